from typing import Any, Optional

from pydantic import BaseModel, Field


class InputEventDetails(BaseModel):
    """Payload of an "input validated" event.

    Carries the field being validated, the rule tokens attached to it, and the
    raw input map of the form it belongs to (field name -> submitted value).
    """

    field: str
    rules: list[str] = []
    input: dict[str, Any] = {}


class Discrepancy(BaseModel):
    """A single failed rule.

    field:   the field display name, e.g. "age"
    rule:    the rule name, e.g. "max"
    message: the rendered message, e.g. "The age field must be less than or equal to 18"
    params:  the raw parameter string the rule ran with, if any
    """

    field: str
    rule: str
    message: str
    params: Optional[str] = None


class FieldValidationResult(BaseModel):
    """Outcome of running one field's rules against its value."""

    field: str
    status: str  # "VALID" or "INVALID"
    value: Any = None
    discrepancies: list[Discrepancy] = []

    @property
    def passes(self) -> bool:
        return self.status == "VALID"


class FormValidationResult(BaseModel):
    """Outcome of validating every field of a form."""

    status: str  # "VALID" or "INVALID"
    results: dict[str, FieldValidationResult] = Field(default_factory=dict)

    def errors(self) -> dict[str, list[str]]:
        """Rendered messages per failing field."""
        return {
            name: [d.message for d in result.discrepancies]
            for name, result in self.results.items()
            if result.discrepancies
        }
