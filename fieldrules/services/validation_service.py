"""Validation service: the end-to-end pipeline for fields and forms.

For each field, the pipeline:
  1. Builds a RuleSet from the rule spec and message spec
  2. Runs the rules in order through a FieldValidator
  3. Returns VALID or INVALID with the rendered discrepancies

Forms repeat this per field, reading each field's value from the submitted
data; a field missing from the data is validated as None.
"""

import logging
from typing import Any, Mapping, Optional, Sequence, Union

from fieldrules.models.schemas import (
    Discrepancy,
    FieldValidationResult,
    FormValidationResult,
    InputEventDetails,
)
from fieldrules.validators.field_validator import FieldValidator
from fieldrules.validators.rule_set import MessageSpec, RuleSet

logger = logging.getLogger(__name__)

RuleSpecInput = Union[str, Sequence[str], RuleSet]


def _as_rule_set(rules: RuleSpecInput, messages: MessageSpec, locale: Optional[str]) -> RuleSet:
    if isinstance(rules, RuleSet):
        return rules
    return RuleSet(rules, messages, locale)


def validate_field(
    field_name: str,
    value: Any,
    rules: RuleSpecInput,
    messages: MessageSpec = None,
    locale: Optional[str] = None,
) -> FieldValidationResult:
    """Validate one value against a rule spec (or a ready-made RuleSet).

    A RuleSet passed in is used as-is; messages and locale are then ignored.
    """
    rule_set = _as_rule_set(rules, messages, locale)
    discrepancies = FieldValidator(rule_set).validate(field_name, value)
    status = "INVALID" if discrepancies else "VALID"
    return FieldValidationResult(
        field=field_name,
        status=status,
        value=value,
        discrepancies=[Discrepancy(**d) for d in discrepancies],
    )


def validate_form(
    data: Mapping[str, Any],
    rules_by_field: Mapping[str, RuleSpecInput],
    messages_by_field: Optional[Mapping[str, MessageSpec]] = None,
    locale: Optional[str] = None,
) -> FormValidationResult:
    """Validate every field named in rules_by_field against data."""
    messages_by_field = messages_by_field or {}
    fields = {}
    for field_name, rules in rules_by_field.items():
        fields[field_name] = validate_field(
            field_name,
            data.get(field_name),
            rules,
            messages_by_field.get(field_name),
            locale,
        )

    status = "INVALID" if any(not r.passes for r in fields.values()) else "VALID"
    logger.debug("Validated %d field(s): %s", len(fields), status)
    return FormValidationResult(status=status, results=fields)


def validate_event(
    details: InputEventDetails,
    messages: MessageSpec = None,
    locale: Optional[str] = None,
) -> FieldValidationResult:
    """Validate the field an input event refers to, using the event's rules."""
    return validate_field(
        details.field,
        details.input.get(details.field),
        details.rules,
        messages,
        locale,
    )
