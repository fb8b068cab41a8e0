"""Field validator: runs a field's rule set against a value.

Rules execute in rule-set order. Each failing rule produces a discrepancy
dict carrying the rendered message. If "required" fails, remaining rules are
skipped since there's no value to check them against.

Errors raised by a rule (ParamFormatError for a malformed parameter) are not
caught: they describe a broken rule spec, not an invalid value.
"""

import logging
from typing import Any

from fieldrules.validators.rule_set import RuleSet

logger = logging.getLogger(__name__)

# Rules after which an empty value makes every other check pointless.
STOP_ON_FAILURE = {"required"}


class FieldValidator:
    """Runs the entries of a RuleSet in order and collects failures."""

    def __init__(self, rule_set: RuleSet):
        self.rule_set = rule_set

    def validate(self, field_name: str, value: Any) -> list[dict]:
        """Return one discrepancy dict per failing rule (empty list if valid).

        Each dict has "field", "rule", "message" and "params".
        """
        discrepancies = []

        for entry in self.rule_set:
            outcome = entry.run(value)
            if outcome["passes"]:
                continue

            logger.debug("Rule %r failed for field %r", entry.name, field_name)
            discrepancies.append({
                "field": field_name,
                "rule": entry.name,
                "message": entry.render(field_name),
                "params": entry.raw_params,
            })

            if entry.name in STOP_ON_FAILURE:
                break

        return discrepancies

    def passes(self, field_name: str, value: Any) -> bool:
        return not self.validate(field_name, value)
