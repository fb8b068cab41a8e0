"""Error types raised while building or running rule sets.

Only two failures are fatal:
  - RuleNotDefined: a rule name has no registered validator and none was
    supplied explicitly. Raised when a rule entry is constructed.
  - ParamFormatError: a built-in rule was given a parameter string it cannot
    read (e.g. "length:abc", "maxFileSize:1XB"). Raised when the rule runs,
    never when the rule set is built.

Everything else (unknown message, missing placeholder index, editing a rule
that is not there) is a soft fallback and does not raise.
"""

from typing import Optional


class FieldRulesError(Exception):
    """Base class for errors raised by fieldrules."""

    def __init__(self, message: str, rule: Optional[str] = None):
        self.message = message
        self.rule = rule
        super().__init__(message)


class RuleNotDefined(FieldRulesError):
    def __init__(self, rule: str):
        super().__init__(f"The rule {rule} is not defined", rule=rule)


class ParamFormatError(FieldRulesError):
    pass
