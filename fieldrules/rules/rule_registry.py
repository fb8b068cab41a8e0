"""Rule registry: central lookup of validator callbacks by rule name.

Rule sets reference validators by the name used in rule specs ("required",
"max", "maxFileSize") rather than importing functions directly. Applications
add their own rules with register_rule() or the @rule decorator; a rule
registered under an existing name replaces the built-in one.

Registration is expected to happen at startup. Nothing here locks, so
registering from one thread while another looks rules up is not supported.
"""

import logging
from typing import Any, Callable, Optional

from fieldrules.rules import common_rules, file_rules, number_rules

logger = logging.getLogger(__name__)

# Each validator takes (value, param=None) and returns {"passes": bool, "value": Any}.
Validator = Callable[..., dict[str, Any]]

# Maps rule names (as written in rule specs) to their implementation functions.
RULE_REGISTRY: dict[str, Validator] = {
    "required": common_rules.required,
    "email": common_rules.email,
    "url": common_rules.url,
    "minlength": common_rules.minlength,
    "maxlength": common_rules.maxlength,
    "length": common_rules.length,
    "stringBetween": common_rules.string_between,
    "contains": common_rules.contains,
    "excludes": common_rules.excludes,
    "startWith": common_rules.start_with,
    "endWith": common_rules.end_with,
    "startWithUpper": common_rules.start_with_upper,
    "startWithLower": common_rules.start_with_lower,
    "startWithLetter": common_rules.start_with_letter,
    "endWithLetter": common_rules.end_with_letter,
    "password": common_rules.password,
    "in": common_rules.in_list,
    "regex": common_rules.regex,
    "number": number_rules.number,
    "integer": number_rules.integer,
    "min": number_rules.min_value,
    "max": number_rules.max_value,
    "between": number_rules.between,
    "file": file_rules.is_file,
    "maxFileSize": file_rules.max_file_size,
    "minFileSize": file_rules.min_file_size,
    "fileBetween": file_rules.file_between,
    "mimes": file_rules.mimes,
}


def get_rule(name: str) -> Optional[Validator]:
    """Return the validator registered under name, or None."""
    return RULE_REGISTRY.get(name)


def register_rule(name: str, fn: Validator) -> Validator:
    if name in RULE_REGISTRY:
        logger.debug("Replacing validator for rule %r", name)
    RULE_REGISTRY[name] = fn
    return fn


def rule(name: str):
    """Decorator form of register_rule().

        @rule("postcode")
        def postcode(value, param=None):
            ...
    """
    def decorator(fn: Validator) -> Validator:
        return register_rule(name, fn)
    return decorator


def list_rule_names() -> list[str]:
    return list(RULE_REGISTRY)
