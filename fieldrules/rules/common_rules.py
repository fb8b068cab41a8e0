"""Common validation rules for text inputs.

Each rule function takes the input value and the raw parameter string that
followed ":" in the rule token, and returns:
  - {"passes": bool, "value": <the value the rule looked at>}

Rules are forgiving about input type: a value of the wrong type fails the
check instead of raising. Only a malformed parameter string raises
(ParamFormatError), and it does so when the rule runs.
"""

import re
from typing import Any

from fieldrules.errors import ParamFormatError
from fieldrules.utils.params import require_param, to_int, to_range
from fieldrules.utils.rule_parsing import split_params

# Stands for a literal space inside comma-separated parameters ("excludes:&esp;").
SPACE_TOKEN = "&esp;"

_EMAIL_PATTERN = re.compile(
    r"^[A-Za-z0-9._%+\-]+@[A-Za-z0-9\-]+(?:\.[A-Za-z0-9\-]+)*\.[A-Za-z]{2,}$"
)
_URL_PATTERN = re.compile(r"^(?:https?|ftp)://[^\s/$.?#][^\s]*$", re.IGNORECASE)
_PASSWORD_SPECIALS = re.compile(r"[^A-Za-z0-9]")


def result(passes: bool, value: Any) -> dict:
    """Build the dict every rule returns."""
    return {"passes": bool(passes), "value": value}


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, dict, set)):
        return len(value) == 0
    return False


def _tokens(param: str) -> list[str]:
    """Split a parameter list, turning the space token back into " "."""
    return [" " if t == SPACE_TOKEN else t for t in split_params(param)]


def required(value, param=None) -> dict:
    """required — fails on None, empty/whitespace strings and empty collections."""
    return result(not _is_blank(value), value)


def email(value, param=None) -> dict:
    """email — checks the value looks like an address (local@domain.tld)."""
    if not isinstance(value, str):
        return result(False, value)
    value = value.strip()
    return result(bool(_EMAIL_PATTERN.match(value)), value)


def url(value, param=None) -> dict:
    """url — http, https or ftp URL with a host."""
    if not isinstance(value, str):
        return result(False, value)
    return result(bool(_URL_PATTERN.match(value.strip())), value)


def minlength(value, param=None) -> dict:
    """minlength:N — string is at least N characters. Missing values fail."""
    size = to_int("minlength", param)
    if not isinstance(value, str) or not value:
        return result(False, value)
    return result(len(value) >= size, value)


def maxlength(value, param=None) -> dict:
    """maxlength:N — string is at most N characters. Missing values pass."""
    size = to_int("maxlength", param)
    if value is None:
        return result(True, value)
    if not isinstance(value, str):
        return result(False, value)
    return result(len(value) <= size, value)


def length(value, param=None) -> dict:
    """length:N — exact length. Numbers are measured by their digits.

    Booleans and None fail; they have no meaningful length.
    """
    size = to_int("length", param)
    if value is None or isinstance(value, bool):
        return result(False, value)
    if isinstance(value, (int, float)):
        return result(len(str(value)) == size, value)
    if isinstance(value, (str, list, tuple)):
        return result(len(value) == size, value)
    return result(False, value)


def string_between(value, param=None) -> dict:
    """stringBetween:min,max — string length within [min, max]."""
    low, high = to_range("stringBetween", param, convert=to_int)
    if not isinstance(value, str):
        return result(False, value)
    return result(low <= len(value) <= high, value)


def contains(value, param=None) -> dict:
    """contains:a,b — every listed substring appears in the value."""
    needles = _tokens(require_param("contains", param))
    if not isinstance(value, (str, list, tuple)) or not value:
        return result(False, value)
    return result(all(n in value for n in needles), value)


def excludes(value, param=None) -> dict:
    """excludes:a,b — none of the listed substrings appear in the value."""
    needles = _tokens(require_param("excludes", param))
    if not isinstance(value, (str, list, tuple)) or not value:
        return result(True, value)
    return result(not any(n in value for n in needles), value)


def start_with(value, param=None) -> dict:
    """startWith:a,b — value starts with one of the prefixes."""
    prefixes = _tokens(require_param("startWith", param))
    if isinstance(value, str):
        return result(value.startswith(tuple(prefixes)), value)
    if isinstance(value, (list, tuple)) and value:
        return result(str(value[0]) in prefixes, value)
    return result(False, value)


def end_with(value, param=None) -> dict:
    """endWith:a,b — value ends with one of the suffixes."""
    suffixes = _tokens(require_param("endWith", param))
    if isinstance(value, str):
        return result(value.endswith(tuple(suffixes)), value)
    if isinstance(value, (list, tuple)) and value:
        return result(str(value[-1]) in suffixes, value)
    return result(False, value)


def start_with_upper(value, param=None) -> dict:
    """startWithUpper — first character is an uppercase letter."""
    return result(isinstance(value, str) and value[:1].isupper(), value)


def start_with_lower(value, param=None) -> dict:
    """startWithLower — first character is a lowercase letter."""
    return result(isinstance(value, str) and value[:1].islower(), value)


def start_with_letter(value, param=None) -> dict:
    """startWithLetter — first character is a letter."""
    return result(isinstance(value, str) and value[:1].isalpha(), value)


def end_with_letter(value, param=None) -> dict:
    """endWithLetter — last character is a letter."""
    return result(isinstance(value, str) and value[-1:].isalpha(), value)


def password(value, param=None) -> dict:
    """password — 8+ chars with upper, lower, digit and a special character."""
    if not isinstance(value, str):
        return result(False, value)
    passes = (
        len(value) >= 8
        and any(c.isupper() for c in value)
        and any(c.islower() for c in value)
        and any(c.isdigit() for c in value)
        and bool(_PASSWORD_SPECIALS.search(value))
    )
    return result(passes, value)


def in_list(value, param=None) -> dict:
    """in:a,b,c — value is one of the listed options."""
    options = split_params(require_param("in", param))
    if isinstance(value, (list, tuple)):
        return result(bool(value) and all(str(v) in options for v in value), value)
    return result(value is not None and str(value) in options, value)


def regex(value, param=None) -> dict:
    """regex:pattern — the whole value matches the pattern.

    The parameter is used as-is (commas included), it is not split.
    """
    pattern = require_param("regex", param)
    try:
        compiled = re.compile(pattern)
    except re.error as e:
        raise ParamFormatError(f"Invalid pattern for the regex rule: {e}", rule="regex") from e
    if not isinstance(value, str):
        return result(False, value)
    return result(bool(compiled.fullmatch(value)), value)
