"""Numeric validation rules.

Form inputs usually arrive as strings, so every rule here accepts numeric
strings ("18", " 2.5 ") as well as int/float values. Booleans are not numbers.
"""

from fieldrules.rules.common_rules import result
from fieldrules.utils.params import to_number, to_range


def to_float(value) -> float | None:
    """Return the value as a float, or None if it isn't numeric."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return None
    return None


def number(value, param=None) -> dict:
    """number — value is numeric."""
    return result(to_float(value) is not None, value)


def integer(value, param=None) -> dict:
    """integer — value is a whole number ("12" passes, "12.5" does not)."""
    num = to_float(value)
    return result(num is not None and num.is_integer(), value)


def min_value(value, param=None) -> dict:
    """min:N — numeric value greater than or equal to N."""
    bound = to_number("min", param)
    num = to_float(value)
    return result(num is not None and num >= bound, value)


def max_value(value, param=None) -> dict:
    """max:N — numeric value less than or equal to N."""
    bound = to_number("max", param)
    num = to_float(value)
    return result(num is not None and num <= bound, value)


def between(value, param=None) -> dict:
    """between:min,max — numeric range for numbers, length range for other strings."""
    low, high = to_range("between", param)
    num = to_float(value)
    if num is not None:
        return result(low <= num <= high, value)
    if isinstance(value, str):
        return result(low <= len(value) <= high, value)
    return result(False, value)
