"""Parameter helpers shared by the built-in rules.

Rules receive their parameters as the raw string that followed ":" in the
rule token. These helpers convert that string into the numbers and sizes the
rule needs, raising ParamFormatError with a readable message when it can't.
"""

import re

from fieldrules.errors import ParamFormatError
from fieldrules.utils.rule_parsing import split_params

# Multipliers for file size units. Sizes without a unit are bytes.
FILE_SIZE_UNITS = {
    "B": 1,
    "KB": 1024,
    "MB": 1024 ** 2,
    "GB": 1024 ** 3,
}

_FILE_SIZE_PATTERN = re.compile(r"^(\d+(?:\.\d+)?)\s*([A-Za-z]*)$")


def require_param(rule: str, param) -> str:
    """Fail if a rule that needs an argument was given none."""
    if param is None or (isinstance(param, str) and not param.strip()):
        raise ParamFormatError(f"The {rule} rule requires at least one argument", rule=rule)
    return str(param)


def to_int(rule: str, param) -> int:
    """Read an integer argument, e.g. the "5" in "length:5"."""
    text = require_param(rule, param).strip()
    if not re.fullmatch(r"[+-]?\d+", text):
        raise ParamFormatError(f"The {rule} rule argument must be an integer", rule=rule)
    return int(text)


def to_number(rule: str, param) -> float:
    """Read a numeric argument, e.g. the "18.5" in "min:18.5"."""
    text = require_param(rule, param).strip()
    try:
        return float(text)
    except ValueError as e:
        raise ParamFormatError(f"The {rule} rule argument must be a number", rule=rule) from e


def to_range(rule: str, param, convert=to_number) -> tuple:
    """Read a "min,max" argument pair and convert both ends."""
    parts = split_params(require_param(rule, param))
    if len(parts) != 2:
        raise ParamFormatError(f"The {rule} rule requires two arguments: min,max", rule=rule)
    return convert(rule, parts[0]), convert(rule, parts[1])


def parse_file_size(rule: str, param) -> int:
    """Convert a size like "1MB", "512 KB" or "100" into bytes.

    Units are case-insensitive. Unknown units raise ParamFormatError.
    """
    text = require_param(rule, param).strip()
    match = _FILE_SIZE_PATTERN.match(text)
    if not match:
        raise ParamFormatError(
            f"Invalid file size '{text}' for the {rule} rule, expected <number><unit> (B, KB, MB, GB)",
            rule=rule,
        )
    number, unit = match.groups()
    unit = (unit or "B").upper()
    if unit not in FILE_SIZE_UNITS:
        raise ParamFormatError(
            f"Invalid file size unit '{unit}' for the {rule} rule, expected one of: {', '.join(FILE_SIZE_UNITS)}",
            rule=rule,
        )
    return int(float(number) * FILE_SIZE_UNITS[unit])
