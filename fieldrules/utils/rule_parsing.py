"""Parsing of rule spec strings.

A rule spec is a pipe-separated chain of rule tokens, each token being a rule
name optionally followed by ":" and a raw parameter string:

    "required|max:10|between:18,30"

Only the first ":" splits name from parameters, so parameter strings may
themselves contain colons ("regex:^\\d{2}:\\d{2}$"). Rule names are matched
exactly; nothing here changes case.
"""

from dataclasses import dataclass
from typing import Optional, Sequence, Union


@dataclass(frozen=True)
class ParsedRule:
    """A single rule token split into its name and raw parameter string."""

    name: str
    raw_params: Optional[str] = None


def parse_rule(token: str) -> ParsedRule:
    """Split one rule token on its first ":".

    "between:18,30" -> ParsedRule("between", "18,30")
    "required"      -> ParsedRule("required", None)
    "max:"          -> ParsedRule("max", "")
    """
    token = token.strip()
    name, sep, raw_params = token.partition(":")
    return ParsedRule(name=name, raw_params=raw_params if sep else None)


def split_rules(spec: Union[str, Sequence[str]]) -> list[str]:
    """Turn a rule spec (pipe-delimited string or sequence) into trimmed tokens.

    Empty pieces are kept, "required||email" gives ["required", "", "email"].
    Deciding what to do with them is up to the caller.
    """
    if isinstance(spec, str):
        return [piece.strip() for piece in spec.split("|")]
    return [piece.strip() for piece in spec]


def split_params(raw_params: Optional[str]) -> list[str]:
    """Split a raw parameter string on "," and trim each token."""
    if not raw_params:
        return []
    return [p.strip() for p in raw_params.split(",")]
