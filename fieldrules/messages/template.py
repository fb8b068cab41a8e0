"""Message template rendering.

Templates are plain strings with three kinds of placeholder:

  :field   the field's display name
  :argN    the (N+1)-th comma-separated rule parameter, trimmed
  ...arg   every parameter, joined with ", "

    render_message("The :field field must be between in :arg0 and :arg1",
                   "age", "between", "18,30")
    -> "The age field must be between in 18 and 30"

Substitution is literal and runs in that order (:field, then each :argN the
template references, in one pass, then ...arg). A :argN whose index has no
parameter is left in the text as-is, as is any other ":word".

Bulk messages (a list parallel to a rule list) may carry a group marker
"{i,j,...}". The message, with the marker removed, is also used for rule
positions i, j, ... See assign_grouped_messages().
"""

import re
from typing import Optional, Sequence

from fieldrules.utils.rule_parsing import split_params

ARG_PATTERN = re.compile(r":arg(\d+)")
GROUP_PATTERN = re.compile(r"{(\d+(?:,\s*\d+)*)}")
VARIADIC_PLACEHOLDER = "...arg"


def render_message(
    template: str,
    field_name: str,
    rule_name: Optional[str] = None,
    raw_params: Optional[str] = None,
) -> str:
    """Substitute placeholders in template.

    rule_name is accepted so callers can pass the full rule context; no
    placeholder currently refers to it.
    """
    message = template.replace(":field", field_name)
    params = split_params(raw_params)

    def _arg(match: re.Match) -> str:
        index = int(match.group(1))
        return params[index] if index < len(params) else match.group(0)

    message = ARG_PATTERN.sub(_arg, message)

    if VARIADIC_PLACEHOLDER in message:
        message = message.replace(VARIADIC_PLACEHOLDER, ", ".join(params))
    return message


def extract_group_indexes(message: Optional[str]) -> list[int]:
    """Indexes listed in the first "{i,j}" marker of message, or []."""
    if not message:
        return []
    match = GROUP_PATTERN.search(message)
    if not match:
        return []
    return [int(num.strip()) for num in match.group(1).split(",")]


def strip_group_markers(message: Optional[str]) -> Optional[str]:
    """Remove every "{i,j}" marker from message. None and "" pass through."""
    if not message:
        return message
    return GROUP_PATTERN.sub("", message)


def assign_grouped_messages(messages: Sequence[Optional[str]], count: Optional[int] = None) -> list[Optional[str]]:
    """Resolve group markers across a list of bulk messages.

    Positions are scanned left to right. For position k the marker indexes
    of messages[k] are read first; each listed position then receives
    messages[k] with markers stripped, and position k itself gets the
    stripped message too. A marker therefore only reaches positions that
    have not been resolved yet: it overwrites later positions and has no
    effect on earlier ones.

    count extends the result to cover that many positions (missing ones are
    None), so markers may fill positions that had no message of their own.
    """
    size = max(len(messages), count or 0)
    pending: list[Optional[str]] = list(messages) + [None] * (size - len(messages))
    resolved: list[Optional[str]] = []
    for k in range(size):
        message = pending[k]
        cleaned = strip_group_markers(message)
        for index in extract_group_indexes(message):
            if 0 <= index < size:
                pending[index] = cleaned
        resolved.append(cleaned)
    return resolved
