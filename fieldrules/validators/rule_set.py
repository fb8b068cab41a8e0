"""Rule sets: the ordered, name-unique list of rules attached to one field.

A RuleSet is built from a rule spec ("required|max:10" or a list of tokens)
and an optional message spec, then edited in place for the life of the field.
Order matters: it is the order rules run in and the order messages display.

Dedupe policy differs per operation:
  - add / append / push / set remove a same-named entry first, then append.
  - replace overwrites the matching slot in place, keeping its position.
  - prepend / insert_before / insert_after insert without checking names,
    so they can leave two entries with the same name.

Besides each entry's own message, the set keeps a name -> message mapping
(`messages`). clear() and remove() leave that mapping alone, so get_message()
keeps returning a message after its entry is gone.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Iterator, Mapping, Optional, Sequence, TypeVar, Union

from fieldrules.errors import RuleNotDefined
from fieldrules.messages.catalog import MessageCatalog, default_catalog
from fieldrules.messages.template import (
    assign_grouped_messages,
    render_message,
    strip_group_markers,
)
from fieldrules.rules.rule_registry import RULE_REGISTRY, Validator
from fieldrules.utils.rule_parsing import parse_rule, split_rules

logger = logging.getLogger(__name__)

T = TypeVar("T")

RuleParam = Union[str, Sequence[str], None]
MessageSpec = Union[str, Sequence[Optional[str]], Mapping[str, str], None]


@dataclass(eq=False)
class RuleEntry:
    """One resolved rule: name, message template, parameters and validator.

    Attributes:
        name: Rule name, unique within a RuleSet except after prepend/insert.
        message: Failure message template (placeholders rendered by render()).
        params: Raw parameter string, or a list of parameters.
        validate: Callback taking (value, param) and returning
            {"passes": bool, "value": Any}.
    """

    name: str
    message: str
    params: RuleParam
    validate: Validator

    @property
    def raw_params(self) -> Optional[str]:
        if self.params is None or isinstance(self.params, str):
            return self.params
        return ",".join(str(p) for p in self.params)

    def run(self, value: Any) -> dict:
        """Call the validator with this entry's parameters."""
        return self.validate(value, self.raw_params)

    def render(self, field_name: str) -> str:
        """Failure message with :field / :argN / ...arg filled in."""
        return render_message(self.message, field_name, self.name, self.raw_params)


class RuleSet:
    """Ordered collection of RuleEntry objects for a single field.

    Every method that takes a rule accepts either a bare name ("max") or a
    full token ("max:10"); only the name part is used to find entries.
    Mutating methods return the set so calls can be chained.
    """

    def __init__(
        self,
        rules: Union[str, Sequence[str], None] = None,
        messages: MessageSpec = None,
        locale: Optional[str] = None,
        catalog: Optional[MessageCatalog] = None,
        registry: Optional[Mapping[str, Validator]] = None,
    ):
        self.items: list[RuleEntry] = []
        self.messages: dict[str, str] = {}
        self.locale = locale
        self.catalog = catalog or default_catalog
        self.registry = RULE_REGISTRY if registry is None else registry
        if rules is not None:
            self.set(rules, messages, locale)

    # ------------------------------------------------------------------
    # Building
    # ------------------------------------------------------------------

    def set(
        self,
        rules: Union[str, Sequence[str]],
        messages: MessageSpec = None,
        locale: Optional[str] = None,
    ) -> "RuleSet":
        """(Re)build the set from a rule spec and an optional message spec.

        messages may be:
          - a "|"-delimited string or a list, parallel to the rules; entries
            may carry "{i,j}" group markers (see messages.template)
          - a mapping of rule name -> message
          - None, in which case every rule gets its catalog default

        Empty rule tokens ("required||email") are skipped. The side message
        mapping is kept; entries are replaced.
        """
        tokens = split_rules(rules)
        positional: Optional[list[Optional[str]]] = None
        by_name: Optional[Mapping[str, str]] = None
        if isinstance(messages, str):
            positional = assign_grouped_messages(split_rules(messages), len(tokens))
        elif isinstance(messages, Mapping):
            by_name = messages
        elif messages is not None:
            positional = assign_grouped_messages(list(messages), len(tokens))

        self.items = []
        for i, token in enumerate(tokens):
            if not token:
                logger.debug("Skipping empty rule token at position %d", i)
                continue
            parsed = parse_rule(token)
            message = None
            if positional is not None:
                message = positional[i]
            elif by_name is not None:
                message = strip_group_markers(by_name.get(parsed.name))
            self.add(parsed.name, message, parsed.raw_params, None, locale)
        return self

    def create_rule(
        self,
        rule: str,
        message: Optional[str] = None,
        param: RuleParam = None,
        validate: Optional[Validator] = None,
        locale: Optional[str] = None,
    ) -> RuleEntry:
        """Resolve a rule token into a new entry without touching the set.

        Message: explicit message, else the catalog template for the locale.
        Validator: explicit validate, else the registry entry.
        Raises RuleNotDefined when neither validator source has one.
        """
        parsed = parse_rule(rule)
        name = parsed.name
        validate = validate or self.registry.get(name)
        if validate is None:
            raise RuleNotDefined(name)
        if not message:
            message = self.catalog.get(name, locale or self.locale)
        return RuleEntry(
            name=name,
            message=message,
            params=param if param is not None else parsed.raw_params,
            validate=validate,
        )

    def _remember(self, entry: RuleEntry) -> RuleEntry:
        self.messages[entry.name] = entry.message
        return entry

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------

    def add(
        self,
        rule: str,
        message: Optional[str] = None,
        param: RuleParam = None,
        validate: Optional[Validator] = None,
        locale: Optional[str] = None,
    ) -> "RuleSet":
        """Append a rule, removing any entry with the same name first."""
        entry = self.create_rule(rule, message, param, validate, locale)
        if self.has(entry.name):
            self.remove(entry.name)
        self.items.append(self._remember(entry))
        logger.debug("Added rule %r (params=%r)", entry.name, entry.params)
        return self

    def push(self, rule, message=None, param=None, validate=None, locale=None) -> "RuleSet":
        return self.add(rule, message, param, validate, locale)

    def append(self, rule, message=None, param=None, validate=None, locale=None) -> "RuleSet":
        return self.add(rule, message, param, validate, locale)

    def prepend(
        self,
        rule: str,
        message: Optional[str] = None,
        param: RuleParam = None,
        validate: Optional[Validator] = None,
        locale: Optional[str] = None,
    ) -> "RuleSet":
        """Insert a rule at position 0. Same-named entries elsewhere stay."""
        entry = self.create_rule(rule, message, param, validate, locale)
        self.items.insert(0, self._remember(entry))
        return self

    def insert_before(
        self,
        existing_rule: str,
        new_rule: str,
        message: Optional[str] = None,
        param: RuleParam = None,
        validate: Optional[Validator] = None,
        locale: Optional[str] = None,
    ) -> "RuleSet":
        """Insert new_rule just before existing_rule; no-op if it's absent."""
        index = self._index_of(existing_rule)
        if index != -1:
            entry = self.create_rule(new_rule, message, param, validate, locale)
            self.items.insert(index, self._remember(entry))
        return self

    def insert_after(
        self,
        existing_rule: str,
        new_rule: str,
        message: Optional[str] = None,
        param: RuleParam = None,
        validate: Optional[Validator] = None,
        locale: Optional[str] = None,
    ) -> "RuleSet":
        """Insert new_rule just after existing_rule; no-op if it's absent."""
        index = self._index_of(existing_rule)
        if index != -1:
            entry = self.create_rule(new_rule, message, param, validate, locale)
            self.items.insert(index + 1, self._remember(entry))
        return self

    def replace(self, outgoing: str, incoming: str) -> "RuleSet":
        """Swap outgoing for a fresh incoming entry at the same position.

        The new entry gets default message and the params of the incoming
        token only; nothing is carried over from the outgoing entry.
        """
        index = self._index_of(outgoing)
        if index != -1:
            self.items[index] = self._remember(self.create_rule(incoming))
        return self

    def remove(self, rule: str) -> "RuleSet":
        """Drop every entry with this name. Missing names are ignored."""
        name = parse_rule(rule).name
        self.items = [item for item in self.items if item.name != name]
        return self

    def clear(self) -> "RuleSet":
        """Remove all entries. The side message mapping is kept."""
        self.items = []
        return self

    def assign_message(self, rule: str, message: str) -> "RuleSet":
        """Replace the message of an existing rule; no-op if it's absent."""
        name = parse_rule(rule).name
        entry = self.get(name) if name else None
        if entry is not None:
            self.messages[name] = message
            entry.message = message
        return self

    # ------------------------------------------------------------------
    # Reading
    # ------------------------------------------------------------------

    def _index_of(self, rule: str) -> int:
        name = parse_rule(rule).name
        return next((i for i, item in enumerate(self.items) if item.name == name), -1)

    def has(self, rule: str) -> bool:
        name = parse_rule(rule).name
        return any(item.name == name for item in self.items)

    def get(self, rule: Optional[str] = None) -> Union[RuleEntry, list[RuleEntry], None]:
        """With no argument, every entry in order; else the named entry or None."""
        if rule is None:
            return self.items
        name = parse_rule(rule).name
        return next((item for item in self.items if item.name == name), None)

    def at_index(self, index: int) -> Optional[RuleEntry]:
        """Entry at a position, or None when the position is out of range."""
        if 0 <= index < len(self.items):
            return self.items[index]
        return None

    def get_message(self, rule: str) -> Optional[str]:
        """Last message recorded for the rule, even if the entry was removed."""
        return self.messages.get(parse_rule(rule).name) or None

    def get_messages(self) -> dict[str, str]:
        return self.messages

    def rule_name_as_array(self) -> list[str]:
        return [item.name for item in self.items]

    def message_as_array(self) -> list[str]:
        return [item.message for item in self.items]

    def map(self, fn: Callable[[RuleEntry, int], T]) -> list[T]:
        return [fn(item, i) for i, item in enumerate(self.items)]

    def all(self) -> list[RuleEntry]:
        return self.items

    @property
    def length(self) -> int:
        return len(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[RuleEntry]:
        return iter(self.items)

    def __contains__(self, rule: object) -> bool:
        return isinstance(rule, str) and self.has(rule)

    def __repr__(self) -> str:
        return f"RuleSet({'|'.join(self.rule_name_as_array())!r})"
