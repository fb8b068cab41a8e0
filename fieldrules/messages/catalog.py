"""Message catalog — default failure message templates per rule and locale.

Lookup for (rule, locale) goes:
  1. the locale's own override for the rule, if the locale has one
  2. the default (English) template for the rule
  3. the generic fallback, "The input value is not valid"

Templates may use the placeholders understood by messages.template
(":field", ":arg0".. ":argN", "...arg").
"""

import logging
from typing import Iterable, Mapping, Optional

from fieldrules.config import get_settings

logger = logging.getLogger(__name__)

DEFAULT_MESSAGES: dict[str, str] = {
    "required": "This field is required",
    "email": "Please enter a valid email address",
    "url": "Please enter a valid URL",
    "minlength": "The :field field must be at least :arg0 characters",
    "maxlength": "The :field field must not exceed :arg0 characters",
    "length": "The :field field must be exactly :arg0 characters",
    "stringBetween": "The :field field must be between :arg0 and :arg1 characters",
    "contains": "The :field field must contain ...arg",
    "excludes": "The :field field must not contain ...arg",
    "startWith": "The :field field must start with one of ...arg",
    "endWith": "The :field field must end with one of ...arg",
    "startWithUpper": "The :field field must start with an uppercase letter",
    "startWithLower": "The :field field must start with a lowercase letter",
    "startWithLetter": "The :field field must start with a letter",
    "endWithLetter": "The :field field must end with a letter",
    "password": "The password must be at least 8 characters and contain an uppercase letter, a lowercase letter, a digit and a special character",
    "in": "The :field field must be one of ...arg",
    "regex": "The :field field format is invalid",
    "number": "The :field field must be a number",
    "integer": "The :field field must be an integer",
    "min": "The :field field must be greater than or equal to :arg0",
    "max": "The :field field must be less than or equal to :arg0",
    "between": "The :field field must be between in :arg0 and :arg1",
    "file": "The :field field must be a file",
    "maxFileSize": "The file size must not exceed :arg0",
    "minFileSize": "The file size must be at least :arg0",
    "fileBetween": "The file size must be between :arg0 and :arg1",
    "mimes": "The file must be of type ...arg",
}

FR_MESSAGES: dict[str, str] = {
    "required": "Ce champ est obligatoire",
    "email": "Veuillez entrer une adresse e-mail valide",
    "url": "Veuillez entrer une URL valide",
    "minlength": "Le champ :field doit contenir au moins :arg0 caractères",
    "maxlength": "Le champ :field ne doit pas dépasser :arg0 caractères",
    "number": "Le champ :field doit être un nombre",
    "integer": "Le champ :field doit être un entier",
    "min": "Le champ :field doit être supérieur ou égal à :arg0",
    "max": "Le champ :field doit être inférieur ou égal à :arg0",
    "between": "Le champ :field doit être compris entre :arg0 et :arg1",
    "in": "Le champ :field doit être l'une des valeurs suivantes : ...arg",
}


class MessageCatalog:
    """Default message templates with optional per-locale overrides."""

    def __init__(
        self,
        defaults: Optional[Mapping[str, str]] = None,
        locales: Optional[Mapping[str, Mapping[str, str]]] = None,
        fallback: Optional[str] = None,
    ):
        self.defaults: dict[str, str] = dict(DEFAULT_MESSAGES if defaults is None else defaults)
        self.locales: dict[str, dict[str, str]] = {
            name: dict(table) for name, table in (locales or {}).items()
        }
        self.fallback = fallback

    def get(self, rule: str, locale: Optional[str] = None) -> str:
        """Return the template for rule, never None."""
        locale = locale or get_settings().default_locale
        override = self.locales.get(locale, {}).get(rule)
        if override:
            return override
        template = self.defaults.get(rule)
        if template:
            return template
        logger.debug("No message for rule %r (locale %r), using fallback", rule, locale)
        return self.fallback or get_settings().fallback_message

    def put(self, locale: Optional[str], messages: Mapping[str, str]) -> "MessageCatalog":
        """Add or replace templates. locale=None edits the default table."""
        if locale is None:
            self.defaults.update(messages)
        else:
            self.locales.setdefault(locale, {}).update(messages)
        logger.debug("Registered %d message(s) for locale %r", len(messages), locale)
        return self

    def get_rules_messages(self, rules: Iterable[str], locale: Optional[str] = None) -> list[str]:
        """Templates for several rules, in the order given."""
        return [self.get(rule, locale) for rule in rules]

    def has_locale(self, locale: str) -> bool:
        return locale in self.locales


# Process-wide catalog used by rule sets unless one is passed explicitly.
default_catalog = MessageCatalog(locales={"fr": FR_MESSAGES})
