"""
Locator compilation.

A locator is the human-facing string a caller passes to a session action.
Three forms are recognized by their first characters:

    #signup             identifier equality
    //form//a, (//a)[2] XPath, used verbatim
    Sign up             fuzzy text/label/attribute match

``compile_locator`` turns a locator plus an action kind into an ordered list
of XPath alternatives. The session tries them left to right and stops at the
first one that matches.
"""

import enum
from dataclasses import dataclass
from typing import List, Union

from .errors import InvalidLocator


class LocatorKind(enum.Enum):
    ID = "id"
    XPATH = "xpath"
    FUZZY = "fuzzy"


class ActionKind(enum.Enum):
    LINK = "link"
    BUTTON = "button"
    LINK_OR_BUTTON = "link_or_button"
    FIELD = "field"
    RADIO = "radio"
    CHECKBOX = "checkbox"
    OPTION = "option"
    FILE_FIELD = "file_field"
    SELECT_FIELD = "select_field"


_XPATH_PREFIXES = ("/", "./", "(")


@dataclass(frozen=True)
class Locator:
    raw: str
    kind: LocatorKind

    @classmethod
    def parse(cls, value: Union[str, "Locator"]) -> "Locator":
        if isinstance(value, Locator):
            return value
        if not isinstance(value, str):
            raise InvalidLocator(f"Locator must be a string, got {type(value).__name__}")
        if not value.strip():
            raise InvalidLocator("Locator must not be empty")

        if value.startswith("#"):
            if len(value) == 1:
                raise InvalidLocator("Identifier locator '#' has no identifier")
            return cls(value, LocatorKind.ID)
        if value.startswith(_XPATH_PREFIXES):
            return cls(value, LocatorKind.XPATH)
        return cls(value, LocatorKind.FUZZY)

    @property
    def text(self) -> str:
        """The locator without its form marker."""
        if self.kind is LocatorKind.ID:
            return self.raw[1:]
        return self.raw

    def __str__(self) -> str:
        return self.raw


def xpath_literal(text: str) -> str:
    """Quote ``text`` as an XPath string literal."""
    if "'" not in text:
        return f"'{text}'"
    if '"' not in text:
        return f'"{text}"'
    parts = text.split("'")
    return "concat(" + ", \"'\", ".join(f"'{p}'" for p in parts) + ")"


def to_xpath(locator: Union[str, Locator]) -> str:
    """
    Kind-agnostic query for ``find``/``all``.

    Identifier and XPath locators give their structural query. A fuzzy
    string is matched against id or name.
    """
    loc = Locator.parse(locator)
    if loc.kind is LocatorKind.XPATH:
        return loc.raw
    lit = xpath_literal(loc.text)
    if loc.kind is LocatorKind.ID:
        return f"//*[@id={lit}]"
    return f"//*[@id={lit} or @name={lit}]"


# ----------------------------------------------------------------------------
# Per-kind alternatives
# ----------------------------------------------------------------------------

_BUTTON_INPUT_TYPES = "(@type='submit' or @type='button' or @type='image')"

_NON_TEXT_INPUT_TYPES = (
    "@type='submit' or @type='button' or @type='image' or @type='reset' "
    "or @type='radio' or @type='checkbox' or @type='file' or @type='hidden'"
)

_TEXT_FIELD = f"(self::input[not({_NON_TEXT_INPUT_TYPES})] or self::textarea)"


def _link(lit: str) -> List[str]:
    return [
        f"//a[normalize-space(.)={lit}]",
        f"//a[@title={lit}]",
        f"//a//img[@alt={lit}]",
    ]


def _button(lit: str) -> List[str]:
    return [
        f"//input[{_BUTTON_INPUT_TYPES} and @value={lit}]",
        f"//input[{_BUTTON_INPUT_TYPES} and @title={lit}]",
        f"//button[@value={lit}]",
        f"//button[@title={lit}]",
        f"//button[normalize-space(.)={lit}]",
        f"//input[@type='image' and @alt={lit}]",
    ]


def _labelled(predicate: str, lit: str, placeholder: bool = False) -> List[str]:
    attrs = f"@name={lit} or @id={lit}"
    if placeholder:
        attrs += f" or @placeholder={lit}"
    return [
        f"//*[{predicate}][@id=//label[normalize-space(.)={lit}]/@for]",
        f"//label[normalize-space(.)={lit}]//*[{predicate}]",
        f"//*[{predicate}][{attrs}]",
    ]


def _option(lit: str) -> List[str]:
    return [f"//option[ancestor::select][normalize-space(.)={lit}]"]


_BUILDERS = {
    ActionKind.LINK: _link,
    ActionKind.BUTTON: _button,
    ActionKind.LINK_OR_BUTTON: lambda lit: _link(lit) + _button(lit),
    ActionKind.FIELD: lambda lit: _labelled(_TEXT_FIELD, lit, placeholder=True),
    ActionKind.RADIO: lambda lit: _labelled("self::input[@type='radio']", lit),
    ActionKind.CHECKBOX: lambda lit: _labelled("self::input[@type='checkbox']", lit),
    ActionKind.FILE_FIELD: lambda lit: _labelled("self::input[@type='file']", lit),
    ActionKind.SELECT_FIELD: lambda lit: _labelled("self::select", lit),
    ActionKind.OPTION: _option,
}


def compile_locator(locator: Union[str, Locator], kind: ActionKind) -> List[str]:
    """
    Compile a locator into ordered XPath alternatives for one action kind.

    Identifier and XPath locators always compile to a single alternative, so a
    caller can escape fuzzy matching by writing the query out.

    Args:
        locator: Locator string or parsed Locator
        kind: The action the node is resolved for

    Returns:
        Non-empty list of XPath strings, most specific first
    """
    loc = Locator.parse(locator)
    if loc.kind is not LocatorKind.FUZZY:
        return [to_xpath(loc)]

    builder = _BUILDERS.get(kind)
    if builder is None:
        raise InvalidLocator(f"Unsupported action kind: {kind!r}")
    return builder(xpath_literal(loc.raw))


__all__ = [
    "ActionKind",
    "Locator",
    "LocatorKind",
    "compile_locator",
    "to_xpath",
    "xpath_literal",
]
