# ================================================================================
# Matchers Module
# ================================================================================
#
# Ready-made predicates and converters for the fluent page-object operations.
#
#   items.filter(has_text("Apple")).convert(to_text()).size()
#   title.should(is_displayed())
#   items.should(has_size(3))
#
# Any plain callable works in the same places; these only add readable
# descriptions to allure steps and assertion messages.
#
# ================================================================================

from __future__ import annotations

from typing import Any, Callable, Optional


class Matcher:
    """Named predicate over a page-object node."""

    def __init__(self, description: str, test: Callable[[Any], bool]):
        self.description = description
        self._test = test

    def __call__(self, item: Any) -> bool:
        return bool(self._test(item))

    def __invert__(self) -> "Matcher":
        return Matcher(f"not {self.description}", lambda item: not self._test(item))

    def __str__(self) -> str:
        return self.description

    __repr__ = __str__


class Converter:
    """Named function mapping a list item to another value."""

    def __init__(self, description: str, function: Callable[[Any], Any]):
        self.description = description
        self._function = function

    def __call__(self, item: Any) -> Any:
        return self._function(item)

    def __str__(self) -> str:
        return self.description

    __repr__ = __str__


def _text(item: Any) -> str:
    return (item.text_content() or "").strip()


def has_text(text: str) -> Matcher:
    """Element text, stripped, equals ``text``."""
    return Matcher(f"has text '{text}'", lambda item: _text(item) == text)


def contains_text(text: str) -> Matcher:
    return Matcher(f"contains text '{text}'", lambda item: text in _text(item))


def has_attribute(name: str, value: Optional[str] = None) -> Matcher:
    """Attribute ``name`` is present, and equals ``value`` when one is given."""
    if value is None:
        return Matcher(
            f"has attribute '{name}'",
            lambda item: item.get_attribute(name) is not None,
        )
    return Matcher(
        f"has attribute {name}='{value}'",
        lambda item: item.get_attribute(name) == value,
    )


def is_displayed() -> Matcher:
    return Matcher("is displayed", lambda item: item.is_visible())


def has_size(size: int) -> Matcher:
    """List node holds exactly ``size`` items after its filters."""
    return Matcher(f"has size {size}", lambda items: len(items) == size)


def to_text() -> Converter:
    return Converter("text", _text)


def to_attribute(name: str) -> Converter:
    return Converter(f"attribute '{name}'", lambda item: item.get_attribute(name))


__all__ = [
    "Matcher",
    "Converter",
    "has_text",
    "contains_text",
    "has_attribute",
    "is_displayed",
    "has_size",
    "to_text",
    "to_attribute",
]
