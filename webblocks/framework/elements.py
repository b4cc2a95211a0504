"""
================================================================================
Declared Base Types
================================================================================

Base classes page objects are declared with.

    WebPage              root of a page; its target is the driver itself
    ExtendedWebElement   a single element or a block of elements
    ExtendedList[E]      a list of elements of declared type E
    ElementList          what a list operation actually runs against

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import typing
from typing import Any, Callable, Generic, List, Optional, TypeVar

from webblocks.framework.annotations import declare
from webblocks.framework.context import Context
from webblocks.framework.extension import hover_method


E = TypeVar("E", bound="ExtendedWebElement")


class WebBlock:
    """
    Base of every declared page-object class.

    The reserved operations below exist on every node. ``filter`` and
    ``convert`` only take effect on list nodes, where they are applied each
    time a list operation runs.
    """

    @declare
    def get_context(self) -> Context: ...

    @declare
    def should(self, matcher: Callable[[Any], Any]) -> "WebBlock": ...

    @declare
    def wait_until(self, predicate: Callable[[Any], Any]) -> "WebBlock": ...

    @declare
    def filter(self, predicate: Callable[[Any], Any]) -> "WebBlock": ...

    @declare
    def convert(self, function: Callable[[Any], Any]) -> "WebBlock": ...


class ExtendedWebElement(WebBlock):
    """A single element; subclass it to declare a block with nested elements."""

    @hover_method
    def hover_over(self) -> "ExtendedWebElement": ...


class ExtendedList(WebBlock, Generic[E]):
    """A list of elements, declared as ``ExtendedList[ItemType]``."""


class ElementList(list):
    """Filtered and converted snapshot a list operation is executed against."""

    def __getitem__(self, index: Any) -> Any:
        if isinstance(index, slice):
            return ElementList(super().__getitem__(index))
        return super().__getitem__(index)

    def size(self) -> int:
        return len(self)

    def get(self, index: int) -> Any:
        return self[index]

    def is_empty(self) -> bool:
        return len(self) == 0

    def first(self) -> Optional[Any]:
        return self[0] if self else None

    def to_list(self) -> List[Any]:
        return list(self)


class WebPage(WebBlock):
    """Root of a page object. Unknown operations go to the driver (e.g. ``goto``)."""

    def open(self, url: str) -> "WebPage":
        self.goto(url)
        return self


def is_element_type(declared: Any) -> bool:
    return isinstance(declared, type) and issubclass(declared, ExtendedWebElement)


def list_origin(declared: Any) -> Optional[type]:
    """The ExtendedList class behind ``declared``, or None when it is not a list type."""
    origin = typing.get_origin(declared) or declared
    if isinstance(origin, type) and issubclass(origin, ExtendedList):
        return origin
    return None


def list_item_type(declared: Any) -> type:
    """Item type of a list declaration, ExtendedWebElement when unspecified."""
    args = typing.get_args(declared)
    if not args:
        for base in getattr(declared, "__orig_bases__", ()):
            if list_origin(base) is not None and typing.get_args(base):
                args = typing.get_args(base)
                break
    if args and is_element_type(args[0]):
        return args[0]
    return ExtendedWebElement


__all__ = [
    "WebBlock",
    "ExtendedWebElement",
    "ExtendedList",
    "ElementList",
    "WebPage",
    "is_element_type",
    "list_origin",
    "list_item_type",
]
