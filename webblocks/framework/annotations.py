"""
================================================================================
Page Object Declarations
================================================================================

Markers used to declare the structure of a page object.

A page object is a class whose methods are *declared*, not implemented:

    class SearchPage(WebPage):

        @find_by("//h1")
        def title(self) -> ExtendedWebElement: ...

        @find_by("//li[@data-id='{item_id}']")
        @name("Item {item_id}")
        def item(self, item_id: str) -> ExtendedWebElement: ...

        @find_by("//li")
        def items(self) -> ExtendedList[ExtendedWebElement]: ...

Each marker turns the function into a MethodDescriptor. On a page-object
proxy the descriptor routes calls to the proxy's method handler; on the bare
class it stays a plain description the ExtensionRegistry reads. Methods left
undecorated are *default* methods and run as ordinary Python code.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import functools
import inspect
import typing
from typing import Any, Callable, Dict, Optional, Tuple, Type

from webblocks.framework.exceptions import WebPageError


HANDLER_ATTRIBUTE = "_webblocks_handler"

_UNRESOLVED = object()


class MethodDescriptor:
    """
    Declaration of one page-object method.

    Attributes:
        func: The declared (body-less) function
        method_name: Attribute name on the declaring class
        selector: Selector template for recursion points, if any
        display_name: Name template of the created child, if any
        handler_class: Custom MethodHandler class, if any
        timeout: Retry deadline override for the created child, if any
    """

    def __init__(self, func: Callable):
        functools.update_wrapper(self, func)
        self.func = func
        self.method_name: str = func.__name__
        self.selector: Optional[str] = None
        self.display_name: Optional[str] = None
        self.handler_class: Optional[type] = None
        self.timeout: Optional[float] = None
        self._return_type: Any = _UNRESOLVED
        self._signature: Optional[inspect.Signature] = None

    def __set_name__(self, owner: type, name: str) -> None:
        self.method_name = name

    def __get__(self, instance: Any, owner: Optional[type] = None) -> Any:
        if instance is None:
            return self
        handler = instance.__dict__.get(HANDLER_ATTRIBUTE)
        if handler is None:
            raise WebPageError(
                f"'{self.method_name}' is a declaration; "
                f"obtain page objects from WebPageFactory instead of instantiating "
                f"{type(instance).__name__}"
            )

        @functools.wraps(self.func)
        def dispatch(*args, **kwargs):
            return handler.invoke(instance, self.method_name, args, kwargs)

        return dispatch

    @property
    def return_type(self) -> Any:
        """Return annotation, resolved on first access."""
        if self._return_type is _UNRESOLVED:
            try:
                hints = typing.get_type_hints(self.func)
            except (NameError, TypeError) as e:
                raise WebPageError(
                    f"Cannot resolve return type of '{self.method_name}': {e}"
                ) from e
            self._return_type = hints.get("return")
        return self._return_type

    def bind_arguments(self, args: Tuple, kwargs: Dict[str, Any]) -> Dict[str, Any]:
        """Map call arguments to parameter names, defaults applied, ``self`` dropped."""
        if self._signature is None:
            self._signature = inspect.signature(self.func)
        try:
            bound = self._signature.bind(None, *args, **kwargs)
        except TypeError as e:
            raise WebPageError(f"Bad arguments for '{self.method_name}': {e}") from e
        bound.apply_defaults()
        arguments = dict(bound.arguments)
        arguments.pop(next(iter(self._signature.parameters)), None)
        return arguments

    def _format(self, template: str, args: Tuple, kwargs: Dict[str, Any]) -> str:
        if "{" not in template:
            return template
        try:
            return template.format(**self.bind_arguments(args, kwargs))
        except (KeyError, IndexError) as e:
            raise WebPageError(
                f"Template '{template}' of '{self.method_name}' references "
                f"unknown argument {e}"
            ) from e

    def resolve_selector(self, args: Tuple, kwargs: Dict[str, Any]) -> Optional[str]:
        if self.selector is None:
            return None
        return self._format(self.selector, args, kwargs)

    def resolve_name(self, args: Tuple, kwargs: Dict[str, Any]) -> str:
        if self.display_name is None:
            return self.method_name
        return self._format(self.display_name, args, kwargs)

    def __repr__(self) -> str:
        return f"<MethodDescriptor {self.method_name} selector={self.selector!r}>"


def _descriptor(target: Any) -> MethodDescriptor:
    if isinstance(target, MethodDescriptor):
        return target
    if not callable(target):
        raise TypeError(f"Only functions can be declared, got {target!r}")
    return MethodDescriptor(target)


def declare(func: Callable) -> MethodDescriptor:
    """Mark a method as declared: its calls are routed by the framework."""
    return _descriptor(func)


def find_by(selector: str, timeout: Optional[float] = None) -> Callable[[Any], MethodDescriptor]:
    """
    Declare a recursion point located by ``selector``.

    The method's return annotation decides what is created: an element-like
    class gives a single element, ``ExtendedList[...]`` a list.

    Args:
        selector: Playwright selector; ``{param}`` placeholders are filled
                  from the call arguments
        timeout: Retry deadline in seconds for the created child and its
                 descendants, overriding the inherited one
    """
    def decorator(func: Any) -> MethodDescriptor:
        descriptor = _descriptor(func)
        descriptor.selector = selector
        descriptor.timeout = timeout
        return descriptor
    return decorator


def name(display_name: str) -> Callable[[Any], MethodDescriptor]:
    """Give the created child a readable name; ``{param}`` placeholders allowed."""
    def decorator(func: Any) -> MethodDescriptor:
        descriptor = _descriptor(func)
        descriptor.display_name = display_name
        return descriptor
    return decorator


def handle_with(handler_class: Type) -> Callable[[Any], MethodDescriptor]:
    """Route the method to a custom MethodHandler class."""
    def decorator(func: Any) -> MethodDescriptor:
        descriptor = _descriptor(func)
        descriptor.handler_class = handler_class
        return descriptor
    return decorator


__all__ = [
    "MethodDescriptor",
    "declare",
    "find_by",
    "name",
    "handle_with",
    "HANDLER_ATTRIBUTE",
]
