"""
================================================================================
Proxy Factory
================================================================================

Builds the runtime objects handed to page-object code.

A proxy is an instance of a generated subclass of the declared class:
declared stubs route through the proxy's own WebBlockMethodHandler, default
methods run unchanged, and attribute access falls back to the handler for
target operations (``click``, ``text_content``, ...) and reserved names.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Callable, Dict

from webblocks.framework.annotations import HANDLER_ATTRIBUTE
from webblocks.framework.context import Context


_ROUTED_DUNDERS = ("__str__", "__repr__")
_SEQUENCE_DUNDERS = ("__len__", "__iter__", "__getitem__", "__contains__")

_PROXY_CLASSES_ATTRIBUTE = "_webblocks_proxy_classes"


def _route(method_name: str) -> Callable:
    def method(self, *args, **kwargs):
        return self.__dict__[HANDLER_ATTRIBUTE].invoke(self, method_name, args, kwargs)

    method.__name__ = method_name
    return method


def _proxy_getattr(self, attr_name: str) -> Any:
    handler = self.__dict__.get(HANDLER_ATTRIBUTE)
    if handler is None or attr_name.startswith("_"):
        raise AttributeError(
            f"'{type(self).__name__}' object has no attribute '{attr_name}'"
        )
    return handler.bind(self, attr_name)


def _defines(declared_type: type, attr_name: str) -> bool:
    return any(
        attr_name in vars(klass)
        for klass in declared_type.__mro__
        if klass is not object
    )


def proxy_class(declared_type: type, sequence: bool = False) -> type:
    """Return the generated proxy class of ``declared_type``, cached on that class."""
    cached: Dict[bool, type] = vars(declared_type).get(_PROXY_CLASSES_ATTRIBUTE)
    if cached is None:
        cached = {}
        setattr(declared_type, _PROXY_CLASSES_ATTRIBUTE, cached)
    klass = cached.get(sequence)
    if klass is not None:
        return klass

    namespace: Dict[str, Any] = {
        "__module__": declared_type.__module__,
        "__qualname__": f"{declared_type.__qualname__}Proxy",
        "__getattr__": _proxy_getattr,
    }
    for dunder in _ROUTED_DUNDERS:
        if not _defines(declared_type, dunder):
            namespace[dunder] = _route(dunder)
    if sequence:
        for dunder in _SEQUENCE_DUNDERS:
            namespace[dunder] = _route(dunder)

    klass = type(f"{declared_type.__name__}Proxy", (declared_type,), namespace)
    cached[sequence] = klass
    return klass


def create_proxy(
    declared_type: type,
    context: Context,
    target_provider: Callable[[], Any],
    *target_classes: type,
) -> Any:
    """
    Create a proxy implementing ``declared_type``.

    Args:
        declared_type: Declared page-object class to implement
        context: Context of the new node
        target_provider: Returns the live target each time it is called
        *target_classes: Capability types whose operations reach the target

    Returns:
        A new proxy with its own method handler
    """
    from webblocks.framework.handler import WebBlockMethodHandler

    sequence = any(issubclass(klass, Sequence) for klass in target_classes)
    klass = proxy_class(declared_type, sequence)
    proxy = object.__new__(klass)
    proxy.__dict__[HANDLER_ATTRIBUTE] = WebBlockMethodHandler(
        declared_type, context, target_provider, target_classes
    )
    return proxy


def handler_of(proxy: Any) -> Any:
    """The WebBlockMethodHandler behind ``proxy``."""
    return proxy.__dict__[HANDLER_ATTRIBUTE]


__all__ = [
    "create_proxy",
    "proxy_class",
    "handler_of",
]
