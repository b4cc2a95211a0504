"""
================================================================================
Page Object Method Handler
================================================================================

Routes every call made on a page-object proxy.

Resolution order for a call ``proxy.<name>(...)``:
    1. default method written on the declared class   -> run it as-is
    2. declared method returning Context               -> the node's context
    3. operation of the target classes (click, ...)    -> browser target, retried
    4. reserved name (filter, convert, should, ...)    -> reserved handler
    5. declared with handle_with(...)                  -> custom handler
    6. declared with find_by(...)                      -> child proxy
    7. anything else                                   -> UnsupportedOperationError

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import functools
from collections.abc import Sequence
from typing import Any, Callable, Dict, FrozenSet, Tuple

from loguru import logger
from playwright.sync_api import ElementHandle

from webblocks.framework.annotations import MethodDescriptor
from webblocks.framework.context import CONVERTER_KEY, FILTER_KEY, Context
from webblocks.framework.elements import ElementList, list_item_type, list_origin
from webblocks.framework.exceptions import ElementNotFoundError, UnsupportedOperationError
from webblocks.framework.proxies import create_proxy
from webblocks.framework.registry import EntryKind, ExtensionRegistry
from webblocks.framework.waiter import SlowLoader


SEQUENCE_DUNDERS: Tuple[str, ...] = ("__len__", "__iter__", "__getitem__", "__contains__")


@functools.lru_cache(maxsize=None)
def target_operations(target_classes: Tuple[type, ...]) -> Tuple[FrozenSet[str], FrozenSet[str]]:
    """
    Public operations of the target classes as ``(methods, attributes)``.

    Methods are the public callables plus the sequence protocol of sequence
    targets; attributes are the public non-callable class attributes
    (properties such as ``url``).
    """
    methods = set()
    attributes = set()
    for klass in target_classes:
        for attr_name in dir(klass):
            if attr_name.startswith("_"):
                if attr_name in SEQUENCE_DUNDERS and issubclass(klass, Sequence):
                    methods.add(attr_name)
                continue
            if callable(getattr(klass, attr_name, None)):
                methods.add(attr_name)
            else:
                attributes.add(attr_name)
    return frozenset(methods), frozenset(attributes)


class WebBlockMethodHandler:
    """
    Method handler of one page-object proxy.

    Holds the immutable triple the proxy was created with: its Context, the
    provider resolving the real browser target, and the target classes whose
    operations are forwarded to that target.

    Args:
        declared_type: Class the proxy implements
        context: Node context
        target_provider: Zero-argument callable returning the live target
        target_classes: Capability types of the target
    """

    def __init__(
        self,
        declared_type: type,
        context: Context,
        target_provider: Callable[[], Any],
        target_classes: Tuple[type, ...],
    ):
        self._declared_type = declared_type
        self._context = context
        self._target_provider = target_provider
        self._target_classes = tuple(target_classes)
        self._registry = ExtensionRegistry.create(declared_type)
        self._target_methods, self._target_attributes = target_operations(self._target_classes)

    @property
    def context(self) -> Context:
        return self._context

    @property
    def target_classes(self) -> Tuple[type, ...]:
        return self._target_classes

    @property
    def is_list(self) -> bool:
        return any(issubclass(klass, list) for klass in self._target_classes)

    # =========================================================================
    # Dispatch
    # =========================================================================

    def invoke(self, proxy: Any, method_name: str, args: Tuple, kwargs: Dict[str, Any]) -> Any:
        entry = self._registry.resolve(method_name)

        if entry.kind is EntryKind.DEFAULT:
            return entry.function(proxy, *args, **kwargs)

        if entry.kind is EntryKind.CONTEXT:
            return entry.handler.handle(self._context, proxy, entry.descriptor, args, kwargs)

        if method_name in self._target_methods:
            return self.invoke_target_method(method_name, args, kwargs)

        if entry.kind in (EntryKind.RESERVED, EntryKind.EXTENSION):
            return entry.handler.handle(self._context, proxy, entry.descriptor, args, kwargs)

        if entry.kind is EntryKind.CHILD:
            return self.create_child(proxy, entry.descriptor, args, kwargs)

        raise UnsupportedOperationError(method_name, str(self._context))

    def bind(self, proxy: Any, attr_name: str) -> Any:
        """
        Resolve an attribute the proxy class does not define.

        Target attributes are read from the live target; anything else the
        dispatch rules can handle comes back as a callable.
        """
        entry = self._registry.resolve(attr_name)
        if entry.kind is EntryKind.DEFAULT:
            return functools.partial(entry.function, proxy)

        if attr_name in self._target_attributes and attr_name not in self._target_methods:
            return self.read_target_attribute(attr_name)

        if entry.kind is EntryKind.UNSUPPORTED and attr_name not in self._target_methods:
            raise UnsupportedOperationError(attr_name, str(self._context))

        def dispatch(*args, **kwargs):
            return self.invoke(proxy, attr_name, args, kwargs)

        dispatch.__name__ = attr_name
        return dispatch

    # =========================================================================
    # Browser target
    # =========================================================================

    def resolve_target(self) -> Any:
        """
        Fetch the live target.

        For list nodes the candidates are fetched fresh, then filtered and
        converted in declaration order.
        """
        target = self._target_provider()
        if not self.is_list:
            return target

        items = list(target)
        for predicate in self._context.store.get_list(FILTER_KEY):
            items = [item for item in items if predicate(item)]
        for converter in self._context.store.get_list(CONVERTER_KEY):
            items = [converter(item) for item in items]
        return ElementList(items)

    def invoke_target_method(self, method_name: str, args: Tuple, kwargs: Dict[str, Any]) -> Any:
        def attempt():
            return getattr(self.resolve_target(), method_name)(*args, **kwargs)

        return SlowLoader(self._context.wait_config).load(
            attempt, description=f"{method_name} on {self._context}"
        )

    def read_target_attribute(self, attr_name: str) -> Any:
        return SlowLoader(self._context.wait_config).load(
            lambda: getattr(self.resolve_target(), attr_name),
            description=f"{attr_name} of {self._context}",
        )

    # =========================================================================
    # Recursion
    # =========================================================================

    def create_child(
        self,
        proxy: Any,
        descriptor: MethodDescriptor,
        args: Tuple,
        kwargs: Dict[str, Any],
    ) -> Any:
        selector = descriptor.resolve_selector(args, kwargs)
        child_name = descriptor.resolve_name(args, kwargs)
        return_type = descriptor.return_type
        origin = list_origin(return_type)

        if origin is not None:
            child_context = self._context.new_child(
                child_name, selector, origin, descriptor.timeout
            )
            item_type = list_item_type(return_type)
            logger.debug(f"Created list {child_context} of {item_type.__name__} in {self._context}")

            def find_elements():
                return [
                    create_proxy(item_type, child_context, _constant(element), ElementHandle)
                    for element in proxy.query_selector_all(selector)
                ]

            return create_proxy(origin, child_context, find_elements, ElementList)

        child_context = self._context.new_child(
            child_name, selector, return_type, descriptor.timeout
        )
        logger.debug(f"Created element {child_context} in {self._context}")

        def find_element():
            element = proxy.query_selector(selector)
            if element is None:
                raise ElementNotFoundError(f"Unable to locate element {child_context}")
            return element

        return create_proxy(return_type, child_context, find_element, ElementHandle)

    def __repr__(self) -> str:
        return f"WebBlockMethodHandler({self._declared_type.__name__}, {self._context})"


def _constant(value: Any) -> Callable[[], Any]:
    return lambda: value


__all__ = [
    "WebBlockMethodHandler",
    "target_operations",
    "SEQUENCE_DUNDERS",
]
