"""
================================================================================
Extension Registry
================================================================================

Per-class table mapping each method name to how it is handled.

The table is computed once per declared class by scanning its MRO:

    DEFAULT      plain function written on the class, runs as-is
    CONTEXT      declared method returning Context
    RESERVED     wait_until / filter / convert / should / __str__ / __repr__
    EXTENSION    declared with handle_with(...)
    CHILD        declared with find_by(...) returning an element or a list
    UNSUPPORTED  anything else

The table is stored on the class it describes and goes away with it.

Browser-target operations are not part of the table: they depend on the
node's target classes and are checked by the method handler between
CONTEXT and RESERVED.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import inspect
import weakref
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Dict, Mapping, Optional

from loguru import logger

from webblocks.framework.annotations import MethodDescriptor
from webblocks.framework.context import Context
from webblocks.framework.elements import is_element_type, list_origin
from webblocks.framework.extension import RESERVED_HANDLERS, ContextAccessor, MethodHandler


class EntryKind(Enum):
    DEFAULT = "default"
    CONTEXT = "context"
    RESERVED = "reserved"
    EXTENSION = "extension"
    CHILD = "child"
    UNSUPPORTED = "unsupported"


@dataclass(frozen=True)
class RegistryEntry:
    """How one method of a declared class is handled."""
    kind: EntryKind
    method_name: str
    descriptor: Optional[MethodDescriptor] = None
    handler: Optional[MethodHandler] = None
    function: Optional[Callable] = None


_CONTEXT_ACCESSOR = ContextAccessor()


class ExtensionRegistry:
    """
    Immutable method table of one declared class.

    Usage:
        >>> registry = ExtensionRegistry.create(SearchPage)
        >>> registry.resolve("items").kind
        <EntryKind.CHILD: 'child'>
    """

    _CACHE_ATTRIBUTE = "_webblocks_registry"
    _cached_types: "weakref.WeakSet[type]" = weakref.WeakSet()

    def __init__(self, declared_type: type):
        self.declared_type = declared_type
        self._entries: Mapping[str, RegistryEntry] = MappingProxyType(
            self._scan(declared_type)
        )

    @classmethod
    def create(cls, declared_type: type) -> "ExtensionRegistry":
        """Return the registry of ``declared_type``, building it on first use."""
        registry = vars(declared_type).get(cls._CACHE_ATTRIBUTE)
        if registry is None:
            registry = cls(declared_type)
            setattr(declared_type, cls._CACHE_ATTRIBUTE, registry)
            cls._cached_types.add(declared_type)
            logger.debug(
                f"Built extension registry for {declared_type.__name__}: "
                f"{len(registry._entries)} methods"
            )
        return registry

    @classmethod
    def clear_cache(cls) -> None:
        """Forget every built registry; classes rebuild theirs on next use."""
        for declared_type in list(cls._cached_types):
            if cls._CACHE_ATTRIBUTE in vars(declared_type):
                delattr(declared_type, cls._CACHE_ATTRIBUTE)
        cls._cached_types.clear()

    def _scan(self, declared_type: type) -> Dict[str, RegistryEntry]:
        entries: Dict[str, RegistryEntry] = {}
        for klass in reversed(declared_type.__mro__):
            if klass is object:
                continue
            for attr_name, attr in vars(klass).items():
                if isinstance(attr, MethodDescriptor):
                    entries[attr_name] = self._classify(attr_name, attr)
                elif inspect.isfunction(attr):
                    entries[attr_name] = RegistryEntry(
                        EntryKind.DEFAULT, attr_name, function=attr
                    )
        return entries

    @staticmethod
    def _classify(method_name: str, descriptor: MethodDescriptor) -> RegistryEntry:
        if descriptor.return_type is Context:
            return RegistryEntry(
                EntryKind.CONTEXT, method_name, descriptor, handler=_CONTEXT_ACCESSOR
            )

        if method_name in RESERVED_HANDLERS:
            return RegistryEntry(
                EntryKind.RESERVED, method_name, descriptor,
                handler=RESERVED_HANDLERS[method_name],
            )

        if descriptor.handler_class is not None:
            return RegistryEntry(
                EntryKind.EXTENSION, method_name, descriptor,
                handler=descriptor.handler_class(),
            )

        return_type = descriptor.return_type
        if descriptor.selector is not None and (
            is_element_type(return_type) or list_origin(return_type) is not None
        ):
            return RegistryEntry(EntryKind.CHILD, method_name, descriptor)

        return RegistryEntry(EntryKind.UNSUPPORTED, method_name, descriptor)

    def resolve(self, method_name: str) -> RegistryEntry:
        entry = self._entries.get(method_name)
        if entry is not None:
            return entry
        if method_name in RESERVED_HANDLERS:
            return RegistryEntry(
                EntryKind.RESERVED, method_name, handler=RESERVED_HANDLERS[method_name]
            )
        return RegistryEntry(EntryKind.UNSUPPORTED, method_name)

    def __contains__(self, method_name: Any) -> bool:
        return method_name in self._entries

    def method_names(self):
        return list(self._entries)

    def __repr__(self) -> str:
        return f"ExtensionRegistry({self.declared_type.__name__})"


__all__ = [
    "ExtensionRegistry",
    "RegistryEntry",
    "EntryKind",
]
