"""
================================================================================
Page Object Context
================================================================================

Hierarchical state carried by every page-object node.

A Context mirrors one node of the declared page structure: the page itself,
a block, an element or a list of elements. It holds the node's name and
selector, a key-value Store for extension state (driver, filters,
converters) and the ExtensionRegistry of the node's declared class.

The tree is owned top-down. ``parent`` is a plain back-reference used when
a child is created; the child copies what it needs and never reads the
parent again.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, FrozenSet, Iterable, List, Optional

from webblocks.framework.exceptions import MissingDependencyError
from webblocks.framework.waiter import WaitConfig

if TYPE_CHECKING:
    from webblocks.framework.registry import ExtensionRegistry


DRIVER_KEY = "driver"
FILTER_KEY = "filter"
CONVERTER_KEY = "convert"

# Keys that only ever hold an ordered list of callables
LIST_KEYS: FrozenSet[str] = frozenset({FILTER_KEY, CONVERTER_KEY})


class Store:
    """
    String-keyed storage with an explicit schema for list keys.

    A list key accumulates values in write order through ``append`` and can
    never hold anything but a list; every other key holds a single value set
    with ``put``.
    """

    def __init__(self, list_keys: Iterable[str] = LIST_KEYS):
        self._data: Dict[str, Any] = {}
        self._list_keys = frozenset(list_keys)

    def __contains__(self, key: str) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)

    def contains(self, key: str) -> bool:
        return key in self._data

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def put(self, key: str, value: Any) -> None:
        if key in self._list_keys:
            raise TypeError(f"'{key}' is a list key, use append() instead of put()")
        self._data[key] = value

    def append(self, key: str, value: Any) -> None:
        if key not in self._list_keys:
            raise TypeError(f"'{key}' is not a list key, use put() instead of append()")
        self._data.setdefault(key, []).append(value)

    def get_list(self, key: str) -> List[Any]:
        """Return a copy of the values appended under ``key`` (empty if none)."""
        if key not in self._list_keys:
            raise TypeError(f"'{key}' is not a list key")
        return list(self._data.get(key, ()))

    def keys(self) -> List[str]:
        return list(self._data)


class Context:
    """
    One node of the page-object tree.

    Use ``Context.new_page_context`` for the root and ``new_child`` for every
    other node; the constructor itself is not meant to be called directly.

    Attributes:
        name: Human-readable node name used in diagnostics
        selector: Selector locating the node, None for the page root
        store: Extension state of this node
        registry: ExtensionRegistry of the node's declared class
        wait_config: Retry settings used for this node's browser operations
    """

    def __init__(
        self,
        name: str,
        selector: Optional[str],
        registry: "ExtensionRegistry",
        wait_config: WaitConfig,
        parent: Optional["Context"] = None,
    ):
        self.name = name
        self.selector = selector
        self.registry = registry
        self.wait_config = wait_config
        self.store = Store()
        self._parent = parent

    @property
    def parent(self) -> Optional["Context"]:
        return self._parent

    @property
    def driver(self) -> Any:
        return self.store.get(DRIVER_KEY)

    def require(self, key: str) -> Any:
        """
        Return a store entry a handler cannot work without.

        Raises:
            MissingDependencyError: If the entry was never stored
        """
        if key not in self.store:
            raise MissingDependencyError(key, self.name)
        return self.store.get(key)

    def new_child(
        self,
        name: str,
        selector: Optional[str],
        declared_type: type,
        timeout: Optional[float] = None,
    ) -> "Context":
        """
        Create the context of a nested element, block or list.

        The child gets the registry of ``declared_type``, a fresh store holding
        only the driver copied from this context, and this context's wait
        settings unless ``timeout`` overrides them.
        """
        from webblocks.framework.registry import ExtensionRegistry

        child = Context(
            name=name,
            selector=selector,
            registry=ExtensionRegistry.create(declared_type),
            wait_config=self.wait_config.with_timeout(timeout),
            parent=self,
        )
        if DRIVER_KEY in self.store:
            child.store.put(DRIVER_KEY, self.store.get(DRIVER_KEY))
        return child

    @classmethod
    def new_page_context(
        cls,
        page_class: type,
        driver: Any,
        wait_config: Optional[WaitConfig] = None,
    ) -> "Context":
        """Create the root context of a page, the only one given the driver directly."""
        from webblocks.framework.registry import ExtensionRegistry

        context = cls(
            name=page_class.__name__,
            selector=None,
            registry=ExtensionRegistry.create(page_class),
            wait_config=wait_config or WaitConfig.from_config(),
        )
        context.store.put(DRIVER_KEY, driver)
        return context

    def __str__(self) -> str:
        return f"{{name: {self.name}, selector: {self.selector}}}"

    def __repr__(self) -> str:
        return f"Context(name={self.name!r}, selector={self.selector!r})"


__all__ = [
    "Context",
    "Store",
    "DRIVER_KEY",
    "FILTER_KEY",
    "CONVERTER_KEY",
    "LIST_KEYS",
]
