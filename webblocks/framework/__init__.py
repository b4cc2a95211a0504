"""
================================================================================
Page Object Framework
================================================================================

Declare a page once, get live, self-resolving page objects.

Components:
    - annotations: find_by / name / declare / handle_with markers
    - elements: WebPage, ExtendedWebElement, ExtendedList base classes
    - context: per-node Context tree and Store
    - registry: per-class method tables
    - extension: reserved and custom method handlers (hover_method)
    - handler: WebBlockMethodHandler call router
    - proxies: proxy factory
    - waiter: bounded retry loader
    - page_factory: WebPageFactory entry point
    - matchers: predicates and converters

Author: Automation Team
License: MIT
================================================================================
"""

from .annotations import MethodDescriptor, declare, find_by, handle_with, name
from .context import CONVERTER_KEY, DRIVER_KEY, FILTER_KEY, Context, Store
from .elements import ElementList, ExtendedList, ExtendedWebElement, WebBlock, WebPage
from .exceptions import (
    ElementNotFoundError,
    MissingDependencyError,
    UnsupportedOperationError,
    WebPageError,
)
from .extension import MethodHandler, hover_method
from .registry import EntryKind, ExtensionRegistry
from .handler import WebBlockMethodHandler
from .proxies import create_proxy
from .page_factory import WebPageFactory
from .waiter import SlowLoader, WaitConfig

__all__ = [
    "MethodDescriptor",
    "declare",
    "find_by",
    "handle_with",
    "name",
    "Context",
    "Store",
    "DRIVER_KEY",
    "FILTER_KEY",
    "CONVERTER_KEY",
    "ElementList",
    "ExtendedList",
    "ExtendedWebElement",
    "WebBlock",
    "WebPage",
    "ElementNotFoundError",
    "MissingDependencyError",
    "UnsupportedOperationError",
    "WebPageError",
    "MethodHandler",
    "hover_method",
    "EntryKind",
    "ExtensionRegistry",
    "WebBlockMethodHandler",
    "create_proxy",
    "WebPageFactory",
    "SlowLoader",
    "WaitConfig",
]
