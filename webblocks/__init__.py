"""
================================================================================
WebBlocks
================================================================================

Page-object layer for Playwright UI automation: declare page structure as
classes, get lazily-resolving, retrying page objects back.

Modules:
    - framework: declarations, proxies, dispatch, retry loader
    - common: configuration and logging

Example:
    from webblocks import WebPageFactory, WebPage, ExtendedList, ExtendedWebElement, find_by

    class SearchPage(WebPage):

        @find_by("//li")
        def items(self) -> ExtendedList[ExtendedWebElement]: ...

    search = WebPageFactory(page).get(SearchPage)
    assert search.items().size() == 3

================================================================================
"""

__version__ = "1.0.0"

from webblocks.framework import (
    Context,
    ElementList,
    ElementNotFoundError,
    ExtendedList,
    ExtendedWebElement,
    MethodHandler,
    MissingDependencyError,
    UnsupportedOperationError,
    WaitConfig,
    WebBlock,
    WebPage,
    WebPageError,
    WebPageFactory,
    declare,
    find_by,
    handle_with,
    hover_method,
    name,
)

__all__ = [
    "Context",
    "ElementList",
    "ElementNotFoundError",
    "ExtendedList",
    "ExtendedWebElement",
    "MethodHandler",
    "MissingDependencyError",
    "UnsupportedOperationError",
    "WaitConfig",
    "WebBlock",
    "WebPage",
    "WebPageError",
    "WebPageFactory",
    "declare",
    "find_by",
    "handle_with",
    "hover_method",
    "name",
    "__version__",
]
