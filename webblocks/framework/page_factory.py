"""
================================================================================
Web Page Factory
================================================================================

Entry point creating page objects from a driver.

Usage:
    with sync_playwright() as p:
        page = p.chromium.launch().new_page()
        search = WebPageFactory(page).get(SearchPage)
        search.open("https://example.com/search")
        search.items().filter(has_text("A")).size()

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Any, Optional, Type, TypeVar

import allure
from loguru import logger

from webblocks.common import init_logger
from webblocks.framework.context import Context
from webblocks.framework.elements import WebBlock
from webblocks.framework.proxies import create_proxy
from webblocks.framework.waiter import WaitConfig


P = TypeVar("P", bound=WebBlock)


class WebPageFactory:
    """
    Creates root page objects bound to one driver.

    The root target is the driver itself, so every driver operation the page
    class does not declare (``goto``, ``title``, ``query_selector``, ...) passes
    straight through.

    Args:
        driver: Playwright sync ``Page`` (or an object with the same shape)
        wait_config: Retry settings for every node of created pages;
                     defaults to the ``loader.*`` configuration

    Creating a factory applies the ``logging.*`` configuration once per process.
    """

    def __init__(self, driver: Any, wait_config: Optional[WaitConfig] = None):
        init_logger()
        self._driver = driver
        self._wait_config = wait_config

    @property
    def driver(self) -> Any:
        return self._driver

    def get(self, page_class: Type[P]) -> P:
        """Create a fresh page object tree implementing ``page_class``."""
        with allure.step(f"Create page object {page_class.__name__}"):
            context = Context.new_page_context(
                page_class, self._driver, self._wait_config or WaitConfig.from_config()
            )
            logger.info(
                f"Created page object {page_class.__name__} "
                f"(timeout={context.wait_config.timeout}s)"
            )
            driver = self._driver
            return create_proxy(page_class, context, lambda: driver, type(driver))


__all__ = [
    "WebPageFactory",
]
