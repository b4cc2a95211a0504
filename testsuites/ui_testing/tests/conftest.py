"""
================================================================================
UI Testing Pytest Configuration
================================================================================

Fixtures running the page-object suites against a search page, either the
in-memory fake or a real Chromium page.

Key Features:
- The same tests run on both drivers (``browser_page`` is parametrized)
- Chromium runs only when WEBBLOCKS_LIVE_BROWSER=1 and a browser is installed
- Screenshot capture on failure for real pages

================================================================================
"""

import os
from typing import Generator

import allure
import pytest
from loguru import logger
from playwright.sync_api import Browser, Error as PlaywrightError, sync_playwright

from testsuites.fakes import FakeElement, FakePage
from testsuites.ui_testing.pages.search_page import SearchPage
from webblocks.framework import WaitConfig, WebPageFactory


SEARCH_RESULTS = [
    # (data-id, title, href, tags)
    ("1", "Apple", "/apple", ("fruit", "red")),
    ("2", "Banana", "/banana", ("fruit",)),
    ("3", "Apple", "/apple-pie", ("dessert",)),
]


def _result_html(result_id, title, href, tags) -> str:
    tag_html = "".join(f'<span class="tag">{tag}</span>' for tag in tags)
    return (
        f'<li class="result" data-id="{result_id}">'
        f'<a class="result-title" href="{href}">{title}</a>{tag_html}</li>'
    )


SEARCH_HTML = (
    "<html><body>"
    "<h1>Search</h1>"
    '<form id="search" onsubmit="return false">'
    '<input name="q" /><button type="submit">Go</button>'
    "</form>"
    f"<ul>{''.join(_result_html(*result) for result in SEARCH_RESULTS)}</ul>"
    "</body></html>"
)


def render_search_page(page: FakePage) -> FakePage:
    """Fake equivalent of SEARCH_HTML, keyed by the selectors SearchPage uses."""
    form = FakeElement()
    form.render("input[name='q']", FakeElement())
    form.render("button[type='submit']", FakeElement("Go"))

    results = []
    for result_id, title, href, tags in SEARCH_RESULTS:
        result = FakeElement(title + "".join(tags), {"class": "result", "data-id": result_id})
        result.render("a.result-title", FakeElement(title, {"href": href}))
        result.render("span.tag", *(FakeElement(tag) for tag in tags))
        page.render(f"li.result[data-id='{result_id}']", result)
        results.append(result)

    page.render("//h1", FakeElement("Search"))
    page.render("form#search", form)
    page.render("li.result", *results)
    return page


# ================================================================================
# Browser Fixtures
# ================================================================================

@pytest.fixture(scope="session")
def live_browser() -> Generator[Browser, None, None]:
    """Session-scoped Chromium, skipped unless explicitly requested."""
    if os.getenv("WEBBLOCKS_LIVE_BROWSER", "").lower() not in ("1", "true", "yes"):
        pytest.skip("Set WEBBLOCKS_LIVE_BROWSER=1 to run against Chromium")

    with sync_playwright() as p:
        try:
            browser = p.chromium.launch(headless=True)
        except PlaywrightError as e:
            pytest.skip(f"Chromium is not available: {e}")
        yield browser
        browser.close()


@pytest.fixture(params=["fake", "live"])
def browser_page(request, fake_page: FakePage):
    """Driver showing the search page."""
    if request.param == "fake":
        yield render_search_page(fake_page)
        return

    browser: Browser = request.getfixturevalue("live_browser")
    context = browser.new_context(viewport={"width": 1280, "height": 720})
    page = context.new_page()
    page.set_content(SEARCH_HTML)
    yield page
    context.close()


# ================================================================================
# Page Object Fixtures
# ================================================================================

@pytest.fixture
def search_page(browser_page, fast_wait: WaitConfig) -> SearchPage:
    return WebPageFactory(browser_page, wait_config=fast_wait).get(SearchPage)


# ================================================================================
# Test Lifecycle Hooks
# ================================================================================

@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """Attach a screenshot to the Allure report when a real-page test fails."""
    outcome = yield
    report = outcome.get_result()

    if report.when != "call" or not report.failed:
        return

    page = getattr(item, "funcargs", {}).get("browser_page")
    if page is None or not hasattr(page, "screenshot"):
        return

    try:
        allure.attach(
            page.screenshot(full_page=True),
            name="failure_screenshot",
            attachment_type=allure.attachment_type.PNG,
        )
    except PlaywrightError as e:
        logger.warning(f"Failed to capture screenshot on failure: {e}")
