"""
================================================================================
Search Page Object
================================================================================

Declared page object for a search page: a heading, a search form and a list
of result cards.

Nothing here locates elements up front. Each declared method returns a
node that finds its element again whenever it is used, so the same objects
stay valid while the page re-renders.

NOTE:
  Nested selectors are CSS so that they resolve relative to their parent
  element; page-level selectors may be XPath.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import List

import allure

from webblocks.framework import (
    ExtendedList,
    ExtendedWebElement,
    WebPage,
    find_by,
    name,
)


class SearchForm(ExtendedWebElement):
    """Search box with its submit button."""

    @find_by("input[name='q']")
    def query_input(self) -> ExtendedWebElement: ...

    @find_by("button[type='submit']")
    def submit_button(self) -> ExtendedWebElement: ...

    @allure.step("Search for '{text}'")
    def search(self, text: str) -> None:
        self.query_input().fill(text)
        self.submit_button().click()


class SearchResult(ExtendedWebElement):
    """One result card."""

    @find_by("a.result-title")
    def link(self) -> ExtendedWebElement: ...

    @find_by("span.tag")
    def tags(self) -> ExtendedList[ExtendedWebElement]: ...

    def title_text(self) -> str:
        return (self.link().text_content() or "").strip()

    def href(self) -> str:
        return self.link().get_attribute("href")


class SearchPage(WebPage):
    """Search page; ``heading`` rather than ``title`` since Page.title() wins."""

    URL_PATH = "/search"

    @find_by("//h1")
    def heading(self) -> ExtendedWebElement: ...

    @find_by("form#search")
    def search_form(self) -> SearchForm: ...

    @find_by("li.result")
    def results(self) -> ExtendedList[SearchResult]: ...

    @find_by("li.result[data-id='{result_id}']")
    @name("Result {result_id}")
    def result(self, result_id: str) -> SearchResult: ...

    @find_by("div.banner", timeout=0.1)
    def banner(self) -> ExtendedWebElement: ...

    def open_search(self, base_url: str) -> "SearchPage":
        return self.open(base_url.rstrip("/") + self.URL_PATH)

    def search_for(self, text: str) -> "SearchPage":
        self.search_form().search(text)
        return self

    @allure.step("Collect result titles")
    def result_titles(self) -> List[str]:
        return [result.title_text() for result in self.results()]
