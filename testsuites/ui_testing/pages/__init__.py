"""
================================================================================
Page Objects
================================================================================

Declared page objects used by the UI test suites.

Each page class declares:
    - Elements and blocks located with find_by
    - Lists of elements as ExtendedList[ItemType]
    - Default methods composing them into page-level actions

Author: Automation Team
License: MIT
================================================================================
"""

from .search_page import SearchForm, SearchPage, SearchResult

__all__ = [
    "SearchPage",
    "SearchForm",
    "SearchResult",
]
