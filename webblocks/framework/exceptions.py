"""
================================================================================
Framework Exceptions
================================================================================

Failure taxonomy of the page-object layer.

    WebPageError
     ├── ElementNotFoundError       lookup failed, retried until the deadline
     ├── UnsupportedOperationError  call matches no dispatch rule
     └── MissingDependencyError     required context entry is absent

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations


class WebPageError(Exception):
    """Base class for every error raised by the framework."""
    pass


class ElementNotFoundError(WebPageError):
    """Raised when an element cannot be located or a wait condition is not met."""
    pass


class UnsupportedOperationError(WebPageError, AttributeError):
    """
    Raised when a call on a page object matches none of the dispatch rules.

    Subclasses AttributeError so that ``hasattr()`` and ``getattr(obj, name,
    default)`` keep working on proxies.
    """

    def __init__(self, method_name: str, owner: str = "") -> None:
        self.method_name = method_name
        self.owner = owner
        where = f" on {owner}" if owner else ""
        super().__init__(f"Method '{method_name}' is not supported{where}")


class MissingDependencyError(WebPageError):
    """Raised when a handler needs a context entry that was never provided."""

    def __init__(self, key: str, context_name: str = "") -> None:
        self.key = key
        where = f" in context '{context_name}'" if context_name else ""
        super().__init__(f"{key} is missing{where}")


__all__ = [
    "WebPageError",
    "ElementNotFoundError",
    "UnsupportedOperationError",
    "MissingDependencyError",
]
