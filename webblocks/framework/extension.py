"""
================================================================================
Method Handlers
================================================================================

Strategies executed for reserved and custom page-object methods.

Every handler receives the node's Context, the proxy the call was made on,
the MethodDescriptor of the called method (None for reserved names used
without a declaration) and the call arguments.

Reserved handlers (selected by method name):
    - filter      append a predicate to the node's filters
    - convert     append a function to the node's converters
    - should      assert a matcher holds, retried until the deadline
    - wait_until  wait for a predicate, retried until the deadline
    - __str__     diagnostic rendering {name: ..., selector: ...}

Custom handlers are attached with ``handle_with``; ``hover_method`` is the
built-in one.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Optional, Tuple

import allure

from webblocks.framework.annotations import handle_with
from webblocks.framework.context import CONVERTER_KEY, DRIVER_KEY, FILTER_KEY, Context
from webblocks.framework.exceptions import ElementNotFoundError
from webblocks.framework.waiter import SlowLoader

if TYPE_CHECKING:
    from webblocks.framework.annotations import MethodDescriptor


def describe(obj: Any) -> str:
    """Readable name of a matcher, predicate or function."""
    if hasattr(obj, "description"):
        return str(obj)
    return getattr(obj, "__name__", repr(obj))


class MethodHandler:
    """Base class of every method strategy."""

    def handle(
        self,
        context: Context,
        proxy: Any,
        descriptor: Optional["MethodDescriptor"],
        args: Tuple,
        kwargs: Dict[str, Any],
    ) -> Any:
        raise NotImplementedError

    @staticmethod
    def single_argument(args: Tuple, kwargs: Dict[str, Any], method: str) -> Any:
        values = list(args) + list(kwargs.values())
        if len(values) != 1:
            raise TypeError(f"{method}() takes exactly one argument ({len(values)} given)")
        return values[0]


class ContextAccessor(MethodHandler):
    """Returns the node's own Context."""

    def handle(self, context, proxy, descriptor, args, kwargs):
        return context


class ToStringMethodHandler(MethodHandler):

    def handle(self, context, proxy, descriptor, args, kwargs):
        return str(context)


class FilterMethodHandler(MethodHandler):
    """Records a predicate; evaluated when a list operation runs."""

    def handle(self, context, proxy, descriptor, args, kwargs):
        predicate = self.single_argument(args, kwargs, "filter")
        context.store.append(FILTER_KEY, predicate)
        return proxy


class ConvertMethodHandler(MethodHandler):
    """Records a converter; evaluated when a list operation runs."""

    def handle(self, context, proxy, descriptor, args, kwargs):
        function = self.single_argument(args, kwargs, "convert")
        context.store.append(CONVERTER_KEY, function)
        return proxy


class ShouldMethodHandler(MethodHandler):
    """
    Asserts that ``matcher(proxy)`` holds, retrying until the deadline.

    A matcher may return a falsy value or raise AssertionError to signal a
    mismatch; either way the next attempt re-evaluates it against the live page.
    """

    def handle(self, context, proxy, descriptor, args, kwargs):
        matcher = self.single_argument(args, kwargs, "should")

        def check():
            if not matcher(proxy):
                raise AssertionError(f"Expected {context} to match: {describe(matcher)}")
            return proxy

        with allure.step(f"{context.name} should {describe(matcher)}"):
            return SlowLoader(context.wait_config).load(
                check, description=f"{context} should {describe(matcher)}"
            )


class WaitUntilMethodHandler(MethodHandler):
    """Waits until ``predicate(proxy)`` is true, otherwise no such element."""

    def handle(self, context, proxy, descriptor, args, kwargs):
        predicate = self.single_argument(args, kwargs, "wait_until")

        def check():
            if predicate(proxy):
                return proxy
            raise ElementNotFoundError(
                f"No such element {context} matching: {describe(predicate)}"
            )

        with allure.step(f"Wait until {context.name} {describe(predicate)}"):
            return SlowLoader(context.wait_config).load(
                check, description=f"wait until {context} {describe(predicate)}"
            )


class HoverMethodHandler(MethodHandler):
    """Moves the driver's mouse to the centre of the element."""

    def handle(self, context, proxy, descriptor, args, kwargs):
        driver = context.require(DRIVER_KEY)

        def move():
            box = proxy.bounding_box()
            if not box:
                raise ElementNotFoundError(f"Element {context} has no bounding box")
            driver.mouse.move(box["x"] + box["width"] / 2, box["y"] + box["height"] / 2)
            return proxy

        with allure.step(f"Hover over {context.name}"):
            return SlowLoader(context.wait_config).load(
                move, description=f"hover over {context}"
            )


hover_method = handle_with(HoverMethodHandler)

RESERVED_HANDLERS: Dict[str, MethodHandler] = {
    "wait_until": WaitUntilMethodHandler(),
    "filter": FilterMethodHandler(),
    "convert": ConvertMethodHandler(),
    "should": ShouldMethodHandler(),
    "__str__": ToStringMethodHandler(),
    "__repr__": ToStringMethodHandler(),
}


__all__ = [
    "MethodHandler",
    "ContextAccessor",
    "ToStringMethodHandler",
    "FilterMethodHandler",
    "ConvertMethodHandler",
    "ShouldMethodHandler",
    "WaitUntilMethodHandler",
    "HoverMethodHandler",
    "hover_method",
    "RESERVED_HANDLERS",
    "describe",
]
