"""
================================================================================
In-Memory Browser Fakes
================================================================================

Minimal stand-ins shaped like Playwright's sync ``Page`` and ``ElementHandle``
so page objects can be exercised without launching a browser.

Selectors are not parsed: each fake maps a selector string to the elements
it "finds". Tests mutate that mapping to simulate a changing page.

================================================================================
"""

from __future__ import annotations

from collections import Counter
from typing import Dict, List, Optional, Tuple


class FakeElement:
    """Element handle with text, attributes and nested elements."""

    def __init__(
        self,
        text: str = "",
        attributes: Optional[Dict[str, str]] = None,
        visible: bool = True,
        box: Optional[Dict[str, float]] = None,
    ):
        self.text = text
        self.attributes = dict(attributes or {})
        self.visible = visible
        self.box = box
        self.children: Dict[str, List["FakeElement"]] = {}
        self.value = ""
        self.clicks = 0
        self.lookups: Counter = Counter()

    def render(self, selector: str, *elements: "FakeElement") -> "FakeElement":
        self.children[selector] = list(elements)
        return self

    def text_content(self) -> str:
        return self.text

    def inner_text(self) -> str:
        return self.text

    def get_attribute(self, name: str) -> Optional[str]:
        return self.attributes.get(name)

    def is_visible(self) -> bool:
        return self.visible

    def click(self) -> None:
        self.clicks += 1

    def fill(self, value: str) -> None:
        self.value = value

    def input_value(self) -> str:
        return self.value

    def bounding_box(self) -> Optional[Dict[str, float]]:
        return self.box

    def query_selector(self, selector: str) -> Optional["FakeElement"]:
        self.lookups[selector] += 1
        found = self.children.get(selector) or []
        return found[0] if found else None

    def query_selector_all(self, selector: str) -> List["FakeElement"]:
        self.lookups[selector] += 1
        return list(self.children.get(selector, []))

    def __repr__(self) -> str:
        return f"FakeElement({self.text!r})"


class FakeMouse:

    def __init__(self):
        self.moves: List[Tuple[float, float]] = []

    def move(self, x: float, y: float, steps: int = 1) -> None:
        self.moves.append((x, y))


class FakePage:
    """Page-shaped driver: navigation, element lookup and a mouse."""

    def __init__(self):
        self.dom: Dict[str, List[FakeElement]] = {}
        self.mouse = FakeMouse()
        self.visited: List[str] = []
        self.lookups: Counter = Counter()

    @property
    def url(self) -> str:
        return self.visited[-1] if self.visited else "about:blank"

    def render(self, selector: str, *elements: FakeElement) -> "FakePage":
        self.dom[selector] = list(elements)
        return self

    def goto(self, url: str) -> None:
        self.visited.append(url)

    def query_selector(self, selector: str) -> Optional[FakeElement]:
        self.lookups[selector] += 1
        found = self.dom.get(selector) or []
        return found[0] if found else None

    def query_selector_all(self, selector: str) -> List[FakeElement]:
        self.lookups[selector] += 1
        return list(self.dom.get(selector, []))
