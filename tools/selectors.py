"""
Selector Chains — ordered extraction strategies with early exit.

Portal markup changes often, so every field is read through a list of
selectors tried in order; the first non-empty result wins.
"""

from dataclasses import dataclass
from itertools import chain
from typing import Callable, Iterable, Optional
from bs4 import BeautifulSoup, Tag


def clean_text(node: Optional[Tag]) -> str:
    """Text of a node, trimmed. Empty string for None."""
    if node is None:
        return ""
    return node.get_text().strip()


def first_result(strategies: Iterable[Callable[[], str]]) -> str:
    """Run strategies in order and return the first non-empty result."""
    for strategy in strategies:
        result = strategy()
        if result:
            return result
    return ""


@dataclass(frozen=True)
class SelectorChain:
    """An ordered list of CSS selectors evaluated against a scope element."""

    selectors: tuple[str, ...]
    # Text must be strictly longer than this to be accepted
    min_length: int = 0

    def first_text(self, scope: Optional[Tag], reject: Iterable[str] = ()) -> str:
        """Text of the first element matched by the earliest selector that yields usable text."""
        if scope is None:
            return ""
        rejected = set(reject)
        for selector in self.selectors:
            text = clean_text(scope.select_one(selector))
            if text and len(text) > self.min_length and text not in rejected:
                return text
        return ""

    def first_attr(
        self,
        scope: Optional[Tag],
        attr: str,
        accept: Callable[[str], bool] = lambda value: True,
    ) -> str:
        """First attribute value, across selectors in order, that passes `accept`."""
        if scope is None:
            return ""
        for selector in self.selectors:
            for node in scope.select(selector):
                value = (node.get(attr) or "").strip()
                if value and accept(value):
                    return value
        return ""


def closest(element: Optional[Tag], selector: str, include_self: bool = True) -> Optional[Tag]:
    """Nearest ancestor (or the element itself) matching the selector."""
    if element is None:
        return None
    nodes = chain([element], element.parents) if include_self else element.parents
    for node in nodes:
        if isinstance(node, BeautifulSoup):
            break
        if node.css.match(selector):
            return node
    return None
