"""
Pagination — decides from a search page whether another page exists.
"""

import re
from typing import Optional
from bs4 import BeautifulSoup

from config.portals import get_portal


PAGINATION_CONTAINERS = '[class*="pagination"], [class*="Pagination"]'
PAGE_OF_PATTERN = re.compile(r"(\d+)\s*(?:of|von|/)\s*(\d+)", re.IGNORECASE)


def parse_page_indicator(soup: BeautifulSoup) -> Optional[tuple[int, int]]:
    """Return (current, last) from a "2 of 7" / "2 von 7" / "2 / 7" indicator, if present."""
    text = " ".join(node.get_text(" ") for node in soup.select(PAGINATION_CONTAINERS))
    match = PAGE_OF_PATTERN.search(text)
    if not match:
        return None
    return int(match.group(1)), int(match.group(2))


def has_next_control(soup: BeautifulSoup, portal) -> bool:
    config = get_portal(portal)
    for selector in config.next_page_selectors:
        control = soup.select_one(selector)
        if control is None:
            continue
        classes = control.get("class") or []
        disabled = (
            "disabled" in classes
            or control.has_attr("disabled")
            or control.get("aria-disabled") == "true"
        )
        return not disabled
    return False


def has_more_pages(html: str, page: int, portal, soft_cap: int = 10) -> bool:
    """
    Decide whether the page after `page` should be fetched.

    An explicit "X of Y" indicator wins. Otherwise a usable "next" control
    means more pages; without one, keep going only while below the soft cap.
    The hard page cap is enforced by the caller.
    """
    soup = BeautifulSoup(html or "", "html.parser")

    indicator = parse_page_indicator(soup)
    if indicator is not None:
        current, last = indicator
        return current < last

    if has_next_control(soup, portal):
        return True

    return page < soft_cap
