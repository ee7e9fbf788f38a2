"""
LangGraph Scan State — shared state that flows through the graph
for one (role, portal) scan.
"""

import operator
from typing import Optional, TypedDict, Annotated
from models.listing import Listing, Portal


def merge_lists(left: list, right: list) -> list:
    """Reducer that merges two lists (used for accumulating results across loop iterations)."""
    return left + right


class ScanState(TypedDict):
    """
    Shared state for the LangGraph workflow.
    Each agent reads from and writes to this state.
    """

    # Input: human-entered role and the portal to scan
    role: str
    portal: Portal

    # Planner output
    role_slug: str

    # Current page being scraped (1-based) and its URL
    page: int
    page_url: str

    # Scraper output: raw HTML of the search page
    raw_html: str

    # Parser output: listings extracted from the current page
    listings: list[Listing]

    # Dedup output: listings not yet in the store
    new_listings: list[Listing]

    # Paginator output
    has_more: bool

    # Why the scan ended ("no_listings", "last_page", "page_cap", "fetch_error", "rate_limited", "no_role"; "error" is set outside the graph)
    stop_reason: Optional[str]

    # Counters accumulated across pages
    pages_scanned: Annotated[int, operator.add]
    processed: Annotated[int, operator.add]
    duplicates: Annotated[int, operator.add]
    detail_errors: Annotated[int, operator.add]
    filtered: Annotated[int, operator.add]
    inserted: Annotated[int, operator.add]

    # Accumulated errors during processing
    errors: Annotated[list[str], merge_lists]
