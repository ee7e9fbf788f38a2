"""
Paginator Agent — decides whether the next search page is fetched.
"""

from config.portals import get_portal
from config.settings import Settings
from models.state import ScanState
from tools.pagination import has_more_pages


def paginator_agent(state: ScanState, settings: Settings) -> dict:
    """
    Continue while the page indicators say so, never past settings.max_pages.
    """
    page = state.get("page", 1)
    portal = state["portal"]

    if page >= settings.max_pages:
        print(f"[Paginator] 🛑 {portal.value}: reached safety limit of {settings.max_pages} pages.")
        return {"has_more": False, "stop_reason": "page_cap"}

    if not has_more_pages(state.get("raw_html", ""), page, portal, soft_cap=settings.soft_page_cap):
        print(f"[Paginator] {portal.value}: page {page} is the last page.")
        return {"has_more": False, "stop_reason": "last_page"}

    return {"has_more": True}


def advance_to_next_page(state: ScanState) -> dict:
    """
    Transition node: move to the next search page and reset per-page state.
    """
    config = get_portal(state["portal"])
    next_page = state.get("page", 1) + 1
    print(f"\n[Workflow] Moving to page {next_page}")

    return {
        "page": next_page,
        "page_url": config.build_search_url(state["role_slug"], next_page),
        "raw_html": "",
        "listings": [],
        "new_listings": [],
    }
