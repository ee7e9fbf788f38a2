"""
Parser Agent — extracts listings from the fetched search page.
No LLM needed: selector cascades do the work.
"""

from models.state import ScanState
from tools.listing_extractor import extract_listings


def parser_agent(state: ScanState) -> dict:
    """
    Extract listings from state['raw_html']. An empty page ends the scan.
    """
    raw_html = state.get("raw_html", "")
    page = state.get("page", 1)
    portal = state["portal"]

    listings = extract_listings(raw_html, portal, role_slug=state.get("role_slug", ""))

    if not listings:
        print(f"[Parser] 🛑 {portal.value}: no jobs found on page {page}. Stopping pagination.")
        return {
            "listings": [],
            "has_more": False,
            "stop_reason": "no_listings",
        }

    print(f"[Parser] 📋 Found {len(listings)} jobs on page {page}. Titles:")
    for listing in listings:
        print(f"   - {listing.title}")

    return {
        "listings": listings,
        "processed": len(listings),
    }
