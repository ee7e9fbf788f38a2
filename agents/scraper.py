"""
Scraper Agent — fetches the current search results page.
"""

from models.errors import FetchError, RateLimited
from models.state import ScanState
from tools.fetcher import PageFetcher


def scraper_agent(state: ScanState, fetcher: PageFetcher) -> dict:
    """
    Fetch the current page. A failed fetch ends this role/portal scan;
    listings persisted from earlier pages are kept.
    """
    page = state.get("page", 1)
    url = state.get("page_url", "")
    portal = state["portal"].value

    print(f"[Scraper] 📄 {portal} page {page}: {url}")

    try:
        status, html = fetcher.fetch(url)
    except RateLimited as e:
        print(f"[Scraper] [RATE LIMIT] {e}. Stopping {portal} scan for {state.get('role')}.")
        return {
            "raw_html": "",
            "has_more": False,
            "stop_reason": "rate_limited",
            "errors": [f"Rate limited on {portal} page {page}: {e}"],
        }
    except FetchError as e:
        print(f"[Scraper] ❌ Failed: {e}")
        return {
            "raw_html": "",
            "has_more": False,
            "stop_reason": "fetch_error",
            "errors": [f"Fetch failed on {portal} page {page}: {e}"],
        }

    print(f"[Scraper] HTTP {status}, {len(html)} chars of HTML")

    return {
        "raw_html": html,
        "pages_scanned": 1,
        "errors": [],
    }
