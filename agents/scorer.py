"""
Scorer Agent — attaches a relevance score to every new listing.
"""

from config.settings import Settings
from models.state import ScanState
from tools.relevance import score_relevance


def scorer_agent(state: ScanState, settings: Settings) -> dict:
    """
    Score new listings against the searched role. Low scores get a
    filtered_reason but are not dropped here.
    """
    new_listings = state.get("new_listings", [])
    role = state.get("role", "")
    filtered = 0

    for listing in new_listings:
        result = score_relevance(
            listing.title,
            listing.description,
            listing.company,
            role,
            threshold=settings.relevance_threshold,
        )
        listing.relevance_score = result.score
        listing.matched_keywords = result.matched_keywords
        listing.filtered_reason = result.filtered_reason
        if result.filtered_reason:
            filtered += 1
            print(f"[Scorer] Low relevance ({result.score}): {listing.title} ({result.filtered_reason})")

    if new_listings:
        print(f"[Scorer] Scored {len(new_listings)} jobs, {filtered} below threshold {settings.relevance_threshold}")

    return {
        "new_listings": new_listings,
        "filtered": filtered,
    }
