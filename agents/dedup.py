"""
Dedup Agent — deterministic duplicate detection against the job store.
No LLM needed.

Listings already known are dropped before their detail pages are fetched:
first by URL, then by (title, company, location) since portals sometimes
republish the same job under a new tracking URL.
"""

from typing import NamedTuple
from models.listing import Listing
from models.state import ScanState
from tools.job_store import JobStore


class DedupResult(NamedTuple):
    new_listings: list[Listing]
    url_duplicates: list[Listing]
    content_duplicates: list[Listing]

    @property
    def duplicates(self) -> int:
        return len(self.url_duplicates) + len(self.content_duplicates)


def partition(candidates: list[Listing], store: JobStore) -> DedupResult:
    """
    Split candidates into listings not yet stored and the duplicates dropped
    at each stage.

    Issues at most one store query per stage, however many candidates there are.
    """
    # Stage 1: URL identity (within the batch, then against the store)
    seen_urls = set()
    unique_by_url = []
    url_duplicates = []
    for listing in candidates:
        if listing.url in seen_urls:
            url_duplicates.append(listing)
        else:
            seen_urls.add(listing.url)
            unique_by_url.append(listing)

    if not unique_by_url:
        return DedupResult([], [], [])

    existing_urls = store.exists_by_url(seen_urls)
    url_survivors = []
    for listing in unique_by_url:
        if listing.url in existing_urls:
            url_duplicates.append(listing)
        else:
            url_survivors.append(listing)

    # Stage 2: content identity
    if not url_survivors:
        return DedupResult([], url_duplicates, [])

    existing_keys = store.exists_by_content(
        [(listing.title, listing.company, listing.location) for listing in url_survivors]
    )
    seen_keys = set(existing_keys)
    new_listings = []
    content_duplicates = []
    for listing in url_survivors:
        key = listing.content_key()
        if key in seen_keys:
            content_duplicates.append(listing)
        else:
            seen_keys.add(key)
            new_listings.append(listing)

    return DedupResult(new_listings, url_duplicates, content_duplicates)


def dedup_agent(state: ScanState, store: JobStore) -> dict:
    """
    Drop listings that are already stored so their details are never fetched.
    """
    listings = state.get("listings", [])
    result = partition(listings, store)

    if result.duplicates:
        print(
            f"[Dedup] Skipping detail fetch for {result.duplicates} duplicate jobs "
            f"({len(result.url_duplicates)} URL + {len(result.content_duplicates)} content matches)"
        )
        for listing in result.url_duplicates:
            print(f"   [DUPLICATE] Job ignored (same URL): {listing.title} ({listing.url})")
        for listing in result.content_duplicates:
            print(f"   [DUPLICATE] Job ignored (same content): {listing.title} ({listing.url})")

    print(f"[Dedup] {len(result.new_listings)} new jobs remaining")

    return {
        "new_listings": result.new_listings,
        "duplicates": result.duplicates,
    }
