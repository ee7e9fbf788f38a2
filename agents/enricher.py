"""
Enricher Agent — fetches each new listing's own page for its description
and qualifications.

Detail pages are fetched concurrently in fixed-size batches; each batch is
awaited in full and batches are separated by a short pause.
"""

import asyncio
from typing import NamedTuple

from config.settings import Settings
from models.errors import DetailFetchError
from models.listing import Listing
from models.state import ScanState
from tools.detail_extractor import extract_details
from tools.fetcher import PageFetcher


class EnrichResult(NamedTuple):
    listings: list[Listing]
    errors: list[str]


async def _enrich_one(listing: Listing, fetcher: PageFetcher, client) -> str:
    """Fill in one listing's details. Returns an error message, or "" on success."""
    try:
        html = await fetcher.fetch_detail(client, listing.url)
    except DetailFetchError as e:
        print(f"[Enricher] Error fetching job details: {e}")
        return str(e)

    listing.description, listing.qualifications = extract_details(html)
    return ""


async def enrich_async(listings: list[Listing], fetcher: PageFetcher, settings: Settings) -> EnrichResult:
    batch_size = max(1, settings.detail_batch_size)
    total_batches = (len(listings) + batch_size - 1) // batch_size
    errors = []

    async with fetcher.async_client() as client:
        for i in range(0, len(listings), batch_size):
            batch = listings[i : i + batch_size]
            print(f"[Enricher] Processing batch {i // batch_size + 1}/{total_batches} ({len(batch)} jobs)...")

            results = await asyncio.gather(*(_enrich_one(listing, fetcher, client) for listing in batch))
            errors.extend(error for error in results if error)

            if i + batch_size < len(listings):
                await fetcher.async_sleep(settings.batch_pause)

    return EnrichResult(listings, errors)


def enrich(listings: list[Listing], fetcher: PageFetcher, settings: Settings) -> EnrichResult:
    """
    Populate description/qualifications for every listing, in place.

    A failed detail fetch leaves that listing's fields empty and is reported
    in EnrichResult.errors; the other fetches carry on.
    """
    if not listings:
        return EnrichResult([], [])
    return asyncio.run(enrich_async(listings, fetcher, settings))


def enricher_agent(state: ScanState, fetcher: PageFetcher, settings: Settings) -> dict:
    new_listings = state.get("new_listings", [])

    if not new_listings:
        print("[Enricher] No new jobs to enrich")
        return {"detail_errors": 0}

    print(f"[Enricher] Fetching details for {len(new_listings)} NEW jobs (concurrently)...")
    result = enrich(new_listings, fetcher, settings)

    return {
        "new_listings": result.listings,
        "detail_errors": len(result.errors),
        "errors": result.errors,
    }
