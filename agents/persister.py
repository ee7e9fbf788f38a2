"""
Persister Agent — writes new listings to the job store.
"""

from config.settings import Settings
from models.state import ScanState
from tools.job_store import InsertStatus, JobStore


def persister_agent(state: ScanState, store: JobStore, settings: Settings) -> dict:
    """
    Insert each new listing once. A URL that turned up in the meantime is
    skipped; a failed insert is reported and the rest continue.
    """
    new_listings = state.get("new_listings", [])
    page = state.get("page", 1)
    inserted = 0
    errors = []

    for listing in new_listings:
        if listing.is_filtered and not settings.store_filtered:
            print(f"   [FILTERED] Not stored: {listing.title} ({listing.filtered_reason})")
            continue

        result = store.insert_if_absent(listing)
        if result.status is InsertStatus.INSERTED:
            inserted += 1
            print(f"   [INSERTED] {listing.title} at {listing.company} (role: {listing.role_slug})")
        elif result.status is InsertStatus.ALREADY_EXISTS:
            print(f"   [DUPLICATE] Skipped: {listing.title} at {listing.company}")
        else:
            print(f"   [DB ERROR] Failed to insert job {listing.title}: {result.reason}")
            errors.append(f"Insert failed for {listing.url}: {result.reason}")

    print(
        f"[Persister] ✅ Page {page}: found {len(state.get('listings', []))} jobs, "
        f"inserted {inserted} new ones"
    )

    return {
        "inserted": inserted,
        "errors": errors,
    }
