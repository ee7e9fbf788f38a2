import asyncio
import unittest
from contextlib import asynccontextmanager
from config.settings import Settings
from agents.enricher import enrich, enricher_agent
from models.errors import DetailFetchError
from models.listing import Listing, Portal


DETAIL_HTML = (
    '<div class="job-description">Sie entwickeln Firmware für Steuergeräte '
    "und betreuen die Inbetriebnahme beim Kunden vor Ort.</div>"
)


class FakeFetcher:
    """Records concurrency and the order of fetches and pauses."""

    def __init__(self, failing_urls=()):
        self.failing_urls = set(failing_urls)
        self.in_flight = 0
        self.max_in_flight = 0
        self.events = []

    @asynccontextmanager
    async def _client(self):
        yield object()

    def async_client(self):
        return self._client()

    async def fetch_detail(self, client, url):
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        self.events.append(("fetch", url))
        await asyncio.sleep(0)
        self.in_flight -= 1
        if url in self.failing_urls:
            raise DetailFetchError(url, "HTTP 404")
        return DETAIL_HTML

    async def async_sleep(self, seconds):
        self.events.append(("pause", seconds))


def make_listings(count):
    return [
        Listing(
            title=f"Job {i}",
            url=f"https://www.stepstone.de/stellenangebote/job-{i}.html",
            source=Portal.STEPSTONE,
        )
        for i in range(count)
    ]


class TestEnricherBatching(unittest.TestCase):
    def setUp(self):
        self.settings = Settings(detail_batch_size=5, batch_pause=1)

    def test_batches_of_five_with_pauses_between(self):
        fetcher = FakeFetcher()
        listings = make_listings(12)

        result = enrich(listings, fetcher, self.settings)

        self.assertEqual(len(result.listings), 12)
        self.assertEqual(result.errors, [])
        self.assertEqual(fetcher.max_in_flight, 5)

        # 5 fetches, pause, 5 fetches, pause, 2 fetches; no pause after the last batch
        kinds = [kind for kind, _ in fetcher.events]
        self.assertEqual(kinds, ["fetch"] * 5 + ["pause"] + ["fetch"] * 5 + ["pause"] + ["fetch"] * 2)
        self.assertEqual([value for kind, value in fetcher.events if kind == "pause"], [1, 1])

        fetched = [value for kind, value in fetcher.events if kind == "fetch"]
        self.assertEqual(fetched, [listing.url for listing in listings])

        for listing in result.listings:
            self.assertTrue(listing.description.startswith("Sie entwickeln Firmware"))

    def test_failed_detail_fetch_is_isolated(self):
        listings = make_listings(3)
        fetcher = FakeFetcher(failing_urls=[listings[1].url])

        result = enrich(listings, fetcher, self.settings)

        self.assertEqual(len(result.errors), 1)
        self.assertIn("HTTP 404", result.errors[0])
        self.assertEqual(result.listings[1].description, "")
        self.assertNotEqual(result.listings[0].description, "")
        self.assertNotEqual(result.listings[2].description, "")
        self.assertNotIn("pause", [kind for kind, _ in fetcher.events])

    def test_agent_counts_detail_errors(self):
        listings = make_listings(2)
        fetcher = FakeFetcher(failing_urls=[listings[0].url])

        update = enricher_agent({"new_listings": listings}, fetcher, self.settings)

        self.assertEqual(update["detail_errors"], 1)
        self.assertEqual(len(update["errors"]), 1)
        self.assertEqual(len(update["new_listings"]), 2)

    def test_no_new_listings(self):
        fetcher = FakeFetcher()
        update = enricher_agent({"new_listings": []}, fetcher, self.settings)
        self.assertEqual(update, {"detail_errors": 0})
        self.assertEqual(fetcher.events, [])


if __name__ == "__main__":
    unittest.main()
