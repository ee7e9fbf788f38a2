import unittest
from models.listing import UNKNOWN, Portal
from tools.listing_extractor import company_from_profile_slug, extract_listings


CAPTURED_AT = "2026-01-01T00:00:00+00:00"

STEPSTONE_PAGE = """
<html><body>
<div class="results">
  <article data-testid="job-item">
    <h2 data-testid="job-title">Embedded Software Engineer (m/w/d)</h2>
    <span data-testid="job-company">Acme Robotics GmbH</span>
    <span data-testid="job-location">München</span>
    <time>vor 2 Stunden</time>
    <a href="/stellenangebote/embedded-software-engineer-123.html">Details</a>
  </article>
  <article data-testid="job-item">
    <h2 data-testid="job-title">.res-1a2b3c{color:red}Firmware Developer Automotive</h2>
    <a href="https://www.stepstone.de/stellenangebote/firmware-developer-456.html">Zum Job</a>
  </article>
  <article data-testid="job-item">
    <h2 data-testid="job-title">Werkstudent Marketing</h2>
    <a href="/cmp/de/acme-robotics-12345/jobs">Acme Robotics</a>
  </article>
</div>
</body></html>
"""


class TestStepStoneExtraction(unittest.TestCase):
    def setUp(self):
        self.listings = extract_listings(
            STEPSTONE_PAGE, Portal.STEPSTONE, role_slug="embedded-engineer", captured_at=CAPTURED_AT
        )

    def test_one_listing_per_card_and_profile_only_cards_dropped(self):
        self.assertEqual(len(self.listings), 2)
        self.assertEqual(
            [listing.url for listing in self.listings],
            [
                "https://www.stepstone.de/stellenangebote/embedded-software-engineer-123.html",
                "https://www.stepstone.de/stellenangebote/firmware-developer-456.html",
            ],
        )

    def test_fields_are_read_from_card(self):
        first = self.listings[0]
        self.assertEqual(first.title, "Embedded Software Engineer (m/w/d)")
        self.assertEqual(first.company, "Acme Robotics GmbH")
        self.assertEqual(first.location, "München")
        self.assertEqual(first.posted_at, "vor 2 Stunden")
        self.assertEqual(first.source, Portal.STEPSTONE)
        self.assertEqual(first.role_slug, "embedded-engineer")

    def test_missing_fields_use_sentinels(self):
        second = self.listings[1]
        self.assertEqual(second.title, "Firmware Developer Automotive")
        self.assertEqual(second.company, UNKNOWN)
        self.assertEqual(second.location, UNKNOWN)
        self.assertEqual(second.posted_at, CAPTURED_AT)


class TestCompanyResolution(unittest.TestCase):
    def test_company_from_ancestor_container(self):
        html = """
        <ul>
          <li class="job-row">
            <span class="company-name">Sensorik AG</span>
            <span class="city">Dresden</span>
            <div class="job-card">
              <h3>Hardware Engineer Sensorik</h3>
              <a href="/stellenangebote/hardware-engineer-9.html">Ansehen</a>
            </div>
          </li>
        </ul>
        """
        listings = extract_listings(html, "stepstone", captured_at=CAPTURED_AT)
        self.assertEqual(len(listings), 1)
        self.assertEqual(listings[0].company, "Sensorik AG")
        self.assertEqual(listings[0].location, "Dresden")

    def test_company_from_profile_link(self):
        html = """
        <div class="job-card">
          <h3>FPGA Design Engineer</h3>
          <a href="/cmp/de/robert-bosch-gmbh-12345">Firmenprofil</a>
          <a href="/stellenangebote/fpga-design-engineer-77.html">Job ansehen</a>
        </div>
        """
        listings = extract_listings(html, "stepstone", captured_at=CAPTURED_AT)
        self.assertEqual(len(listings), 1)
        self.assertEqual(listings[0].company, "Robert Bosch GmbH")
        self.assertEqual(listings[0].url, "https://www.stepstone.de/stellenangebote/fpga-design-engineer-77.html")

    def test_company_from_profile_slug(self):
        self.assertEqual(company_from_profile_slug("m%C3%BCller-elektronik--998"), "Müller Elektronik")

    def test_legal_forms_keep_their_casing(self):
        self.assertEqual(company_from_profile_slug("siemens-ag"), "Siemens AG")
        self.assertEqual(company_from_profile_slug("robert-bosch-gmbh-12345"), "Robert Bosch GmbH")
        self.assertEqual(
            company_from_profile_slug("mueller-gmbh-%26-co-kg-77"), "Mueller GmbH & Co. KG"
        )
        self.assertEqual(company_from_profile_slug("agentur-fuer-arbeit"), "Agentur Fuer Arbeit")


class TestFallbackLinkScan(unittest.TestCase):
    def test_job_links_are_used_when_no_card_matches(self):
        html = """
        <div class="listing">
          <a href="/stellenangebote/hardware-engineer-42.html">Hardware Engineer Medizintechnik</a>
          <span class="company">MedTec AG</span>
          <span class="location">Berlin</span>
        </div>
        <div class="listing">
          <a href="/stellenangebote/hardware-engineer-42.html">Mehr</a>
          <a href="/impressum">Impressum</a>
        </div>
        """
        listings = extract_listings(html, "stepstone", captured_at=CAPTURED_AT)
        self.assertEqual(len(listings), 1)
        listing = listings[0]
        self.assertEqual(listing.title, "Hardware Engineer Medizintechnik")
        self.assertEqual(listing.company, "MedTec AG")
        self.assertEqual(listing.location, "Berlin")
        self.assertEqual(listing.url, "https://www.stepstone.de/stellenangebote/hardware-engineer-42.html")
        self.assertEqual(listing.posted_at, CAPTURED_AT)


class TestMalformedLinks(unittest.TestCase):
    def test_unparseable_href_skips_only_that_card(self):
        html = """
        <article data-testid="job-item">
          <h2 data-testid="job-title">Hardware Engineer Sensorik</h2>
          <a href="http://[oops/stellenangebote/x">Details</a>
        </article>
        <article data-testid="job-item">
          <h2 data-testid="job-title">Firmware Engineer Automotive</h2>
          <a href="/stellenangebote/firmware-engineer-5.html">Details</a>
        </article>
        """
        listings = extract_listings(html, Portal.STEPSTONE, captured_at=CAPTURED_AT)
        self.assertEqual([listing.title for listing in listings], ["Firmware Engineer Automotive"])

    def test_unparseable_href_in_link_scan(self):
        html = """
        <div class="listing"><a href="http://[oops/stellenangebote/x">Hardware Engineer Sensorik</a></div>
        <div class="listing"><a href="/stellenangebote/fpga-engineer-8.html">FPGA Engineer Medizintechnik</a></div>
        """
        listings = extract_listings(html, Portal.STEPSTONE, captured_at=CAPTURED_AT)
        self.assertEqual(
            [listing.url for listing in listings],
            ["https://www.stepstone.de/stellenangebote/fpga-engineer-8.html"],
        )


class TestGlassdoorExtraction(unittest.TestCase):
    def test_glassdoor_cards(self):
        html = """
        <ul>
          <li data-test="job-listing">
            <a data-test="job-title" href="/job-listing/firmware-engineer-JV_123.htm">Firmware Engineer</a>
            <div data-test="employer-name">Bosch</div>
            <div data-test="job-location">Stuttgart</div>
            <div data-test="job-age">3 d</div>
          </li>
        </ul>
        """
        listings = extract_listings(html, Portal.GLASSDOOR, captured_at=CAPTURED_AT)
        self.assertEqual(len(listings), 1)
        listing = listings[0]
        self.assertEqual(listing.title, "Firmware Engineer")
        self.assertEqual(listing.company, "Bosch")
        self.assertEqual(listing.location, "Stuttgart")
        self.assertEqual(listing.posted_at, "3 d")
        self.assertEqual(listing.url, "https://www.glassdoor.de/job-listing/firmware-engineer-JV_123.htm")
        self.assertEqual(listing.source, Portal.GLASSDOOR)

    def test_empty_page(self):
        self.assertEqual(extract_listings("", Portal.GLASSDOOR), [])
        self.assertEqual(extract_listings("<html><body><p>Keine Treffer</p></body></html>", Portal.GLASSDOOR), [])


if __name__ == "__main__":
    unittest.main()
