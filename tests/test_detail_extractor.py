import unittest
from tools.detail_extractor import extract_details


DESCRIPTION = (
    "Sie entwickeln Firmware für unsere Steuergeräte und begleiten das Produkt "
    "von der Konzeption bis zur Serienreife."
)
QUALIFICATIONS = "Abgeschlossenes Studium der Elektrotechnik und Erfahrung mit C."


class TestExtractDetails(unittest.TestCase):
    def test_dedicated_selectors(self):
        html = f"""
        <html><body>
          <div data-testid="job-description">{DESCRIPTION}</div>
          <ul class="requirements"><li>{QUALIFICATIONS}</li></ul>
        </body></html>
        """
        description, qualifications = extract_details(html)
        self.assertEqual(description, DESCRIPTION)
        self.assertEqual(qualifications, QUALIFICATIONS)

    def test_short_matches_are_skipped_for_later_selectors(self):
        html = f"""
        <div data-testid="job-description">Kurz.</div>
        <div class="job-description">{DESCRIPTION}</div>
        """
        description, qualifications = extract_details(html)
        self.assertEqual(description, DESCRIPTION)
        self.assertEqual(qualifications, "")

    def test_content_block_fallback(self):
        tasks = "Ihre Aufgaben: " + "Entwicklung hardwarenaher Software für Sensorik. " * 5
        profile = "Ihre Anforderungen: " + "Kenntnisse in C und RTOS. " * 4
        html = f"""
        <section><p>{tasks}</p></section>
        <div class="main-content"><p>{profile}</p></div>
        """
        description, qualifications = extract_details(html)
        self.assertEqual(description, tasks.strip())
        self.assertEqual(qualifications, profile.strip())

    def test_scripts_are_ignored(self):
        html = f"""
        <div class="job-description">
          <script>var description = "{"x" * 80}";</script>
          {DESCRIPTION}
        </div>
        """
        description, _ = extract_details(html)
        self.assertEqual(description, DESCRIPTION)

    def test_nothing_found(self):
        self.assertEqual(extract_details(""), ("", ""))
        self.assertEqual(extract_details("<html><body><p>404</p></body></html>"), ("", ""))


if __name__ == "__main__":
    unittest.main()
