import unittest
from tools.relevance import (
    REASON_IRRELEVANT,
    REASON_LOW_SCORE,
    REASON_NO_KEYWORDS,
    score_relevance,
)


FIRMWARE_DESCRIPTION = "Bare metal firmware development on STM32 microcontrollers with RTOS and SPI drivers."


class TestScoreRelevance(unittest.TestCase):
    def test_embedded_listing_passes(self):
        result = score_relevance("Firmware Engineer", FIRMWARE_DESCRIPTION, "Acme", "Systems Tester")
        self.assertEqual(result.score, 8)
        self.assertEqual(
            result.matched_keywords,
            [
                "firmware development", "firmware engineer", "firmware engineer (title)",
                "microcontroller", "stm32", "rtos", "bare metal", "spi",
            ],
        )
        self.assertIsNone(result.filtered_reason)

    def test_web_listing_is_flagged_irrelevant(self):
        result = score_relevance(
            "Frontend Developer", "React and JavaScript for our website", "Shop GmbH", "data analyst"
        )
        self.assertEqual(result.score, -8)
        self.assertEqual(result.matched_keywords, [])
        self.assertEqual(result.filtered_reason, REASON_IRRELEVANT)

    def test_no_keywords(self):
        result = score_relevance("Koch", "Kochen in unserem Restaurant", "Gasthof Sonne", "Embedded Engineer")
        self.assertEqual(result.score, 0)
        self.assertEqual(result.filtered_reason, REASON_NO_KEYWORDS)

    def test_low_score(self):
        result = score_relevance("Techniker", "Erfahrung mit FPGA", "Acme", "")
        self.assertEqual(result.score, 1)
        self.assertEqual(result.filtered_reason, REASON_LOW_SCORE)

    def test_title_matches_count_double(self):
        in_title = score_relevance("FPGA Designer", "", "Acme", "")
        in_body = score_relevance("Designer", "FPGA work", "Acme", "")
        self.assertEqual(in_title.score, 2)
        self.assertEqual(in_title.matched_keywords, ["fpga", "fpga (title)"])
        self.assertEqual(in_body.score, 1)
        self.assertEqual(in_body.matched_keywords, ["fpga"])

    def test_role_bonus(self):
        embedded = score_relevance("Embedded Developer", "", "Acme", "Embedded Engineer")
        self.assertEqual(embedded.score, 3)
        self.assertIsNone(embedded.filtered_reason)

        exact = score_relevance("Hardware Tester", "", "Acme", " Hardware Tester ")
        self.assertEqual(exact.score, 3)

    def test_threshold_is_configurable(self):
        result = score_relevance("Firmware Engineer", FIRMWARE_DESCRIPTION, "Acme", "", threshold=10)
        self.assertEqual(result.score, 8)
        self.assertEqual(result.filtered_reason, REASON_LOW_SCORE)

    def test_case_insensitive(self):
        upper = score_relevance("FIRMWARE ENGINEER", FIRMWARE_DESCRIPTION.upper(), "ACME", "")
        lower = score_relevance("firmware engineer", FIRMWARE_DESCRIPTION.lower(), "acme", "")
        self.assertEqual(upper, lower)


if __name__ == "__main__":
    unittest.main()
