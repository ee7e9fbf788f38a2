"""
Detail Extractor Tool — pulls description and qualifications text
from a listing's own page.
"""

from bs4 import BeautifulSoup

from tools.selectors import SelectorChain, clean_text


DESCRIPTION_CHAIN = SelectorChain(
    selectors=(
        '[data-testid="job-description"]',
        ".job-description",
        '[class*="description"]',
        '[class*="job-content"]',
        'section[class*="description"]',
        ".at-section-text",
    ),
    min_length=50,
)

QUALIFICATIONS_CHAIN = SelectorChain(
    selectors=(
        '[data-testid="job-qualifications"]',
        '[data-testid="job-requirements"]',
        ".qualifications",
        ".requirements",
        '[class*="qualification"]',
        '[class*="requirement"]',
        'section[class*="qualification"]',
    ),
    min_length=20,
)

# Generic content blocks scanned when no dedicated selector matched
CONTENT_BLOCKS = 'section, div[class*="content"], div[class*="text"]'

DESCRIPTION_MARKERS = ("description", "über", "Aufgaben")
DESCRIPTION_MIN_BLOCK = 200

QUALIFICATION_MARKERS = ("qualification", "Anforderungen", "Voraussetzungen")
QUALIFICATION_MIN_BLOCK = 100


def _scan_blocks(soup: BeautifulSoup, min_length: int, markers: tuple[str, ...]) -> str:
    for block in soup.select(CONTENT_BLOCKS):
        text = clean_text(block)
        if len(text) > min_length and any(marker in text for marker in markers):
            return text
    return ""


def extract_details(html: str) -> tuple[str, str]:
    """
    Extract (description, qualifications) from a job detail page.
    Either value is an empty string when nothing suitable was found.
    """
    if not html:
        return "", ""

    soup = BeautifulSoup(html, "html.parser")
    for element in soup.find_all(["script", "style", "noscript"]):
        element.decompose()

    description = DESCRIPTION_CHAIN.first_text(soup)
    qualifications = QUALIFICATIONS_CHAIN.first_text(soup)

    if not description:
        description = _scan_blocks(soup, DESCRIPTION_MIN_BLOCK, DESCRIPTION_MARKERS)
    if not qualifications:
        qualifications = _scan_blocks(soup, QUALIFICATION_MIN_BLOCK, QUALIFICATION_MARKERS)

    return description, qualifications
