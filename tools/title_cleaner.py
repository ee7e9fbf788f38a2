"""
Title Cleaner — repairs job titles polluted by inline stylesheet text.

Some portals render CSS-in-JS <style> blocks inside the job card, so the
scraped title comes out as ".res-1a2b3c{color:red}Embedded Software Engineer".
"""

import re


# Signs that a title contains leaked CSS
RES_TOKEN = re.compile(r"\bres-[A-Za-z0-9_-]+")
BARE_RULE = re.compile(r"^[A-Za-z0-9_-]+\{")

MEDIA_BLOCK = re.compile(r"@media[^{]*\{(?:[^{}]*\{[^{}]*\})*[^{}]*\}")
RULE_WITH_SELECTOR = re.compile(r"[^\s{}]*\s*\{[^{}]*\}")
LEADING_RULE_TAIL = re.compile(r"^.*\}")
TRAILING_OPEN_RULE = re.compile(r"[^\s{}]*\{[^}]*$")
CLASS_TOKEN = re.compile(r"(?<![\w])\.[A-Za-z_-][\w-]*")
WHITESPACE = re.compile(r"\s+")

SLUG_LIKE = re.compile(r"[A-Za-z0-9_-]*")

# Lines that look like a job title (English and German role nouns, domain terms)
JOB_TITLE_KEYWORDS = re.compile(
    r"(Software\s+(Entwickler|Developer)|Developer|Engineer|Manager|Architect|Consultant"
    r"|Analyst|Programmierer|Entwickler|Embedded|Aerospace|Hardware|Firmware"
    r"|Bildverarbeitung|Angular|X\+\+|Dynamics)",
    re.IGNORECASE,
)

MIN_TITLE_LENGTH = 10


def looks_like_css(text: str) -> bool:
    return "{" in text or bool(RES_TOKEN.search(text)) or bool(BARE_RULE.match(text))


def strip_css(text: str) -> str:
    """Remove rule bodies, selectors and class tokens, then collapse whitespace."""
    text = MEDIA_BLOCK.sub(" ", text)
    text = RULE_WITH_SELECTOR.sub(" ", text)
    text = LEADING_RULE_TAIL.sub(" ", text)
    text = TRAILING_OPEN_RULE.sub(" ", text)
    text = CLASS_TOKEN.sub(" ", text)
    text = RES_TOKEN.sub(" ", text)
    return WHITESPACE.sub(" ", text).strip()


def is_unusable(title: str) -> bool:
    return (
        not title
        or len(title) < MIN_TITLE_LENGTH
        or "{" in title
        or bool(SLUG_LIKE.fullmatch(title))
    )


def title_from_lines(text: str) -> str:
    """First line of a container's text that reads like a job title."""
    for line in (raw.strip() for raw in text.split("\n")):
        if len(line) < MIN_TITLE_LENGTH or "{" in line or RES_TOKEN.search(line):
            continue
        if SLUG_LIKE.fullmatch(line):
            continue
        if JOB_TITLE_KEYWORDS.search(line):
            return line
    return ""


def clean_title(raw: str, container_text: str = "", anchor_text: str = "") -> str:
    """
    Clean a scraped title.

    Titles without CSS leakage are returned trimmed. Leaky titles are stripped;
    if what remains is unusable, the title is re-derived from the enclosing
    container's text lines, then from the first anchor's text.

    Args:
        raw: Title text as captured from the page.
        container_text: Newline-separated text of the enclosing job container.
        anchor_text: Text of the first anchor in the job element.

    Returns:
        The cleaned title (may be empty).
    """
    title = raw.strip()
    if not title or not looks_like_css(title):
        return title

    title = strip_css(title)
    if not is_unusable(title):
        return title

    from_lines = title_from_lines(container_text)
    if from_lines:
        return from_lines

    anchor_text = anchor_text.strip()
    if anchor_text and "{" not in anchor_text:
        return anchor_text

    return title
