"""
Relevance Scorer — keyword-overlap heuristic that flags listings
unrelated to embedded/hardware work.

The score is advisory: it is stored with every listing and callers decide
what to do with filtered ones.
"""

from typing import NamedTuple, Optional


EMBEDDED_KEYWORDS = (
    # Core embedded terms
    "embedded systems", "embedded software", "embedded firmware", "embedded development",
    "firmware development", "firmware engineer", "driver development", "bootloader",
    # Hardware platforms
    "microcontroller", "microprocessor", "arm", "cortex", "stm32", "avr", "pic", "ti",
    "arduino", "raspberry pi", "esp32", "esp8266", "beaglebone", "nrf", "nordic",
    # Languages and tools
    "c/c++", "assembly language", "real-time", "rtos", "bare metal", "hal",
    "system programming", "low level programming", "cross compilation", "toolchain",
    # Hardware interfaces
    "spi", "i2c", "uart", "can bus", "ethernet", "usb", "gpio", "pwm", "adc", "dac",
    "hardware interface", "peripheral driver", "register programming",
    # System aspects
    "real-time systems", "deterministic", "memory management", "interrupt handling",
    "power management", "hardware abstraction", "board support package", "bsp",
    # Related technologies
    "iot", "edge computing", "sensor fusion", "motor control", "power electronics",
    "pcb", "electronics", "semiconductor", "asic", "fpga", "verilog", "vhdl",
    # Industry applications
    "automotive", "automotive embedded", "medical devices", "industrial control",
    "aerospace", "telecommunications", "consumer electronics",
)

IRRELEVANT_KEYWORDS = (
    "web development", "web developer", "frontend", "backend", "full stack",
    "javascript", "react", "angular", "vue", "node.js", "python web", "django",
    "mobile app", "ios development", "android development", "app store",
    "ui/ux", "user interface", "data science", "machine learning", "ai",
    "cloud", "aws", "azure", "docker", "kubernetes", "devops",
    "website", "e-commerce", "wordpress", "shopify", "web design",
    "social media", "marketing technology", "fintech", "blockchain",
)

KEYWORD_POINTS = 1
IRRELEVANT_PENALTY = 2
ROLE_BONUS = 3
DEFAULT_THRESHOLD = 2

REASON_IRRELEVANT = "contains irrelevant terms"
REASON_NO_KEYWORDS = "no relevant keywords found"
REASON_LOW_SCORE = "low relevance score"


class RelevanceResult(NamedTuple):
    score: int
    matched_keywords: list[str]
    filtered_reason: Optional[str]


def score_relevance(
    title: str,
    description: str,
    company: str,
    target_role: str,
    threshold: int = DEFAULT_THRESHOLD,
) -> RelevanceResult:
    """
    Score a listing against the embedded-systems vocabulary.

    Every embedded keyword found in title, description or company adds a
    point, and another point when it also appears in the title. Every
    irrelevant keyword costs two points. A title containing the target role
    earns a bonus.

    Args:
        title: Listing title.
        description: Listing description (may be empty).
        company: Company name.
        target_role: Role the listing was searched for.
        threshold: Listings scoring below this get a filtered_reason.

    Returns:
        RelevanceResult(score, matched_keywords, filtered_reason).
    """
    text = f"{title} {description} {company}".lower()
    title_lower = title.lower()
    role_lower = target_role.strip().lower()

    score = 0
    matched_keywords = []
    positive_hits = 0

    for keyword in EMBEDDED_KEYWORDS:
        if keyword in text:
            score += KEYWORD_POINTS
            positive_hits += 1
            matched_keywords.append(keyword)
            # Title matches count double
            if keyword in title_lower:
                score += KEYWORD_POINTS
                matched_keywords.append(f"{keyword} (title)")

    irrelevant_hits = 0
    for keyword in IRRELEVANT_KEYWORDS:
        if keyword in text:
            score -= IRRELEVANT_PENALTY
            irrelevant_hits += 1

    if role_lower and (
        role_lower in title_lower
        or ("embedded" in role_lower and "embedded" in text)
    ):
        score += ROLE_BONUS

    filtered_reason = None
    if score < threshold:
        if irrelevant_hits:
            filtered_reason = REASON_IRRELEVANT
        elif not positive_hits:
            filtered_reason = REASON_NO_KEYWORDS
        else:
            filtered_reason = REASON_LOW_SCORE

    return RelevanceResult(score, matched_keywords, filtered_reason)
