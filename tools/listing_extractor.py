"""
Listing Extractor Tool — turns a portal search page into Listing objects.
Uses BeautifulSoup with per-portal selector cascades; no I/O.
"""

import re
from typing import Optional
from urllib.parse import unquote, urljoin
from bs4 import BeautifulSoup, Tag

from config.portals import PortalConfig, get_portal
from models.listing import UNKNOWN, Listing, utc_now_iso
from tools.selectors import SelectorChain, clean_text, closest, first_result
from tools.title_cleaner import clean_title


NON_NAVIGABLE_PREFIXES = ("#", "javascript:", "mailto:", "tel:")
TRAILING_PROFILE_ID = re.compile(r"-+\d+$")

# Title-casing mangles German legal forms; longer forms first
LEGAL_FORMS = (
    (re.compile(r"\bGmbh (?:& )?Co\.? Kg\b"), "GmbH & Co. KG"),
    (re.compile(r"\bGmbh\b"), "GmbH"),
    (re.compile(r"\bAg\b"), "AG"),
)


def extract_listings(
    html: str,
    portal,
    role_slug: str = "",
    captured_at: Optional[str] = None,
) -> list[Listing]:
    """
    Extract job listings from a portal search results page.

    Container selectors are tried in order and the first one that matches
    anything is used. If that produces no listing, every anchor pointing at a
    job path is treated as a listing instead.

    Args:
        html: Raw HTML of the search page.
        portal: Portal enum member or name.
        role_slug: Slug of the role searched for, copied onto each listing.
        captured_at: Fallback posting date (defaults to now, UTC).

    Returns:
        Listings with title, company, location, url and posted_at set.
    """
    if not html:
        return []

    config = get_portal(portal)
    captured_at = captured_at or utc_now_iso()
    soup = BeautifulSoup(html, "html.parser")

    for element in soup.find_all(["script", "noscript", "svg"]):
        element.decompose()

    listings = []
    for card in _find_cards(soup, config):
        listing = _listing_from_card(card, config, role_slug, captured_at)
        if listing is not None:
            listings.append(listing)

    if not listings:
        listings = _listings_from_links(soup, config, role_slug, captured_at)

    return listings


def company_from_profile_slug(slug: str) -> str:
    """'robert-bosch-gmbh-12345' -> 'Robert Bosch GmbH'."""
    name = TRAILING_PROFILE_ID.sub("", unquote(slug))
    name = re.sub(r"\s+", " ", name.replace("-", " ")).strip()
    name = re.sub(r"\b\w", lambda m: m.group(0).upper(), name)
    for pattern, replacement in LEGAL_FORMS:
        name = pattern.sub(replacement, name)
    return name


def resolve_url(origin: str, href: str) -> str:
    """Absolute URL for href, or "" when href cannot be parsed."""
    try:
        return urljoin(origin, href)
    except ValueError:
        return ""


def _find_cards(soup: BeautifulSoup, config: PortalConfig) -> list[Tag]:
    for selector in config.container_selectors:
        matches = soup.select(selector)
        if matches:
            # A card's own children can match broad selectors too
            matched = {id(element) for element in matches}
            return [
                element for element in matches
                if not any(id(parent) in matched for parent in element.parents)
            ]
    return []


def _is_posting_href(config: PortalConfig, href: str) -> bool:
    if href.startswith(NON_NAVIGABLE_PREFIXES):
        return False
    if config.company_profile_pattern.search(href):
        return False
    return bool(resolve_url(config.origin, href))


def _company_from_links(scope: Optional[Tag], config: PortalConfig, url: str = "") -> str:
    if scope is None:
        return ""
    hrefs = [url] + [a.get("href", "") for a in scope.select("a[href]")]
    for href in hrefs:
        match = config.company_profile_pattern.search(href)
        if match:
            return company_from_profile_slug(match.group(1))
    return ""


def _listing_from_card(
    card: Tag,
    config: PortalConfig,
    role_slug: str,
    captured_at: str,
) -> Optional[Listing]:
    container = closest(card, config.ancestor_selector) or card
    ancestor = closest(card, config.ancestor_selector, include_self=False)
    first_anchor = card.find("a")
    anchor_text = clean_text(first_anchor)

    raw_title = first_result([
        lambda: SelectorChain(config.title_selectors).first_text(card),
        lambda: anchor_text,
    ])
    title = clean_title(
        raw_title,
        container_text=container.get_text("\n"),
        anchor_text=anchor_text,
    )

    href = SelectorChain(config.url_selectors).first_attr(
        card, "href", accept=lambda value: _is_posting_href(config, value)
    )
    if not title or not href:
        return None
    url = resolve_url(config.origin, href)

    company = first_result([
        lambda: SelectorChain(config.company_selectors).first_text(card, reject=(UNKNOWN,)),
        lambda: SelectorChain(config.ancestor_company_selectors).first_text(ancestor, reject=(UNKNOWN,)),
        lambda: _company_from_links(container, config, url),
    ]) or UNKNOWN

    location = first_result([
        lambda: SelectorChain(config.location_selectors).first_text(card, reject=(UNKNOWN,)),
        lambda: SelectorChain(config.ancestor_location_selectors).first_text(ancestor, reject=(UNKNOWN,)),
    ]) or UNKNOWN

    posted_at = SelectorChain(config.date_selectors).first_text(card) or captured_at

    return Listing(
        title=title,
        company=company,
        location=location,
        url=url,
        posted_at=posted_at,
        source=config.portal,
        role_slug=role_slug,
    )


def _listings_from_links(
    soup: BeautifulSoup,
    config: PortalConfig,
    role_slug: str,
    captured_at: str,
) -> list[Listing]:
    listings = []
    seen_urls = set()

    for anchor in soup.find_all("a", href=True):
        href = anchor["href"].strip()
        if not config.job_path_pattern.search(href) or not _is_posting_href(config, href):
            continue

        url = resolve_url(config.origin, href)
        if url in seen_urls:
            continue

        parent = closest(anchor, config.fallback_ancestor_selector)
        title = clean_title(
            clean_text(anchor),
            container_text=parent.get_text("\n") if parent is not None else "",
        )
        if len(title) < config.fallback_min_title_length or "{" in title:
            continue

        company = first_result([
            lambda: SelectorChain(config.ancestor_company_selectors).first_text(parent, reject=(UNKNOWN,)),
            lambda: _company_from_links(parent, config),
        ]) or UNKNOWN
        location = (
            SelectorChain(config.ancestor_location_selectors).first_text(parent, reject=(UNKNOWN,))
            or UNKNOWN
        )

        seen_urls.add(url)
        listings.append(Listing(
            title=title,
            company=company,
            location=location,
            url=url,
            posted_at=captured_at,
            source=config.portal,
            role_slug=role_slug,
        ))

    return listings
