"""
Portal definitions — origin, search URL and selector cascades for each
supported job portal. Selectors are ordered: earlier entries win.
"""

import re
from dataclasses import dataclass
from models.listing import Portal


@dataclass(frozen=True)
class PortalConfig:
    """Everything the extractor and paginator need to read one portal."""

    portal: Portal
    origin: str
    search_url: str
    page_param: str

    # Job-card containers, tried one selector at a time
    container_selectors: tuple[str, ...]
    # Closest ancestor that groups a card's fields
    ancestor_selector: str

    title_selectors: tuple[str, ...]
    company_selectors: tuple[str, ...]
    ancestor_company_selectors: tuple[str, ...]
    location_selectors: tuple[str, ...]
    ancestor_location_selectors: tuple[str, ...]
    url_selectors: tuple[str, ...]
    date_selectors: tuple[str, ...]

    # Anchor scan used when no container matches
    job_path_pattern: re.Pattern
    fallback_ancestor_selector: str
    fallback_min_title_length: int

    # Company profile pages carry no postable job
    company_profile_pattern: re.Pattern

    next_page_selectors: tuple[str, ...]

    def build_search_url(self, role_slug: str, page: int = 1) -> str:
        url = self.search_url.format(role_slug=role_slug)
        if page > 1:
            url = f"{url}&{self.page_param}={page}"
        return url


STEPSTONE = PortalConfig(
    portal=Portal.STEPSTONE,
    origin="https://www.stepstone.de",
    search_url=(
        "https://www.stepstone.de/jobs/vollzeit/{role_slug}"
        "?sort=1&action=facet_selected%3bworktypes%3b80001&ag=age_1"
    ),
    page_param="page",
    container_selectors=(
        '[data-testid*="job"]',
        ".job-item",
        ".job-card",
        'article[class*="job"]',
        '[class*="JobCard"]',
    ),
    ancestor_selector='article, div[class*="job"], li[class*="job"], tr[class*="job"]',
    title_selectors=(
        '[data-testid="job-title"]',
        "h2",
        "h3",
        ".job-title",
        'a[class*="title"]',
        '[class*="JobTitle"]',
    ),
    company_selectors=(
        '[data-testid="job-company"]',
        ".company",
        ".employer",
        '[class*="company"]',
        '[class*="Company"]',
        '[class*="employer"]',
        '[class*="Employer"]',
    ),
    ancestor_company_selectors=('[class*="company"]', '[class*="employer"]'),
    location_selectors=(
        '[data-testid="job-location"]',
        ".location",
        '[class*="location"]',
        '[class*="Location"]',
        '[class*="city"]',
        '[class*="City"]',
        '[class*="place"]',
        '[class*="Place"]',
    ),
    ancestor_location_selectors=('[class*="location"]', '[class*="city"]', '[class*="place"]'),
    url_selectors=(
        'a[href*="/stellenangebote/"]',
        'a[href*="/job/"]',
        'a[href*="/jobs/"]',
        "a[href]",
    ),
    date_selectors=('[data-testid="job-date"]', ".date", '[class*="date"]', "time"),
    job_path_pattern=re.compile(r"/(stellenangebote|job)/", re.IGNORECASE),
    fallback_ancestor_selector='article, div[class*="job"], div[class*="listing"]',
    fallback_min_title_length=5,
    company_profile_pattern=re.compile(r"/cmp/de/([^/?#]+)"),
    next_page_selectors=(
        'a[class*="next"]',
        'a[class*="pagination"]',
        '[aria-label*="next"]',
        '[aria-label*="Next"]',
    ),
)


GLASSDOOR = PortalConfig(
    portal=Portal.GLASSDOOR,
    origin="https://www.glassdoor.de",
    search_url=(
        "https://www.glassdoor.de/Job/deutschland-{role_slug}"
        "-jobs-SRCH_IL.0,11_IN96_KO12,38.htm?fromAge=1"
    ),
    page_param="p",
    container_selectors=(
        '[data-test="job-listing"]',
        ".react-job-listing",
        '[class*="JobCard"]',
        '[class*="jobContainer"]',
    ),
    ancestor_selector='li[class*="job"], div[class*="job"], article',
    title_selectors=(
        '[data-test="job-title"]',
        "h2",
        "h3",
        'a[class*="jobTitle"]',
        '[class*="JobTitle"]',
    ),
    company_selectors=(
        '[data-test="employer-name"]',
        '[class*="employerName"]',
        '[class*="company"]',
    ),
    ancestor_company_selectors=('[class*="company"]', '[class*="employer"]'),
    location_selectors=(
        '[data-test="job-location"]',
        '[class*="location"]',
        '[class*="jobLocation"]',
    ),
    ancestor_location_selectors=('[class*="location"]', '[class*="city"]'),
    url_selectors=('a[href*="/Job/"]', 'a[href*="/job/"]', "a[href]"),
    date_selectors=('[data-test="job-age"]', '[class*="jobAge"]', '[class*="date"]'),
    job_path_pattern=re.compile(r"/job/", re.IGNORECASE),
    fallback_ancestor_selector='[class*="job"], [class*="listing"], article',
    fallback_min_title_length=10,
    company_profile_pattern=re.compile(r"/Overview/Working-at-([^/?#]+?)-EI_"),
    next_page_selectors=(
        'button[aria-label*="Next"]',
        'a[aria-label*="Next"]',
        '[class*="nextButton"]',
    ),
)


PORTALS: dict[Portal, PortalConfig] = {
    Portal.STEPSTONE: STEPSTONE,
    Portal.GLASSDOOR: GLASSDOOR,
}


def get_portal(portal) -> PortalConfig:
    """Look up a portal by enum member or by its name ("stepstone", "glassdoor")."""
    return PORTALS[Portal(portal)]
