"""
Listing data model — represents a single scraped job posting.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


UNKNOWN = "Unknown"


class Portal(str, Enum):
    """External job portals the scraper knows how to read."""

    STEPSTONE = "stepstone"
    GLASSDOOR = "glassdoor"


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class Listing(BaseModel):
    """A job posting found on a portal search page, keyed durably by URL."""

    title: str = Field(min_length=1, description="Job title after cleanup")
    company: str = Field(default=UNKNOWN, description="Employer name")
    location: str = Field(default=UNKNOWN, description="Job location")
    url: str = Field(min_length=1, description="Absolute URL of the job posting")
    posted_at: str = Field(default_factory=utc_now_iso, description="Posting date as shown by the portal")
    description: str = Field(default="", description="Free-text description from the detail page")
    qualifications: str = Field(default="", description="Free-text requirements from the detail page")
    source: Portal = Field(description="Portal that produced the listing")
    role_slug: str = Field(default="", description="Slug of the role searched for")
    relevance_score: int = Field(default=0)
    matched_keywords: list[str] = Field(default_factory=list)
    filtered_reason: Optional[str] = Field(default=None)

    def content_key(self) -> str:
        """Secondary identity used to catch reposts under a new URL."""
        return content_key(self.title, self.company, self.location)

    @property
    def is_filtered(self) -> bool:
        return self.filtered_reason is not None


def content_key(title: str, company: str, location: str) -> str:
    return f"{title}|{company}|{location}"
