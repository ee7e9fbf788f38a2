"""
Configuration settings for the Portal Scout scraper.
Loads values from .env file and provides typed access.
"""

import os
from dataclasses import dataclass, field
from dotenv import load_dotenv

# Determine project root
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
env_path = os.path.join(project_root, ".env")
load_dotenv(env_path)


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    # HTTP
    request_timeout: int = field(
        default_factory=lambda: int(os.getenv("REQUEST_TIMEOUT", "30"))
    )
    retry_timeout: int = field(
        default_factory=lambda: int(os.getenv("RETRY_TIMEOUT", "20"))
    )

    # Pacing (seconds)
    page_delay_min: float = field(
        default_factory=lambda: float(os.getenv("PAGE_DELAY_MIN", "3"))
    )
    page_delay_max: float = field(
        default_factory=lambda: float(os.getenv("PAGE_DELAY_MAX", "8"))
    )
    batch_pause: float = field(
        default_factory=lambda: float(os.getenv("BATCH_PAUSE", "1"))
    )
    rate_limit_wait: float = field(
        default_factory=lambda: float(os.getenv("RATE_LIMIT_WAIT", "30"))
    )

    # Pipeline tuning
    detail_batch_size: int = field(
        default_factory=lambda: int(os.getenv("DETAIL_BATCH_SIZE", "5"))
    )
    max_pages: int = field(
        default_factory=lambda: int(os.getenv("MAX_PAGES", "20"))
    )
    soft_page_cap: int = field(
        default_factory=lambda: int(os.getenv("SOFT_PAGE_CAP", "10"))
    )
    relevance_threshold: int = field(
        default_factory=lambda: int(os.getenv("RELEVANCE_THRESHOLD", "2"))
    )

    # Filtered listings are still stored with their score unless disabled
    store_filtered: bool = field(
        default_factory=lambda: os.getenv("STORE_FILTERED_LISTINGS", "true").lower() == "true"
    )

    # Paths
    db_path: str = field(
        default_factory=lambda: os.getenv(
            "DB_PATH", os.path.join(project_root, "data", "portal_scout.db")
        )
    )
    output_dir: str = field(
        default_factory=lambda: os.getenv("OUTPUT_DIR", "output")
    )


# Singleton instance
settings = Settings()
