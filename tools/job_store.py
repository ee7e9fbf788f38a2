"""
Job Store — SQLite-based persistence for scraped listings.

A JobStore owns one connection and is passed explicitly to the pipeline.
Existence checks are batched: one query per call regardless of how many
listings are checked.
"""

import json
import os
import sqlite3
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional

from models.listing import Listing, content_key


class InsertStatus(str, Enum):
    INSERTED = "inserted"
    ALREADY_EXISTS = "already_exists"
    FAILED = "failed"


@dataclass(frozen=True)
class InsertResult:
    status: InsertStatus
    reason: str = ""

    @property
    def inserted(self) -> bool:
        return self.status is InsertStatus.INSERTED


INSERTED = InsertResult(InsertStatus.INSERTED)
ALREADY_EXISTS = InsertResult(InsertStatus.ALREADY_EXISTS)


def failed(reason: str) -> InsertResult:
    return InsertResult(InsertStatus.FAILED, reason)


SCHEMA = """
    CREATE TABLE IF NOT EXISTS jobs (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        title TEXT NOT NULL,
        company TEXT NOT NULL,
        location TEXT NOT NULL,
        url TEXT UNIQUE NOT NULL,
        posted_at TEXT,
        role_slug TEXT NOT NULL,
        description TEXT,
        qualifications TEXT,
        source TEXT NOT NULL,
        relevance_score INTEGER DEFAULT 0,
        matched_keywords TEXT DEFAULT '[]',
        filtered_reason TEXT,
        is_favorite INTEGER DEFAULT 0,
        created_at TEXT DEFAULT CURRENT_TIMESTAMP
    );
    CREATE INDEX IF NOT EXISTS idx_jobs_role_slug ON jobs(role_slug);
    CREATE INDEX IF NOT EXISTS idx_jobs_posted_at ON jobs(posted_at);
    CREATE INDEX IF NOT EXISTS idx_jobs_created_at ON jobs(created_at);
    CREATE INDEX IF NOT EXISTS idx_jobs_source ON jobs(source);
    CREATE INDEX IF NOT EXISTS idx_jobs_content ON jobs(title, company, location);
"""


class JobStore:
    """SQLite store for listings. Use ":memory:" for a throwaway database."""

    def __init__(self, db_path: str):
        self.db_path = db_path
        if db_path != ":memory:":
            directory = os.path.dirname(db_path)
            if directory:
                os.makedirs(directory, exist_ok=True)
        self._conn = sqlite3.connect(db_path)
        self._conn.row_factory = sqlite3.Row

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def close(self) -> None:
        self._conn.close()

    def init_db(self) -> None:
        """Create the jobs table and indexes if they don't exist."""
        self._conn.executescript(SCHEMA)
        self._conn.commit()

    def exists_by_url(self, urls: Iterable[str]) -> set[str]:
        """Return the subset of `urls` already stored."""
        urls = list(set(urls))
        if not urls:
            return set()
        placeholders = ", ".join("?" for _ in urls)
        rows = self._conn.execute(
            f"SELECT url FROM jobs WHERE url IN ({placeholders})", urls
        ).fetchall()
        return {row["url"] for row in rows}

    def exists_by_content(self, triples: Iterable[tuple[str, str, str]]) -> set[str]:
        """
        Return "title|company|location" keys of the triples already stored
        (under any URL).
        """
        triples = list(dict.fromkeys(triples))
        if not triples:
            return set()
        values = ", ".join("(?, ?, ?)" for _ in triples)
        params = [value for triple in triples for value in triple]
        rows = self._conn.execute(
            f"SELECT title, company, location FROM jobs "
            f"WHERE (title, company, location) IN (VALUES {values})",
            params,
        ).fetchall()
        return {content_key(row["title"], row["company"], row["location"]) for row in rows}

    def insert_if_absent(self, listing: Listing) -> InsertResult:
        """Insert a listing unless its URL is already stored."""
        try:
            cursor = self._conn.execute(
                """
                INSERT OR IGNORE INTO jobs (
                    title, company, location, url, posted_at, role_slug,
                    description, qualifications, source,
                    relevance_score, matched_keywords, filtered_reason
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    listing.title,
                    listing.company,
                    listing.location,
                    listing.url,
                    listing.posted_at,
                    listing.role_slug,
                    listing.description,
                    listing.qualifications,
                    listing.source.value,
                    listing.relevance_score,
                    json.dumps(listing.matched_keywords),
                    listing.filtered_reason,
                ),
            )
            self._conn.commit()
        except sqlite3.Error as e:
            self._conn.rollback()
            return failed(str(e))

        return INSERTED if cursor.rowcount > 0 else ALREADY_EXISTS

    def count(self, role_slug: Optional[str] = None, source: Optional[str] = None) -> int:
        """Number of stored listings, optionally narrowed by role slug and/or source."""
        where, params = _filters(role_slug, source)
        return self._conn.execute(f"SELECT COUNT(*) FROM jobs{where}", params).fetchone()[0]

    def list_jobs(
        self,
        role_slug: Optional[str] = None,
        source: Optional[str] = None,
        limit: int = 1000,
    ) -> list[dict]:
        """Stored listings as dicts, newest first."""
        where, params = _filters(role_slug, source)
        rows = self._conn.execute(
            f"SELECT * FROM jobs{where} ORDER BY created_at DESC, id DESC LIMIT ?",
            params + [limit],
        ).fetchall()
        jobs = []
        for row in rows:
            job = dict(row)
            job["matched_keywords"] = json.loads(job["matched_keywords"] or "[]")
            jobs.append(job)
        return jobs


def _filters(role_slug: Optional[str], source: Optional[str]) -> tuple[str, list]:
    conditions, params = [], []
    if role_slug:
        conditions.append("role_slug = ?")
        params.append(role_slug)
    if source:
        conditions.append("source = ?")
        params.append(source)
    where = " WHERE " + " AND ".join(conditions) if conditions else ""
    return where, params
