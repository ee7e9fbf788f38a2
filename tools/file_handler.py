"""
File Handler Tool — loads the roles config and writes scan reports.
"""

import csv
import json
import os
from datetime import datetime

import yaml


LISTING_FIELDS = [
    "title", "company", "location", "url", "posted_at", "role_slug", "source",
    "relevance_score", "filtered_reason", "created_at",
]


def load_roles(yaml_path: str) -> list[str]:
    """
    Load the roles to scan from a YAML file.

    Args:
        yaml_path: Path to a file with a top-level `roles:` list.

    Returns:
        Non-empty role strings, in file order, without repeats.
    """
    with open(yaml_path, "r") as f:
        data = yaml.safe_load(f) or {}

    roles = []
    for role in data.get("roles", []) or []:
        role = str(role).strip()
        if role and role not in roles:
            roles.append(role)
    return roles


def _timestamped(output_dir: str, filename: str, prefix: str, extension: str) -> str:
    os.makedirs(output_dir, exist_ok=True)
    if not filename:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filename = f"{prefix}_{timestamp}.{extension}"
    return os.path.join(output_dir, filename)


def save_scan_report(report: dict, output_dir: str, filename: str = None) -> str:
    """
    Save a scan report (per-role, per-portal stats) to a JSON file.

    Returns:
        Path to the saved file.
    """
    filepath = _timestamped(output_dir, filename, "scan", "json")

    with open(filepath, "w") as f:
        json.dump(report, f, indent=2, default=str)

    return filepath


def save_to_csv(jobs: list[dict], output_dir: str, filename: str = None) -> str:
    """
    Save stored listings to a CSV file (descriptions left out).

    Returns:
        Path to the saved file.
    """
    filepath = _timestamped(output_dir, filename, "jobs", "csv")

    with open(filepath, "w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=LISTING_FIELDS, extrasaction="ignore")
        writer.writeheader()
        writer.writerows(jobs)

    return filepath


def generate_summary(report: dict) -> str:
    """
    Generate a human-readable summary of a scan report.

    Args:
        report: {"roles": {role: [stats dict, ...]}} as built by run.py.

    Returns:
        Formatted summary string.
    """
    roles = report.get("roles", {})
    if not roles:
        return "No roles scanned."

    lines = [
        f"{'=' * 50}",
        f"  SCAN SUMMARY",
        f"{'=' * 50}",
    ]
    total = 0
    for role, portal_stats in roles.items():
        inserted = sum(stats.get("inserted", 0) for stats in portal_stats)
        total += inserted
        lines.append(f"  {role}: {inserted} new")
        for stats in portal_stats:
            lines.append(
                f"    - {stats.get('portal')}: {stats.get('inserted', 0)} inserted, "
                f"{stats.get('duplicates', 0)} duplicates, "
                f"{stats.get('pages_scanned', 0)} pages (stopped: {stats.get('stop_reason')})"
            )

    lines.append(f"")
    lines.append(f"  Total new jobs: {total}")
    lines.append(f"{'=' * 50}")

    return "\n".join(lines)
