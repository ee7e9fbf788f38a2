"""
Role slugs — URL-safe form of a human-entered role such as "C++ Developer".
"""

import re


def slugify(text: str) -> str:
    """
    Normalize a role for use in portal search URLs.

    "C++" -> "cplusplus", "C# Dev" -> "csharp-dev",
    "  Embedded   Engineer " -> "embedded-engineer".
    """
    slug = text.lower().replace("+", "plus").replace("#", "sharp")
    slug = re.sub(r"[^\w\s-]", "", slug)
    slug = re.sub(r"\s+", "-", slug.strip())
    slug = re.sub(r"-+", "-", slug)
    return slug.strip("-")
