"""
Planner Agent — prepares a (role, portal) scan.
This is a deterministic agent.
"""

from config.portals import get_portal
from models.state import ScanState
from tools.slug import slugify


def planner_agent(state: ScanState) -> dict:
    """
    Derive the role slug and the URL of the first search page.
    """
    role = state.get("role", "")
    config = get_portal(state["portal"])
    role_slug = slugify(role)

    if not role_slug:
        return {
            "role_slug": "",
            "page_url": "",
            "has_more": False,
            "stop_reason": "no_role",
            "errors": [f"Role {role!r} has no usable slug"],
        }

    page_url = config.build_search_url(role_slug, 1)
    print(f"[Planner] Scanning {config.portal.value} for: {role} ({role_slug})")

    return {
        "role_slug": role_slug,
        "page": 1,
        "page_url": page_url,
        "errors": [],
    }
