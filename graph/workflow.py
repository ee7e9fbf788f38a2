"""
LangGraph Workflow — defines the scan graph for one (role, portal) pair.

Graph structure:
    planner → scraper → parser → dedup → enricher → scorer → persister → paginator

The graph loops back from paginator to scraper (through `advance`) while
more pages remain, and ends early when a fetch fails or a page is empty.
"""

from dataclasses import asdict, dataclass, field
from typing import Iterable, Optional

from langgraph.graph import StateGraph, END

from agents.dedup import dedup_agent
from agents.enricher import enricher_agent
from agents.paginator import advance_to_next_page, paginator_agent
from agents.parser import parser_agent
from agents.persister import persister_agent
from agents.planner import planner_agent
from agents.scorer import scorer_agent
from agents.scraper import scraper_agent
from config.settings import Settings, settings as default_settings
from models.listing import Portal
from models.state import ScanState
from tools.fetcher import PageFetcher
from tools.job_store import JobStore


# Nodes visited per page, used to size LangGraph's recursion limit
NODES_PER_PAGE = 8


@dataclass
class ScanStats:
    """Summary of one role/portal scan."""

    role: str
    portal: str
    pages_scanned: int = 0
    processed: int = 0
    duplicates: int = 0
    detail_errors: int = 0
    filtered: int = 0
    inserted: int = 0
    stop_reason: Optional[str] = None  # ScanState reasons, or "error" when the scan raised
    errors: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return asdict(self)


def stop_if_done(next_node: str):
    """Conditional edge: go on to `next_node` unless a node set stop_reason."""

    def route(state: ScanState) -> str:
        return END if state.get("stop_reason") else next_node

    return route


def should_continue(state: ScanState) -> str:
    """
    Conditional edge: decide whether to fetch the next page or finish.

    Returns:
        'advance' if more pages remain, END otherwise.
    """
    return "advance" if state.get("has_more") else END


def build_workflow(store: JobStore, fetcher: PageFetcher, settings: Settings = default_settings):
    """
    Build and compile the scan workflow.

    The store, fetcher and settings are bound into the nodes that need them,
    so every stage works against the handles passed in here.

    Returns:
        Compiled StateGraph ready to invoke.
    """

    def scraper(state):
        return scraper_agent(state, fetcher)

    def dedup(state):
        return dedup_agent(state, store)

    def enricher(state):
        return enricher_agent(state, fetcher, settings)

    def scorer(state):
        return scorer_agent(state, settings)

    def persister(state):
        return persister_agent(state, store, settings)

    def paginator(state):
        return paginator_agent(state, settings)

    workflow = StateGraph(ScanState)

    workflow.add_node("planner", planner_agent)
    workflow.add_node("scraper", scraper)
    workflow.add_node("parser", parser_agent)
    workflow.add_node("dedup", dedup)
    workflow.add_node("enricher", enricher)
    workflow.add_node("scorer", scorer)
    workflow.add_node("persister", persister)
    workflow.add_node("paginator", paginator)
    workflow.add_node("advance", advance_to_next_page)

    workflow.set_entry_point("planner")

    # Planner → Scraper (unless the role has no slug)
    workflow.add_conditional_edges("planner", stop_if_done("scraper"), ["scraper", END])

    # Scraper → Parser (unless the fetch failed)
    workflow.add_conditional_edges("scraper", stop_if_done("parser"), ["parser", END])

    # Parser → Dedup (unless the page was empty)
    workflow.add_conditional_edges("parser", stop_if_done("dedup"), ["dedup", END])

    workflow.add_edge("dedup", "enricher")
    workflow.add_edge("enricher", "scorer")
    workflow.add_edge("scorer", "persister")
    workflow.add_edge("persister", "paginator")

    # Paginator → conditional: more pages? → advance → scraper  OR  → END
    workflow.add_conditional_edges("paginator", should_continue, ["advance", END])

    # Advance → Scraper (loop back)
    workflow.add_edge("advance", "scraper")

    return workflow.compile()


def initial_state(role: str, portal: Portal) -> dict:
    return {
        "role": role,
        "portal": portal,
        "role_slug": "",
        "page": 1,
        "page_url": "",
        "raw_html": "",
        "listings": [],
        "new_listings": [],
        "has_more": False,
        "stop_reason": None,
        "pages_scanned": 0,
        "processed": 0,
        "duplicates": 0,
        "detail_errors": 0,
        "filtered": 0,
        "inserted": 0,
        "errors": [],
    }


def scan_portal(
    role: str,
    portal,
    store: JobStore,
    fetcher: PageFetcher,
    settings: Settings = default_settings,
) -> ScanStats:
    """Run the page-by-page scan of one portal for one role."""
    portal = Portal(portal)
    graph = build_workflow(store, fetcher, settings)
    try:
        result = graph.invoke(
            initial_state(role, portal),
            config={"recursion_limit": settings.max_pages * NODES_PER_PAGE + 10},
        )
    except Exception as e:
        # Rows persisted before the failure stay in the store
        print(f"[Workflow] ❌ {portal.value} / {role}: scan aborted: {e!r}")
        return ScanStats(
            role=role,
            portal=portal.value,
            stop_reason="error",
            errors=[f"Scan of {portal.value} for {role!r} aborted: {e!r}"],
        )

    stats = ScanStats(
        role=role,
        portal=portal.value,
        pages_scanned=result.get("pages_scanned", 0),
        processed=result.get("processed", 0),
        duplicates=result.get("duplicates", 0),
        detail_errors=result.get("detail_errors", 0),
        filtered=result.get("filtered", 0),
        inserted=result.get("inserted", 0),
        stop_reason=result.get("stop_reason"),
        errors=result.get("errors", []),
    )

    print(
        f"[Workflow] [STATS] {portal.value} / {role}: pages {stats.pages_scanned}, "
        f"processed {stats.processed}, duplicates {stats.duplicates}, "
        f"detail errors {stats.detail_errors}, inserted {stats.inserted} "
        f"(stopped: {stats.stop_reason})"
    )
    return stats


def scan(
    role: str,
    portals: Iterable,
    store: JobStore,
    fetcher: Optional[PageFetcher] = None,
    settings: Settings = default_settings,
) -> int:
    """
    Scan the given portals for one role, one portal after the other.

    Returns:
        Total number of newly inserted listings.
    """
    return sum(stats.inserted for stats in scan_with_stats(role, portals, store, fetcher, settings))


def scan_with_stats(
    role: str,
    portals: Iterable,
    store: JobStore,
    fetcher: Optional[PageFetcher] = None,
    settings: Settings = default_settings,
) -> list[ScanStats]:
    """Like scan(), but returns the per-portal ScanStats."""
    owns_fetcher = fetcher is None
    fetcher = fetcher or PageFetcher(settings)
    try:
        # Sorted so portals are always visited in the same order
        ordered = sorted({Portal(portal) for portal in portals}, key=list(Portal).index)
        return [scan_portal(role, portal, store, fetcher, settings) for portal in ordered]
    finally:
        if owns_fetcher:
            fetcher.close()


def scan_roles(
    roles: Iterable[str],
    portals: Iterable,
    store: JobStore,
    fetcher: Optional[PageFetcher] = None,
    settings: Settings = default_settings,
) -> dict[str, list[ScanStats]]:
    """Scan several roles sequentially. Returns per-role scan stats."""
    portals = list(portals)
    return {role: scan_with_stats(role, portals, store, fetcher, settings) for role in roles}
