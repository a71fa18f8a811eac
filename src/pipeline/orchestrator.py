"""Orchestrator: wires candidate loading, session state, filter chain and paging.

Data flow:
  1. Load raw records from the candidate data export
  2. Map records to search projections
  3. Apply the session's saved flags
  4. Filter chain
  5. Clamp the session page and slice it
"""

import logging
from collections.abc import Sequence
from datetime import datetime

from src.core.candidates import load_candidate_records, to_candidates
from src.core.config import Settings
from src.core.schemas import Candidate, FilterSpec, SearchRunResult
from src.pipeline.matcher import filter_candidates
from src.pipeline.pagination import Page, paginate
from src.pipeline.session import SearchSession

logger = logging.getLogger(__name__)


class SearchResult:
    """A search run summary together with the page it produced."""

    def __init__(self, run: SearchRunResult, page: Page, matches: list[Candidate]) -> None:
        self.run = run
        self.page = page
        self.matches = matches


def run_search(
    candidates: Sequence[Candidate],
    spec: FilterSpec,
    session: SearchSession,
    view: str = "all",
) -> SearchResult:
    """Filter ``candidates`` for one session and return the session's current page.

    The session page is clamped to the filtered result count before slicing.
    """
    started_at = datetime.now()

    shown = session.apply_saved(candidates)
    matches = filter_candidates(shown, spec, view)
    session.clamp_to(len(matches))
    page = paginate(matches, session.current_page, session.page_size)

    finished_at = datetime.now()
    logger.info(
        "Search '%s' (%s view): %d of %d candidates, page %d/%d",
        spec.query, view, len(matches), len(candidates), page.page, page.total_pages,
    )

    run = SearchRunResult(
        view=view,
        query=spec.query,
        total_count=len(candidates),
        filtered_count=len(matches),
        page=page.page,
        total_pages=page.total_pages,
        started_at=started_at,
        finished_at=finished_at,
    )
    return SearchResult(run=run, page=page, matches=matches)


def search_from_settings(
    settings: Settings,
    spec: FilterSpec | None = None,
    session: SearchSession | None = None,
    view: str = "all",
) -> SearchResult:
    """Load the configured candidate export and run one search over it."""
    records = load_candidate_records(settings.data.candidates_path)
    candidates = to_candidates(records)
    session = session or SearchSession(page_size=settings.pagination.page_size)
    return run_search(candidates, spec or settings.search, session, view)
