"""Search session: caller-owned UI state for one recruiter's search screen.

Saved flags, selection and the current page live here, not in the filter
engine. Nothing is persisted; the caller keeps one session per user view.
"""

import logging
from collections.abc import Iterable, Sequence

from src.core.schemas import Candidate
from src.pipeline.pagination import PAGE_SIZE, clamp_page

logger = logging.getLogger(__name__)

BULK_ACTIONS = ("save", "unsave")


class SearchSession:
    """Mutable per-user state fed into each filter evaluation.

    Usage::

        session = SearchSession()
        session.toggle_saved("c1")
        shown = session.apply_saved(candidates)
        matches = filter_candidates(shown, spec, view="saved")
        session.clamp_to(len(matches))
    """

    def __init__(self, page_size: int = PAGE_SIZE) -> None:
        if page_size < 1:
            msg = f"page_size must be at least 1, got {page_size}"
            raise ValueError(msg)
        self.page_size = page_size
        self.current_page = 1
        self._saved: set[str] = set()
        self._selected: list[str] = []

    @property
    def saved_ids(self) -> frozenset[str]:
        return frozenset(self._saved)

    @property
    def selected_ids(self) -> tuple[str, ...]:
        return tuple(self._selected)

    def is_saved(self, candidate_id: str) -> bool:
        return candidate_id in self._saved

    def toggle_saved(self, candidate_id: str) -> bool:
        """Flip the saved flag for a candidate, returning the new value."""
        if candidate_id in self._saved:
            self._saved.discard(candidate_id)
            return False
        self._saved.add(candidate_id)
        return True

    def apply_saved(self, candidates: Iterable[Candidate]) -> list[Candidate]:
        """Return copies of ``candidates`` whose ``saved`` flag reflects this session."""
        result: list[Candidate] = []
        for c in candidates:
            saved = c.id in self._saved
            result.append(c if c.saved == saved else c.model_copy(update={"saved": saved}))
        return result

    def toggle_selected(self, candidate_id: str) -> None:
        if candidate_id in self._selected:
            self._selected.remove(candidate_id)
        else:
            self._selected.append(candidate_id)

    def toggle_select_page(self, page_items: Sequence[Candidate]) -> None:
        """Select every candidate on the page, or deselect them if all are selected."""
        page_ids = [c.id for c in page_items]
        if all(cid in self._selected for cid in page_ids):
            self._selected = [cid for cid in self._selected if cid not in page_ids]
            return
        for cid in page_ids:
            if cid not in self._selected:
                self._selected.append(cid)

    def bulk_action(self, action: str) -> int:
        """Save or unsave every selected candidate, then clear the selection.

        Returns the number of candidates the action was applied to.
        """
        if action not in BULK_ACTIONS:
            msg = f"action must be one of {list(BULK_ACTIONS)}, got '{action}'"
            raise ValueError(msg)
        count = len(self._selected)
        if action == "save":
            self._saved.update(self._selected)
        else:
            self._saved.difference_update(self._selected)
        self._selected = []
        logger.debug("Bulk %s applied to %d candidates", action, count)
        return count

    def reset_page(self) -> None:
        """Go back to the first page, e.g. after the filters change."""
        self.current_page = 1

    def clamp_to(self, count: int) -> int:
        """Clamp the current page to the pages available for ``count`` results."""
        self.current_page = clamp_page(self.current_page, count, self.page_size)
        return self.current_page
