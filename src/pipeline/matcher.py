"""Filter chain for candidate search.

Filter order:
  1. SavedViewFilter       - "saved" view keeps only saved candidates
  2. TextSearchFilter      - plain or boolean query over name, title, skills
  3. FieldFilter (each)    - case-insensitive substring per populated field
  4. ExperienceRangeFilter - inclusive [min, max] years
  5. RequiredSkillsFilter  - every required skill must match some skill
  6. CtcRangeFilter        - digits-only CTC against min/max bounds

Every filter keeps input order and never mutates candidates, so running the
chain twice with the same inputs gives the same output.
"""

import logging
import re
from collections.abc import Callable, Sequence

from src.core.schemas import Candidate, FilterSpec
from src.pipeline.query import parse_boolean_query

logger = logging.getLogger(__name__)

VIEWS: tuple[str, ...] = ("all", "saved")

# A filter is a callable that takes candidates and returns a subset.
Filter = Callable[[list[Candidate]], list[Candidate]]

_NON_DIGIT = re.compile(r"\D")

# (spec field, candidate field, candidate without a value passes)
FIELD_FILTERS: tuple[tuple[str, str, bool], ...] = (
    ("location", "location", False),
    ("role", "title", False),
    ("company", "current_company", False),
    ("pedigree_level", "pedigree_level", True),
    ("company_level", "company_level", False),
    ("company_sector", "company_sector", True),
    ("product_service", "product_service", True),
    ("product_category", "product_category", True),
    ("product_domain", "product_domain", False),
    ("employment_type", "employment_type", False),
    ("notice_period", "notice_period", True),
    ("availability", "availability", True),
)


def parse_ctc(text: str) -> int:
    """Strip every non-digit from a CTC string ("12 LPA" -> 12). No digits -> 0."""
    digits = _NON_DIGIT.sub("", text)
    return int(digits) if digits else 0


def _log_removed(name: str, before: int, after: int) -> None:
    removed = before - after
    if removed:
        logger.debug("%s: removed %d candidates", name, removed)


class SavedViewFilter:
    """Restrict to saved candidates when the "saved" view is selected."""

    def __init__(self, view: str = "all") -> None:
        if view not in VIEWS:
            msg = f"view must be one of {list(VIEWS)}, got '{view}'"
            raise ValueError(msg)
        self._view = view

    def __call__(self, candidates: list[Candidate]) -> list[Candidate]:
        if self._view != "saved":
            return candidates
        result = [c for c in candidates if c.saved]
        _log_removed("SavedViewFilter", len(candidates), len(result))
        return result


class TextSearchFilter:
    """Match the free-text query against name, title and skills.

    Plain mode: the query must be a substring of the name, the title, or any
    one skill. Boolean mode: AND/OR terms are matched against the name, title
    and skills joined with spaces. A blank query is a no-op.
    """

    def __init__(self, query: str, boolean_mode: bool = False) -> None:
        self._needle = query.lower()
        self._active = bool(query.strip())
        self._boolean = parse_boolean_query(query) if boolean_mode else None

    def __call__(self, candidates: list[Candidate]) -> list[Candidate]:
        if not self._active:
            return candidates
        result = [c for c in candidates if self._matches(c)]
        _log_removed("TextSearchFilter", len(candidates), len(result))
        return result

    def _matches(self, candidate: Candidate) -> bool:
        if self._boolean is not None:
            return self._boolean.matches(searchable_text(candidate))
        return (
            self._needle in candidate.name.lower()
            or self._needle in candidate.title.lower()
            or any(self._needle in s.lower() for s in candidate.skills)
        )


def searchable_text(candidate: Candidate) -> str:
    """Name, title and skills joined by spaces, as searched in boolean mode."""
    return " ".join([candidate.name, candidate.title, *candidate.skills])


class FieldFilter:
    """Case-insensitive substring match of one candidate attribute.

    An empty filter value is a no-op. With ``allow_missing`` a candidate whose
    attribute is empty is kept rather than rejected.
    """

    def __init__(self, attribute: str, value: str, allow_missing: bool = False) -> None:
        self._attribute = attribute
        self._value = value.lower()
        self._allow_missing = allow_missing

    def __call__(self, candidates: list[Candidate]) -> list[Candidate]:
        if not self._value:
            return candidates
        result = [c for c in candidates if self._matches(c)]
        _log_removed(f"FieldFilter[{self._attribute}]", len(candidates), len(result))
        return result

    def _matches(self, candidate: Candidate) -> bool:
        actual: str = getattr(candidate, self._attribute)
        if not actual and self._allow_missing:
            return True
        return self._value in actual.lower()


class ExperienceRangeFilter:
    """Keep candidates whose experience lies in [minimum, maximum], inclusive.

    A ``maximum`` of None leaves the range open-ended.
    """

    def __init__(self, minimum: float, maximum: float | None = None) -> None:
        self._min = minimum
        self._max = maximum

    def __call__(self, candidates: list[Candidate]) -> list[Candidate]:
        result = [c for c in candidates if self._in_range(c.experience)]
        _log_removed("ExperienceRangeFilter", len(candidates), len(result))
        return result

    def _in_range(self, experience: float) -> bool:
        if experience < self._min:
            return False
        return self._max is None or experience <= self._max


class RequiredSkillsFilter:
    """Keep candidates matching every required skill.

    A required skill matches if it is a case-insensitive substring of at least
    one of the candidate's skills ("aws" matches "AWS Lambda").
    """

    def __init__(self, skills: Sequence[str]) -> None:
        self._skills = [s.lower() for s in skills]

    def __call__(self, candidates: list[Candidate]) -> list[Candidate]:
        if not self._skills:
            return candidates
        result = [c for c in candidates if self._matches(c)]
        _log_removed("RequiredSkillsFilter", len(candidates), len(result))
        return result

    def _matches(self, candidate: Candidate) -> bool:
        own = [s.lower() for s in candidate.skills]
        return all(any(req in s for s in own) for req in self._skills)


class CtcRangeFilter:
    """Compare the digits of the current CTC against optional bounds.

    Bounds are strings as typed by the user; empty means unset.
    """

    def __init__(self, ctc_min: str = "", ctc_max: str = "") -> None:
        self._min = parse_ctc(ctc_min) if ctc_min.strip() else None
        self._max = parse_ctc(ctc_max) if ctc_max.strip() else None

    def __call__(self, candidates: list[Candidate]) -> list[Candidate]:
        if self._min is None and self._max is None:
            return candidates
        result = [c for c in candidates if self._matches(c)]
        _log_removed("CtcRangeFilter", len(candidates), len(result))
        return result

    def _matches(self, candidate: Candidate) -> bool:
        ctc = parse_ctc(candidate.ctc)
        if self._min is not None and ctc < self._min:
            return False
        return not (self._max is not None and ctc > self._max)


def build_filter_chain(spec: FilterSpec, view: str = "all") -> list[Filter]:
    """Build the ordered filter list for one evaluation of ``spec``."""
    filters: list[Filter] = [
        SavedViewFilter(view),
        TextSearchFilter(spec.query, spec.boolean_mode),
    ]
    for spec_field, attribute, allow_missing in FIELD_FILTERS:
        filters.append(FieldFilter(attribute, getattr(spec, spec_field), allow_missing))
    filters.extend([
        ExperienceRangeFilter(spec.experience_min, spec.experience_max),
        RequiredSkillsFilter(spec.skills),
        CtcRangeFilter(spec.ctc_min, spec.ctc_max),
    ])
    return filters


def run_filter_chain(
    candidates: Sequence[Candidate],
    filters: list[Filter],
) -> list[Candidate]:
    """Apply filters in order, returning the surviving candidates."""
    result = list(candidates)
    for f in filters:
        result = f(result)
    return result


def filter_candidates(
    candidates: Sequence[Candidate],
    spec: FilterSpec,
    view: str = "all",
) -> list[Candidate]:
    """Return the candidates matching ``spec`` in ``view``, in input order."""
    result = run_filter_chain(candidates, build_filter_chain(spec, view))
    logger.debug("filter_candidates: %d of %d matched", len(result), len(candidates))
    return result
