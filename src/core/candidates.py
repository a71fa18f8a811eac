"""Candidate data loading and mapping of raw records to search projections.

The candidate data service is external; this module reads its JSON/YAML
exports and derives the display fields the filter engine works on.
"""

import json
import logging
import math
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import yaml

from src.core.schemas import (
    NOT_SPECIFIED,
    Candidate,
    CandidateRecord,
    Requirement,
    ResumeSubmission,
)

logger = logging.getLogger(__name__)

_NON_NUMERIC = re.compile(r"[^\d.]")
_LEADING_NUMBER = re.compile(r"\d+(?:\.\d*)?|\.\d+")
_SECONDS_PER_DAY = 60 * 60 * 24


def parse_experience(text: str | None) -> float:
    """Extract years of experience from free text ("5+ yrs" -> 5.0).

    Everything except digits and the decimal point is dropped, then the
    leading number is parsed. Returns 0.0 when nothing numeric is left.
    """
    if not text:
        return 0.0
    match = _LEADING_NUMBER.match(_NON_NUMERIC.sub("", text))
    if match is None:
        return 0.0
    return float(match.group(0))


def parse_skills(text: str | None) -> tuple[str, ...]:
    """Split a comma-separated skills field into trimmed, non-empty skills."""
    if not text:
        return ()
    return tuple(s.strip() for s in text.split(",") if s.strip())


def format_last_active(created_at: datetime, now: datetime | None = None) -> str:
    """Render how long ago a record was created, in whole days."""
    if now is None:
        now = datetime.now(created_at.tzinfo)
    elif (now.tzinfo is None) != (created_at.tzinfo is None):
        # A naive timestamp is local time
        if now.tzinfo is None:
            now = now.astimezone()
        else:
            created_at = created_at.astimezone()

    days = math.floor((now - created_at).total_seconds() / _SECONDS_PER_DAY)
    if days <= 0:
        return "Today"
    if days == 1:
        return "1 day ago"
    return f"{days} days ago"


def to_candidate(record: CandidateRecord, now: datetime | None = None) -> Candidate:
    """Project a raw record onto the fields used for search and display."""
    title = record.designation or record.current_role or record.position or NOT_SPECIFIED
    return Candidate(
        id=record.id,
        name=record.full_name,
        email=record.email,
        phone=record.phone or "",
        title=title,
        location=record.location or NOT_SPECIFIED,
        experience=parse_experience(record.experience),
        education=record.education or NOT_SPECIFIED,
        current_company=record.company or NOT_SPECIFIED,
        last_active=format_last_active(record.created_at, now),
        skills=parse_skills(record.skills),
        summary=f"Candidate profile for {record.full_name}",
        profile_pic=record.profile_picture or "",
        ctc=record.ctc or NOT_SPECIFIED,
        expected_ctc=record.ectc or NOT_SPECIFIED,
        notice_period=record.notice_period or NOT_SPECIFIED,
        availability=record.notice_period or NOT_SPECIFIED,
        pedigree_level=record.pedigree_level or "",
        company_level=record.company_level or "",
        company_sector=record.company_sector or "",
        product_service=record.product_service or "",
        product_category=record.product_category or "",
        product_domain=record.product_domain or "",
        employment_type=record.employment_type or "",
    )


def to_candidates(
    records: list[CandidateRecord], now: datetime | None = None,
) -> list[Candidate]:
    """Map a batch of records, sharing one reference time for ``last_active``."""
    now = now or datetime.now(timezone.utc)
    return [to_candidate(r, now) for r in records]


def load_candidate_records(path: str | Path) -> list[CandidateRecord]:
    """Load raw candidate records from a JSON or YAML export."""
    rows = _load_rows(path, "candidates")
    records = [CandidateRecord.model_validate(row) for row in rows]
    logger.info("Loaded %d candidate records from %s", len(records), path)
    return records


def load_requirements(path: str | Path) -> list[Requirement]:
    """Load requirements from a JSON or YAML export."""
    rows = _load_rows(path, "requirements")
    return [Requirement.model_validate(row) for row in rows]


def load_submissions(path: str | Path) -> list[ResumeSubmission]:
    """Load resume submissions from a JSON or YAML export."""
    rows = _load_rows(path, "submissions")
    return [ResumeSubmission.model_validate(row) for row in rows]


def _load_rows(path: str | Path, key: str) -> list[dict[str, Any]]:
    """Read a list of rows, either top-level or under ``key``."""
    path = Path(path)
    if not path.exists():
        msg = f"Data file not found: {path}"
        raise FileNotFoundError(msg)

    text = path.read_text()
    if path.suffix.lower() == ".json":
        raw: Any = json.loads(text) if text.strip() else []
    else:
        raw = yaml.safe_load(text) or []

    if isinstance(raw, dict):
        raw = raw.get(key, [])
    if not isinstance(raw, list):
        msg = f"Expected a list of {key} in {path}, got {type(raw).__name__}"
        raise ValueError(msg)
    return raw
