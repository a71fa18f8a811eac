"""Export of search results as CSV rows or a JSON run summary."""

import csv
import io
import json
from collections.abc import Iterable

from src.core.schemas import Candidate, SearchRunResult

CSV_HEADERS = (
    "Name",
    "Title",
    "Location",
    "Experience",
    "Education",
    "Company",
    "Skills",
    "Last Active",
)


def _format_experience(years: float) -> str:
    return str(int(years)) if years.is_integer() else str(years)


def export_candidates_csv(candidates: Iterable[Candidate]) -> str:
    """Render candidates as CSV with every value quoted; skills joined by " | "."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    buffer.write(",".join(CSV_HEADERS) + "\n")
    for c in candidates:
        writer.writerow([
            c.name,
            c.title,
            c.location,
            _format_experience(c.experience),
            c.education,
            c.current_company,
            " | ".join(c.skills),
            c.last_active,
        ])
    return buffer.getvalue()


def export_results_json(
    result: SearchRunResult,
    candidates: Iterable[Candidate],
) -> str:
    """Export a run summary and the page of candidates it produced."""
    data = {
        "run": result.model_dump(mode="json"),
        "candidates": [c.model_dump(mode="json") for c in candidates],
    }
    return json.dumps(data, indent=2)
