"""Resume delivery targets per requirement.

A requirement's target is looked up from a fixed criticality x toughness
matrix. Inputs are sanitized at the boundary so the lookup never raises:
blank values take the MEDIUM / Medium defaults and any pair outside the
matrix resolves to FALLBACK_TARGET.
"""

from typing import Literal

DEFAULT_CRITICALITY = "MEDIUM"
DEFAULT_TOUGHNESS = "Medium"
FALLBACK_TARGET = 4

RESUME_TARGET_MATRIX: dict[str, dict[str, int]] = {
    "HIGH": {"Easy": 6, "Medium": 4, "Tough": 2},
    "MEDIUM": {"Easy": 5, "Medium": 3, "Tough": 2},
    "LOW": {"Easy": 4, "Medium": 3, "Tough": 2},
}

DefaultRateBucket = Literal["HT", "HM", "MM", "ME"]
DEFAULT_RATE_BUCKETS: tuple[DefaultRateBucket, ...] = ("HT", "HM", "MM", "ME")


def normalize_criticality(criticality: str | None) -> str:
    """Uppercase ``criticality``, substituting MEDIUM when blank."""
    return (criticality or DEFAULT_CRITICALITY).upper()


def normalize_toughness(toughness: str | None) -> str:
    """Title-case ``toughness`` ("tough" -> "Tough"), substituting Medium when blank."""
    value = toughness or DEFAULT_TOUGHNESS
    return value[:1].upper() + value[1:].lower()


def resolve_target(criticality: str | None, toughness: str | None) -> int:
    """Return how many resumes must be sourced for a requirement.

    >>> resolve_target("HIGH", "Easy")
    6
    >>> resolve_target("low", "tough")
    2
    >>> resolve_target("", "")
    3
    """
    row = RESUME_TARGET_MATRIX.get(normalize_criticality(criticality), {})
    return row.get(normalize_toughness(toughness), FALLBACK_TARGET)


def default_rate_bucket(criticality: str | None, toughness: str | None) -> DefaultRateBucket:
    """Group a requirement for default-rate reporting.

    HT = high criticality and tough, HM = other high, MM = medium and not
    easy, ME = everything else (easy medium work and all low criticality).
    """
    crit = normalize_criticality(criticality)
    tough = normalize_toughness(toughness)
    if crit == "HIGH":
        return "HT" if tough == "Tough" else "HM"
    if crit == "MEDIUM" and tough != "Easy":
        return "MM"
    return "ME"
