"""Filter suggestions derived from the loaded candidates."""

from collections.abc import Iterable, Sequence

from src.core.schemas import Candidate

# Facet name -> candidate attribute it is collected from
FACET_ATTRIBUTES: dict[str, str] = {
    "location": "location",
    "role": "title",
    "company": "current_company",
    "company_level": "company_level",
    "product_domain": "product_domain",
    "employment_type": "employment_type",
    "pedigree_level": "pedigree_level",
    "company_sector": "company_sector",
    "product_service": "product_service",
    "product_category": "product_category",
}


def facet_values(candidates: Sequence[Candidate]) -> dict[str, list[str]]:
    """Unique non-empty values per facet, in first-seen order."""
    return {
        facet: _unique(getattr(c, attribute) for c in candidates)
        for facet, attribute in FACET_ATTRIBUTES.items()
    }


def suggest(values: Iterable[str], typed: str) -> list[str]:
    """Autocomplete: values containing ``typed`` (case-insensitive)."""
    needle = typed.lower()
    return [v for v in values if needle in v.lower()]


def _unique(values: Iterable[str]) -> list[str]:
    return list(dict.fromkeys(v for v in values if v))
