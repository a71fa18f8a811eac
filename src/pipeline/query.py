"""Boolean search query parsing.

Not a grammar: the query is split on whitespace-delimited AND/OR tokens.
When both operators appear, AND takes precedence over OR for the whole query.
"""

import re
from typing import Literal

from pydantic import BaseModel, ConfigDict

Operator = Literal["AND", "OR"]

_OPERATOR_SPLIT = re.compile(r"\s+(AND|OR)\s+", re.IGNORECASE)


class BooleanQuery(BaseModel):
    """A parsed boolean-mode query: an operator and its substring terms."""

    model_config = ConfigDict(frozen=True)

    operator: Operator | None = None
    terms: tuple[str, ...] = ()

    def matches(self, haystack: str) -> bool:
        """Return True if the terms match ``haystack`` (case-insensitive)."""
        text = haystack.lower()
        if self.operator == "OR":
            return any(t.lower() in text for t in self.terms)
        # AND, or a single whole-query term
        return all(t.lower() in text for t in self.terms)


def parse_boolean_query(query: str) -> BooleanQuery:
    """Parse ``query`` into a BooleanQuery.

    Examples::

        parse_boolean_query("React AND Node.js")  # AND, ("React", "Node.js")
        parse_boolean_query("go or rust")          # OR, ("go", "rust")
        parse_boolean_query("React Native")        # None, ("React Native",)
    """
    parts = _OPERATOR_SPLIT.split(query)
    # re.split keeps captured operators at the odd indices
    operators = {p.upper() for p in parts[1::2]}
    terms = tuple(parts[0::2])

    if "AND" in operators:
        return BooleanQuery(operator="AND", terms=terms)
    if "OR" in operators:
        return BooleanQuery(operator="OR", terms=terms)
    return BooleanQuery(operator=None, terms=(query,))
