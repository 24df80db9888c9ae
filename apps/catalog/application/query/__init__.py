"""Backend-neutral Query IR."""

from catalog.application.query.builder import QueryBuilder, build_search_query
from catalog.application.query.predicates import (
    Contains,
    Match,
    Predicate,
    Query,
    Range,
    SortField,
    TextMatch,
)

__all__ = [
    "Contains",
    "Match",
    "Predicate",
    "Query",
    "QueryBuilder",
    "Range",
    "SortField",
    "TextMatch",
    "build_search_query",
]
