"""Chainable where helpers over a dialect-aware SQL query builder."""

from .query_builder import QueryBuilder
from .conditions import Condition, RawCondition, Nested
from .expressions import Raw, Bound, ColumnSpec, Single, Batch
from .helpers import (
    WherePlusMixin, or_empty_or_null, in_delimited_list, not_in_delimited_list,
    starts_with, not_starts_with, ends_with, not_ends_with, contains, not_contains,
    with_null_fallback
)
from .identifiers import quote_identifier
from .adapt_sql import adapt_sql

__all__ = [
    'QueryBuilder',
    'Condition',
    'RawCondition',
    'Nested',
    'Raw',
    'Bound',
    'ColumnSpec',
    'Single',
    'Batch',
    'WherePlusMixin',
    'or_empty_or_null',
    'in_delimited_list',
    'not_in_delimited_list',
    'starts_with',
    'not_starts_with',
    'ends_with',
    'not_ends_with',
    'contains',
    'not_contains',
    'with_null_fallback',
    'quote_identifier',
    'adapt_sql'
]
