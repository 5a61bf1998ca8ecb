"""Chainable where helpers.

Each helper takes a query builder first, appends exactly one clause (or none,
for an ignored value) and returns the same builder. The builder only needs
``where``, ``where_null`` and ``where_raw`` plus an optional ``dialect``
attribute; :class:`WherePlusMixin` exposes the helpers as ``where_*`` methods.

Usage:
    query = (QueryBuilder('users', 'sqlite')
             .where_starts_with('name', 'Jo')
             .where_in_delimited_list('tags', 'admin')
             .where_with_null_fallback('score', 0, '>', 10))
"""

import logging
from typing import Any, Mapping, Optional, Union
from .expressions import Batch, ColumnSpec, Raw, as_fallback
from .identifiers import quote_identifier
from .mappings import list_wrappers, null_coalesce, quote_chars, valid_operators

logger = logging.getLogger(__name__)


def _dialect(query: Any) -> str:
    return getattr(query, 'dialect', 'default')


def _is_operator(operator: Any) -> bool:
    return isinstance(operator, str) and operator.upper() in valid_operators


def or_empty_or_null(query: Any, column: Union[str, Mapping[str, Any]], value: Any = '', ignore: Any = None):
    """Match ``column = value``, or ``column = '' OR column IS NULL`` when value is empty.

    A mapping of column -> value applies the helper to each pair in order.
    When ``ignore`` is given and equals the value, no clause is added.
    """
    spec = ColumnSpec.of(column)
    if isinstance(spec, Batch):
        for where_col, where_val in spec.pairs:
            or_empty_or_null(query, where_col, where_val, ignore)
        return query

    if ignore is not None and value == ignore:
        logger.debug('Skipping %s: value matches ignore %r', spec.name, ignore)
        return query

    if value is None or value == '':
        return query.where(lambda q: q.where(spec.name, '=', '').where_null(spec.name, boolean='or'))

    return query.where(spec.name, '=', value)


def _delimited(query: Any, column: str, value: Any, op: str):
    dialect = _dialect(query)
    col = quote_identifier(column, quote_chars.get(dialect, '`'))
    wrapped = list_wrappers.get(dialect, list_wrappers['default']).format(col=col)
    return query.where_raw(f'{wrapped} {op} ?', [f'%,{value},%'])


def in_delimited_list(query: Any, column: str, value: Any):
    """Match rows whose comma-delimited ``column`` holds ``value`` as an entry."""
    return _delimited(query, column, value, 'LIKE')


def not_in_delimited_list(query: Any, column: str, value: Any):
    """Exclude rows whose comma-delimited ``column`` holds ``value`` as an entry."""
    return _delimited(query, column, value, 'NOT LIKE')


def starts_with(query: Any, column: str, value: str):
    return query.where(column, 'LIKE', value + '%')


def not_starts_with(query: Any, column: str, value: str):
    return query.where(column, 'NOT LIKE', value + '%')


def ends_with(query: Any, column: str, value: str):
    return query.where(column, 'LIKE', '%' + value)


def not_ends_with(query: Any, column: str, value: str):
    return query.where(column, 'NOT LIKE', '%' + value)


def contains(query: Any, column: str, value: str):
    return query.where(column, 'LIKE', '%' + value + '%')


def not_contains(query: Any, column: str, value: str):
    return query.where(column, 'NOT LIKE', '%' + value + '%')


def with_null_fallback(query: Any, column: str, fallback: Any, operator: Optional[str] = None,
                       value: Any = None, boolean: str = 'and'):
    """Compare ``column`` against ``value`` with NULLs replaced by ``fallback``.

    ``fallback`` is bound as a parameter unless it is :class:`Raw`, in which
    case its SQL is embedded as-is. When ``value`` is omitted and ``operator``
    is not an operator, ``operator`` is taken as the value to compare with ``=``.
    The column itself is embedded unquoted.
    """
    if value is None and operator is not None and not _is_operator(operator):
        value, operator = operator, '='
    operator = (operator or '=').upper()
    if operator not in valid_operators:
        raise ValueError(f'Invalid operator: {operator}')

    fallback = as_fallback(fallback)
    bindings = []
    if isinstance(fallback, Raw):
        arg = fallback.sql
    else:
        arg = '?'
        bindings.append(fallback.value)
    fn = null_coalesce.get(_dialect(query), null_coalesce['default'])
    expr = f'{fn}({column}, {arg})'

    if operator in ('IS NULL', 'IS NOT NULL'):
        return query.where_raw(f'{expr} {operator}', bindings, boolean)
    if value is None:
        if operator == '=':
            return query.where_raw(f'{expr} IS NULL', bindings, boolean)
        if operator in ('!=', '<>'):
            return query.where_raw(f'{expr} IS NOT NULL', bindings, boolean)
        raise ValueError(f'Cannot compare NULL using {operator}')

    if operator in ('IN', 'NOT IN'):
        values = [value] if isinstance(value, str) else list(value)
        sql = f'{expr} {operator} ({", ".join("?" for _ in values)})'
        return query.where_raw(sql, bindings + values, boolean)
    if operator == 'BETWEEN':
        low, high = value
        return query.where_raw(f'{expr} BETWEEN ? AND ?', bindings + [low, high], boolean)

    bindings.append(value)
    return query.where_raw(f'{expr} {operator} ?', bindings, boolean)


class WherePlusMixin:
    """Adds the where helpers as chainable methods to a query builder."""

    def where_or_empty_or_null(self, column, value='', ignore=None):
        return or_empty_or_null(self, column, value, ignore)

    def where_in_delimited_list(self, column, value):
        return in_delimited_list(self, column, value)

    def where_not_in_delimited_list(self, column, value):
        return not_in_delimited_list(self, column, value)

    def where_starts_with(self, column, value):
        return starts_with(self, column, value)

    def where_not_starts_with(self, column, value):
        return not_starts_with(self, column, value)

    def where_ends_with(self, column, value):
        return ends_with(self, column, value)

    def where_not_ends_with(self, column, value):
        return not_ends_with(self, column, value)

    def where_contains(self, column, value):
        return contains(self, column, value)

    def where_not_contains(self, column, value):
        return not_contains(self, column, value)

    def where_with_null_fallback(self, column, fallback, operator=None, value=None, boolean='and'):
        return with_null_fallback(self, column, fallback, operator, value, boolean)
