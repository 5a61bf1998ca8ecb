"""Chainable SQL query builder that accumulates WHERE conditions."""

from typing import Any, Callable, Dict, List, Optional, Tuple, Union
import logging
from .adapt_sql import adapt_sql
from .conditions import Condition, Nested, RawCondition, render_wheres
from .helpers import WherePlusMixin
from .identifiers import quote_column
from .mappings import dialects, placeholders, quote_chars, valid_operators

logger = logging.getLogger(__name__)

_missing = object()


class QueryBuilder(WherePlusMixin):
    """Accumulates conditions and renders SELECT queries with named parameters."""
    def __init__(self, table: Optional[str] = None, dialect: str = 'default'):
        """Initialize with an optional table and database dialect."""
        self.dialect = dialect.lower()
        if self.dialect not in dialects:
            raise ValueError(f'Unknown dialect: {dialect}')
        self.table = table
        self.ph = placeholders.get(self.dialect, ':')
        self.quote_char = quote_chars.get(self.dialect, '"')
        self.wheres: List[Any] = []

    def new_query(self) -> 'QueryBuilder':
        """Empty builder with the same table and dialect."""
        return QueryBuilder(self.table, self.dialect)

    def where(self, column: Union[str, Callable], operator: Any = None, value: Any = _missing,
              boolean: str = 'and') -> 'QueryBuilder':
        """Add a condition.

        ``where(col, value)`` compares with ``=``; a ``None`` value with ``=``
        or ``!=`` becomes ``IS NULL`` / ``IS NOT NULL``. A callable column
        receives a fresh builder and its conditions are added as a group.
        """
        if callable(column):
            nested = self.new_query()
            column(nested)
            if nested.wheres:
                self.wheres.append(Nested(nested.wheres, boolean))
            return self
        if value is _missing:
            value, operator = operator, '='
        op = operator.upper() if isinstance(operator, str) else operator
        if value is None and op in ('=', '!=', '<>'):
            return self.where_null(column, boolean, negate=op != '=')
        if op not in valid_operators:
            raise ValueError(f'Invalid operator: {operator}')
        self.wheres.append(Condition(column, op, value, boolean))
        return self

    def or_where(self, column: Union[str, Callable], operator: Any = None, value: Any = _missing) -> 'QueryBuilder':
        return self.where(column, operator, value, 'or')

    def where_null(self, column: str, boolean: str = 'and', negate: bool = False) -> 'QueryBuilder':
        self.wheres.append(Condition(column, 'IS NOT NULL' if negate else 'IS NULL', [], boolean))
        return self

    def or_where_null(self, column: str) -> 'QueryBuilder':
        return self.where_null(column, 'or')

    def where_not_null(self, column: str, boolean: str = 'and') -> 'QueryBuilder':
        return self.where_null(column, boolean, negate=True)

    def where_raw(self, sql: str, bindings: Optional[List[Any]] = None, boolean: str = 'and') -> 'QueryBuilder':
        """Add SQL text as-is; ``?`` marks each binding in order."""
        self.wheres.append(RawCondition(sql, bindings, boolean))
        return self

    def or_where_raw(self, sql: str, bindings: Optional[List[Any]] = None) -> 'QueryBuilder':
        return self.where_raw(sql, bindings, 'or')

    @property
    def bindings(self) -> List[Any]:
        """All bound values in the order they appear in the SQL."""
        return [b for w in self.wheres for b in w.bindings]

    def to_sql(self) -> Tuple[str, Dict[str, Any]]:
        """Render the WHERE conditions (without the keyword) and their parameters."""
        if not self.wheres:
            return '', {}
        return render_wheres(self.wheres, self.ph, self.quote_char)

    def select(self, columns: Union[str, List[str]] = '*', order_by: Optional[List[Tuple[str, str]]] = None,
               limit: Optional[int] = None, offset: Optional[int] = None) -> Tuple[str, Dict[str, Any]]:
        """Generate SELECT query."""
        if not self.table:
            raise ValueError('No table set for select')
        table = quote_column(self.table, self.quote_char)
        cols = ', '.join(quote_column(c, self.quote_char) for c in columns) if isinstance(columns, list) else columns
        sql = f'SELECT {cols} FROM {table}'
        w_sql, params = self.to_sql()
        if w_sql:
            sql += f' WHERE {w_sql}'
        if order_by:
            if not all(d.upper() in ('ASC', 'DESC') for _, d in order_by):
                raise ValueError(f'Invalid order_by: {order_by}')
            sql += f' ORDER BY {", ".join(f"{quote_column(f, self.quote_char)} {d.upper()}" for f, d in order_by)}'
        if offset is not None or limit is not None:
            if self.dialect in ('oracle', 'mssql'):
                sql += f' OFFSET {int(offset or 0)} ROWS'
                if limit is not None:
                    sql += f' FETCH NEXT {int(limit)} ROWS ONLY'
            else:
                if limit is None and offset and self.dialect not in ('postgres', 'postgresql'):
                    sql += ' LIMIT -1' if self.dialect == 'sqlite' else ' LIMIT 18446744073709551615'
                if limit is not None:
                    sql += f' LIMIT {int(limit)}'
                if offset:
                    sql += f' OFFSET {int(offset)}'
        logger.debug('SQL: %s | Params: %s', sql, params)
        return sql, params

    def compile(self, columns: Union[str, List[str]] = '*', **kwargs) -> Tuple[str, Union[Dict[str, Any], List[Any]]]:
        """SELECT with placeholders adapted for the dialect's driver."""
        return adapt_sql(*self.select(columns, **kwargs), self.dialect)

    def __repr__(self) -> str:
        return f'QueryBuilder({self.table!r}, {self.dialect!r}, wheres={len(self.wheres)})'
