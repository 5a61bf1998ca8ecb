"""Condition objects for SQL WHERE clauses."""

import re
import itertools
from typing import Any, Dict, List, Optional, Sequence, Tuple
from .identifiers import quote_column
from .mappings import valid_operators, valid_booleans

_rx_qmark = re.compile(r"'(?:[^']|'')*'|\?")


def _boolean(boolean: str) -> str:
    """Normalise and validate a boolean connective."""
    b = boolean.upper()
    if b not in valid_booleans:
        raise ValueError(f'Invalid boolean: {boolean}')
    return b


class Condition:
    """Represents a single SQL condition (e.g., col = value)."""
    _ids = itertools.count(1)
    __slots__ = ('field', 'op', 'values', 'boolean', '_uid')

    def __init__(self, field: str, op: str, values: Any = None, boolean: str = 'and'):
        """Initialize condition."""
        if op.upper() not in valid_operators:
            raise ValueError(f'Invalid operator: {op}')
        self.field = field
        self.op = op.upper()
        if values is None:
            values = []
        self.values = values if isinstance(values, list) else [values]
        self.boolean = _boolean(boolean)
        self._uid = next(self._ids)

    def to_sql(self, ph: str, quote_char: str) -> Tuple[str, Dict[str, Any]]:
        """Convert condition to SQL fragment and parameters."""
        col_str = quote_column(self.field, quote_char)
        params = {}
        pname_base = 'p%d_%s' % (self._uid, self.field.replace('.', '_'))

        if self.op in ('IS NULL', 'IS NOT NULL'):
            return f'{col_str} {self.op}', params

        if self.op == 'BETWEEN':
            params[f'{pname_base}_min'] = self.values[0]
            params[f'{pname_base}_max'] = self.values[1]
            return f'{col_str} BETWEEN {ph}{pname_base}_min AND {ph}{pname_base}_max', params

        if self.op in ('IN', 'NOT IN'):
            keys = [f'{ph}{pname_base}_{i}' for i in range(len(self.values))]
            params.update({f'{pname_base}_{i}': v for i, v in enumerate(self.values)})
            return f'{col_str} {self.op} ({",".join(keys)})', params

        params[pname_base] = self.values[0]
        return f'{col_str} {self.op} {ph}{pname_base}', params

    @property
    def bindings(self) -> List[Any]:
        if self.op in ('IS NULL', 'IS NOT NULL'):
            return []
        return list(self.values)

    def __repr__(self) -> str:
        return f'Condition({self.field!r}, {self.op!r}, {self.values!r}, {self.boolean!r})'


class RawCondition:
    """SQL text with ``?`` placeholders and their ordered bindings."""
    _ids = itertools.count(1)
    __slots__ = ('sql', 'bindings', 'boolean', '_uid')

    def __init__(self, sql: str, bindings: Optional[Sequence[Any]] = None, boolean: str = 'and'):
        self.sql = sql
        self.bindings = list(bindings or [])
        self.boolean = _boolean(boolean)
        self._uid = next(self._ids)

    def to_sql(self, ph: str, quote_char: str) -> Tuple[str, Dict[str, Any]]:
        """Swap each ``?`` outside string literals for a named placeholder."""
        params = {}
        counter = itertools.count()

        def repl(m):
            if m.group(0) != '?':
                return m.group(0)
            i = next(counter)
            if i >= len(self.bindings):
                raise ValueError(f'Not enough bindings for raw SQL: {self.sql}')
            name = f'raw_{self._uid}_{i}'
            params[name] = self.bindings[i]
            return f'{ph}{name}'

        sql = _rx_qmark.sub(repl, self.sql)
        if len(params) != len(self.bindings):
            raise ValueError(f'Too many bindings for raw SQL: {self.sql}')
        return sql, params

    def __repr__(self) -> str:
        return f'RawCondition({self.sql!r}, {self.bindings!r}, {self.boolean!r})'


class Nested:
    """A parenthesised group of conditions."""
    __slots__ = ('wheres', 'boolean')

    def __init__(self, wheres: List[Any], boolean: str = 'and'):
        self.wheres = wheres
        self.boolean = _boolean(boolean)

    def to_sql(self, ph: str, quote_char: str) -> Tuple[str, Dict[str, Any]]:
        sql, params = render_wheres(self.wheres, ph, quote_char)
        return f'({sql})', params

    @property
    def bindings(self) -> List[Any]:
        return [b for w in self.wheres for b in w.bindings]

    def __repr__(self) -> str:
        return f'Nested({self.wheres!r}, {self.boolean!r})'


def render_wheres(wheres: List[Any], ph: str, quote_char: str) -> Tuple[str, Dict[str, Any]]:
    """Join clauses with their connectives; the first clause's connective is dropped."""
    sql_parts = []
    params = {}
    for i, w in enumerate(wheres):
        frag, p = w.to_sql(ph, quote_char)
        dup = params.keys() & p.keys()
        if dup:
            raise ValueError(f'Duplicate parameter names: {sorted(dup)}')
        sql_parts.append(frag if i == 0 else f'{w.boolean} {frag}')
        params.update(p)
    return ' '.join(sql_parts), params
