"""Dialect-specific placeholder adaptation."""

import re
from typing import Dict, Any, Union, Tuple, List

# Same lookbehind as SQLAlchemy's text(): '::' casts are not placeholders
_rx_named = re.compile(r"'(?:[^']|'')*'|(?<![:\w]):(\w+)")


def _sub_named(sql: str, fmt) -> str:
    """Rewrite :name placeholders outside string literals."""
    return _rx_named.sub(lambda m: fmt(m.group(1)) if m.group(1) else m.group(0), sql)


def adapt_sql(sql: str, params: Dict[str, Any], dialect: str) -> Tuple[str, Union[Dict[str, Any], List[Any]]]:
    """Adapt SQL and parameters for specific dialect.

    oracle keeps :name, mssql uses @name, postgres %(name)s, mysql %s
    (pymysql/mysqlclient format style) and sqlite/default qmark ``?``.
    Positional dialects return the values as a list in SQL order.
    """
    d = dialect.lower()
    if d == 'oracle':
        return sql, params
    if d == 'mssql':
        return _sub_named(sql, lambda name: f'@{name}'), params
    if d in ('postgres', 'postgresql'):
        return _sub_named(sql, lambda name: f'%({name})s'), params
    if d in ('mysql', 'sqlite', 'default'):
        marker = '%s' if d == 'mysql' else '?'
        names = []

        def _positional(name):
            names.append(name)
            return marker

        sql = _sub_named(sql, _positional)
        return sql, [params[n] for n in names]
    raise ValueError(f'Unknown dialect: {d}')
