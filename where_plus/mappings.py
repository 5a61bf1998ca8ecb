"""Dialect mappings for placeholders, quoting and helper SQL functions."""

from typing import Dict

dialects = ('default', 'mysql', 'sqlite', 'postgres', 'postgresql', 'oracle', 'mssql')

# Named placeholder prefix used while building; adapt_sql converts per dialect
placeholders = {
    'default': ':', 'mysql': ':', 'sqlite': ':', 'postgres': ':',
    'postgresql': ':', 'oracle': ':', 'mssql': ':'
}

quote_chars = {
    'default': '`', 'mysql': '`', 'sqlite': '"', 'postgres': '"',
    'postgresql': '"', 'oracle': '"', 'mssql': '"'
}

valid_operators = (
    '=', '!=', '<>', '<', '>', '<=', '>=',
    'LIKE', 'NOT LIKE', 'ILIKE', 'NOT ILIKE',
    'IN', 'NOT IN', 'BETWEEN', 'IS NULL', 'IS NOT NULL'
)

valid_booleans = ('AND', 'OR')

# Null-coalescing function per dialect
null_coalesce: Dict[str, str] = {
    'default': 'IFNULL', 'mysql': 'IFNULL', 'sqlite': 'IFNULL',
    'postgres': 'COALESCE', 'postgresql': 'COALESCE',
    'oracle': 'NVL', 'mssql': 'ISNULL'
}

# Wrap a column in leading/trailing commas; {col} is the already-quoted column
list_wrappers: Dict[str, str] = {
    'default': "CONCAT(',', {col}, ',')",
    'mysql': "CONCAT(',', {col}, ',')",
    'sqlite': "',' || {col} || ','",
    'postgres': "',' || {col} || ','",
    'postgresql': "',' || {col} || ','",
    'oracle': "',' || {col} || ','",
    'mssql': "',' + {col} + ','"
}
