"""Identifier validation and quoting."""

import re
import logging

logger = logging.getLogger(__name__)

_rx_safe = re.compile(r'[0-9A-Za-z]+(?:\.[0-9A-Za-z]+)*')
_rx_column = re.compile(r'\w+(?:\.\w+)*')


def quote_identifier(column: str, quote_char: str = '`') -> str:
    """Quote a bare or table-qualified column for use in raw SQL.

    table.col becomes `table`.`col` with the default quote char.
    Anything that is not plain alphanumeric segments joined by single dots
    (expressions, spaces, quotes) is returned unchanged.
    """
    if not _rx_safe.fullmatch(column):
        logger.debug('Column %r left unquoted in raw SQL', column)
        return column
    return '.'.join(f'{quote_char}{part}{quote_char}' for part in column.split('.'))


def quote_column(column: str, quote_char: str) -> str:
    """Quote a column for a structured condition, rejecting anything unsafe."""
    if not _rx_column.fullmatch(column):
        raise ValueError(f'Invalid field name: {column}')
    return '.'.join(f'{quote_char}{part}{quote_char}' for part in column.split('.'))
