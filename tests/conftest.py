"""Pytest fixtures for where_plus tests."""

import pytest

from sqlcon import SqlCon
from where_plus import QueryBuilder

ROWS = [
    {'id': 1, 'name': 'apple', 'tags': 'red,fruit', 'score': 5},
    {'id': 2, 'name': 'banana', 'tags': 'yellow,fruit', 'score': None},
    {'id': 3, 'name': 'pineapple', 'tags': '', 'score': 7},
    {'id': 4, 'name': '', 'tags': None, 'score': None},
    {'id': 5, 'name': None, 'tags': 'fruit', 'score': 10},
]


@pytest.fixture
def con():
    """In-memory SQLite connection with a seeded ``items`` table."""
    with SqlCon('sqlite://') as c:
        c.execute('CREATE TABLE items (id INTEGER PRIMARY KEY, name TEXT, tags TEXT, score INTEGER)')
        for row in ROWS:
            c.execute('INSERT INTO items (id, name, tags, score) VALUES (:id, :name, :tags, :score)', row)
        yield c


@pytest.fixture
def qb():
    """Empty builder on the default dialect."""
    return QueryBuilder('items')


@pytest.fixture
def ids(con):
    """Sorted ids of the rows matched by a query."""
    def _ids(query):
        return sorted(r['id'] for r in con.fetch(query, ['id']))
    return _ids
