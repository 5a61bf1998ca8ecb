"""Runs the where helpers against rows in an in-memory SQLite database."""

import time

import pandas as pd
import pytest
from sqlalchemy.exc import OperationalError

from sqlcon import SqlCon, retry, load_config
from where_plus import Raw

NAMED = [1, 2, 3, 4]  # rows whose name is not NULL


class TestLikeAgainstRows:
    """LIKE helpers select the expected rows."""

    def test_starts_with(self, con, ids):
        assert ids(con.query('items').where_starts_with('name', 'ap')) == [1]

    def test_ends_with(self, con, ids):
        assert ids(con.query('items').where_ends_with('name', 'apple')) == [1, 3]

    def test_contains(self, con, ids):
        assert ids(con.query('items').where_contains('name', 'an')) == [2]

    @pytest.mark.parametrize('positive, negative, value', [
        ('where_starts_with', 'where_not_starts_with', 'pine'),
        ('where_ends_with', 'where_not_ends_with', 'na'),
        ('where_contains', 'where_not_contains', 'pp'),
    ])
    def test_negations_are_complementary(self, con, ids, positive, negative, value):
        """Every non-NULL row matches exactly one of a helper and its negation."""
        hit = ids(getattr(con.query('items'), positive)('name', value))
        miss = ids(getattr(con.query('items'), negative)('name', value))

        assert not set(hit) & set(miss)
        assert sorted(hit + miss) == NAMED


class TestDelimitedListAgainstRows:
    """Membership in comma-delimited columns."""

    def test_in_list(self, con, ids):
        assert ids(con.query('items').where_in_delimited_list('tags', 'fruit')) == [1, 2, 5]

    def test_partial_entry_does_not_match(self, con, ids):
        assert ids(con.query('items').where_in_delimited_list('tags', 'ed')) == []

    def test_not_in_list_is_complement(self, con, ids):
        """Negation covers the rest of the rows with non-NULL tags."""
        hit = ids(con.query('items').where_in_delimited_list('tags', 'red'))
        miss = ids(con.query('items').where_not_in_delimited_list('tags', 'red'))

        assert hit == [1]
        assert miss == [2, 3, 5]

    def test_qualified_column(self, con, ids):
        assert ids(con.query('items').where_in_delimited_list('items.tags', 'yellow')) == [2]

    def test_injection_attempt_matches_nothing(self, con, ids):
        query = con.query('items').where_in_delimited_list('tags', "x' OR '1'='1")

        assert ids(query) == []


class TestOrEmptyOrNullAgainstRows:
    """Empty-or-null checks."""

    def test_empty_matches_empty_and_null(self, con, ids):
        assert ids(con.query('items').where_or_empty_or_null('name', '')) == [4, 5]

    def test_value_matches_exactly(self, con, ids):
        assert ids(con.query('items').where_or_empty_or_null('name', 'apple')) == [1]

    def test_ignored_value_leaves_query_unfiltered(self, con, ids):
        query = con.query('items').where_or_empty_or_null('name', '*', ignore='*')

        assert query.wheres == []
        assert ids(query) == [1, 2, 3, 4, 5]

    def test_batch_equals_sequential(self, con, ids):
        batch = con.query('items').where_or_empty_or_null({'name': '', 'tags': 'fruit'})
        seq = con.query('items').where_or_empty_or_null('name', '').where_or_empty_or_null('tags', 'fruit')

        assert ids(batch) == ids(seq) == [5]


class TestNullFallbackAgainstRows:
    """Null-coalescing comparisons."""

    def test_fallback_equals(self, con, ids):
        assert ids(con.query('items').where_with_null_fallback('score', 0, '=', 0)) == [2, 4]

    def test_fallback_greater_than(self, con, ids):
        assert ids(con.query('items').where_with_null_fallback('score', 0, '>', 6)) == [3, 5]

    def test_raw_fallback(self, con, ids):
        query = con.query('items').where_with_null_fallback('score', Raw('10'), '=', 10)

        assert ids(query) == [2, 4, 5]

    def test_or_with_previous(self, con, ids):
        query = con.query('items').where('id', 1).where_with_null_fallback('score', 0, '=', 10, boolean='or')

        assert ids(query) == [1, 5]


class TestSqlCon:
    """Connection wrapper."""

    def test_dialect_from_engine(self, con):
        assert con.db == 'sqlite'
        assert con.query('items').dialect == 'sqlite'

    def test_fetch_rows_as_dicts(self, con):
        rows = con.fetch(con.query('items').where('id', 1), ['id', 'name'])

        assert rows == [{'id': 1, 'name': 'apple'}]

    def test_fetch_with_order_and_limit(self, con):
        rows = con.fetch(con.query('items').where_not_null('score'), ['id'], order_by=[('score', 'desc')], limit=2)

        assert [r['id'] for r in rows] == [5, 3]

    def test_fetch_df(self, con):
        df = con.fetch_df(con.query('items').where_contains('name', 'apple'), ['id', 'name'])

        assert isinstance(df, pd.DataFrame)
        assert list(df.columns) == ['id', 'name']
        assert sorted(df['id'].tolist()) == [1, 3]

    def test_execute_non_query_returns_empty(self, con):
        assert con.execute('UPDATE items SET score = 1 WHERE id = :id', {'id': 2}) == []
        assert con.fetch(con.query('items').where('id', 2), ['score']) == [{'score': 1}]

    def test_from_config(self, monkeypatch):
        monkeypatch.setenv('WHEREPLUS_DB_URL', 'sqlite://')
        monkeypatch.setenv('WHEREPLUS_DIALECT', 'mysql')

        with SqlCon.from_config() as c:
            assert c.db == 'mysql'

    def test_load_config(self, monkeypatch):
        monkeypatch.setenv('WHEREPLUS_POOL_SIZE', '7')
        monkeypatch.setenv('WHEREPLUS_ECHO', 'true')
        monkeypatch.delenv('WHEREPLUS_DIALECT', raising=False)

        cfg = load_config()
        assert cfg['pool_size'] == 7
        assert cfg['echo'] is True
        assert cfg['dialect'] is None


class TestRetry:
    """Retry decorator."""

    def test_retries_then_succeeds(self, monkeypatch):
        monkeypatch.setattr(time, 'sleep', lambda s: None)
        calls = []

        @retry(tries=3, delay=0)
        def flaky():
            calls.append(1)
            if len(calls) < 3:
                raise OperationalError('SELECT 1', {}, Exception('down'))
            return 'ok'

        assert flaky() == 'ok'
        assert len(calls) == 3

    def test_gives_up(self, monkeypatch):
        monkeypatch.setattr(time, 'sleep', lambda s: None)
        calls = []

        @retry(tries=2, delay=0)
        def broken():
            calls.append(1)
            raise OperationalError('SELECT 1', {}, Exception('down'))

        with pytest.raises(OperationalError):
            broken()
        assert len(calls) == 2

    def test_other_errors_propagate(self):
        @retry(tries=3, delay=0)
        def bad():
            raise ValueError('nope')

        with pytest.raises(ValueError):
            bad()
