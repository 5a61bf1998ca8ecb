"""SQL connection wrapper that runs built queries."""

import pandas as pd
from contextlib import contextmanager
from typing import Dict, List, Any, Optional, Union
from sqlalchemy import create_engine, text
from sqlalchemy.engine.url import make_url
from sqlalchemy.pool import QueuePool, StaticPool
from where_plus import QueryBuilder
from where_plus.mappings import dialects
from .config import load_config
from .decorators import retry
import logging

logger = logging.getLogger(__name__)


class SqlCon:
    """SQL connection wrapper for executing QueryBuilder output."""
    def __init__(
        self, conn: str, pool_size: int = 5, pool_timeout: int = 30,
        echo: bool = False, debug: bool = False, dialect: Optional[str] = None
    ):
        self.url = make_url(conn)
        self.debug = debug
        if self.url.get_backend_name() == 'sqlite' and self.url.database in (None, '', ':memory:'):
            # In-memory SQLite lives on one shared connection
            self.engine = create_engine(
                conn, poolclass=StaticPool, connect_args={'check_same_thread': False},
                echo=echo, future=True
            )
        else:
            self.engine = create_engine(
                conn, poolclass=QueuePool, pool_size=pool_size,
                pool_timeout=pool_timeout, pool_recycle=3600, echo=echo, future=True
            )
        self.db = (dialect or self._get_dialect()).lower()

    @classmethod
    def from_config(cls, config: Optional[Dict[str, Any]] = None) -> 'SqlCon':
        """Build a connection from a DB_CONFIG-style dict (environment by default)."""
        cfg = config or load_config()
        return cls(
            cfg['conn_str'], pool_size=cfg.get('pool_size', 5), pool_timeout=cfg.get('pool_timeout', 30),
            echo=cfg.get('echo', False), debug=cfg.get('debug', False), dialect=cfg.get('dialect')
        )

    def _get_dialect(self) -> str:
        """Get database dialect from the engine."""
        dialect = self.engine.dialect.name.lower()
        dialect = 'postgresql' if dialect == 'postgres' else dialect
        return dialect if dialect in dialects else 'default'

    def _log(self, sql: str, params: Any):
        """Log SQL and params if debug enabled."""
        if self.debug:
            logger.debug('SQL: %s | Params: %s', sql, params)

    def query(self, table: str) -> QueryBuilder:
        """New query builder for ``table`` in this connection's dialect."""
        return QueryBuilder(table, self.db)

    @contextmanager
    def connect(self):
        """Context-managed connection."""
        conn = self.engine.connect()
        try:
            yield conn
        finally:
            conn.close()

    @retry()
    def execute(self, sql: str, params: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        """Execute SQL with named parameters and return results as list of dicts."""
        params = params or {}
        self._log(sql, params)
        with self.engine.begin() as conn:
            result = conn.execute(text(sql), params)
            return [dict(row) for row in result.mappings().all()] if result.returns_rows else []

    def fetch(self, query: QueryBuilder, columns: Union[str, List[str]] = '*', **kwargs) -> List[Dict[str, Any]]:
        """Run ``query.select(...)`` and return rows as dicts."""
        return self.execute(*query.select(columns, **kwargs))

    @retry()
    def fetch_df(self, query: QueryBuilder, columns: Union[str, List[str]] = '*', **kwargs) -> pd.DataFrame:
        """Run ``query.select(...)`` and return a DataFrame."""
        sql, params = query.select(columns, **kwargs)
        self._log(sql, params)
        with self.connect() as conn:
            return pd.read_sql(text(sql), conn, params=params)

    def close(self):
        """Dispose of engine resources."""
        self.engine.dispose()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()
