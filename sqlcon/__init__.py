"""Execution helpers for running built queries through SQLAlchemy."""

from .conn import SqlCon
from .decorators import retry
from .config import DB_CONFIG, load_config

__all__ = ['SqlCon', 'retry', 'DB_CONFIG', 'load_config']
