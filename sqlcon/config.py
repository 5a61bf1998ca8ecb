"""Connection settings read from the environment."""

import os
from typing import Any, Dict

_truthy = ('1', 'true', 'yes')


def load_config() -> Dict[str, Any]:
    """Read WHEREPLUS_* environment variables."""
    env = os.environ
    return {
        'conn_str': env.get('WHEREPLUS_DB_URL', 'sqlite://'),
        'dialect': env.get('WHEREPLUS_DIALECT') or None,
        'pool_size': int(env.get('WHEREPLUS_POOL_SIZE', '5')),
        'pool_timeout': int(env.get('WHEREPLUS_POOL_TIMEOUT', '30')),
        'echo': env.get('WHEREPLUS_ECHO', '').lower() in _truthy,
        'debug': env.get('WHEREPLUS_DEBUG', '').lower() in _truthy,
    }


DB_CONFIG = load_config()
