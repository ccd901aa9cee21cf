"""Low-level connection utilities with no internal dependencies.

These work with anything exposing a `dialect` (Connector, SQLAlchemy
connections and engines) and import nothing else from wpstore, so they are
safe to import from anywhere in the package.
"""
import logging
from typing import Any

logger = logging.getLogger(__name__)


def get_dialect_name(obj: Any) -> str:
    """Get dialect name for a database connection or engine.
    """
    if hasattr(obj, 'dialect'):
        dialect = obj.dialect
        if isinstance(dialect, str):
            return dialect.lower()
        return str(dialect.name).lower()

    raise AttributeError(f'Cannot determine dialect for {type(obj)}')


def get_raw_connection(connection: Any) -> Any:
    """Extract the raw DBAPI connection from a SQLAlchemy connection."""
    raw_conn = connection
    if hasattr(connection, 'connection'):
        raw_conn = connection.connection
    if hasattr(raw_conn, 'driver_connection'):
        raw_conn = raw_conn.driver_connection
    return raw_conn
