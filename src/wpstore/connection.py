"""
Database connection handling with SQLAlchemy.

This module provides:
1. The `connect()` function for opening a Connector from options
2. The `Connector` class: a live storage handle plus table-name prefixing
3. `StorageHandle` and `Statement`: prepare once, bind and execute many times
4. Engine creation and management through a thread-safe registry

A Connector wraps exactly one SQLAlchemy connection. Repositories built on it
assume they are its only user at any given moment: the identifier returned
by `StorageHandle.last_insert_id` is scoped to that connection.
"""
import atexit
import logging
import threading
import time
from collections.abc import Callable, Iterator, Mapping
from dataclasses import fields, replace
from functools import wraps
from typing import Any, Self, TypeVar

import sqlalchemy as sa
from sqlalchemy.engine import Engine
from sqlalchemy.pool import NullPool

from wpstore.exceptions import ConnectionFailure, DbConnectionError, QueryError
from wpstore.options import DatabaseOptions
from wpstore.strategy import DatabaseStrategy, get_strategy
from wpstore.utils import get_dialect_name, get_raw_connection

__all__ = [
    'Connector',
    'StorageHandle',
    'Statement',
    'connect',
    'check_connection',
    'get_engine_for_options',
    'dispose_all_engines',
]

logger = logging.getLogger(__name__)

T = TypeVar('T')
_engine_registry: dict[str, Engine] = {}
_engine_registry_lock = threading.RLock()

CONNECT_ERRORS = DbConnectionError + (sa.exc.OperationalError, sa.exc.InterfaceError)


def check_connection(func: Callable[..., T] | None = None, *, max_retries: int = 3,
                     retry_delay: float = 1, retry_errors: type | tuple[type, ...] | None = None,
                     retry_backoff: float = 1.5,
                     sleep_func: Callable[[float], None] = time.sleep) -> Callable[..., T]:
    """Connection retry decorator with backoff.

    Only used around opening connections; statements are never retried.

    Supports both @check_connection and @check_connection() syntax.
    """
    def decorator(f: Callable[..., T]) -> Callable[..., T]:
        @wraps(f)
        def inner(*args: Any, **kwargs: Any) -> T:
            error_types = retry_errors if retry_errors is not None else CONNECT_ERRORS

            tries = 0
            delay = retry_delay
            while True:
                try:
                    return f(*args, **kwargs)
                except error_types as err:
                    tries += 1
                    if tries >= max_retries:
                        logger.error(f'Maximum retries ({max_retries}) exceeded: {err}')
                        raise
                    logger.warning(f'Connection error (attempt {tries}/{max_retries}): {err}')
                    sleep_func(delay)
                    delay *= retry_backoff

        return inner

    if func is None:
        return decorator
    return decorator(func)


def get_engine_for_options(options: DatabaseOptions,
                           engine_factory: Callable[..., Engine] = sa.create_engine,
                           **kwargs: Any) -> Engine:
    """Get or create a SQLAlchemy engine for the given options.
    """
    # every field, credentials included; str(options) leaves the password out
    key = repr(options)

    with _engine_registry_lock:
        if key in _engine_registry:
            logger.debug(f'Using existing engine for {options.drivername}')
            return _engine_registry[key]

        strategy = get_strategy(options.drivername)
        url = strategy.build_connection_url(options)

        engine_kwargs: dict[str, Any] = {'echo': False}
        engine_kwargs.update(strategy.get_engine_kwargs(options))

        if not options.use_pool:
            engine_kwargs['poolclass'] = NullPool
        else:
            engine_kwargs['pool_size'] = options.pool_max_connections
            engine_kwargs['pool_recycle'] = options.pool_max_idle_time
            engine_kwargs['pool_timeout'] = options.pool_wait_timeout
            engine_kwargs['max_overflow'] = 10
            engine_kwargs['pool_pre_ping'] = True
            engine_kwargs['pool_reset_on_return'] = 'rollback'

        engine_kwargs.update(kwargs)

        engine = engine_factory(url, **engine_kwargs)

        _engine_registry[key] = engine
        logger.debug(f'Created new engine for {options.drivername}')

        return engine


def dispose_all_engines() -> None:
    """Dispose all engines in the registry.
    """
    with _engine_registry_lock:
        for engine in list(_engine_registry.values()):
            engine.dispose()
        _engine_registry.clear()
        logger.debug('All database engines disposed')


atexit.register(dispose_all_engines)


class Statement:
    """A compiled, parameterized statement bound to one connection.

    Parameters are bound by name on every `execute` call; the SQL text and
    its compiled form are reused.
    """

    def __init__(self, sa_connection: sa.engine.Connection, sql: str) -> None:
        self.sql = sql
        self._connection = sa_connection
        self._clause = sa.text(sql)
        self._result: sa.engine.CursorResult | None = None

    def __repr__(self) -> str:
        return f'Statement({" ".join(self.sql.split())!r})'

    def execute(self, **params: Any) -> Self:
        """Bind named parameters and execute.

        Driver errors propagate as `sqlalchemy.exc.DBAPIError`.
        """
        self._result = self._connection.execute(self._clause, params)
        return self

    @property
    def rowcount(self) -> int:
        return self._result.rowcount if self._result is not None else -1

    def fetchone(self) -> Mapping[str, Any] | None:
        """Fetch the next row as a column-name mapping, or None when exhausted."""
        if self._result is None or not self._result.returns_rows:
            return None
        row = self._result.fetchone()
        return row._mapping if row is not None else None

    def __iter__(self) -> Iterator[Mapping[str, Any]]:
        while (row := self.fetchone()) is not None:
            yield row


class StorageHandle:
    """The live connection a Connector hands to repositories.
    """

    def __init__(self, sa_connection: sa.engine.Connection,
                 strategy: DatabaseStrategy) -> None:
        self.sa_connection = sa_connection
        self.strategy = strategy
        self.calls = 0

    @property
    def dialect(self) -> str:
        return self.strategy.dialect_name

    def quote(self, identifier: str) -> str:
        """Quote a column or table name for this dialect."""
        return self.strategy.quote_identifier(identifier)

    def prepare(self, sql: str) -> Statement:
        """Compile a parameterized statement with `:name` placeholders.
        """
        statement = Statement(self.sa_connection, sql)
        self.calls += 1
        logger.debug(f'Prepared statement #{self.calls}: {statement!r}')
        return statement

    def last_insert_id(self) -> int:
        """Identifier generated by the most recent insert on this connection.
        """
        value = self.sa_connection.execute(sa.text(self.strategy.last_insert_id_sql())).scalar()
        return int(value)

    def exec(self, sql: str) -> int:
        """Execute a raw statement with no parameters and commit.

        Returns the affected row count reported by the driver. A driver
        error rolls the transaction back and is raised as `QueryError`.
        """
        try:
            result = self.sa_connection.execute(sa.text(sql))
            self.commit()
        except sa.exc.DBAPIError as err:
            logger.error(f'Statement failed: {err.orig!r}')
            self.rollback()
            raise QueryError(str(err.orig)) from err
        return result.rowcount

    def commit(self) -> None:
        self.sa_connection.commit()

    def rollback(self) -> None:
        self.sa_connection.rollback()

    def close(self) -> None:
        if not self.sa_connection.closed:
            self.sa_connection.close()
            logger.debug(f'Connection closed after {self.calls} prepared statements')


class Connector:
    """A storage handle plus the installation's table-name prefix.

    Supports the context manager protocol; leaving the block closes the
    underlying connection.
    """

    def __init__(self, sa_connection: sa.engine.Connection, table_prefix: str = 'wp_',
                 options: DatabaseOptions | None = None) -> None:
        self.options = options
        self.table_prefix = table_prefix or ''
        strategy = get_strategy(get_dialect_name(sa_connection))
        self._handle = StorageHandle(sa_connection, strategy)

    def __enter__(self) -> Self:
        return self

    def __exit__(self, exc_type: type | None, exc_val: Exception | None,
                 exc_tb: Any | None) -> None:
        self.close()

    def __repr__(self) -> str:
        return f'Connector({self.dialect!r}, table_prefix={self.table_prefix!r})'

    @property
    def dialect(self) -> str:
        return self._handle.dialect

    def table_name(self, name: str) -> str:
        """Return the physical, quoted table name for a logical table name.
        """
        return self._handle.quote(f'{self.table_prefix}{name}')

    def handle(self) -> StorageHandle:
        return self._handle

    def close(self) -> None:
        self._handle.close()


def configure_connection(sa_connection: sa.engine.Connection) -> None:
    """Apply dialect-specific settings to a newly opened connection.
    """
    strategy = get_strategy(get_dialect_name(sa_connection))
    strategy.configure_connection(get_raw_connection(sa_connection))


@check_connection
def _open(engine: Engine) -> sa.engine.Connection:
    return engine.connect()


def connect(options: DatabaseOptions | dict[str, Any] | None = None, **kw: Any) -> Connector:
    """Open a Connector.

    Args:
        options: Can be:
                - DatabaseOptions object
                - Dictionary of options
                - None, with options given as keyword arguments
        **kw: Keyword arguments overriding the given options

    Returns
        Connector over a single new connection

    Raises
        ConnectionFailure: the database could not be reached
    """
    names = {f.name for f in fields(DatabaseOptions)}
    given = kw if isinstance(options, DatabaseOptions) else dict(options or {}) | kw
    unknown = set(given) - names
    if unknown:
        raise ValueError(f'Unknown database options: {sorted(unknown)}')
    if isinstance(options, DatabaseOptions):
        options = replace(options, **kw) if kw else options
    else:
        options = DatabaseOptions(**given)

    engine = get_engine_for_options(options)
    try:
        if options.check_connection:
            sa_connection = _open(engine)
        else:
            sa_connection = engine.connect()
    except CONNECT_ERRORS as err:
        raise ConnectionFailure(f'Could not connect to {options}: {err}') from err
    configure_connection(sa_connection)

    logger.debug(f'Connected to {options.drivername} with table prefix {options.table_prefix!r}')
    return Connector(sa_connection, options.table_prefix, options)
