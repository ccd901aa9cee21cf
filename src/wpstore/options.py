import pathlib
import sys
from dataclasses import dataclass

from wpstore.strategy import get_available_dialects, get_strategy_class
from wpstore.strategy import is_supported_dialect

__all__ = ['DatabaseOptions']


def scriptname() -> str | None:
    """Name of the running script, used as the default application name."""
    if not sys.argv or not sys.argv[0]:
        return None
    return pathlib.Path(sys.argv[0]).stem or None


@dataclass
class DatabaseOptions:
    """Options

    supported driver names: `postgresql`, `sqlite`

    table_prefix is prepended to every logical table name (`posts` becomes
    `wp_posts` with the default prefix).

    Connection pooling options:
    - use_pool: Whether to use connection pooling (default: False)
    - pool_max_connections: Maximum connections in pool (default: 5)
    - pool_max_idle_time: Maximum seconds a connection can be idle (default: 300)
    - pool_wait_timeout: Maximum seconds to wait for a connection (default: 30)
    """
    drivername: str = 'postgresql'
    hostname: str = None
    username: str = None
    password: str = None
    database: str = None
    port: int = 0
    timeout: int = 0
    appname: str = None
    table_prefix: str = 'wp_'
    check_connection: bool = True
    # Connection pooling parameters
    use_pool: bool = False
    pool_max_connections: int = 5
    pool_max_idle_time: int = 300
    pool_wait_timeout: int = 30

    def __post_init__(self):
        if not is_supported_dialect(self.drivername):
            available = get_available_dialects()
            raise ValueError(f'drivername must be one of: {available}')
        self.appname = self.appname or scriptname() or 'python_console'
        self.table_prefix = self.table_prefix or ''
        strategy_cls = get_strategy_class(self.drivername)
        strategy_cls.validate_options(self)

    def __str__(self) -> str:
        return (f'{self.drivername}://{self.username or ""}@{self.hostname or ""}'
                f':{self.port}/{self.database}')
