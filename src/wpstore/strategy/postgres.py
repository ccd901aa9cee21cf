"""
PostgreSQL-specific strategy implementation.

Connections go through psycopg 3 (``postgresql+psycopg``). The identifier of
the last insert is read with ``lastval()``, which like MySQL's
``LAST_INSERT_ID()`` is scoped to the current session.
"""
import logging
from typing import TYPE_CHECKING, Any

from wpstore.strategy.base import DatabaseStrategy, register_strategy

if TYPE_CHECKING:
    from wpstore.options import DatabaseOptions

logger = logging.getLogger(__name__)


@register_strategy('postgresql')
class PostgresStrategy(DatabaseStrategy):
    """PostgreSQL-specific operations.
    """

    @property
    def dialect_name(self) -> str:
        """Return the dialect identifier for PostgreSQL."""
        return 'postgresql'

    def build_connection_url(self, options: 'DatabaseOptions') -> str:
        """Build the SQLAlchemy connection URL for PostgreSQL."""
        query_parts = []
        if options.timeout:
            query_parts.append(f'connect_timeout={options.timeout}')
        if options.appname:
            query_parts.append(f'application_name={options.appname}')

        url = (f'postgresql+psycopg://{options.username}:{options.password}'
               f'@{options.hostname}:{options.port}/{options.database}')

        if query_parts:
            url += '?' + '&'.join(query_parts)

        return url

    @classmethod
    def get_required_options(cls) -> list[str]:
        """Return required options for PostgreSQL connections."""
        return ['hostname', 'username', 'password', 'database', 'port']

    def configure_connection(self, conn: Any) -> None:
        """PostgreSQL needs no per-connection setup."""

    def last_insert_id_sql(self) -> str:
        return 'SELECT lastval()'
