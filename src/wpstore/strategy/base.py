"""
Base strategy interface for dialect-specific statement handling.

The repositories write their statements once, in a dialect-neutral form, and
ask the strategy only for what genuinely differs between backends: how
identifiers are quoted, how the connection reports the identifier generated
by the last insert, and how a connection is prepared after it is opened.
"""
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from wpstore.options import DatabaseOptions

# Registry of dialect name -> strategy class
_STRATEGY_REGISTRY: dict[str, type['DatabaseStrategy']] = {}


def register_strategy(dialect: str):
    """Decorator to register a strategy class for a dialect.

    Usage:
        @register_strategy('postgresql')
        class PostgresStrategy(DatabaseStrategy):
            ...
    """
    def decorator(cls: type['DatabaseStrategy']) -> type['DatabaseStrategy']:
        _STRATEGY_REGISTRY[dialect] = cls
        return cls
    return decorator


class DatabaseStrategy(ABC):
    """Base class for database-specific operations.
    """

    @property
    @abstractmethod
    def dialect_name(self) -> str:
        """Return the dialect identifier."""

    @abstractmethod
    def build_connection_url(self, options: 'DatabaseOptions') -> str:
        """Build the SQLAlchemy connection URL for these options."""

    def get_engine_kwargs(self, options: 'DatabaseOptions') -> dict[str, Any]:
        """Return extra create_engine kwargs for this dialect."""
        return {}

    @classmethod
    @abstractmethod
    def get_required_options(cls) -> list[str]:
        """Return option names that must be set for this dialect."""

    @classmethod
    def validate_options(cls, options: 'DatabaseOptions') -> None:
        """Raise ValueError if a required option is missing.
        """
        missing = [name for name in cls.get_required_options()
                   if getattr(options, name, None) in {None, ''}]
        if missing:
            raise ValueError(f'Missing required options for {options.drivername}: {missing}')

    def configure_connection(self, conn: Any) -> None:
        """Configure a freshly opened DBAPI connection.

        Args:
            conn: The raw DBAPI connection (not wrapped)
        """

    @abstractmethod
    def last_insert_id_sql(self) -> str:
        """Return SQL selecting the identifier generated by the last insert
        on the current connection.
        """

    def quote_identifier(self, identifier: str) -> str:
        """Quote a table or column name.

        Both supported dialects accept ANSI double quotes, which also keep
        mixed-case WordPress column names such as ``comment_ID`` intact.
        """
        escaped = identifier.replace('"', '""')
        return f'"{escaped}"'
