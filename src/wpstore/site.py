"""
Site: one connector and one repository of each kind.

Repositories are created on first access and live as long as the Site, so
their compiled statements are reused across calls. A Site is meant for one
unit of work (a request, a script run); share it across threads only with
external locking.
"""
import logging
from functools import cached_property
from typing import Any, Self

from wpstore.connection import Connector, connect
from wpstore.options import DatabaseOptions
from wpstore.repositories import CommentRepository, PostRepository
from wpstore.repositories import TaxonomyRepository

__all__ = ['Site', 'open_site']

logger = logging.getLogger(__name__)


class Site:
    """Entry point bundling the repositories over a shared connector.
    """

    def __init__(self, connector: Connector) -> None:
        self.connector = connector

    def __enter__(self) -> Self:
        return self

    def __exit__(self, exc_type: type | None, exc_val: Exception | None,
                 exc_tb: Any | None) -> None:
        self.close()

    @cached_property
    def posts(self) -> PostRepository:
        return PostRepository(self.connector)

    @cached_property
    def comments(self) -> CommentRepository:
        return CommentRepository(self.connector)

    @cached_property
    def terms(self) -> TaxonomyRepository:
        return TaxonomyRepository(self.connector)

    def close(self) -> None:
        self.connector.close()
        logger.debug('Site closed')


def open_site(options: DatabaseOptions | dict[str, Any] | None = None, **kw: Any) -> Site:
    """Connect and return a Site; arguments are those of `connect`."""
    return Site(connect(options, **kw))
