"""
Base repository: one entity kind, many lazily-compiled statements.

A repository owns a mapping from query-shape name to compiled statement. A
shape is compiled the first time it is used and reused for the rest of the
repository's life with fresh bindings. Rows are never cached.
"""
import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Mapping
from typing import TYPE_CHECKING, Any, Generic, TypeVar

import sqlalchemy as sa

from wpstore.results import Result

if TYPE_CHECKING:
    from wpstore.connection import Connector, Statement, StorageHandle

__all__ = ['Repository']

logger = logging.getLogger(__name__)

R = TypeVar('R', bound=Result)


class Repository(ABC, Generic[R]):
    """Finder, save and delete operations for one table.

    Subclasses set `result_class`, `table`, `primary_key` and `date_column`
    and implement `get`. Writable repositories build `save` and `delete` on
    `_insert` and `_delete`.
    """

    result_class: type[R]
    table: str
    primary_key: str
    date_column: str | None = None

    def __init__(self, connector: 'Connector') -> None:
        self._connector = connector
        self._statements: dict[str, 'Statement'] = {}

    def __repr__(self) -> str:
        return f'{type(self).__name__}({self._connector!r})'

    @property
    def connector(self) -> 'Connector':
        return self._connector

    def handle(self) -> 'StorageHandle':
        return self._connector.handle()

    def q(self, column: str) -> str:
        """Quote a column name."""
        return self.handle().quote(column)

    def _statement(self, shape: str, build_sql: Callable[['Connector'], str]) -> 'Statement':
        """Return the compiled statement for a query shape.

        `build_sql` runs, and the connection prepares its result, only the
        first time a shape is requested on this repository.
        """
        statement = self._statements.get(shape)
        if statement is None:
            sql = build_sql(self._connector)
            statement = self.handle().prepare(sql)
            self._statements[shape] = statement
            logger.debug(f'Compiled {type(self).__name__}.{shape}')
        return statement

    def _result(self, row: Mapping[str, Any]) -> R:
        return self.result_class(self._connector, row)

    def _fetch_one(self, statement: 'Statement', **params: Any) -> R | None:
        row = statement.execute(**params).fetchone()
        return self._result(row) if row is not None else None

    def _fetch_all(self, statement: 'Statement', **params: Any) -> list[R]:
        return [self._result(row) for row in statement.execute(**params)]

    def _by_id_sql(self, cn: 'Connector') -> str:
        return f"""
SELECT
    t.*
FROM
    {cn.table_name(self.table)} AS t
WHERE
    t.{self.q(self.primary_key)} = :id
LIMIT
    1"""

    def _delete_sql(self, cn: 'Connector') -> str:
        return f"""
DELETE FROM
    {cn.table_name(self.table)}
WHERE
    {self.q(self.primary_key)} = :id"""

    def _insert_sql(self, cn: 'Connector', columns: Iterable[tuple[str, str]]) -> str:
        """Build an INSERT naming every (column, parameter) pair explicitly."""
        columns = list(columns)
        names = ',\n    '.join(self.q(column) for column, _ in columns)
        params = ',\n    '.join(f':{param}' for _, param in columns)
        return f"""
INSERT INTO
    {cn.table_name(self.table)}
    ({names})
VALUES
    ({params})"""

    def find_by_id(self, id: int) -> R | None:
        """Return the row with the given primary key, or None."""
        statement = self._statement('by_id', self._by_id_sql)
        return self._fetch_one(statement, id=int(id))

    def _insert(self, shape: str, columns: list[tuple[str, str]],
                params: dict[str, Any]) -> R | None:
        """Run an insert and return the stored row, or None on failure.
        """
        statement = self._statement(shape, lambda cn: self._insert_sql(cn, columns))
        handle = self.handle()
        try:
            statement.execute(**params)
            new_id = handle.last_insert_id()
            handle.commit()
        except sa.exc.DBAPIError as err:
            logger.error(f'Insert into {self.table} failed: {err.orig!r}')
            handle.rollback()
            return None
        logger.debug(f'Inserted {self.table} row {new_id}')
        return self.find_by_id(new_id)

    def _delete(self, id: int) -> bool:
        statement = self._statement('delete', self._delete_sql)
        handle = self.handle()
        try:
            statement.execute(id=int(id))
            handle.commit()
        except sa.exc.DBAPIError as err:
            logger.error(f'Delete from {self.table} failed: {err.orig!r}')
            handle.rollback()
            return False
        logger.debug(f'Delete from {self.table} for id {id} affected {statement.rowcount} row(s)')
        return True

    @abstractmethod
    def get(self, id: int) -> R | None:
        """Return a single result by unique identifier, or None."""
