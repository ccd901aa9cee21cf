"""Read-only view over a single fetched row."""
from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Any

from wpstore.types import MISSING, to_text


class Row(Mapping):
    """Immutable mapping of column name to stored value.

    NULL columns are treated as absent, so ``property`` distinguishes a
    column that holds ``''`` from one the row does not carry at all.
    Constructing with no backing row gives an empty placeholder.
    """

    __slots__ = ('_values',)

    def __init__(self, values: Mapping[str, Any] | None = None) -> None:
        data = {k: v for k, v in dict(values or {}).items() if v is not None}
        object.__setattr__(self, '_values', MappingProxyType(data))

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f'{type(self).__name__} is read-only')

    def __getitem__(self, name: str) -> Any:
        return self._values[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __hash__(self) -> int:
        return hash(frozenset((k, to_text(v)) for k, v in self._values.items()))

    def __repr__(self) -> str:
        return f'Row({dict(self._values)!r})'

    def property(self, name: str) -> str:
        """Return the trimmed text of a column, or MISSING if absent.
        """
        if name not in self._values:
            return MISSING
        return to_text(self._values[name])

    def to_dict(self) -> dict[str, Any]:
        """Return the raw (unconverted) column values."""
        return dict(self._values)
