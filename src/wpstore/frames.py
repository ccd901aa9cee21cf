"""
DataFrame loaders for sequences of results.

Handy for reporting over `PostRepository.all()` and similar finders. Column
values are the trimmed text the result accessors expose; absent columns
become missing values.
"""
from collections.abc import Callable, Iterable, Sequence
from typing import Any

import pandas as pd
import pyarrow as pa

from wpstore.results import Result

__all__ = [
    'to_frame',
    'pandas_numpy_data_loader',
    'pandas_pyarrow_data_loader',
]


def _columns(results: Sequence[Result]) -> list[str]:
    """Union of column names, in first-seen order."""
    seen: dict[str, None] = {}
    for result in results:
        for name in result.row:
            seen.setdefault(name)
    return list(seen)


def _records(results: Sequence[Result], columns: list[str]) -> list[dict[str, Any]]:
    return [
        {col: (result.property(col) if col in result.row else None) for col in columns}
        for result in results
        ]


def pandas_numpy_data_loader(results: Sequence[Result], columns: list[str]) -> pd.DataFrame:
    """Standard pandas DataFrame loader using NumPy.

    Always returns a DataFrame, with the given columns kept for empty input.
    """
    if not results:
        return pd.DataFrame(columns=columns)
    return pd.DataFrame.from_records(_records(results, columns), columns=columns)


def pandas_pyarrow_data_loader(results: Sequence[Result], columns: list[str]) -> pd.DataFrame:
    """PyArrow-backed pandas DataFrame loader.

    Always returns a DataFrame, with the given columns kept for empty input.
    """
    if not results:
        return pd.DataFrame(columns=columns)
    records = _records(results, columns)
    data = [pa.array([row[col] for row in records], type=pa.string()) for col in columns]
    return pa.table(data, names=columns).to_pandas(types_mapper=pd.ArrowDtype)


def to_frame(results: Iterable[Result], columns: list[str] | None = None,
             loader: Callable[..., pd.DataFrame] = pandas_numpy_data_loader) -> pd.DataFrame:
    """Load results into a DataFrame, one row per result.

    The column set defaults to every column seen on any result.
    """
    results = list(results)
    columns = list(columns) if columns is not None else _columns(results)
    df = loader(results, columns)
    df.attrs['result_type'] = type(results[0]).__name__ if results else None
    return df
