"""CIF table columns.

A `CIFColumn` holds the values of one data name in a table,
and is one of three variants, each backed by a typed Polars Series:

- `CIFStrings`: `Utf8` series
- `CIFInts`: `Int64` series
- `CIFFloats`: `Float64` series

Columns are homogeneous. Numeric columns only contain nulls
when the file was read with `numeric_nulls="null"`
(or when they are created from a Series with nulls).
"""

from __future__ import annotations

from abc import ABCMeta, abstractmethod
from collections.abc import Iterator, Sequence
from typing import ClassVar, TypeAlias

import numpy as np
import polars as pl

from cifio.exception import CIFValueError
from cifio.typing import ArrayLike
from ._value import INT64_MAX, INT64_MIN, ValueKind


__all__ = [
    "CIFColumn",
    "CIFFloats",
    "CIFInts",
    "CIFStrings",
    "ColumnLike",
    "column",
    "format_float",
]


def format_float(number: float) -> str:
    """Format a float in fixed-point notation.

    The shortest representation that uniquely identifies the value is used,
    so that parsing the output returns exactly the same float.
    Integral values keep one fractional digit (e.g., `10.0`),
    so that they are read back as floats.
    """
    return np.format_float_positional(number, unique=True, trim="0")


class CIFColumn(metaclass=ABCMeta):
    """CIF table column base class."""

    __match_args__ = ("series",)

    kind: ClassVar[ValueKind]

    def __init__(self, series: pl.Series):
        self._series = series
        return

    @property
    def series(self) -> pl.Series:
        """Polars Series holding the column values."""
        return self._series

    @property
    def null_count(self) -> int:
        """Number of null values in the column."""
        return self._series.null_count()

    @abstractmethod
    def strings(self) -> list[str | None]:
        """Column values as strings; empty unless the column can be formatted as strings."""
        raise NotImplementedError

    @abstractmethod
    def ints(self) -> list[int | None]:
        """Column values as integers; empty for string columns."""
        raise NotImplementedError

    @abstractmethod
    def floats(self) -> list[float | None]:
        """Column values as floats; empty for string columns."""
        raise NotImplementedError

    def to_list(self) -> list[str | int | float | None]:
        """Column values as a list of their underlying Python values."""
        return self._series.to_list()

    def to_numpy(self) -> np.ndarray:
        """Column values as a NumPy array."""
        return self._series.to_numpy()

    def __len__(self) -> int:
        return len(self._series)

    def __iter__(self) -> Iterator[str | int | float | None]:
        return iter(self._series)

    def __getitem__(self, index: int) -> str | int | float | None:
        return self._series[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CIFColumn):
            return NotImplemented
        return (
            type(self) is type(other)
            and len(self) == len(other)
            and self._series.equals(other._series, check_names=False, null_equal=True)
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._series.to_list()!r})"


class CIFStrings(CIFColumn):
    """CIF string column."""

    kind = ValueKind.STRING

    def strings(self) -> list[str | None]:
        return self._series.to_list()

    def ints(self) -> list[int | None]:
        return []

    def floats(self) -> list[float | None]:
        return []


class CIFInts(CIFColumn):
    """CIF integer column."""

    kind = ValueKind.INTEGER

    def strings(self) -> list[str | None]:
        return self._series.cast(pl.Utf8).to_list()

    def ints(self) -> list[int | None]:
        return self._series.to_list()

    def floats(self) -> list[float | None]:
        return self._series.cast(pl.Float64).to_list()


class CIFFloats(CIFColumn):
    """CIF floating-point column."""

    kind = ValueKind.FLOAT

    def strings(self) -> list[str | None]:
        return [None if number is None else format_float(number) for number in self._series]

    def ints(self) -> list[int | None]:
        return self._series.cast(pl.Int64, strict=False).to_list()

    def floats(self) -> list[float | None]:
        return self._series.to_list()


ColumnLike: TypeAlias = CIFColumn | pl.Series | Sequence[str] | Sequence[int] | Sequence[float] | ArrayLike
"""An input that can be converted to a `CIFColumn` by `column`."""


def column(obj: ColumnLike) -> CIFColumn:
    """Create a CIF table column.

    This function should only be used when constructing columns for writing CIF data.

    Parameters
    ----------
    obj
        One of:
        - A non-empty sequence of strings, of 64-bit integers, or of floats
          (mixed sequences are not allowed).
        - A Polars Series with a string, integer, or float dtype.
        - A one-dimensional NumPy array with a string, integer, or float dtype.
        `CIFColumn` inputs are returned unchanged.

    Returns
    -------
    cif_column
        The corresponding `CIFStrings`, `CIFInts`, or `CIFFloats`.

    Raises
    ------
    CIFValueError
        If `obj` cannot be represented as a CIF column.
    """
    if isinstance(obj, CIFColumn):
        return obj
    if isinstance(obj, pl.Series):
        return _column_from_series(obj)
    if isinstance(obj, np.ndarray):
        if obj.ndim != 1:
            raise CIFValueError(
                f"Only one-dimensional arrays can be represented as a CIF column; got {obj.ndim} dimensions."
            )
        if obj.dtype.kind not in "iuUf":
            raise CIFValueError(f"Array dtype '{obj.dtype}' cannot be represented as a CIF column.")
        return _column_from_series(pl.Series(values=obj))
    if isinstance(obj, str | bytes) or not isinstance(obj, Sequence):
        raise CIFValueError(f"Type '{type(obj).__name__}' cannot be represented as a CIF column.")

    values = list(obj)
    if not values:
        raise CIFValueError("An empty sequence cannot be represented as a CIF column.")
    if all(isinstance(v, str) for v in values):
        return CIFStrings(pl.Series(values=values, dtype=pl.Utf8))
    if all(isinstance(v, int | np.integer) and not isinstance(v, bool | np.bool_) for v in values):
        numbers = [int(v) for v in values]
        if any(not INT64_MIN <= n <= INT64_MAX for n in numbers):
            raise CIFValueError("Integers outside the 64-bit range cannot be represented in a CIF column.")
        return CIFInts(pl.Series(values=numbers, dtype=pl.Int64))
    if all(isinstance(v, float | np.floating) for v in values):
        return CIFFloats(pl.Series(values=[float(v) for v in values], dtype=pl.Float64))
    types = sorted({type(v).__name__ for v in values})
    raise CIFValueError(
        f"Sequence of types {types} cannot be represented as a CIF column; "
        "all values must be strings, integers, or floats."
    )


def _column_from_series(series: pl.Series) -> CIFColumn:
    dtype = series.dtype
    if dtype == pl.Utf8:
        return CIFStrings(series)
    if dtype.is_integer():
        if dtype == pl.UInt64 and (series.max() or 0) > INT64_MAX:
            raise CIFValueError("Integers outside the 64-bit range cannot be represented in a CIF column.")
        return CIFInts(series.cast(pl.Int64))
    if dtype.is_float():
        return CIFFloats(series.cast(pl.Float64))
    raise CIFValueError(f"Series dtype '{dtype}' cannot be represented as a CIF column.")
