"""CIF table (loop)."""

from __future__ import annotations

from collections.abc import Iterator, Mapping

import polars as pl

from cifio.exception import CIFStructureError
from ._column import CIFColumn, ColumnLike, column
from ._util import normalize_data_name


__all__ = [
    "CIFTable",
]


class CIFTable:
    """CIF table, i.e., a set of data names declared in one `loop_`,
    sharing the same rows of values.

    Parameters
    ----------
    columns
        Mapping of data names to columns, in column order.
        Data names are case-insensitive and may include the leading underscore.
        Each column can be any input accepted by `cifio.column`.

    Raises
    ------
    CIFStructureError
        If there are no columns, data names are duplicated,
        or columns are empty or have different lengths.

    Notes
    -----
    Within a block, every data name of the table maps to this same table object.
    """

    def __init__(self, columns: Mapping[str, ColumnLike]):
        self._columns: dict[str, int] = {}
        self._values: list[CIFColumn] = []
        for tag, col in columns.items():
            name = normalize_data_name(tag)
            if name in self._columns:
                raise CIFStructureError(f"Data name '{name}' is declared twice in the same table.")
            self._columns[name] = len(self._values)
            self._values.append(column(col))

        if not self._values:
            raise CIFStructureError("A table must have at least one column.")
        lengths = {len(col) for col in self._values}
        if len(lengths) != 1:
            raise CIFStructureError(f"All columns of a table must have the same length; got lengths {sorted(lengths)}.")
        if 0 in lengths:
            raise CIFStructureError("A table must have at least one row.")
        return

    @classmethod
    def from_df(cls, df: pl.DataFrame) -> CIFTable:
        """Create a table from a Polars DataFrame, with one column per data name."""
        return cls({name: df.get_column(name) for name in df.columns})

    @property
    def columns(self) -> dict[str, int]:
        """Mapping of data names to their zero-based column index."""
        return self._columns

    @property
    def values(self) -> list[CIFColumn]:
        """Columns of the table, in column order."""
        return self._values

    @property
    def tags(self) -> list[str]:
        """Data names of the table, in column order."""
        return sorted(self._columns, key=self._columns.__getitem__)

    @property
    def row_count(self) -> int:
        """Number of rows."""
        return len(self._values[0])

    @property
    def df(self) -> pl.DataFrame:
        """DataFrame representation of the table."""
        return pl.DataFrame([col.series.alias(tag) for tag, col in zip(self.tags, self._values)])

    def get(self, tag: str) -> CIFColumn:
        """Get the column of a data name.

        Parameters
        ----------
        tag
            Data name (case-insensitive; the leading underscore is optional).

        Raises
        ------
        KeyError
            If the data name is not part of the table.
        """
        return self._values[self._columns[normalize_data_name(tag)]]

    def __getitem__(self, tag: str) -> CIFColumn:
        return self.get(tag)

    def __contains__(self, tag: object) -> bool:
        return isinstance(tag, str) and tag.removeprefix("_").lower() in self._columns

    def __iter__(self) -> Iterator[str]:
        """Iterate over data names, in column order."""
        return iter(self.tags)

    def __len__(self) -> int:
        """Number of rows."""
        return self.row_count

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CIFTable):
            return NotImplemented
        return self._columns == other._columns and self._values == other._values

    def __repr__(self) -> str:
        return f"CIFTable(tags={self.tags!r}, rows={self.row_count})"
