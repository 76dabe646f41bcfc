"""CIF block-like data structure."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from typing import TYPE_CHECKING

from cifio.exception import CIFStructureError
from ._column import CIFColumn
from ._table import CIFTable
from ._util import normalize_code, normalize_data_name
from ._value import CIFValue, ValueLike, value

if TYPE_CHECKING:
    from cifio.typing import Writer


class CIFBlockLike:
    """CIF block-like data structure base class.

    This is the shared shape of data blocks and save frames:
    a name, single data items, and tables.

    Parameters
    ----------
    name
        Block/frame code (case-insensitive; stored in lowercase).
    items
        Single data items, as a mapping of data names to values.
        Values can be any input accepted by `cifio.value`.
    tables
        Tables of the block.

    Raises
    ------
    CIFStructureError
        If a data name is used more than once.
    """

    def __init__(
        self,
        name: str,
        *,
        items: Mapping[str, ValueLike] | None = None,
        tables: Iterable[CIFTable] | None = None,
    ) -> None:
        self._name = normalize_code(name)
        self._items: dict[str, CIFValue] = {}
        self._tables: dict[str, CIFTable] = {}
        for tag, item_value in (items or {}).items():
            self.add_item(tag, item_value)
        for table in tables or ():
            self.add_table(table)
        return

    @property
    def name(self) -> str:
        """Block/frame code."""
        return self._name

    @property
    def items(self) -> dict[str, CIFValue]:
        """Single data items, as a mapping of data names to values."""
        return self._items

    @property
    def tables(self) -> dict[str, CIFTable]:
        """Tables, as a mapping of each data name to the table it belongs to."""
        return self._tables

    @property
    def tags(self) -> list[str]:
        """All data names in the block; single items first, then tables."""
        return [*self._items, *self._tables]

    def item(self, tag: str) -> CIFValue:
        """Get the value of a single data item (case-insensitive; the leading underscore is optional)."""
        return self._items[normalize_data_name(tag)]

    def table(self, tag: str) -> CIFTable:
        """Get the table that a data name belongs to (case-insensitive; the leading underscore is optional)."""
        return self._tables[normalize_data_name(tag)]

    def has_tag(self, tag: str) -> bool:
        """Whether a data name is used by a single item or a table in the block."""
        name = normalize_data_name(tag)
        return name in self._items or name in self._tables

    def add_item(self, tag: str, item_value: ValueLike) -> CIFValue:
        """Add a single data item.

        Raises
        ------
        CIFStructureError
            If the data name is already used in the block.
        CIFValueError
            If the value cannot be represented in CIF.
        """
        name = normalize_data_name(tag)
        self._assert_unique_tag(name)
        self._items[name] = cif_value = value(item_value)
        return cif_value

    def add_table(self, table: CIFTable) -> CIFTable:
        """Add a table, binding each of its data names to it.

        Raises
        ------
        CIFStructureError
            If any of the table's data names is already used in the block.
        """
        for tag in table.tags:
            self._assert_unique_tag(tag)
        for tag in table.tags:
            self._tables[tag] = table
        return table

    def unique_tables(self) -> list[CIFTable]:
        """Distinct tables of the block, in the order of their first data name.

        Tables are considered the same if they are the same object
        or share a data name (since a data name may only appear once in a block).
        """
        unique: list[CIFTable] = []
        for table in self._tables.values():
            if any(seen is table or not seen.columns.keys().isdisjoint(table.columns) for seen in unique):
                continue
            unique.append(table)
        return unique

    def write(self, writer: Writer, **kwargs) -> None:
        """Write the block in CIF syntax.

        Parameters
        ----------
        writer
            A callable that takes a string and writes it to the desired output.
        **kwargs
            Formatting options; see `cifio.write`.
        """
        from cifio.writer import CIFWriter
        CIFWriter(writer, **kwargs).write_block_like(self)
        return

    def __str__(self) -> str:
        """CIF representation of the block."""
        chunks = []
        self.write(chunks.append)
        return "".join(chunks)

    def __getitem__(self, tag: str) -> CIFValue | CIFColumn:
        """Get the value of a single data item, or the column of a table data name."""
        name = normalize_data_name(tag)
        if name in self._items:
            return self._items[name]
        return self._tables[name].get(name)

    def __contains__(self, tag: object) -> bool:
        return isinstance(tag, str) and bool(tag.removeprefix("_")) and self.has_tag(tag)

    def __iter__(self) -> Iterator[str]:
        """Iterate over all data names in the block."""
        return iter(self.tags)

    def __len__(self) -> int:
        """Number of data names in the block."""
        return len(self._items) + len(self._tables)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CIFBlockLike):
            return NotImplemented
        return (
            type(self) is type(other)
            and self._name == other._name
            and self._items == other._items
            and self._tables == other._tables
        )

    def _assert_unique_tag(self, name: str) -> None:
        if name in self._items or name in self._tables:
            raise CIFStructureError(f"Data item with name '{name}' already exists in block '{self._name}'.")
        return
