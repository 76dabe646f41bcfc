"""CIF document writer."""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from typing import Literal

import polars as pl

from cifio.exception import CIFWriteError, CIFWriteErrorType
from cifio.structure import CIFBlock, CIFBlockLike, CIFFile, CIFFrame, CIFTable, CIFValue
from cifio.typing import Writer
from ._format import format_column, format_value


__all__ = [
    "CIFWriter",
]


logger = logging.getLogger(__name__)


_NAME = re.compile(r"[!-~]+")
"""Block/frame codes and data names: one or more non-blank characters."""


class CIFWriter:
    """Writer of CIF documents in CIF 1.1 syntax.

    Parameters
    ----------
    writer
        A callable that takes a string and writes it to the desired output.
        This could be a file write method or any other string-consuming function.
        For example, you can create a list and pass its `append` method
        to collect the output chunks into the list.
        The whole CIF content can then be obtained by joining the list elements,
        i.e., `''.join(output_list)`.
    min_space_columns
        Minimum number of spaces to use between columns of a table row:
        ```
        value1_1<min_space_columns>value2_1   <min_space_columns>value3_1
        value1_2<min_space_columns>long_value2<min_space_columns>value3_2
        ```
    space_items
        Minimum number of spaces to use between the data name
        and the value of single data items:
        ```
        _name1     <space_items>value1
        _long_name2<space_items>value2
        ```
    null_int
        Symbol to use for null values in integer columns.
    null_float
        Symbol to use for null values in floating-point columns.
    nan_float
        Symbol to use for NaN values in floating-point columns.

    Notes
    -----
    Output that was already passed to `writer`
    is not retracted when a `CIFWriteError` is raised.
    """

    def __init__(
        self,
        writer: Writer,
        *,
        min_space_columns: int = 2,
        space_items: int = 2,
        null_int: Literal[".", "?"] = "?",
        null_float: Literal[".", "?"] = "?",
        nan_float: Literal[".", "?"] = ".",
    ):
        for name, symbol in (("null_int", null_int), ("null_float", null_float), ("nan_float", nan_float)):
            if symbol not in (".", "?"):
                raise ValueError(f"`{name}` must be either '.' or '?', but got {symbol!r}.")
        for name, count in (("min_space_columns", min_space_columns), ("space_items", space_items)):
            if not isinstance(count, int) or count < 1:
                raise ValueError(f"`{name}` must be a positive integer, but got {count!r}.")
        self._writer = writer
        self._space_columns = " " * min_space_columns
        self._space_items = space_items
        self._null_symbols = {"null_int": null_int, "null_float": null_float, "nan_float": nan_float}
        return

    def write_file(self, cif: CIFFile) -> None:
        """Write a whole CIF document.

        The version line (if any) comes first,
        followed by each data block in order.
        """
        if not isinstance(cif, CIFFile):
            raise CIFWriteError(
                CIFWriteErrorType.VALUE_UNSUPPORTED,
                f"Expected a CIFFile, but got '{type(cif).__name__}'.",
            )
        if cif.version:
            self._emit(f"#\\#{cif.version}\n")
        for block in cif:
            self.write_block(block)
        return

    def write_block_like(self, block: CIFBlockLike) -> None:
        """Write a data block or a save frame."""
        if isinstance(block, CIFBlock):
            self.write_block(block)
        elif isinstance(block, CIFFrame):
            self.write_frame(block)
        else:
            raise CIFWriteError(
                CIFWriteErrorType.VALUE_UNSUPPORTED,
                f"Expected a CIFBlock or a CIFFrame, but got '{type(block).__name__}'.",
            )
        return

    def write_block(self, block: CIFBlock) -> None:
        """Write a data block: its heading, its save frames, then its own data items and tables."""
        self._emit(f"data_{self._checked_name('Block code', block.name)}\n")
        for frame in block.frames.values():
            self.write_frame(frame)
        self._write_body(block)
        return

    def write_frame(self, frame: CIFFrame) -> None:
        """Write a save frame, including its heading and terminator."""
        self._emit(f"save_{self._checked_name('Frame code', frame.name)}\n")
        self._write_body(frame)
        self._emit("save_\n")
        return

    def write_items(self, items: Mapping[str, CIFValue]) -> None:
        """Write single data items, with aligned values."""
        if not items:
            return
        tags = [f"_{self._checked_name('Data name', tag)}" for tag in items]
        width = max(len(tag) for tag in tags) + self._space_items
        for tag, item_value in zip(tags, items.values()):
            self._emit(f"{tag.ljust(width)}{format_value(item_value, **self._null_symbols)}\n")
        return

    def write_table(self, table: CIFTable) -> None:
        """Write a table as a `loop_` construct.

        Each data name is written on its own line (in column order),
        followed by one line per row with left-aligned columns.
        """
        tags = [f"_{self._checked_name('Data name', tag)}" for tag in table.tags]
        self._emit("loop_\n" + "".join(f"{tag}\n" for tag in tags))

        columns = pl.DataFrame([
            format_column(col, **self._null_symbols).alias(f"column_{idx}")
            for idx, col in enumerate(table.values)
        ])
        aligned: list[pl.Expr] = []
        for idx, name in enumerate(columns.columns):
            col = pl.col(name)
            if idx == len(columns.columns) - 1:
                aligned.append(col)
                continue
            is_multiline = col.str.contains("\n", literal=True)
            width = columns.select(
                pl.when(is_multiline).then(0).otherwise(col.str.len_chars()).max()
            ).item()
            aligned.append(pl.when(is_multiline).then(col).otherwise(col.str.pad_end(width)))
        rows = columns.select(pl.concat_str(aligned, separator=self._space_columns).alias("row"))
        self._emit("".join(f"{row}\n" for row in rows.get_column("row")))
        return

    # Private Methods
    # ===============

    def _write_body(self, block: CIFBlockLike) -> None:
        self.write_items(block.items)
        tables = block.unique_tables()
        logger.debug(
            "Writing %d data item(s) and %d table(s) in block '%s'.",
            len(block.items), len(tables), block.name,
        )
        for table in tables:
            self.write_table(table)
        return

    def _emit(self, text: str) -> None:
        try:
            self._writer(text)
        except OSError as e:
            raise CIFWriteError(CIFWriteErrorType.SINK, f"Failed to write output: {e}") from e
        return

    @staticmethod
    def _checked_name(kind: str, name: str) -> str:
        if not _NAME.fullmatch(name):
            raise CIFWriteError(
                CIFWriteErrorType.CHARACTER_INVALID,
                f"{kind} {name!r} must be a non-empty sequence of non-blank characters.",
            )
        return name
