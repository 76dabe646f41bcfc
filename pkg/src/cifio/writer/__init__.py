"""CIF document writer."""

from pathlib import Path
from typing import Literal

from cifio.exception import CIFWriteError, CIFWriteErrorType
from cifio.structure import CIFFile
from cifio.typing import Writer
from ._format import format_column, format_strings, format_value
from ._writer import CIFWriter


__all__ = [
    "CIFWriter",
    "format_column",
    "format_strings",
    "format_value",
    "write",
]


def write(
    cif: CIFFile,
    file: Path | Writer | None = None,
    *,
    encoding: str = "utf-8",
    min_space_columns: int = 2,
    space_items: int = 2,
    null_int: Literal[".", "?"] = "?",
    null_float: Literal[".", "?"] = "?",
    nan_float: Literal[".", "?"] = ".",
) -> str | None:
    """Write a CIF document in CIF 1.1 syntax.

    Parameters
    ----------
    cif
        CIF document to write.
    file
        Output destination:
        - `None`: The CIF content is returned as a string.
        - `pathlib.Path`: The CIF content is written to the file at this path
          (overwriting it, if it exists).
        - A callable that takes a string, e.g., the `write` method
          of an open text file, or the `append` method of a list.
    encoding
        Encoding used when `file` is a path.
    min_space_columns
        Minimum number of spaces between the columns of table rows.
    space_items
        Minimum number of spaces between the data name and the value of single data items.
    null_int
        Symbol to use for null values in integer columns.
    null_float
        Symbol to use for null values in floating-point columns.
    nan_float
        Symbol to use for NaN values in floating-point columns.

    Returns
    -------
    content
        The CIF content if `file` is `None`, otherwise `None`.

    Raises
    ------
    CIFWriteError
        If the document cannot be represented in CIF 1.1 syntax,
        or the output cannot be written.
    """
    options = dict(
        min_space_columns=min_space_columns,
        space_items=space_items,
        null_int=null_int,
        null_float=null_float,
        nan_float=nan_float,
    )
    if file is None:
        chunks: list[str] = []
        CIFWriter(chunks.append, **options).write_file(cif)
        return "".join(chunks)
    if isinstance(file, Path):
        try:
            with file.open("w", encoding=encoding) as f:
                CIFWriter(f.write, **options).write_file(cif)
        except OSError as e:
            raise CIFWriteError(CIFWriteErrorType.SINK, f"Failed to write to '{file}': {e}") from e
        return None
    if callable(file):
        CIFWriter(file, **options).write_file(cif)
        return None
    raise TypeError(
        "Parameter `file` expects either None, a Path, or a callable, but the type of input argument "
        f"was '{type(file)}'."
    )
