"""Read CIF files."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ._util import filelike_to_str
from .parser import CIFParser
from .structure import CIFFile

if TYPE_CHECKING:
    from cifio.typing import FileLike
    from typing import Literal


__all__ = [
    "read",
]


logger = logging.getLogger(__name__)


def read(
    file: FileLike,
    *,
    encoding: str = "utf-8",
    numeric_nulls: Literal["zero", "null"] = "zero",
) -> CIFFile:
    """Read a CIF file.

    Parameters
    ----------
    file
        CIF file to read;
        either a `pathlib.Path` to the file,
        or the content of the file as `str` or `bytes`.
    encoding
        Encoding used to decode the file if it is provided as bytes or Path.
    numeric_nulls
        How omitted (`.`) and missing (`?`) values
        in integer and float table columns are stored:
        - "zero": As `0` (or `0.0`).
          This is lossy: such values are written back as numbers.
        - "null": As nulls in the column's Polars Series,
          which are written back as missing values.

    Returns
    -------
    cif
        The parsed CIF document.

    Raises
    ------
    CIFParseError
        If the content is not a valid CIF 1.1 file.
    """
    content = filelike_to_str(file, encoding=encoding)
    logger.debug("Read %d characters of CIF content.", len(content))
    return CIFParser(content, numeric_nulls=numeric_nulls).parse()
