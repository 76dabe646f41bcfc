"""CIF document builder."""

from typing import Literal

from cifio.exception import CIFParseError, CIFParseErrorType
from cifio.structure import CIFFile
from ._parser import CIFParser


__all__ = [
    "CIFParseError",
    "CIFParseErrorType",
    "CIFParser",
    "parse",
]


def parse(content: str, *, numeric_nulls: Literal["zero", "null"] = "zero") -> CIFFile:
    """Parse the content of a CIF file.

    Parameters
    ----------
    content
        Whole content of the CIF file.
    numeric_nulls
        How omitted (`.`) and missing (`?`) values
        in integer and float table columns are stored;
        see `CIFParser`.

    Returns
    -------
    cif
        The parsed document.

    Raises
    ------
    CIFParseError
        If the content is not a valid CIF 1.1 file.
    """
    return CIFParser(content, numeric_nulls=numeric_nulls).parse()
