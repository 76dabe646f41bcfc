"""CIF data structures.

A `CIFFile` is an ordered collection of `CIFBlock`s.
Each block (and each of its `CIFFrame`s) holds single data items (`CIFValue`s)
and tables (`CIFTable`s) of typed columns (`CIFColumn`s).
"""

from ._block import CIFBlock
from ._block_like import CIFBlockLike
from ._column import CIFColumn, CIFFloats, CIFInts, CIFStrings, ColumnLike, column, format_float
from ._file import CIFFile
from ._frame import CIFFrame
from ._table import CIFTable
from ._util import normalize_code, normalize_data_name
from ._value import CIFFloat, CIFInt, CIFString, CIFValue, ValueKind, ValueLike, value


__all__ = [
    "CIFBlock",
    "CIFBlockLike",
    "CIFColumn",
    "CIFFile",
    "CIFFloat",
    "CIFFloats",
    "CIFFrame",
    "CIFInt",
    "CIFInts",
    "CIFString",
    "CIFStrings",
    "CIFTable",
    "CIFValue",
    "ColumnLike",
    "ValueKind",
    "ValueLike",
    "column",
    "format_float",
    "normalize_code",
    "normalize_data_name",
    "value",
]
