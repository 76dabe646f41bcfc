"""cifio: read and write Crystallographic Information Files
([CIF](https://en.wikipedia.org/wiki/Crystallographic_Information_File)).

Currently, only the [Version 1.1](https://www.iucr.org/resources/cif/spec/version1.1) format is supported.

References
----------
- [Official CIF specification](https://www.iucr.org/resources/cif/spec)
- [CIF 1.1 syntax](https://www.iucr.org/resources/cif/spec/version1.1/cifsyntax)
"""

from .exception import (
    CIFError,
    CIFParseError,
    CIFParseErrorType,
    CIFStructureError,
    CIFValueError,
    CIFWriteError,
    CIFWriteErrorType,
)
from .reader import read
from .scanner import scan
from .structure import (
    CIFBlock,
    CIFColumn,
    CIFFile,
    CIFFloat,
    CIFFloats,
    CIFFrame,
    CIFInt,
    CIFInts,
    CIFString,
    CIFStrings,
    CIFTable,
    CIFValue,
    ValueKind,
    column,
    value,
)
from .writer import write

__all__ = [
    "CIFBlock",
    "CIFColumn",
    "CIFError",
    "CIFFile",
    "CIFFloat",
    "CIFFloats",
    "CIFFrame",
    "CIFInt",
    "CIFInts",
    "CIFParseError",
    "CIFParseErrorType",
    "CIFString",
    "CIFStrings",
    "CIFStructureError",
    "CIFTable",
    "CIFValue",
    "CIFValueError",
    "CIFWriteError",
    "CIFWriteErrorType",
    "ValueKind",
    "column",
    "read",
    "scan",
    "value",
    "write",
]
