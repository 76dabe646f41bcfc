"""Utility functions for CIF data structures."""

from cifio.exception import CIFStructureError


def normalize_code(code: str) -> str:
    """Normalize a block/frame code (case-insensitive) to lowercase.

    Raises
    ------
    CIFStructureError
        If the code is empty.
    """
    if not isinstance(code, str) or not code:
        raise CIFStructureError(f"Block and frame codes must be non-empty strings; got {code!r}.")
    return code.lower()


def normalize_data_name(tag: str) -> str:
    """Normalize a data name (case-insensitive) to lowercase.

    A single leading underscore is removed,
    so that both '_entry.id' and 'entry.id' refer to the data name 'entry.id'.

    Raises
    ------
    CIFStructureError
        If the data name is empty.
    """
    if not isinstance(tag, str):
        raise CIFStructureError(f"Data names must be strings; got {tag!r}.")
    name = tag.removeprefix("_").lower()
    if not name:
        raise CIFStructureError(f"Data names must be non-empty; got {tag!r}.")
    return name
