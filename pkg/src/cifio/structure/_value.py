"""CIF scalar values.

A `CIFValue` is one of three variants:
`CIFString`, `CIFInt`, or `CIFFloat`.
Omitted (`.`) and missing (`?`) values are represented as `CIFString`s.

Each variant can be projected to any of the three Python types;
a projection that does not correspond to the variant
returns a default value (`""`, `0`, or `0.0`) instead of failing,
unless `strict=True` is passed.
"""

from __future__ import annotations

import math
from abc import ABCMeta, abstractmethod
from enum import Enum
from typing import ClassVar, TypeAlias

import numpy as np

from cifio.exception import CIFValueError


__all__ = [
    "CIFFloat",
    "CIFInt",
    "CIFString",
    "CIFValue",
    "ValueKind",
    "ValueLike",
    "value",
]


INT64_MIN, INT64_MAX = int(np.iinfo(np.int64).min), int(np.iinfo(np.int64).max)


class ValueKind(Enum):
    """Kinds of CIF values and columns."""
    STRING = 1
    INTEGER = 2
    FLOAT = 3


class CIFValue(metaclass=ABCMeta):
    """CIF scalar value base class."""

    __slots__ = ("_raw",)
    __match_args__ = ("raw",)

    kind: ClassVar[ValueKind]

    def __init__(self, raw: str | int | float):
        self._raw = raw
        return

    @property
    def raw(self) -> str | int | float:
        """The underlying Python value."""
        return self._raw

    @property
    def is_omitted(self) -> bool:
        """Whether this is the omitted (inapplicable) value `.`."""
        return False

    @property
    def is_missing(self) -> bool:
        """Whether this is the missing (unknown) value `?`."""
        return False

    @abstractmethod
    def as_str(self, *, strict: bool = False) -> str:
        """This value as a string; `""` for numeric values."""
        raise NotImplementedError

    @abstractmethod
    def as_int(self, *, strict: bool = False) -> int:
        """This value as an integer; `0` for strings."""
        raise NotImplementedError

    @abstractmethod
    def as_float(self, *, strict: bool = False) -> float:
        """This value as a float; `0.0` for strings."""
        raise NotImplementedError

    def _mismatch(self, kind: ValueKind, default: str | int | float, strict: bool):
        if strict:
            raise CIFValueError(f"{self!r} is not a value of kind {kind.name}.")
        return default

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CIFValue):
            return NotImplemented
        return type(self) is type(other) and self._raw == other._raw

    def __hash__(self) -> int:
        return hash((type(self), self._raw))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._raw!r})"


class CIFString(CIFValue):
    """CIF string value (including omitted `.` and missing `?` values)."""

    __slots__ = ()
    kind = ValueKind.STRING

    @property
    def raw(self) -> str:
        return self._raw

    @property
    def is_omitted(self) -> bool:
        return self._raw == "."

    @property
    def is_missing(self) -> bool:
        return self._raw == "?"

    def as_str(self, *, strict: bool = False) -> str:
        return self._raw

    def as_int(self, *, strict: bool = False) -> int:
        return self._mismatch(ValueKind.INTEGER, 0, strict)

    def as_float(self, *, strict: bool = False) -> float:
        return self._mismatch(ValueKind.FLOAT, 0.0, strict)


class CIFInt(CIFValue):
    """CIF integer value."""

    __slots__ = ()
    kind = ValueKind.INTEGER

    @property
    def raw(self) -> int:
        return self._raw

    def as_str(self, *, strict: bool = False) -> str:
        return self._mismatch(ValueKind.STRING, "", strict)

    def as_int(self, *, strict: bool = False) -> int:
        return self._raw

    def as_float(self, *, strict: bool = False) -> float:
        return float(self._raw)


class CIFFloat(CIFValue):
    """CIF floating-point value."""

    __slots__ = ()
    kind = ValueKind.FLOAT

    @property
    def raw(self) -> float:
        return self._raw

    def as_str(self, *, strict: bool = False) -> str:
        return self._mismatch(ValueKind.STRING, "", strict)

    def as_int(self, *, strict: bool = False) -> int:
        if not math.isfinite(self._raw):
            return self._mismatch(ValueKind.INTEGER, 0, strict)
        return int(self._raw)

    def as_float(self, *, strict: bool = False) -> float:
        return self._raw


ValueLike: TypeAlias = CIFValue | str | int | float | np.integer | np.floating
"""An input that can be converted to a `CIFValue` by `value`."""


def value(obj: ValueLike) -> CIFValue:
    """Create a CIF value from a Python value.

    This function should only be used when constructing values for writing CIF data.

    Parameters
    ----------
    obj
        A string, a 64-bit integer, or a float
        (NumPy scalars are accepted).
        `CIFValue` inputs are returned unchanged.

    Returns
    -------
    cif_value
        The corresponding `CIFString`, `CIFInt`, or `CIFFloat`.

    Raises
    ------
    CIFValueError
        If `obj` has any other type (including `bool`),
        or is an integer outside the 64-bit range.
    """
    if isinstance(obj, CIFValue):
        return obj
    if isinstance(obj, bool | np.bool_):
        raise CIFValueError("Type 'bool' cannot be represented as a CIF value.")
    if isinstance(obj, str):
        return CIFString(obj)
    if isinstance(obj, int | np.integer):
        number = int(obj)
        if not INT64_MIN <= number <= INT64_MAX:
            raise CIFValueError(f"Integer {number} cannot be represented as a 64-bit CIF integer value.")
        return CIFInt(number)
    if isinstance(obj, float | np.floating):
        return CIFFloat(float(obj))
    raise CIFValueError(f"Type '{type(obj).__name__}' cannot be represented as a CIF value.")
