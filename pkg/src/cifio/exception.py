"""Exceptions raised by cifio.

All exceptions derive from `CIFError`:

- `CIFParseError`: the input text is not a valid CIF 1.1 file.
- `CIFWriteError`: a document cannot be serialized to CIF 1.1 text.
- `CIFValueError`: a value or column cannot be represented in the CIF data model.
- `CIFStructureError`: a programmatic change violates a structural invariant
  (e.g., a duplicated data name in a block).
"""

from __future__ import annotations

from enum import Enum


__all__ = [
    "CIFError",
    "CIFParseError",
    "CIFParseErrorType",
    "CIFStructureError",
    "CIFValueError",
    "CIFWriteError",
    "CIFWriteErrorType",
]


class CIFError(Exception):
    """Base class of all cifio exceptions."""


class CIFValueError(CIFError, TypeError):
    """A value or column cannot be represented in the CIF data model."""


class CIFStructureError(CIFError, ValueError):
    """A structural invariant of a CIF document was violated."""


class CIFParseErrorType(Enum):
    """Types of errors that may occur during parsing."""
    TOKEN_BAD = 1
    TOKEN_UNEXPECTED = 2
    BLOCK_CODE_DUPLICATE = 3
    FRAME_CODE_DUPLICATE = 4
    FRAME_UNTERMINATED = 5
    DATA_NAME_DUPLICATE = 6
    TABLE_NO_TAGS = 7
    TABLE_NO_VALUES = 8
    TABLE_INCOMPLETE = 9
    VALUE_MISSING = 10
    VALUE_CONVERSION = 11


class CIFParseError(CIFError):
    """Error raised when the input is not a valid CIF file.

    Parameters
    ----------
    error_type
        Type of the error.
    line
        1-based line number in the input where the error was detected.
    **context
        Details used to generate the error message;
        the required keys depend on `error_type`.

    Attributes
    ----------
    error_type
        Type of the error.
    line
        1-based line number in the input where the error was detected.
    message
        Description of the error, without the line information.
    context
        Details of the error, as passed to the constructor.
    """

    def __init__(self, error_type: CIFParseErrorType, *, line: int, **context: object):
        self.error_type = error_type
        self.line = line
        self.context = context
        error_handler = getattr(self, f"_{error_type.name.lower()}")
        self.message: str = error_handler(**context)
        super().__init__(f"CIF parse error (line {line}): {self.message}")
        return

    @staticmethod
    def _token_bad(*, detail: str) -> str:
        return detail

    @staticmethod
    def _token_unexpected(*, token_type: str, token_value: str, expected: str) -> str:
        return (
            f"Expected {expected}, "
            f"but got a '{token_type}' token instead: '{token_value}'."
        )

    @staticmethod
    def _block_code_duplicate(*, block_code: str, seen_line: int) -> str:
        return (
            f"Data block with name '{block_code}' already exists "
            f"(first declared on line {seen_line})."
        )

    @staticmethod
    def _frame_code_duplicate(*, block_code: str, frame_code: str, seen_line: int) -> str:
        return (
            f"Save frame with name '{frame_code}' already exists in data block "
            f"'{block_code}' (first declared on line {seen_line})."
        )

    @staticmethod
    def _frame_unterminated(*, frame_code: str) -> str:
        return (
            f"End of input reached inside save frame '{frame_code}'; "
            "save frames must be closed with 'save_'."
        )

    @staticmethod
    def _data_name_duplicate(*, data_name: str, block_name: str) -> str:
        return f"Data item with name '{data_name}' already exists in block '{block_name}'."

    @staticmethod
    def _table_no_tags(*, token_type: str) -> str:
        return (
            "After 'loop_' declaration, there must be at least one "
            f"data tag, but found '{token_type}' instead."
        )

    @staticmethod
    def _table_no_values(*, token_type: str) -> str:
        return (
            "After 'loop_' declaration, there must be at least one "
            "data tag and at least one value, but found "
            f"'{token_type}' instead of a value."
        )

    @staticmethod
    def _table_incomplete(*, value_count: int, tag_count: int, table_line: int) -> str:
        return (
            f"There are {value_count} values in loop (starting on line {table_line}), "
            f"which is not a multiple of the number of columns in the loop ({tag_count})."
        )

    @staticmethod
    def _value_missing(*, data_name: str, block_name: str, token_type: str) -> str:
        return (
            f"Expected value for data tag '{data_name}' in block '{block_name}', "
            f"but got a '{token_type}' instead."
        )

    @staticmethod
    def _value_conversion(*, token_value: str, kind: str, reason: str) -> str:
        return f"Could not parse '{token_value}' as {kind}: {reason}."


class CIFWriteErrorType(Enum):
    """Types of errors that may occur during writing."""
    VALUE_UNSUPPORTED = 1
    CHARACTER_INVALID = 2
    TEXT_FIELD_UNREPRESENTABLE = 3
    FLOAT_NON_FINITE = 4
    SINK = 5


class CIFWriteError(CIFError):
    """Error raised when a document cannot be written as CIF text.

    Parameters
    ----------
    error_type
        Type of the error.
    message
        Description of the error.
    """

    def __init__(self, error_type: CIFWriteErrorType, message: str):
        self.error_type = error_type
        self.message = message
        super().__init__(f"CIF write: {message}")
        return
