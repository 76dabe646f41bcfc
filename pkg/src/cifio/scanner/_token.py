"""CIF file token types.

This module defines:

- `Token`: An enumeration of different types of tokens
  that can be found in a CIF file.
- `TokenItem`: A single token emitted by the scanner.
"""

from enum import Enum
from typing import NamedTuple


__all__ = [
    "Token",
    "TokenItem",
    "VALUE_TOKENS",
]


class Token(Enum):
    """Types of tokens in a CIF file."""

    VERSION = 1  # '#\#CIF_1.1' on the very first line; value is 'CIF_1.1'
    COMMENT = 2  # value is the text after '#'
    DATA_BLOCK_START = 3  # value is the block code (without 'data_')
    SAVE_FRAME_START = 4  # value is the frame code (without 'save_')
    SAVE_FRAME_END = 5
    LOOP = 6
    DATA_TAG = 7  # value is the data name (without the leading '_')
    OMITTED = 8  # '.'
    MISSING = 9  # '?'
    INTEGER = 10
    FLOAT = 11
    STRING = 12  # unquoted, quoted or text field; value is without delimiters
    EOF = 13
    ERROR = 14  # value is the error message


VALUE_TOKENS = frozenset(
    {Token.OMITTED, Token.MISSING, Token.INTEGER, Token.FLOAT, Token.STRING}
)
"""Token types that represent a data value."""


class TokenItem(NamedTuple):
    """A token emitted by the scanner.

    Attributes
    ----------
    kind
        Type of the token.
    value
        Text payload of the token.
    line
        1-based line number in the input where the token starts
        (for errors, the line where the error was detected).
    """
    kind: Token
    value: str
    line: int
