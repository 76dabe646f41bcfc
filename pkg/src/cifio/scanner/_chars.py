"""CIF 1.1 character classes.

References
----------
- [CIF 1.1 syntax, paragraphs 34-36](https://www.iucr.org/resources/cif/spec/version1.1/cifsyntax)
"""

import re


__all__ = [
    "ORDINARY_CHARS",
    "NON_BLANK_CHARS",
    "PRINTABLE_CHARS",
    "WHITESPACE_CHARS",
    "NUMERIC",
    "NON_BLANK_RUN",
    "is_ordinary",
    "is_non_blank",
    "is_printable",
    "is_whitespace",
]


ORDINARY_CHARS = frozenset(
    "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789"
    "!%&()*+,-./:<=>?@\\^`{|}~"
)
"""Characters that may start an unquoted value."""

NON_BLANK_CHARS = ORDINARY_CHARS | frozenset("\"#$'_;[]")
"""Characters allowed in tags, block/frame codes and unquoted values."""

PRINTABLE_CHARS = NON_BLANK_CHARS | frozenset(" \t")
"""Characters allowed in quoted strings, text fields and comments."""

WHITESPACE_CHARS = frozenset(" \t\n")
"""Token separators (line endings are normalized to `\\n` before scanning)."""


NUMERIC = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
"""Numeric grammar of CIF values (integers and floats, with optional exponent)."""

NON_BLANK_RUN = re.compile(
    "[" + re.escape("".join(sorted(NON_BLANK_CHARS))) + "]*"
)
"""Zero or more non-blank characters."""


def is_ordinary(char: str) -> bool:
    return char in ORDINARY_CHARS


def is_non_blank(char: str) -> bool:
    return char in NON_BLANK_CHARS


def is_printable(char: str) -> bool:
    return char in PRINTABLE_CHARS


def is_whitespace(char: str) -> bool:
    return char in WHITESPACE_CHARS
