"""Formatting of CIF values and table columns into CIF tokens.

All formatting goes through Polars Series:
string columns are quoted with vectorized Polars expressions,
and single data items are formatted as one-element columns.
"""

from __future__ import annotations

import math
import re
from typing import Literal

import polars as pl

from cifio.exception import CIFWriteError, CIFWriteErrorType
from cifio.scanner import NUMERIC
from cifio.structure import (
    CIFColumn,
    CIFFloat,
    CIFFloats,
    CIFInt,
    CIFInts,
    CIFString,
    CIFStrings,
    CIFValue,
    format_float,
)


__all__ = [
    "format_column",
    "format_strings",
    "format_value",
]


_INVALID_CHAR = r"[^\t\n -~]"
"""Any character that is neither printable nor a newline."""

_NUMERIC_FULL = rf"^{NUMERIC.pattern}$"

_SPECIAL_START_CHARS = r"^[_#$\[\];]"
"""Characters that cannot start an unquoted value."""

_RESERVED_PREFIXES = ("data_", "save_", "loop_", "stop_", "global_")
"""Prefixes that cannot start an unquoted value (case-insensitive)."""


def format_strings(series: pl.Series) -> pl.Series:
    """Format a string column into CIF-ready tokens (unquoted, quoted, or text fields).

    Each value is written as:
    1. Double-quoted, if it looks like a number (so that it is read back as a string).
    2. A semicolon-delimited text field, if it spans multiple lines
       or contains both single and double quotes.
    3. Single-quoted, if it only contains double quotes.
    4. Double-quoted, if it only contains single quotes,
       or if it would otherwise be ambiguous
       (empty, contains spaces or tabs, starts with a special character
       or a reserved prefix).
    5. Unquoted otherwise.

    Null values are written as missing (`?`).

    Parameters
    ----------
    series
        String Series.

    Returns
    -------
    tokens
        String Series of the same length, with one CIF token per value.

    Raises
    ------
    CIFWriteError
        If a value contains a character that is not allowed in CIF 1.1,
        or a multiline value contains a line beginning with ';',
        which cannot be represented exactly as a CIF 1.1 text field.
    """
    df = series.fill_null("?").rename("value").to_frame()
    col = pl.col("value")

    checks = df.select(
        col.str.contains(_INVALID_CHAR).any().alias("invalid"),
        col.str.contains("\n;", literal=True).any().alias("unrepresentable"),
    ).row(0, named=True)
    if checks["invalid"]:
        bad_value = df.get_column("value").filter(df.get_column("value").str.contains(_INVALID_CHAR))[0]
        char = re.search(_INVALID_CHAR, bad_value).group()
        raise CIFWriteError(
            CIFWriteErrorType.CHARACTER_INVALID,
            f"The character {char!r} is not a valid printable character in the CIF 1.1 specification.",
        )
    if checks["unrepresentable"]:
        raise CIFWriteError(
            CIFWriteErrorType.TEXT_FIELD_UNREPRESENTABLE,
            "At least one multiline string contains a line beginning with ';'. "
            "This cannot be represented exactly as a CIF 1.1 text field.",
        )

    has_double = col.str.contains('"', literal=True)
    has_single = col.str.contains("'", literal=True)
    col_lowercase = col.str.to_lowercase()
    is_ambiguous = (
        (col == "")
        | col.str.contains(r"[ \t]")
        | col.str.contains(_SPECIAL_START_CHARS)
        | pl.any_horizontal([col_lowercase.str.starts_with(prefix) for prefix in _RESERVED_PREFIXES])
    )
    tokens = (
        pl.when(col.str.contains(_NUMERIC_FULL))
        .then(_double_quoted(col))
        .when(col.str.contains("\n", literal=True) | (has_double & has_single))
        .then(_text_field(col))
        .when(has_double)
        .then(_single_quoted(col))
        .when(has_single | is_ambiguous)
        .then(_double_quoted(col))
        .otherwise(col)
    )
    return df.select(tokens.alias(series.name)).to_series()


def format_column(
    column: CIFColumn,
    *,
    null_int: Literal[".", "?"] = "?",
    null_float: Literal[".", "?"] = "?",
    nan_float: Literal[".", "?"] = ".",
) -> pl.Series:
    """Format a table column into CIF-ready tokens.

    Parameters
    ----------
    column
        Table column.
    null_int
        Symbol to use for null values in integer columns.
    null_float
        Symbol to use for null values in floating-point columns.
    nan_float
        Symbol to use for NaN values in floating-point columns.

    Returns
    -------
    tokens
        String Series with one CIF token per value.

    Raises
    ------
    CIFWriteError
        If the column is of an unsupported type,
        contains infinite floats,
        or contains strings that cannot be represented in CIF 1.1.
    """
    if isinstance(column, CIFStrings):
        return format_strings(column.series)
    if isinstance(column, CIFInts):
        return column.series.cast(pl.Utf8).fill_null(null_int)
    if isinstance(column, CIFFloats):
        series = column.series
        if series.is_infinite().any():
            raise CIFWriteError(
                CIFWriteErrorType.FLOAT_NON_FINITE,
                "Infinite floating-point values cannot be represented in CIF.",
            )
        return pl.Series(
            name=series.name,
            values=[
                null_float if number is None else nan_float if math.isnan(number) else format_float(number)
                for number in series.to_list()
            ],
            dtype=pl.Utf8,
        )
    raise CIFWriteError(
        CIFWriteErrorType.VALUE_UNSUPPORTED,
        f"CIF does not support columns of type '{type(column).__name__}'.",
    )


def format_value(
    value: CIFValue,
    *,
    null_int: Literal[".", "?"] = "?",
    null_float: Literal[".", "?"] = "?",
    nan_float: Literal[".", "?"] = ".",
) -> str:
    """Format a single data item value into a CIF-ready token.

    The value is formatted as a one-element column;
    see `format_column` for details.
    """
    if isinstance(value, CIFString):
        column = CIFStrings(pl.Series(values=[value.raw], dtype=pl.Utf8))
    elif isinstance(value, CIFInt):
        column = CIFInts(pl.Series(values=[value.raw], dtype=pl.Int64))
    elif isinstance(value, CIFFloat):
        column = CIFFloats(pl.Series(values=[value.raw], dtype=pl.Float64))
    else:
        raise CIFWriteError(
            CIFWriteErrorType.VALUE_UNSUPPORTED,
            f"CIF does not support value of type '{type(value).__name__}'.",
        )
    return format_column(column, null_int=null_int, null_float=null_float, nan_float=nan_float)[0]


def _single_quoted(s: pl.Expr) -> pl.Expr:
    return pl.concat_str([pl.lit("'"), s, pl.lit("'")])


def _double_quoted(s: pl.Expr) -> pl.Expr:
    return pl.concat_str([pl.lit('"'), s, pl.lit('"')])


def _text_field(s: pl.Expr) -> pl.Expr:
    """Wrap a string into a CIF 1.1 semicolon-delimited text field token.

    The produced token has the form `\\n;<value>\\n;`,
    i.e., the opening semicolon always starts a new line.
    """
    delim = pl.lit("\n;")
    return pl.concat_str([delim, s, delim])
