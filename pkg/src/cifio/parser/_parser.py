"""CIF document builder.

The parser consumes the token stream of `cifio.scanner.CIFScanner`
and builds a `cifio.structure.CIFFile` by recursive descent
over the following grammar (comments are skipped):

```
file       := VERSION? block* EOF
block      := DATA_BLOCK_START (save_frame | table | item)*
save_frame := SAVE_FRAME_START (table | item)* SAVE_FRAME_END
table      := LOOP DATA_TAG+ value+
item       := DATA_TAG value
value      := OMITTED | MISSING | INTEGER | FLOAT | STRING
```

Notes
-----
- Errors are not recoverable: the first error is raised as a `CIFParseError`,
  and no partial document is returned.
- Each table column is assigned the most restrictive type
  that describes all of its values (see `CIFParser._build_column`).
"""

import logging
import math
from typing import Literal

import polars as pl

from cifio.exception import CIFParseError, CIFParseErrorType
from cifio.scanner import CIFScanner, Token, TokenItem, VALUE_TOKENS
from cifio.structure import (
    CIFBlock,
    CIFBlockLike,
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
)
from cifio.structure._value import INT64_MAX, INT64_MIN


__all__ = [
    "CIFParser",
]


logger = logging.getLogger(__name__)


_NULL_TOKENS = frozenset({Token.OMITTED, Token.MISSING})
"""Token types of the omitted (`.`) and missing (`?`) values."""


class CIFParser:
    """CIF document builder.

    Parameters
    ----------
    content
        Whole content of the CIF file.
    numeric_nulls
        How omitted (`.`) and missing (`?`) values in
        integer and float table columns are stored:
        - "zero": As `0` (or `0.0`).
        - "null": As nulls in the column's Polars Series.
        String columns always keep `.` and `?` verbatim.
    """

    def __init__(self, content: str, *, numeric_nulls: Literal["zero", "null"] = "zero"):
        if numeric_nulls not in ("zero", "null"):
            raise ValueError(f"`numeric_nulls` must be either 'zero' or 'null', but got {numeric_nulls!r}.")
        self._tokens: CIFScanner = CIFScanner(content)
        self._numeric_nulls: Literal["zero", "null"] = numeric_nulls

        self._seen_block_codes: dict[str, int] = {}
        """Block codes seen so far, mapped to the line where they were declared."""

        self._output: CIFFile | None = None
        self._error: CIFParseError | None = None
        return

    def parse(self) -> CIFFile:
        """Parse the content into a CIF document.

        The content is only parsed once; subsequent calls return the same document,
        or raise the same error again.

        Returns
        -------
        cif
            The parsed document.

        Raises
        ------
        CIFParseError
            If the content is not a valid CIF 1.1 file.
        """
        if self._error is not None:
            raise self._error
        if self._output is None:
            try:
                self._output = self._parse_file()
            except CIFParseError as e:
                self._error = e
                raise
        return self._output

    # Private Methods
    # ===============

    def _parse_file(self) -> CIFFile:
        token = self._next()
        cif = CIFFile(version=token.value if token.kind is Token.VERSION else None)
        if token.kind is Token.VERSION:
            token = self._next()
        while token.kind is not Token.EOF:
            if token.kind is not Token.DATA_BLOCK_START:
                raise self._unexpected(token, "comments, whitespace or a data block heading")
            token = self._parse_block(cif, token)
        logger.debug("Parsed %d data block(s).", len(cif))
        return cif

    def _parse_block(self, cif: CIFFile, heading: TokenItem) -> TokenItem:
        """Parse a data block, and return the first token after it."""
        name = heading.value.lower()
        if name in self._seen_block_codes:
            raise CIFParseError(
                CIFParseErrorType.BLOCK_CODE_DUPLICATE,
                line=heading.line,
                block_code=name,
                seen_line=self._seen_block_codes[name],
            )
        self._seen_block_codes[name] = heading.line
        block = cif.add_block(CIFBlock(name))
        seen_frame_codes: dict[str, int] = {}

        token = self._next()
        while token.kind not in (Token.EOF, Token.DATA_BLOCK_START):
            if token.kind is Token.SAVE_FRAME_START:
                self._parse_frame(block, token, seen_frame_codes)
                token = self._next()
            elif token.kind is Token.LOOP:
                token = self._parse_table(block, token)
            elif token.kind is Token.DATA_TAG:
                self._parse_item(block, token)
                token = self._next()
            else:
                raise self._unexpected(token, "a data item, a table, a save frame or a data block heading")
        logger.debug(
            "Parsed data block '%s' with %d data name(s) and %d save frame(s).",
            name, len(block), len(block.frames),
        )
        return token

    def _parse_frame(self, block: CIFBlock, heading: TokenItem, seen_frame_codes: dict[str, int]) -> None:
        """Parse a save frame, up to and including its terminator."""
        name = heading.value.lower()
        if name in seen_frame_codes:
            raise CIFParseError(
                CIFParseErrorType.FRAME_CODE_DUPLICATE,
                line=heading.line,
                block_code=block.name,
                frame_code=name,
                seen_line=seen_frame_codes[name],
            )
        seen_frame_codes[name] = heading.line
        frame = block.add_frame(CIFFrame(name))

        token = self._next()
        while token.kind is not Token.SAVE_FRAME_END:
            if token.kind is Token.LOOP:
                token = self._parse_table(frame, token)
            elif token.kind is Token.DATA_TAG:
                self._parse_item(frame, token)
                token = self._next()
            elif token.kind is Token.EOF:
                raise CIFParseError(CIFParseErrorType.FRAME_UNTERMINATED, line=token.line, frame_code=name)
            else:
                raise self._unexpected(token, "a data item or the end of the save frame ('save_')")
        logger.debug("Parsed save frame '%s' in data block '%s'.", name, block.name)
        return

    def _parse_item(self, block: CIFBlockLike, tag: TokenItem) -> None:
        """Parse a single data item."""
        name = tag.value.lower()
        self._assert_unique_tag(block, name, tag.line)
        token = self._next()
        if token.kind not in VALUE_TOKENS:
            raise CIFParseError(
                CIFParseErrorType.VALUE_MISSING,
                line=token.line,
                data_name=name,
                block_name=block.name,
                token_type=token.kind.name,
            )
        block.add_item(f"_{name}", self._build_value(token))
        return

    def _parse_table(self, block: CIFBlockLike, loop: TokenItem) -> TokenItem:
        """Parse a table, and return the first token after it."""
        token = self._next()
        if token.kind is not Token.DATA_TAG:
            raise CIFParseError(CIFParseErrorType.TABLE_NO_TAGS, line=token.line, token_type=token.kind.name)

        tags: list[str] = []
        while token.kind is Token.DATA_TAG:
            name = token.value.lower()
            self._assert_unique_tag(block, name, token.line)
            if name in tags:
                raise CIFParseError(
                    CIFParseErrorType.DATA_NAME_DUPLICATE,
                    line=token.line,
                    data_name=name,
                    block_name=block.name,
                )
            tags.append(name)
            token = self._next()

        if token.kind not in VALUE_TOKENS:
            raise CIFParseError(CIFParseErrorType.TABLE_NO_VALUES, line=token.line, token_type=token.kind.name)

        columns: list[list[TokenItem]] = [[] for _ in tags]
        count = 0
        last_line = token.line
        while token.kind in VALUE_TOKENS:
            columns[count % len(tags)].append(token)
            count += 1
            last_line = token.line
            token = self._next()

        if count % len(tags) != 0:
            raise CIFParseError(
                CIFParseErrorType.TABLE_INCOMPLETE,
                line=last_line,
                value_count=count,
                tag_count=len(tags),
                table_line=loop.line,
            )
        table = CIFTable({f"_{tag}": self._build_column(column) for tag, column in zip(tags, columns)})
        block.add_table(table)
        logger.debug(
            "Parsed table with %d column(s) and %d row(s) in block '%s'.",
            len(tags), table.row_count, block.name,
        )
        return token

    # Value Builders
    # --------------

    def _build_value(self, token: TokenItem) -> CIFValue:
        """Convert a single value token to a `CIFValue`."""
        if token.kind is Token.INTEGER:
            return CIFInt(self._to_int(token))
        if token.kind is Token.FLOAT:
            return CIFFloat(self._to_float(token))
        return CIFString(token.value)

    def _build_column(self, tokens: list[TokenItem]) -> CIFColumn:
        """Convert the value tokens of a table column to a `CIFColumn`.

        The column is:
        - integer, if all non-null values are integers;
        - float, if all non-null values are integers or floats,
          and at least one of them is a float;
        - string otherwise, including when all values are null.
        """
        kinds = {token.kind for token in tokens} - _NULL_TOKENS
        if not kinds or not kinds <= {Token.INTEGER, Token.FLOAT}:
            return CIFStrings(pl.Series(values=[token.value for token in tokens], dtype=pl.Utf8))

        if kinds == {Token.INTEGER}:
            converter, default, dtype, column_class = self._to_int, 0, pl.Int64, CIFInts
        else:
            converter, default, dtype, column_class = self._to_float, 0.0, pl.Float64, CIFFloats

        null_count = sum(token.kind in _NULL_TOKENS for token in tokens)
        if null_count and self._numeric_nulls == "zero":
            logger.debug("Stored %d omitted/missing value(s) in a %s column as %r.", null_count, dtype, default)
            null = default
        else:
            null = None
        values = [null if token.kind in _NULL_TOKENS else converter(token) for token in tokens]
        return column_class(pl.Series(values=values, dtype=dtype))

    @staticmethod
    def _to_int(token: TokenItem) -> int:
        number = int(token.value)
        if not INT64_MIN <= number <= INT64_MAX:
            raise CIFParseError(
                CIFParseErrorType.VALUE_CONVERSION,
                line=token.line,
                token_value=token.value,
                kind="integer",
                reason="value out of range",
            )
        return number

    @staticmethod
    def _to_float(token: TokenItem) -> float:
        number = float(token.value)
        if not math.isfinite(number):
            raise CIFParseError(
                CIFParseErrorType.VALUE_CONVERSION,
                line=token.line,
                token_value=token.value,
                kind="float",
                reason="value out of range",
            )
        return number

    # Private Helper Methods
    # ======================

    def _next(self) -> TokenItem:
        """Get the next non-comment token, raising scanner errors."""
        for token in self._tokens:
            if token.kind is Token.COMMENT:
                continue
            if token.kind is Token.ERROR:
                raise CIFParseError(CIFParseErrorType.TOKEN_BAD, line=token.line, detail=token.value)
            return token
        raise RuntimeError("BUG in parser: token requested after end of input.")

    @staticmethod
    def _assert_unique_tag(block: CIFBlockLike, name: str, line: int) -> None:
        if block.has_tag(f"_{name}"):
            raise CIFParseError(
                CIFParseErrorType.DATA_NAME_DUPLICATE,
                line=line,
                data_name=name,
                block_name=block.name,
            )
        return

    @staticmethod
    def _unexpected(token: TokenItem, expected: str) -> CIFParseError:
        return CIFParseError(
            CIFParseErrorType.TOKEN_UNEXPECTED,
            line=token.line,
            token_type=token.kind.name,
            token_value=token.value,
            expected=expected,
        )
