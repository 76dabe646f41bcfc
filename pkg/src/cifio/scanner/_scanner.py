"""CIF file scanner.

The scanner turns the content of a CIF file into a stream of `TokenItem`s.
It is a pushdown automaton: each state handler consumes some input,
optionally emits a single token, and returns the next `Continuation` to run.
Handlers that scan a sub-construct (whitespace, a tag, a value)
return control to their caller by popping the continuation stack.

Notes
-----
State diagram of the block-level part of the scanner
(helper states `WHITESPACE`, `COMMENT` and `SPACE_OR_EOF` omitted):

```{mermaid}

stateDiagram-v2

    [*] --> FILE_START
    FILE_START --> FILE : VERSION / -
    FILE --> BLOCK : DATA_BLOCK_START
    BLOCK --> BLOCK : DATA_BLOCK_START
    BLOCK --> FRAME : SAVE_FRAME_START
    BLOCK --> VALUE : DATA_TAG (push BLOCK)
    BLOCK --> LOOP_FIRST_TAG : LOOP (push BLOCK)
    FRAME --> BLOCK : SAVE_FRAME_END
    FRAME --> VALUE : DATA_TAG (push FRAME)
    FRAME --> LOOP_FIRST_TAG : LOOP (push FRAME)
    LOOP_FIRST_TAG --> LOOP_TAGS : DATA_TAG
    LOOP_TAGS --> LOOP_TAGS : DATA_TAG
    LOOP_TAGS --> LOOP_VALUES
    LOOP_VALUES --> VALUE : (push LOOP_VALUES)
    LOOP_VALUES --> BLOCK : pop
    LOOP_VALUES --> FRAME : pop
    VALUE --> NUMBER
    VALUE --> QUOTED
    VALUE --> TEXT_FIELD
    VALUE --> UNQUOTED
    NUMBER --> UNQUOTED : fallback
```
"""

import re
from collections.abc import Callable, Iterator

from cifio._util import normalize_newlines
from ._chars import NON_BLANK_RUN, NUMERIC, is_non_blank, is_ordinary, is_printable, is_whitespace
from ._state import Continuation, State
from ._token import Token, TokenItem


__all__ = [
    "CIFScanner",
]


_WHITESPACE_RUN = re.compile(r"[ \t\n]*")

_VERSION_PREFIX = "#\\#"

_RESERVED_KEYWORDS = ("global_", "stop_")
"""STAR reserved words that are not supported anywhere in a CIF file."""

_RESERVED_VALUE_PREFIXES = ("data_", "save_", "global_", "stop_")
"""Prefixes that cannot start an unquoted value."""

_RESERVED_VALUES = ("loop_", "stop_", "global_")
"""Words that cannot be used as unquoted values."""

_STRUCTURAL_KEYWORDS = ("data_", "save_", "loop_")
"""Keywords that end the value list of a table."""


class CIFScanner(Iterator[TokenItem]):
    """Scanner (tokenizer) of CIF files.

    Parameters
    ----------
    content
        Whole content of the CIF file.

    Notes
    -----
    - The scanner is a lazy, non-restartable iterator.
      It stops after emitting either a `Token.EOF` or a `Token.ERROR` token.
    - Errors are not recoverable: the first unexpected character
      produces a `Token.ERROR` token carrying the error message
      and the line number, and no further tokens are produced.
    """

    def __init__(self, content: str):
        self._handlers: dict[State, Callable[[str | None], Continuation | None]] = {
            State.FILE_START: self._lex_file_start,
            State.FILE: self._lex_file,
            State.BLOCK: self._lex_block,
            State.FRAME: self._lex_frame,
            State.LOOP_FIRST_TAG: self._lex_loop_first_tag,
            State.LOOP_TAGS: self._lex_loop_tags,
            State.LOOP_VALUES: self._lex_loop_values,
            State.VALUE: self._lex_value,
            State.NUMBER: self._lex_number,
            State.UNQUOTED: self._lex_unquoted,
            State.QUOTED: self._lex_quoted,
            State.TEXT_FIELD: self._lex_text_field,
            State.WHITESPACE: self._lex_whitespace,
            State.COMMENT: self._lex_comment,
            State.SPACE_OR_EOF: self._lex_space_or_eof,
        }
        """Mapping between scanner state and its handler method."""

        self._input: str = normalize_newlines(content)
        self._start: int = 0
        self._start_line: int = 1
        self._pos: int = 0
        self._line: int = 1

        self._state: Continuation | None = Continuation(State.FILE_START)
        self._stack: list[Continuation] = []
        self._emitted: TokenItem | None = None
        return

    def __iter__(self) -> "CIFScanner":
        return self

    def __next__(self) -> TokenItem:
        while self._emitted is None and self._state is not None:
            handler = self._handlers[self._state.state]
            self._state = handler(self._state.arg)
        if self._emitted is None:
            raise StopIteration
        token, self._emitted = self._emitted, None
        return token

    # Top-Level States
    # ----------------

    def _lex_file_start(self, _: str | None) -> Continuation | None:
        """Consume the optional version comment '#\\#CIF_1.1' on the first line."""
        if self._input.startswith(_VERSION_PREFIX + "CIF_"):
            self._advance(len(_VERSION_PREFIX))
            self._ignore()
            self._advance(self._non_blank_run())
            self._emit(Token.VERSION)
        return Continuation(State.FILE)

    def _lex_file(self, _: str | None) -> Continuation | None:
        """Consume input until the first data block heading."""
        char = self._peek()
        if self._is_blank(char):
            return self._skip_blanks(State.FILE)
        if char == "":
            return self._stop()
        if word := self._reserved_keyword():
            return self._error(f"{word} is not supported in the CIF format.")
        if self._ahead("data_"):
            return self._heading(Token.DATA_BLOCK_START, State.BLOCK)
        return self._error(
            "Expected comments, whitespace or a data block heading ('data_'), "
            f"but got '{self._describe(char)}' instead."
        )

    # Block Body States
    # -----------------

    def _lex_block(self, _: str | None) -> Continuation | None:
        """Consume the body of a data block."""
        char = self._peek()
        if self._is_blank(char):
            return self._skip_blanks(State.BLOCK)
        if char == "":
            return self._stop()
        if word := self._reserved_keyword():
            return self._error(f"{word} is not supported in the CIF format.")
        if self._ahead("data_"):
            return self._heading(Token.DATA_BLOCK_START, State.BLOCK)
        if self._ahead("save_"):
            if not is_non_blank(self._peek_at(5)):
                return self._error("Save frame terminator 'save_' found outside of a save frame.")
            return self._heading(Token.SAVE_FRAME_START, State.FRAME)
        return self._data_item(State.BLOCK)

    def _lex_frame(self, _: str | None) -> Continuation | None:
        """Consume the body of a save frame, up to and including its 'save_' terminator."""
        char = self._peek()
        if self._is_blank(char):
            return self._skip_blanks(State.FRAME)
        if char == "":
            return self._stop()
        if word := self._reserved_keyword():
            return self._error(f"{word} is not supported in the CIF format.")
        if self._ahead("save_"):
            if is_non_blank(self._peek_at(5)):
                return self._error(
                    "Save frames cannot be nested; expected the end of the save frame ('save_'), "
                    f"but got '{self._word()}' instead."
                )
            self._ignore()
            self._advance(5)
            self._emit(Token.SAVE_FRAME_END)
            self._push(State.BLOCK)
            return Continuation(State.SPACE_OR_EOF)
        if self._ahead("data_"):
            return self._error(
                "Expected either a data item or the end of a save frame ('save_'), "
                f"but got '{self._word()}' instead."
            )
        return self._data_item(State.FRAME)

    def _data_item(self, body: State) -> Continuation | None:
        """Consume a single data item or a table, then return to `body`."""
        if self._ahead("loop_"):
            self._ignore()
            self._advance(5)
            self._emit(Token.LOOP)
            self._push(body)
            self._push(State.LOOP_FIRST_TAG)
            return Continuation(State.SPACE_OR_EOF)
        if self._peek() == "_":
            self._push(body)
            return self._tag(State.VALUE)
        return self._error(
            f"Expected data item name starting with '_' but got '{self._describe(self._peek())}' "
            "instead. (Strings with spaces must be quoted and all data keys must begin "
            "with an underscore.)"
        )

    # Table States
    # ------------

    def _lex_loop_first_tag(self, _: str | None) -> Continuation | None:
        """Consume the first data tag of a table."""
        char = self._peek()
        if self._is_blank(char):
            return self._skip_blanks(State.LOOP_FIRST_TAG)
        if char == "":
            return self._stop()
        if char == "_":
            return self._tag(State.LOOP_TAGS)
        if any(self._ahead(word) for word in _STRUCTURAL_KEYWORDS):
            # Let the parser report the table without data tags.
            return self._pop()
        return self._error(
            "Every 'loop_' section must have at least one data tag defined "
            f"(starting with a '_'), but found '{self._describe(char)}' instead."
        )

    def _lex_loop_tags(self, _: str | None) -> Continuation | None:
        """Consume the remaining data tags of a table."""
        char = self._peek()
        if self._is_blank(char):
            return self._skip_blanks(State.LOOP_TAGS)
        if char == "_":
            return self._tag(State.LOOP_TAGS)
        return Continuation(State.LOOP_VALUES)

    def _lex_loop_values(self, _: str | None) -> Continuation | None:
        """Consume table values until a data tag, a structural keyword or EOF."""
        char = self._peek()
        if self._is_blank(char):
            return self._skip_blanks(State.LOOP_VALUES)
        if char == "":
            return self._stop()
        if char == "_" or any(self._ahead(word) for word in _STRUCTURAL_KEYWORDS):
            return self._pop()
        self._push(State.LOOP_VALUES)
        return Continuation(State.VALUE)

    def _tag(self, next_state: State) -> Continuation | None:
        """Consume a data tag (the current character must be '_')."""
        self._advance(1)
        self._ignore()
        length = self._non_blank_run()
        if length == 0:
            return self._error(
                f"Expected a data name after '_', but got '{self._describe(self._peek())}' instead."
            )
        self._advance(length)
        self._emit(Token.DATA_TAG)
        self._push(next_state)
        return Continuation(State.SPACE_OR_EOF)

    # Value States
    # ------------

    def _lex_value(self, _: str | None) -> Continuation | None:
        """Consume a single value of any kind."""
        char = self._peek()
        if self._is_blank(char):
            return self._skip_blanks(State.VALUE)
        if char == "":
            return self._stop()
        for word in _RESERVED_VALUE_PREFIXES:
            if self._ahead(word):
                return self._error(f"{word} cannot be used in the beginning of an unquoted value.")

        self._ignore()
        following = self._peek_at(1)
        if char == "." and (following == "" or is_whitespace(following)):
            self._advance(1)
            self._emit(Token.OMITTED)
            return Continuation(State.SPACE_OR_EOF)
        if char == "?" and (following == "" or is_whitespace(following)):
            self._advance(1)
            self._emit(Token.MISSING)
            return Continuation(State.SPACE_OR_EOF)
        if char in "+-.0123456789":
            return Continuation(State.NUMBER)
        if char in "'\"":
            self._advance(1)
            self._ignore()
            return Continuation(State.QUOTED, char)
        if char == ";" and self._at_line_start():
            self._advance(1)
            self._ignore()
            return Continuation(State.TEXT_FIELD)
        if is_ordinary(char) or char == ";":
            return Continuation(State.UNQUOTED)
        return self._error(
            f"Expected a value ('.', '?', numeric or string), but got '{self._describe(char)}'."
        )

    def _lex_number(self, _: str | None) -> Continuation | None:
        """Consume a numeric value, falling back to an unquoted string."""
        match = NUMERIC.match(self._input, self._pos)
        if match is not None:
            following = self._input[match.end():match.end() + 1]
            if following == "" or is_whitespace(following):
                number = match.group()
                self._advance(len(number))
                is_float = any(char in number for char in ".eE")
                self._emit(Token.FLOAT if is_float else Token.INTEGER)
                return Continuation(State.SPACE_OR_EOF)
        return Continuation(State.UNQUOTED)

    def _lex_unquoted(self, _: str | None) -> Continuation | None:
        """Consume an unquoted string value."""
        self._advance(self._non_blank_run())
        word = self._current().lower()
        if word in _RESERVED_VALUES:
            return self._error(f"{word} cannot be used as an unquoted string value.")
        self._emit(Token.STRING)
        return Continuation(State.SPACE_OR_EOF)

    def _lex_quoted(self, quote: str | None) -> Continuation | None:
        """Consume a quoted string, after its opening `quote`.

        The string only ends at a `quote` that is followed by whitespace or EOF,
        so that values like 'a dog's life' are valid.
        """
        newline = self._input.find("\n", self._pos)
        search_from = self._pos
        while True:
            end = self._input.find(quote, search_from)
            if end == -1 or (newline != -1 and newline < end):
                if newline != -1:
                    self._advance(newline - self._pos)
                    return self._error("Quoted strings may not contain new lines.")
                self._advance(len(self._input) - self._pos)
                return self._error("Expected end of quoted string, but got EOF.")
            following = self._input[end + 1:end + 2]
            if following == "" or is_whitespace(following):
                break
            search_from = end + 1

        for offset, char in enumerate(self._input[self._pos:end]):
            if not is_printable(char):
                self._advance(offset)
                return self._invalid_char_error(char)
        self._advance(end - self._pos)
        self._emit(Token.STRING)
        self._advance(1)
        self._ignore()
        return Continuation(State.SPACE_OR_EOF)

    def _lex_text_field(self, _: str | None) -> Continuation | None:
        """Consume a text field, after its opening '<eol>;'.

        The value is everything up to the next '<eol>;', taken verbatim.
        """
        end = self._input.find("\n;", self._pos)
        if end == -1:
            self._advance(len(self._input) - self._pos)
            return self._error("Expected a semi-colon terminator, but got EOF.")
        for offset, char in enumerate(self._input[self._pos:end]):
            if char != "\n" and not is_printable(char):
                self._advance(offset)
                return self._invalid_char_error(char)
        self._advance(end - self._pos)
        self._emit(Token.STRING)
        self._advance(2)
        self._ignore()
        return Continuation(State.SPACE_OR_EOF)

    # Helper States
    # -------------

    def _lex_whitespace(self, _: str | None) -> Continuation | None:
        """Consume zero or more whitespace characters, and any comments in between."""
        self._advance(_WHITESPACE_RUN.match(self._input, self._pos).end() - self._pos)
        self._ignore()
        if self._peek() == "#":
            return Continuation(State.COMMENT)
        return self._pop()

    def _lex_comment(self, _: str | None) -> Continuation | None:
        """Consume a comment up to the end of the line."""
        self._advance(1)
        self._ignore()
        end = self._input.find("\n", self._pos)
        if end == -1:
            end = len(self._input)
        self._advance(end - self._pos)
        self._emit(Token.COMMENT)
        return Continuation(State.WHITESPACE)

    def _lex_space_or_eof(self, _: str | None) -> Continuation | None:
        """Ensure that the previous token is followed by whitespace or EOF."""
        char = self._peek()
        if char == "":
            return self._stop()
        if not is_whitespace(char):
            return self._error(f"Expected whitespace or EOF, but got '{self._describe(char)}' instead.")
        return self._pop()

    # Private Helper Methods
    # ======================

    def _heading(self, kind: Token, next_state: State) -> Continuation | None:
        """Consume a 'data_' or 'save_' heading and its name."""
        keyword = self._input[self._pos:self._pos + 5]
        self._advance(5)
        self._ignore()
        length = self._non_blank_run()
        if length == 0:
            return self._error(
                f"Expected a name after '{keyword}', but got '{self._describe(self._peek())}' instead."
            )
        self._advance(length)
        self._emit(kind)
        self._push(next_state)
        return Continuation(State.SPACE_OR_EOF)

    def _skip_blanks(self, resume: State) -> Continuation:
        self._push(resume)
        return Continuation(State.WHITESPACE)

    def _push(self, state: State, arg: str | None = None) -> None:
        self._stack.append(Continuation(state, arg))
        return

    def _pop(self) -> Continuation | None:
        if not self._stack:
            return self._error("BUG in scanner: no states to pop.")
        return self._stack.pop()

    def _emit(self, kind: Token, value: str | None = None) -> None:
        if self._emitted is not None:
            raise RuntimeError("BUG in scanner: a state may only emit a single token.")
        self._emitted = TokenItem(
            kind=kind,
            value=self._current() if value is None else value,
            line=self._start_line,
        )
        self._ignore()
        return

    def _error(self, message: str) -> None:
        """Stop scanning by emitting an error token."""
        self._emitted = TokenItem(kind=Token.ERROR, value=message, line=self._line)
        self._stack.clear()
        return None

    def _invalid_char_error(self, char: str) -> None:
        return self._error(
            f"The character '{self._describe(char)}' is not a valid printable character "
            "in the CIF 1.1 specification."
        )

    def _stop(self) -> None:
        self._ignore()
        self._emit(Token.EOF, "")
        return None

    def _advance(self, count: int) -> None:
        consumed = self._input[self._pos:self._pos + count]
        self._line += consumed.count("\n")
        self._pos += len(consumed)
        return

    def _ignore(self) -> None:
        """Skip over the pending input before this point."""
        self._start = self._pos
        self._start_line = self._line
        return

    def _current(self) -> str:
        return self._input[self._start:self._pos]

    def _peek(self) -> str:
        return self._input[self._pos:self._pos + 1]

    def _peek_at(self, offset: int) -> str:
        return self._input[self._pos + offset:self._pos + offset + 1]

    def _ahead(self, word: str) -> bool:
        """Whether the input at the current position starts with `word` (case-insensitive)."""
        return self._input[self._pos:self._pos + len(word)].lower() == word

    def _at_line_start(self) -> bool:
        return self._pos == 0 or self._input[self._pos - 1] == "\n"

    def _non_blank_run(self) -> int:
        return NON_BLANK_RUN.match(self._input, self._pos).end() - self._pos

    def _word(self) -> str:
        return self._input[self._pos:self._pos + max(self._non_blank_run(), 1)]

    def _reserved_keyword(self) -> str | None:
        for word in _RESERVED_KEYWORDS:
            if self._ahead(word):
                return word
        return None

    @staticmethod
    def _is_blank(char: str) -> bool:
        """Whether `char` starts whitespace or a comment."""
        return char == "#" or is_whitespace(char)

    @staticmethod
    def _describe(char: str) -> str:
        """Printable representation of a character for error messages."""
        if char == "":
            return "EOF"
        if char == "\n":
            return "\\n"
        if char == "\t":
            return "\\t"
        if not is_printable(char):
            return f"U+{ord(char):04X}"
        return char
