"""CIF scanner states.

The scanner is a pushdown automaton: it holds the current `Continuation`
and a stack of continuations to resume once a sub-scan
(e.g., a whitespace run, a tag, or a value) is complete.

State families:

- Top level: `FILE_START`, `FILE`
- Block body: `BLOCK`, `FRAME`
- Table body: `LOOP_FIRST_TAG`, `LOOP_TAGS`, `LOOP_VALUES`
- Value lexing: `VALUE`, `NUMBER`, `UNQUOTED`, `QUOTED`, `TEXT_FIELD`
- Helpers: `WHITESPACE`, `COMMENT`, `SPACE_OR_EOF`
"""

from enum import Enum
from typing import NamedTuple


__all__ = [
    "Continuation",
    "State",
]


class State(Enum):
    """Scanner states."""
    FILE_START = 1
    FILE = 2
    BLOCK = 3
    FRAME = 4
    LOOP_FIRST_TAG = 5
    LOOP_TAGS = 6
    LOOP_VALUES = 7
    VALUE = 8
    NUMBER = 9
    UNQUOTED = 10
    QUOTED = 11
    TEXT_FIELD = 12
    WHITESPACE = 13
    COMMENT = 14
    SPACE_OR_EOF = 15


class Continuation(NamedTuple):
    """A scanner state, together with the data captured when it was scheduled.

    Attributes
    ----------
    state
        State to run.
    arg
        Captured argument, e.g., the quote character
        that terminates a quoted string for `State.QUOTED`.
    """
    state: State
    arg: str | None = None
