"""CIF file scanner (tokenizer)."""

from ._chars import is_non_blank, is_ordinary, is_printable, is_whitespace, NUMERIC
from ._scanner import CIFScanner
from ._state import Continuation, State
from ._token import Token, TokenItem, VALUE_TOKENS

__all__ = [
    "CIFScanner",
    "Continuation",
    "State",
    "Token",
    "TokenItem",
    "VALUE_TOKENS",
    "NUMERIC",
    "is_non_blank",
    "is_ordinary",
    "is_printable",
    "is_whitespace",
    "scan",
]


def scan(content: str) -> CIFScanner:
    """Tokenize the content of a CIF file.

    Parameters
    ----------
    content
        Whole content of the CIF file.

    Returns
    -------
    tokens
        Lazy iterator over the tokens in the file.
        It ends after a `Token.EOF` token,
        or after the first `Token.ERROR` token.
    """
    return CIFScanner(content)
