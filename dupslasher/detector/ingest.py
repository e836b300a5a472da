"""Tokenisation helpers for DupSlasher.

Text is scanned as bytes: a token is a maximal run of ASCII alphanumeric
bytes and every other byte value acts as a delimiter. Bytes of multi-byte
UTF-8 sequences are therefore delimiters too, so ``"Šuker"`` yields ``uker``.
"""
from __future__ import annotations

import re
from functools import lru_cache
from typing import List, Optional, Union

Text = Union[str, bytes]

# -----------------------------------------------------------
# Delimiters
# -----------------------------------------------------------

_ALNUM = frozenset(b"0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz")


def nonalnum_delimiters() -> bytes:
    """Return every byte value that is not ASCII alphanumeric."""
    return bytes(c for c in range(256) if c not in _ALNUM)


_DEFAULT_DELIMITERS = nonalnum_delimiters()


@lru_cache(maxsize=32)
def _token_pattern(delimiters: bytes) -> "re.Pattern[bytes]":
    if not delimiters:
        return re.compile(b".+", re.DOTALL)
    cls = b"".join(b"\\x%02x" % c for c in sorted(set(delimiters)))
    return re.compile(b"[^" + cls + b"]+", re.DOTALL)


def as_bytes(text: Optional[Text]) -> bytes:
    """Encode *text* as UTF-8; ``None`` becomes an empty document.

    Lone surrogates are kept as their raw bytes, which are delimiters.
    """
    if text is None:
        return b""
    if isinstance(text, str):
        return text.encode("utf-8", errors="surrogatepass")
    return bytes(text)


# -----------------------------------------------------------
# Token stream
# -----------------------------------------------------------


class TokenStream:
    """Lazy iterator over the non-empty tokens of *text*.

    Maximal runs of delimiter bytes are skipped, so consecutive delimiters
    collapse to a single boundary. The stream is single-pass: once
    exhausted it stays exhausted, and a fresh scan needs a new
    ``TokenStream`` over the original text.
    """

    __slots__ = ("_matches", "_done")

    def __init__(self, text: Optional[Text], delimiters: Optional[bytes] = None) -> None:
        delims = _DEFAULT_DELIMITERS if delimiters is None else bytes(delimiters)
        self._matches = _token_pattern(delims).finditer(as_bytes(text))
        self._done = False

    def __iter__(self) -> "TokenStream":
        return self

    def __next__(self) -> bytes:
        if self._done:
            raise StopIteration
        try:
            return next(self._matches).group()
        except StopIteration:
            self._done = True
            raise

    @property
    def exhausted(self) -> bool:
        return self._done


def tokenize(text: Optional[Text], delimiters: Optional[bytes] = None) -> List[bytes]:
    """Return all tokens of *text* as a list."""
    return list(TokenStream(text, delimiters))
