# src/blparse/tokenizer.py
# BL token vocabulary, token predicates, and the front-consumed token stream.
# Tokens are plain strings; the stream always ends with END_OF_INPUT.

from __future__ import annotations

import re
from collections import deque
from typing import Iterable, List, Optional

from .errors import UnexpectedEndOfInputError

# Never produced by splitting source text (it contains spaces).
END_OF_INPUT = "### END OF INPUT ###"

KEYWORDS = frozenset({
    "PROGRAM", "IS", "INSTRUCTION", "BEGIN", "END",
    "IF", "THEN", "ELSE", "WHILE", "DO",
})

CONDITION_WORDS = frozenset({
    "next-is-empty", "next-is-not-empty",
    "next-is-wall", "next-is-not-wall",
    "next-is-friend", "next-is-not-friend",
    "next-is-enemy", "next-is-not-enemy",
    "random", "true",
})

# Tokens that close a block without being consumed by it
BLOCK_TERMINATORS = frozenset({"ELSE", "END", END_OF_INPUT})

_IDENT_RE = re.compile(r"[A-Za-z][A-Za-z0-9-]*")

_TOKEN_RE = re.compile(r"""
    (?P<comment>\#[^\n]*)|
    (?P<space>\s+)|
    (?P<word>[A-Za-z0-9-]+)|
    (?P<other>.)
""", re.VERBOSE)


def is_keyword(token: Optional[str]) -> bool:
    return token in KEYWORDS


def is_condition(token: Optional[str]) -> bool:
    if not isinstance(token, str):
        return False
    return token.lower() in CONDITION_WORDS


def is_identifier(token: Optional[str]) -> bool:
    """A letter followed by letters, digits or hyphens; not a keyword or condition."""
    if not isinstance(token, str) or not _IDENT_RE.fullmatch(token):
        return False
    return not is_keyword(token) and not is_condition(token)


def tokenize(text: str) -> List[str]:
    """
    Split BL source text into tokens and append END_OF_INPUT.
    '#' comments run to end of line. Any character outside [A-Za-z0-9-]
    becomes a one-character token of its own.
    """
    tokens: List[str] = []
    for mo in _TOKEN_RE.finditer(text or ""):
        kind = mo.lastgroup
        if kind in ("comment", "space"):
            continue
        tokens.append(mo.group())
    tokens.append(END_OF_INPUT)
    return tokens


class TokenStream:
    """Left-to-right token queue. Nothing is pushed back once dequeued."""

    def __init__(self, tokens: Iterable[str] = ()):
        self._tokens = deque(tokens)
        self.consumed = 0

    @classmethod
    def of(cls, tokens: Iterable[str]) -> "TokenStream":
        # An existing stream is consumed in place so the caller sees the drain.
        if isinstance(tokens, TokenStream):
            return tokens
        return cls(tokens)

    def __len__(self) -> int:
        return len(self._tokens)

    def __repr__(self) -> str:
        return f"TokenStream({list(self._tokens)!r})"

    def front(self) -> str:
        if not self._tokens:
            raise UnexpectedEndOfInputError(
                "token stream exhausted before END_OF_INPUT",
                position=self.consumed,
            )
        return self._tokens[0]

    def dequeue(self) -> str:
        tok = self.front()
        self._tokens.popleft()
        self.consumed += 1
        return tok

    def at_block_end(self) -> bool:
        return self.front() in BLOCK_TERMINATORS

    def remaining(self) -> List[str]:
        return list(self._tokens)
