"""
Lexer

Single left-to-right scan with a cursor; no backtracking.
"""

import logging
import string
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from ..shared.errors import LexError
from ..shared.source_location import SourceLocation, location_at
from ..utils.config import (
    CLOSE_PAREN,
    DEFAULT_SOURCE_NAME,
    OPEN_PAREN,
    STRING_QUOTE_CHAR,
)

logger = logging.getLogger(__name__)

_DIGITS = frozenset(string.digits)
_LETTERS = frozenset(string.ascii_letters)


class TokenKind(Enum):
    PAREN = "paren"
    NUMBER = "number"
    STRING = "string"
    NAME = "name"


@dataclass(frozen=True)
class Token:
    """
    Minimal lexical unit: kind plus the exact matched text.

    For STRING tokens the text excludes the surrounding quotes.
    """
    kind: TokenKind
    text: str
    location: Optional[SourceLocation] = field(default=None, compare=False, repr=False)

    def is_paren(self, text: str) -> bool:
        return self.kind is TokenKind.PAREN and self.text == text


class Lexer:
    """Tokenizer over one source string. Create one per input."""

    def __init__(self, source: str, source_file: str = DEFAULT_SOURCE_NAME):
        self.source = source
        self.source_file = source_file
        self.current = 0

    def tokenize(self) -> List[Token]:
        tokens: List[Token] = []
        source = self.source

        while self.current < len(source):
            char = source[self.current]

            if char == OPEN_PAREN or char == CLOSE_PAREN:
                tokens.append(self._token(TokenKind.PAREN, self.current, self.current + 1))
                self.current += 1
                continue

            if char.isspace():
                self.current += 1
                continue

            if char in _DIGITS:
                tokens.append(self._read_run(TokenKind.NUMBER, _DIGITS))
                continue

            if char == STRING_QUOTE_CHAR:
                tokens.append(self._read_string())
                continue

            if char in _LETTERS:
                tokens.append(self._read_run(TokenKind.NAME, _LETTERS))
                continue

            raise LexError(
                f"unexpected character {char!r}",
                char=char,
                offset=self.current,
                location=self._location(self.current),
                source_code=source,
                label="not part of the language",
            )

        logger.debug(f"Tokenized {len(source)} chars into {len(tokens)} tokens")
        return tokens

    def _read_run(self, kind: TokenKind, charset: frozenset) -> Token:
        start = self.current
        while self.current < len(self.source) and self.source[self.current] in charset:
            self.current += 1
        return self._token(kind, start, self.current)

    def _read_string(self) -> Token:
        # No escape sequences: the literal ends at the next quote
        start = self.current
        closing = self.source.find(STRING_QUOTE_CHAR, start + 1)
        if closing == -1:
            raise LexError(
                "unterminated string literal",
                char=STRING_QUOTE_CHAR,
                offset=start,
                location=self._location(start, len(self.source) - start),
                source_code=self.source,
                label="string starts here",
                help=f"add a closing {STRING_QUOTE_CHAR} before the end of input",
            )
        self.current = closing + 1
        return Token(
            TokenKind.STRING,
            self.source[start + 1:closing],
            self._location(start, self.current - start),
        )

    def _token(self, kind: TokenKind, start: int, end: int) -> Token:
        return Token(kind, self.source[start:end], self._location(start, end - start))

    def _location(self, offset: int, length: int = 1) -> SourceLocation:
        return location_at(self.source, offset, self.source_file, length)


def tokenize(source: str, source_file: str = DEFAULT_SOURCE_NAME) -> List[Token]:
    """Convert raw text into a flat, ordered token list (raises LexError)."""
    return Lexer(source, source_file).tokenize()
