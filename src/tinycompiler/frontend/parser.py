"""
Parser

Recursive descent over the token list with one token of lookahead:

    Program    := Expression*
    Expression := NUMBER | STRING | Call
    Call       := '(' NAME Expression* ')'
"""

import logging
from typing import List, Optional, Sequence

from .lexer import Token, TokenKind
from ..shared.errors import ParseError
from ..shared.nodes import CallExpression, Expression, NumberLiteral, Program, StringLiteral
from ..utils.config import CLOSE_PAREN, EOF_KIND, OPEN_PAREN

logger = logging.getLogger(__name__)


class Parser:
    """
    Builds a source Program from tokens.

    The cursor only ever moves forward; there is no speculative parsing.
    `source` is optional and only used to render diagnostics.
    """

    def __init__(self, tokens: Sequence[Token], source: Optional[str] = None):
        self.tokens = tokens
        self.source = source
        self.current = 0

    def parse(self) -> Program:
        body: List[Expression] = []
        while self.current < len(self.tokens):
            body.append(self.walk())
        location = self.tokens[0].location if self.tokens else None
        logger.debug(f"Parsed {len(body)} top-level expressions from {len(self.tokens)} tokens")
        return Program(body, location)

    def walk(self) -> Expression:
        token = self._peek("an expression")

        if token.kind is TokenKind.NUMBER:
            self.current += 1
            return NumberLiteral(token.text, token.location)

        if token.kind is TokenKind.STRING:
            self.current += 1
            return StringLiteral(token.text, token.location)

        if token.is_paren(OPEN_PAREN):
            return self._walk_call(token)

        raise self._unexpected(token, "an expression")

    def _walk_call(self, open_paren: Token) -> CallExpression:
        self.current += 1
        name = self._peek("a function name")
        if name.kind is not TokenKind.NAME:
            raise self._unexpected(
                name, "a function name",
                help="a call must start with a name, e.g. (add 1 2)",
            )
        self.current += 1

        params: List[Expression] = []
        while not self._peek(f"{CLOSE_PAREN!r} to close the call to {name.text!r}").is_paren(CLOSE_PAREN):
            params.append(self.walk())
        self.current += 1

        return CallExpression(name.text, params, open_paren.location)

    def _peek(self, expected: str) -> Token:
        if self.current >= len(self.tokens):
            last = self.tokens[-1].location if self.tokens else None
            raise ParseError(
                f"unexpected end of input, expected {expected}",
                token_kind=EOF_KIND,
                location=last,
                source_code=self.source,
                label="input ends after this",
            )
        return self.tokens[self.current]

    def _unexpected(self, token: Token, expected: str, help: Optional[str] = None) -> ParseError:
        return ParseError(
            f"unexpected {token.kind.value} token {token.text!r}, expected {expected}",
            token_kind=token.kind.value,
            token_text=token.text,
            location=token.location,
            source_code=self.source,
            help=help,
        )


def parse(tokens: Sequence[Token], source: Optional[str] = None) -> Program:
    """Parse a token list into a source Program (raises ParseError)."""
    return Parser(tokens, source).parse()
