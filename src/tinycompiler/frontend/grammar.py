"""
Declarative reference grammar (Lark)

Second, independent route from text to the same source AST. Kept in step
with the hand-written lexer/parser so the two can be checked against each
other.
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Optional

from lark import Lark, Transformer, v_args
from lark.exceptions import UnexpectedCharacters, UnexpectedEOF, UnexpectedToken
from lark.lexer import Token as LarkToken

from ..shared.errors import LexError, ParseError
from ..shared.nodes import CallExpression, NumberLiteral, Program, StringLiteral
from ..shared.source_location import SourceLocation, location_at
from ..utils.config import DEFAULT_SOURCE_NAME, EOF_KIND

logger = logging.getLogger(__name__)

GRAMMAR_PATH = Path(__file__).parent / "grammar.lark"

# Lark terminal names -> TokenKind values used in ParseError
_TERMINAL_KINDS = {
    "NUMBER": "number",
    "STRING": "string",
    "NAME": "name",
    "LPAR": "paren",
    "RPAR": "paren",
    "$END": EOF_KIND,
}


@lru_cache(maxsize=None)
def _lark() -> Lark:
    return Lark.open(
        str(GRAMMAR_PATH),
        start="start",
        parser="lalr",
        propagate_positions=True,
        maybe_placeholders=False,
    )


class SourceASTBuilder(Transformer):
    """Lark parse tree -> source AST nodes"""

    def __init__(self, source_file: str = DEFAULT_SOURCE_NAME):
        super().__init__()
        self.source_file = source_file

    def _location(self, token: LarkToken) -> SourceLocation:
        return SourceLocation(
            file=self.source_file,
            line=token.line,
            column=token.column,
            start=token.start_pos,
            end=token.end_pos,
        )

    @v_args(inline=True)
    def number(self, token: LarkToken) -> NumberLiteral:
        return NumberLiteral(str(token), self._location(token))

    @v_args(inline=True)
    def string(self, token: LarkToken) -> StringLiteral:
        return StringLiteral(str(token)[1:-1], self._location(token))

    @v_args(meta=True)
    def call(self, meta, children) -> CallExpression:
        name, *params = children
        location = None
        if not meta.empty:
            location = SourceLocation(
                file=self.source_file,
                line=meta.line,
                column=meta.column,
                start=meta.start_pos,
                end=meta.end_pos,
            )
        return CallExpression(str(name), params, location)

    def start(self, children) -> Program:
        location = children[0].location if children else None
        return Program(children, location)


def parse_with_grammar(source: str, source_file: str = DEFAULT_SOURCE_NAME) -> Program:
    """
    Parse `source` with the Lark grammar.

    Raises the same LexError/ParseError classes as the hand-written
    pipeline so callers can treat both routes alike.
    """
    try:
        tree = _lark().parse(source)
    except UnexpectedCharacters as e:
        offset = e.pos_in_stream
        char = source[offset] if offset < len(source) else ""
        raise LexError(
            f"unexpected character {char!r}",
            char=char,
            offset=offset,
            location=location_at(source, offset, source_file),
            source_code=source,
        ) from e
    except UnexpectedToken as e:
        raise _parse_error(source, source_file, e.token) from e
    except UnexpectedEOF as e:
        raise _parse_error(source, source_file, None) from e

    ast = SourceASTBuilder(source_file).transform(tree)
    logger.debug(f"Grammar parse produced {len(ast.body)} top-level expressions")
    return ast


def _last_token_location(source: str, source_file: str) -> Optional[SourceLocation]:
    """Location of the final token, for errors raised at end of input"""
    last = None
    for last in _lark().lex(source):
        pass
    if last is None:
        return None
    return location_at(source, last.start_pos, source_file, len(str(last)))


def _parse_error(source: str, source_file: str, token: Optional[LarkToken]) -> ParseError:
    if token is None or token.type == "$END":
        return ParseError(
            "unexpected end of input",
            token_kind=EOF_KIND,
            location=_last_token_location(source, source_file),
            source_code=source,
            label="input ends after this",
        )
    kind = _TERMINAL_KINDS.get(token.type, token.type.lower())
    text = str(token)
    if token.type == "STRING":
        text = text[1:-1]
    location = None
    if getattr(token, "start_pos", None) is not None:
        location = location_at(source, token.start_pos, source_file, len(str(token)))
    return ParseError(
        f"unexpected {kind} token {text!r}",
        token_kind=kind,
        token_text=text,
        location=location,
        source_code=source,
    )
