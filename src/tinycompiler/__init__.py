"""
tinycompiler: parenthesized call expressions in, C-style calls out.

    >>> from tinycompiler import compile
    >>> compile('(add 2 (subtract 4 2))')
    'add(2, subtract(4, 2));'
"""

from .shared import (
    SourceLocation, CompileError, LexError, ParseError, ErrorReporter,
    NumberLiteral, StringLiteral, CallExpression, Program,
)
from .frontend import Token, TokenKind, tokenize, parse, parse_with_grammar
from .passes import Visitor, VisitorMethods, traverse, transform
from .ir import IdentifierIR, CallIR, ExpressionStatementIR, ProgramIR
from .backends import generate
from .compiler import CompilationResult, CompilerDriver, compile

__version__ = "0.1.0"

__all__ = [
    "compile", "tokenize", "parse", "transform", "generate", "traverse",
    "parse_with_grammar",
    "CompilerDriver", "CompilationResult",
    "Token", "TokenKind",
    "NumberLiteral", "StringLiteral", "CallExpression", "Program",
    "IdentifierIR", "CallIR", "ExpressionStatementIR", "ProgramIR",
    "Visitor", "VisitorMethods",
    "SourceLocation", "CompileError", "LexError", "ParseError", "ErrorReporter",
]
