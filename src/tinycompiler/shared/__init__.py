"""
Shared components: source spans, errors and the source AST.
"""

from .source_location import SourceLocation, location_at
from .errors import Diagnostic, ErrorReporter, CompileError, LexError, ParseError
from .nodes import (
    NumberLiteral, StringLiteral, CallExpression, Program, Expression, SourceNode,
)
