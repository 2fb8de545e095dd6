"""
Source AST Definitions

Tree shaped after the input call language, produced by the parser.

- Closed set of node kinds (`SourceNode`); consumers match on the concrete class
- Frozen dataclasses: children are attached at construction and never change
- `location` is carried for diagnostics and ignored by equality
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple, Union

from typing_extensions import TypeAlias

from .source_location import SourceLocation


@dataclass(frozen=True)
class NumberLiteral:
    """Digit run, kept as text. Shared by the source and target trees."""
    value: str
    location: Optional[SourceLocation] = field(default=None, compare=False, repr=False)

    def accept(self, visitor):
        return visitor.visit_number_literal(self)


@dataclass(frozen=True)
class StringLiteral:
    """Quoted string contents without the quotes. Shared by both trees."""
    value: str
    location: Optional[SourceLocation] = field(default=None, compare=False, repr=False)

    def accept(self, visitor):
        return visitor.visit_string_literal(self)


@dataclass(frozen=True)
class CallExpression:
    """`(name param...)`; params are kept in argument order"""
    name: str
    params: Tuple[Expression, ...] = ()
    location: Optional[SourceLocation] = field(default=None, compare=False, repr=False)

    def __post_init__(self):
        if not self.name:
            raise ValueError("CallExpression requires a non-empty name")
        object.__setattr__(self, "params", tuple(self.params))


@dataclass(frozen=True)
class Program:
    """Root: top-level expressions in source order"""
    body: Tuple[Expression, ...] = ()
    location: Optional[SourceLocation] = field(default=None, compare=False, repr=False)

    def __post_init__(self):
        object.__setattr__(self, "body", tuple(self.body))


Expression: TypeAlias = Union[NumberLiteral, StringLiteral, CallExpression]
SourceNode: TypeAlias = Union[NumberLiteral, StringLiteral, CallExpression, Program]

