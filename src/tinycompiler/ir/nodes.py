"""
IR Nodes

Target tree, shaped after the emitted call-expression syntax. Number and
string literals are the same leaf types as in the source AST; everything
else is IR-only.

Design: regular classes with __slots__ (not dataclasses). `CallIR.args` and
`ProgramIR.body` are filled in by the transform pass after the node exists,
so they stay plain lists.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, List, Optional, TypeVar, Union

from typing_extensions import TypeAlias

from ..shared.nodes import NumberLiteral, StringLiteral
from ..shared.source_location import SourceLocation

T = TypeVar('T')


class IRNode(ABC):
    """
    Base class for all IR-only nodes.

    Every concrete kind implements `accept`; equality compares every slot
    except `location`.
    """
    __slots__ = ('location',)

    def __init__(self, location: Optional[SourceLocation] = None):
        self.location = location

    @abstractmethod
    def accept(self, visitor: 'IRVisitor[T]') -> T:
        ...

    def _get_all_attributes(self) -> Dict[str, Any]:
        attrs = {}
        for cls in self.__class__.__mro__:
            for slot in getattr(cls, '__slots__', ()):
                if slot != 'location' and slot not in attrs:
                    attrs[slot] = getattr(self, slot, None)
        return attrs

    def __eq__(self, other):
        if not isinstance(other, self.__class__):
            return NotImplemented
        return self._get_all_attributes() == other._get_all_attributes()

    __hash__ = None  # mutable containers inside

    def __repr__(self) -> str:
        fields = ", ".join(f"{k}={v!r}" for k, v in self._get_all_attributes().items())
        return f"{self.__class__.__name__}({fields})"


class IdentifierIR(IRNode):
    """Callee name"""
    __slots__ = ('name',)

    def __init__(self, name: str, location: Optional[SourceLocation] = None):
        super().__init__(location)
        self.name = name

    def accept(self, visitor: 'IRVisitor[T]') -> T:
        return visitor.visit_identifier(self)


class CallIR(IRNode):
    """`callee(args...)` used as an expression"""
    __slots__ = ('callee', 'args')

    def __init__(self, callee: IdentifierIR, args: Optional[List['ExpressionIR']] = None,
                 location: Optional[SourceLocation] = None):
        super().__init__(location)
        if not callee.name:
            raise ValueError("CallIR requires a callee with a non-empty name")
        self.callee = callee
        self.args: List[ExpressionIR] = list(args) if args is not None else []

    def accept(self, visitor: 'IRVisitor[T]') -> T:
        return visitor.visit_call(self)


class ExpressionStatementIR(IRNode):
    """Top-level call turned into a statement"""
    __slots__ = ('expression',)

    def __init__(self, expression: 'ExpressionIR', location: Optional[SourceLocation] = None):
        super().__init__(location if location is not None else getattr(expression, 'location', None))
        self.expression = expression

    def accept(self, visitor: 'IRVisitor[T]') -> T:
        return visitor.visit_expression_statement(self)


class ProgramIR(IRNode):
    """Root of the target tree"""
    __slots__ = ('body',)

    def __init__(self, body: Optional[List['TargetNode']] = None,
                 location: Optional[SourceLocation] = None):
        super().__init__(location)
        self.body: List[TargetNode] = list(body) if body is not None else []

    def accept(self, visitor: 'IRVisitor[T]') -> T:
        return visitor.visit_program(self)


ExpressionIR: TypeAlias = Union[NumberLiteral, StringLiteral, CallIR]
TargetNode: TypeAlias = Union[
    NumberLiteral, StringLiteral, IdentifierIR, CallIR, ExpressionStatementIR, ProgramIR,
]


class IRVisitor(ABC, Generic[T]):
    """
    Visitor over every target node kind.

    All methods are abstract, so a visitor that forgets a kind cannot be
    instantiated.
    """

    @abstractmethod
    def visit_number_literal(self, node: NumberLiteral) -> T:
        raise NotImplementedError

    @abstractmethod
    def visit_string_literal(self, node: StringLiteral) -> T:
        raise NotImplementedError

    @abstractmethod
    def visit_identifier(self, node: IdentifierIR) -> T:
        raise NotImplementedError

    @abstractmethod
    def visit_call(self, node: CallIR) -> T:
        raise NotImplementedError

    @abstractmethod
    def visit_expression_statement(self, node: ExpressionStatementIR) -> T:
        raise NotImplementedError

    @abstractmethod
    def visit_program(self, node: ProgramIR) -> T:
        raise NotImplementedError
