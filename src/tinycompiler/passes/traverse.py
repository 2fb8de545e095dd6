"""
Traverser

Generic depth-first walk over the source AST. For each node:

1. call the visitor's `enter` for that node kind (if any)
2. walk the children in stored order, with this node as their parent
3. call the visitor's `exit` for that node kind (if any)

Callbacks receive `(node, parent, state)`; `parent` is None only for the
root. `state` is an explicit accumulator threaded down the walk: whatever
an `enter` callback returns (other than None) becomes the state its
children see. The traverser itself allocates no nodes and keeps nothing
between calls.

Usage:
    def count_calls(node, parent, seen):
        seen.append(node.name)

    names = []
    traverse(ast, Visitor(call_expression=VisitorMethods(enter=count_calls)), names)
"""

from dataclasses import dataclass
from typing import Any, Callable, Generic, List, Optional, Tuple, TypeVar

from typing_extensions import assert_never

from ..shared.nodes import (
    CallExpression,
    Expression,
    NumberLiteral,
    Program,
    SourceNode,
    StringLiteral,
)

N = TypeVar('N')

Callback = Callable[[N, Optional[SourceNode], Any], Any]


@dataclass(frozen=True)
class VisitorMethods(Generic[N]):
    """Optional enter/exit pair for one node kind"""
    enter: Optional[Callback] = None
    exit: Optional[Callback] = None


@dataclass(frozen=True)
class Visitor:
    """One optional VisitorMethods entry per source node kind"""
    program: Optional[VisitorMethods[Program]] = None
    call_expression: Optional[VisitorMethods[CallExpression]] = None
    number_literal: Optional[VisitorMethods[NumberLiteral]] = None
    string_literal: Optional[VisitorMethods[StringLiteral]] = None


def _dispatch(node: SourceNode, visitor: Visitor) -> Tuple[Optional[VisitorMethods], Tuple[Expression, ...]]:
    """Visitor entry and children for `node`, matched on its concrete kind."""
    if isinstance(node, Program):
        return visitor.program, node.body
    if isinstance(node, CallExpression):
        return visitor.call_expression, node.params
    if isinstance(node, NumberLiteral):
        return visitor.number_literal, ()
    if isinstance(node, StringLiteral):
        return visitor.string_literal, ()
    assert_never(node)


_ENTER, _EXIT = 0, 1

# (phase, node, parent, state)
Frame = Tuple[int, SourceNode, Optional[SourceNode], Any]


def traverse(root: SourceNode, visitor: Visitor, state: Any = None) -> None:
    """
    Walk `root` depth-first, invoking `visitor` callbacks on entry and exit.

    Uses an explicit stack of pending enter/exit frames, so arbitrarily deep
    trees are walked without recursion.
    """
    stack: List[Frame] = [(_ENTER, root, None, state)]
    while stack:
        phase, node, parent, node_state = stack.pop()
        methods, children = _dispatch(node, visitor)

        if phase == _EXIT:
            if methods is not None and methods.exit is not None:
                methods.exit(node, parent, node_state)
            continue

        child_state = node_state
        if methods is not None and methods.enter is not None:
            result = methods.enter(node, parent, node_state)
            if result is not None:
                child_state = result

        stack.append((_EXIT, node, parent, node_state))
        stack.extend((_ENTER, child, node, child_state) for child in reversed(children))
