"""
Code Generator

Renders the target tree to text, one rule per node kind:

    NumberLiteral        2
    StringLiteral        "x"           (no escaping)
    IdentifierIR         add
    CallIR               add(2, "x")
    ExpressionStatementIR add(2, "x");
    ProgramIR            statements joined by newlines

`render` walks the tree post-order with an explicit stack, so nesting depth
is not limited by the interpreter's recursion limit. Each visit method runs
after its children and takes their rendered text off the results stack.
"""

import logging
from typing import List, Sequence, Tuple

from ..ir.nodes import (
    CallIR,
    ExpressionStatementIR,
    IdentifierIR,
    IRVisitor,
    ProgramIR,
    TargetNode,
)
from ..shared.nodes import NumberLiteral, StringLiteral
from ..utils.config import (
    ARGUMENT_SEPARATOR,
    STATEMENT_SEPARATOR,
    STATEMENT_TERMINATOR,
    STRING_QUOTE_CHAR,
)

logger = logging.getLogger(__name__)


def _children(node: TargetNode) -> Sequence[TargetNode]:
    if isinstance(node, CallIR):
        return [node.callee, *node.args]
    if isinstance(node, ExpressionStatementIR):
        return [node.expression]
    if isinstance(node, ProgramIR):
        return node.body
    return ()


class CodeGenerator(IRVisitor[str]):
    """One instance can render any number of trees, one at a time."""

    def __init__(self):
        self._rendered: List[str] = []

    def render(self, root: TargetNode) -> str:
        self._rendered = []
        stack: List[Tuple[TargetNode, bool]] = [(root, False)]
        while stack:
            node, children_done = stack.pop()
            children = _children(node)
            if children and not children_done:
                stack.append((node, True))
                stack.extend((child, False) for child in reversed(children))
                continue
            self._rendered.append(node.accept(self))
        return self._rendered.pop()

    def _take(self, count: int) -> List[str]:
        if count == 0:
            return []
        taken = self._rendered[-count:]
        del self._rendered[-count:]
        return taken

    def visit_number_literal(self, node: NumberLiteral) -> str:
        return node.value

    def visit_string_literal(self, node: StringLiteral) -> str:
        return f"{STRING_QUOTE_CHAR}{node.value}{STRING_QUOTE_CHAR}"

    def visit_identifier(self, node: IdentifierIR) -> str:
        return node.name

    def visit_call(self, node: CallIR) -> str:
        callee, *args = self._take(len(node.args) + 1)
        return f"{callee}({ARGUMENT_SEPARATOR.join(args)})"

    def visit_expression_statement(self, node: ExpressionStatementIR) -> str:
        return self._take(1)[0] + STATEMENT_TERMINATOR

    def visit_program(self, node: ProgramIR) -> str:
        return STATEMENT_SEPARATOR.join(self._take(len(node.body)))


def generate(node: TargetNode) -> str:
    """Render a target node and its subtree to text."""
    output = CodeGenerator().render(node)
    logger.debug(f"Generated {len(output)} chars for {type(node).__name__}")
    return output
