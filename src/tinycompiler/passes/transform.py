"""
AST -> IR Transform

Rewrites the source AST into the target tree by driving the generic
traverser with a fixed visitor. Nothing is returned up the walk; instead
each callback appends into an output slot (the target list its result
belongs in) that arrives as the traversal state:

- the root Program's slot is the new ProgramIR's body
- a CallExpression builds a CallIR and hands its `args` list to its children
- literals are copied into their parent's slot

Top-level calls are wrapped in ExpressionStatementIR; calls nested in
another call's arguments stay bare expressions.
"""

import logging
from typing import List, Optional

from .traverse import Visitor, VisitorMethods, traverse
from ..ir.nodes import CallIR, ExpressionStatementIR, IdentifierIR, ProgramIR, TargetNode
from ..shared.nodes import CallExpression, NumberLiteral, Program, SourceNode, StringLiteral

logger = logging.getLogger(__name__)

OutputSlot = List[TargetNode]


def _enter_number(node: NumberLiteral, parent: Optional[SourceNode], slot: OutputSlot) -> None:
    slot.append(NumberLiteral(node.value, node.location))


def _enter_string(node: StringLiteral, parent: Optional[SourceNode], slot: OutputSlot) -> None:
    slot.append(StringLiteral(node.value, node.location))


def _enter_call(node: CallExpression, parent: Optional[SourceNode], slot: OutputSlot) -> OutputSlot:
    call = CallIR(IdentifierIR(node.name, node.location), [], node.location)

    if isinstance(parent, CallExpression):
        slot.append(call)
    else:
        slot.append(ExpressionStatementIR(call))

    # Children of this call append into its argument list
    return call.args


TRANSFORM_VISITOR = Visitor(
    number_literal=VisitorMethods(enter=_enter_number),
    string_literal=VisitorMethods(enter=_enter_string),
    call_expression=VisitorMethods(enter=_enter_call),
)


def transform(ast: Program) -> ProgramIR:
    """Build a fresh target tree from `ast`; the input is left untouched."""
    program = ProgramIR([], ast.location)
    traverse(ast, TRANSFORM_VISITOR, program.body)
    logger.debug(f"Transformed {len(ast.body)} top-level expressions into {len(program.body)} IR nodes")
    return program
