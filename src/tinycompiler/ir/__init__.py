"""
Target tree (IR) and its S-expression form
"""

from .nodes import (
    IRNode, IdentifierIR, CallIR, ExpressionStatementIR, ProgramIR, IRVisitor,
    ExpressionIR, TargetNode,
)
from .serialization import serialize_ir, deserialize_ir, serialize_ast, serialize_tokens
