"""
S-Expression Serialization
==========================

Canonical S-expression form of token streams, the source AST and the
target tree, for the CLI's --emit modes, debug dumps and tests.

    (program
      (expression-statement
        (call (identifier "add") (number "2") (call (identifier "sub") (number "4")))))

Uses structured sexpr (nested lists + sexpdata.Symbol), then pretty-prints.
Only the target tree reads back (`deserialize_ir`).
"""

from typing import Any, Callable, Dict, List, Sequence

import sexpdata

from .nodes import CallIR, ExpressionStatementIR, IdentifierIR, ProgramIR, TargetNode
from ..frontend.lexer import Token
from ..shared.nodes import CallExpression, NumberLiteral, Program, SourceNode, StringLiteral


def _sym(s: str) -> sexpdata.Symbol:
    return sexpdata.Symbol(s)


def _pretty_dumps(sexpr: Any, indent: int = 0, indent_str: str = "  ", max_line: int = 100) -> str:
    """
    Pretty-print structured sexpr. Keeps short forms on one line; breaks only when needed.
    """
    # Check Symbol before str (sexpdata.Symbol subclasses str)
    if isinstance(sexpr, sexpdata.Symbol):
        return str(sexpr)
    if isinstance(sexpr, str):
        escaped = sexpr.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'
    if isinstance(sexpr, list):
        if not sexpr:
            return "()"
        parts = [_pretty_dumps(e, indent + 1, indent_str, max_line) for e in sexpr]
        one_line = "(" + " ".join(parts) + ")"
        if len(one_line) <= max_line and "\n" not in one_line:
            return one_line
        prefix = indent_str * indent
        next_prefix = indent_str * (indent + 1)
        rest = "\n".join(next_prefix + p for p in parts[1:])
        inner = parts[0] + ("\n" + rest if rest else "")
        return f"({inner}\n{prefix})"
    return str(sexpr)


def _dumps(sexpr: Any, pretty: bool) -> str:
    if pretty:
        return _pretty_dumps(sexpr)
    return sexpdata.dumps(sexpr)


# ---------------------------------------------------------------------------
# Tokens and source AST
# ---------------------------------------------------------------------------

def serialize_tokens(tokens: Sequence[Token], pretty: bool = True) -> str:
    """`(tokens (paren "(") (name "add") ...)`"""
    sexpr: List[Any] = [_sym("tokens")]
    sexpr.extend([_sym(token.kind.value), token.text] for token in tokens)
    return _dumps(sexpr, pretty)


def _ast_to_sexpr(node: SourceNode) -> Any:
    if isinstance(node, Program):
        return [_sym("program"), *(_ast_to_sexpr(n) for n in node.body)]
    if isinstance(node, CallExpression):
        return [_sym("call-expression"), node.name, *(_ast_to_sexpr(p) for p in node.params)]
    if isinstance(node, NumberLiteral):
        return [_sym("number"), node.value]
    if isinstance(node, StringLiteral):
        return [_sym("string"), node.value]
    raise TypeError(f"not a source AST node: {type(node).__name__}")


def serialize_ast(node: SourceNode, pretty: bool = True) -> str:
    return _dumps(_ast_to_sexpr(node), pretty)


# ---------------------------------------------------------------------------
# Target tree
# ---------------------------------------------------------------------------

class IRSerializer:
    """Target tree -> structured sexpr (nested lists, Symbol tags)"""

    def serialize_to_sexpr(self, node: TargetNode) -> Any:
        if isinstance(node, ProgramIR):
            return [_sym("program"), *(self.serialize_to_sexpr(n) for n in node.body)]
        if isinstance(node, ExpressionStatementIR):
            return [_sym("expression-statement"), self.serialize_to_sexpr(node.expression)]
        if isinstance(node, CallIR):
            return [
                _sym("call"),
                self.serialize_to_sexpr(node.callee),
                *(self.serialize_to_sexpr(a) for a in node.args),
            ]
        if isinstance(node, IdentifierIR):
            return [_sym("identifier"), node.name]
        if isinstance(node, NumberLiteral):
            return [_sym("number"), node.value]
        if isinstance(node, StringLiteral):
            return [_sym("string"), node.value]
        raise TypeError(f"not a target tree node: {type(node).__name__}")


def serialize_ir(node: TargetNode, pretty: bool = True) -> str:
    """
    Serialize a target node to an S-expression string.

    Args:
        node: target node to serialize
        pretty: Use pretty-printed format (default True). Set False for compact single-line.
    """
    return _dumps(IRSerializer().serialize_to_sexpr(node), pretty)


class IRDeserializer:
    """Structured sexpr -> target tree. Locations are not serialized."""

    def __init__(self):
        self._handlers: Dict[str, Callable[[list], TargetNode]] = {
            "program": self._deserialize_program,
            "expression-statement": self._deserialize_expression_statement,
            "call": self._deserialize_call,
            "identifier": self._deserialize_identifier,
            "number": self._deserialize_number,
            "string": self._deserialize_string,
        }

    def deserialize(self, sexpr: Any) -> TargetNode:
        if not isinstance(sexpr, list) or not sexpr or not isinstance(sexpr[0], sexpdata.Symbol):
            raise ValueError(f"expected a tagged list, got {sexpr!r}")
        tag = str(sexpr[0])
        handler = self._handlers.get(tag)
        if handler is None:
            raise ValueError(f"unknown IR tag {tag!r}")
        return handler(sexpr[1:])

    def _deserialize_program(self, tail: list) -> ProgramIR:
        return ProgramIR([self.deserialize(x) for x in tail])

    def _deserialize_expression_statement(self, tail: list) -> ExpressionStatementIR:
        if len(tail) != 1:
            raise ValueError("expression-statement takes exactly one expression")
        return ExpressionStatementIR(self.deserialize(tail[0]))

    def _deserialize_call(self, tail: list) -> CallIR:
        if not tail:
            raise ValueError("call requires a callee")
        callee = self.deserialize(tail[0])
        if not isinstance(callee, IdentifierIR):
            raise ValueError("call callee must be an identifier")
        return CallIR(callee, [self.deserialize(x) for x in tail[1:]])

    def _deserialize_identifier(self, tail: list) -> IdentifierIR:
        return IdentifierIR(self._text(tail, "identifier"))

    def _deserialize_number(self, tail: list) -> NumberLiteral:
        return NumberLiteral(self._text(tail, "number"))

    def _deserialize_string(self, tail: list) -> StringLiteral:
        return StringLiteral(self._text(tail, "string"))

    @staticmethod
    def _text(tail: list, tag: str) -> str:
        if len(tail) != 1 or not isinstance(tail[0], str) or isinstance(tail[0], sexpdata.Symbol):
            raise ValueError(f"{tag} takes exactly one string payload")
        return tail[0]


def deserialize_ir(sexpr_str: str) -> TargetNode:
    """
    Deserialize S-expression string to a target node.
    """
    return IRDeserializer().deserialize(sexpdata.loads(sexpr_str))
