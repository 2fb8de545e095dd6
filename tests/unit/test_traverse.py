"""
Tests for the generic traverser: visit order, parents and state threading.
"""

from tests.test_utils import ADD_SUBTRACT, parse_source
from tinycompiler.passes.traverse import Visitor, VisitorMethods, traverse
from tinycompiler.shared.nodes import CallExpression, NumberLiteral, Program


def _label(node):
    if node is None:
        return None
    if isinstance(node, Program):
        return "program"
    if isinstance(node, CallExpression):
        return node.name
    return node.value


def _recording_visitor(events):
    def methods():
        return VisitorMethods(
            enter=lambda node, parent, state: events.append(("enter", _label(node), _label(parent))),
            exit=lambda node, parent, state: events.append(("exit", _label(node), _label(parent))),
        )
    return Visitor(
        program=methods(),
        call_expression=methods(),
        number_literal=methods(),
        string_literal=methods(),
    )


class TestTraversalOrder:

    def test_enter_and_exit_order(self):
        events = []
        traverse(parse_source(ADD_SUBTRACT), _recording_visitor(events))
        assert events == [
            ("enter", "program", None),
            ("enter", "add", "program"),
            ("enter", "2", "add"),
            ("exit", "2", "add"),
            ("enter", "subtract", "add"),
            ("enter", "4", "subtract"),
            ("exit", "4", "subtract"),
            ("enter", "2", "subtract"),
            ("exit", "2", "subtract"),
            ("exit", "subtract", "add"),
            ("exit", "add", "program"),
            ("exit", "program", None),
        ]

    def test_parent_is_none_only_for_root(self):
        events = []
        traverse(parse_source('(a "s" (b)) (c)'), _recording_visitor(events))
        roots = [e for e in events if e[2] is None]
        assert roots == [("enter", "program", None), ("exit", "program", None)]

    def test_subtree_root_has_no_parent(self):
        events = []
        call = parse_source("(a 1)").body[0]
        traverse(call, _recording_visitor(events))
        assert events[0] == ("enter", "a", None)
        assert events[-1] == ("exit", "a", None)

    def test_unregistered_kinds_are_skipped(self):
        seen = []
        visitor = Visitor(number_literal=VisitorMethods(enter=lambda n, p, s: seen.append(n.value)))
        traverse(parse_source('(a 1 "x" (b 2))'), visitor)
        assert seen == ["1", "2"]

    def test_empty_visitor(self):
        ast = parse_source(ADD_SUBTRACT)
        traverse(ast, Visitor())
        assert ast == parse_source(ADD_SUBTRACT)


class TestTraversalState:
    """enter's return value becomes the children's state; exit sees its own"""

    def test_depth_threaded_to_children(self):
        depths = {}

        def enter_call(node, parent, depth):
            depths[node.name] = depth
            return depth + 1

        def enter_number(node, parent, depth):
            depths[node.value] = depth

        visitor = Visitor(
            call_expression=VisitorMethods(enter=enter_call),
            number_literal=VisitorMethods(enter=enter_number),
        )
        traverse(parse_source("(a 1 (b 2)) (c 3)"), visitor, 0)
        assert depths == {"a": 0, "1": 1, "b": 1, "2": 2, "c": 0, "3": 1}

    def test_exit_receives_state_it_was_entered_with(self):
        exits = []
        visitor = Visitor(
            call_expression=VisitorMethods(
                enter=lambda node, parent, depth: depth + 1,
                exit=lambda node, parent, depth: exits.append((node.name, depth)),
            ),
        )
        traverse(parse_source("(a (b (c)))"), visitor, 0)
        assert exits == [("c", 2), ("b", 1), ("a", 0)]

    def test_none_return_keeps_state(self):
        seen = []
        visitor = Visitor(
            call_expression=VisitorMethods(enter=lambda node, parent, state: None),
            number_literal=VisitorMethods(enter=lambda node, parent, state: seen.append(state)),
        )
        traverse(parse_source("(a (b 1))"), visitor, "root")
        assert seen == ["root"]

    def test_traversal_does_not_change_the_tree(self):
        ast = parse_source('(a 1 "x" (b 2))')
        traverse(ast, Visitor(number_literal=VisitorMethods(enter=lambda n, p, s: NumberLiteral("9"))))
        assert ast == parse_source('(a 1 "x" (b 2))')


class TestTraversalDepth:

    def test_deep_tree_walked_without_recursion(self):
        depth = 5000
        node = CallExpression("f", [NumberLiteral("1")])
        for _ in range(depth - 1):
            node = CallExpression("f", [node])

        events = []
        visitor = Visitor(
            call_expression=VisitorMethods(
                enter=lambda node, parent, level: level + 1,
                exit=lambda node, parent, level: events.append(level),
            ),
            number_literal=VisitorMethods(enter=lambda node, parent, level: events.append(level)),
        )
        traverse(Program([node]), visitor, 0)

        assert events[0] == depth
        assert events[1:] == list(range(depth - 1, -1, -1))
