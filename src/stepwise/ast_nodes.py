# src/stepwise/ast_nodes.py
"""Syntax tree node classes and the loader for the parser's JSON output."""

import json

from .errors import UnknownNodeKindError

UNARY_OPERATORS = ("not", "negate")
BINARY_OPERATORS = (
    "or", "and",
    "multiply", "divide", "add", "subtract",
    "eq", "neq", "lt", "lte", "gt", "gte",
)

# Symbols used by the parser mapped to canonical operator names
_UNARY_SYMBOLS = {"not": "not", "-": "negate"}
_BINARY_SYMBOLS = {
    "or": "or",
    "and": "and",
    "*": "multiply",
    "/": "divide",
    "+": "add",
    "-": "subtract",
    "==": "eq",
    "~=": "neq",
    "<": "lt",
    "<=": "lte",
    ">": "gt",
    ">=": "gte",
}


# Base classes
class Node:
    def __repr__(self):
        return f"{self.__class__.__name__}()"

    def __str__(self):
        return self.__repr__()

class Statement(Node): pass
class Expression(Node): pass

class Program(Node):
    def __init__(self, body=None):
        self.body = list(body or [])

    def __repr__(self):
        return f"Program(body={len(self.body)})"

# Statement Nodes
class CallStatement(Statement):
    def __init__(self, expr):
        self.expr = expr

    def __repr__(self):
        return f"CallStatement(expr={self.expr})"

class ProcedureStatement(Statement):
    """Procedure definition.

    proc add(a, b) { return(a + b) }
    """
    def __init__(self, name, parameters, body):
        self.name = name
        self.parameters = list(parameters)
        self.body = list(body)

    def __repr__(self):
        params = ", ".join(self.parameters)
        return f"ProcedureStatement(name={self.name}, parameters=[{params}])"

class InfiniteLoopStatement(Statement):
    def __init__(self, body):
        self.body = list(body)

    def __repr__(self):
        return f"InfiniteLoopStatement(body={len(self.body)})"

class WhileLoopStatement(Statement):
    def __init__(self, test, body):
        self.test = test
        self.body = list(body)

    def __repr__(self):
        return f"WhileLoopStatement(test={self.test})"

class CountLoopStatement(Statement):
    def __init__(self, count, body):
        self.count = count
        self.body = list(body)

    def __repr__(self):
        return f"CountLoopStatement(count={self.count})"

class ConditionalBranch(Node):
    def __init__(self, test, then):
        self.test = test
        self.then = list(then)

    def __repr__(self):
        return f"ConditionalBranch(test={self.test})"

class ConditionalStatement(Statement):
    """if / else-if chain with a required otherwise block."""
    def __init__(self, tests, otherwise=None):
        self.tests = list(tests)
        self.otherwise = list(otherwise or [])

    def __repr__(self):
        return f"ConditionalStatement(tests={len(self.tests)})"

# Expression Nodes
class Literal(Expression):
    def __init__(self, value):
        self.value = value

    def __repr__(self):
        return f"Literal({self.value!r})"

class UnaryExpression(Expression):
    def __init__(self, operator, operand):
        self.operator = operator
        self.operand = operand

    def __repr__(self):
        return f"UnaryExpression({self.operator} {self.operand})"

class BinaryExpression(Expression):
    def __init__(self, operator, left, right):
        self.operator = operator
        self.left = left
        self.right = right

    def __repr__(self):
        return f"BinaryExpression({self.left} {self.operator} {self.right})"

class CallExpression(Expression):
    """Call of a native (``native_name``) or of a user/local name (``name``)."""
    def __init__(self, name=None, arguments=None, native_name=None, line=0, column=0):
        self.name = name
        self.native_name = native_name
        self.arguments = list(arguments or [])
        self.line = line
        self.column = column

    @property
    def target(self):
        return self.native_name if self.native_name else self.name

    def __repr__(self):
        prefix = "native " if self.native_name else ""
        return f"CallExpression({prefix}{self.target}, arguments={len(self.arguments)})"


# ---------------------------------------------------------------------------
# Loading the parser's JSON representation
# ---------------------------------------------------------------------------

def _operator_name(raw, symbols, canonical):
    op = raw.get("type") if isinstance(raw, dict) else raw
    if op in canonical:
        return op
    if op in symbols:
        return symbols[op]
    raise UnknownNodeKindError(op, where="operator")


def _block(items):
    return [_statement(item) for item in (items or [])]


def _statement(data):
    kind = data.get("type")
    if kind == "CallStatement":
        return CallStatement(_expression(data["expr"]))
    if kind == "ProcedureStatement":
        params = data.get("parameters", data.get("arguments", []))
        return ProcedureStatement(data["name"], params, _block(data.get("body")))
    if kind == "InfiniteLoopStatement":
        return InfiniteLoopStatement(_block(data.get("body")))
    if kind == "WhileLoopStatement":
        return WhileLoopStatement(_expression(data["test"]), _block(data.get("body")))
    if kind == "CountLoopStatement":
        return CountLoopStatement(_expression(data["count"]), _block(data.get("body")))
    if kind == "ConditionalStatement":
        branches = [
            ConditionalBranch(_expression(entry["test"]), _block(entry.get("then")))
            for entry in data["tests"]
        ]
        return ConditionalStatement(branches, _block(data.get("otherwise")))
    raise UnknownNodeKindError(kind, where="statement")


def _expression(data):
    kind = data.get("type")
    if kind == "Literal":
        return Literal(data["value"])
    if kind == "UnaryExpression":
        operand = data["operand"] if "operand" in data else data["value"]
        return UnaryExpression(
            _operator_name(data["operator"], _UNARY_SYMBOLS, UNARY_OPERATORS),
            _expression(operand),
        )
    if kind == "BinaryExpression":
        return BinaryExpression(
            _operator_name(data["operator"], _BINARY_SYMBOLS, BINARY_OPERATORS),
            _expression(data["left"]),
            _expression(data["right"]),
        )
    if kind == "CallExpression":
        return CallExpression(
            name=data.get("name"),
            native_name=data.get("nativeName", data.get("native_name")),
            arguments=[_expression(arg) for arg in data.get("arguments", [])],
            line=data.get("line", 0),
            column=data.get("column", 0),
        )
    raise UnknownNodeKindError(kind, where="expression")


def from_dict(data):
    """Build a :class:`Program` from the parser's JSON-compatible tree."""
    if data.get("type", "Program") != "Program":
        raise UnknownNodeKindError(data.get("type"), where="program")
    return Program(_block(data.get("body")))


def load_program(path):
    with open(path, "r", encoding="utf-8") as f:
        return from_dict(json.load(f))
