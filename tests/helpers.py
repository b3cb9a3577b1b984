"""Tree builders and a recording native table shared by the test-suite."""
import asyncio

from stepwise.ast_nodes import (
    Program, CallStatement, ProcedureStatement, InfiniteLoopStatement,
    WhileLoopStatement, CountLoopStatement, ConditionalStatement,
    ConditionalBranch, Literal, UnaryExpression, BinaryExpression,
    CallExpression,
)
from stepwise.evaluator import Interpreter


def num(value):
    return Literal(value)


def native(name, *args, line=0, column=0):
    return CallExpression(native_name=name, arguments=args, line=line, column=column)


def call(name, *args, line=0, column=0):
    return CallExpression(name=name, arguments=args, line=line, column=column)


def binop(op, left, right):
    return BinaryExpression(op, left, right)


def unop(op, operand):
    return UnaryExpression(op, operand)


def do(expr):
    return CallStatement(expr)


def proc(name, params, body):
    return ProcedureStatement(name, params, body)


def forever(*body):
    return InfiniteLoopStatement(body)


def while_(test, *body):
    return WhileLoopStatement(test, body)


def repeat(count, *body):
    return CountLoopStatement(count, body)


def if_(branches, otherwise=()):
    return ConditionalStatement(
        [ConditionalBranch(test, then) for test, then in branches], otherwise)


class Recorder:
    """Native table recording ``log`` calls and published positions."""

    def __init__(self):
        self.logged = []
        self.positions = []
        self.state = {}
        self.natives = {"log": self._log}

    def _log(self, *values):
        self.logged.append(values[0] if len(values) == 1 else values)
        return 0

    def add(self, name, fn):
        self.natives[name] = fn
        return fn

    def interpreter(self, config=None):
        interp = Interpreter(self.natives, config)
        interp.on("position", self.positions.append)
        return interp

    def run(self, *body, config=None):
        return asyncio.run(self.interpreter(config).run(Program(body)))

    def lines(self):
        return [p.line for p in self.positions]


def evaluate(expr, recorder=None):
    """Run ``log(expr)`` and return the logged value."""
    recorder = recorder or Recorder()
    recorder.run(do(native("log", expr)))
    return recorder.logged[-1]
