# src/stepwise/evaluator/expressions.py
import logging
import math
import operator

from ..ast_nodes import Literal, UnaryExpression, BinaryExpression, CallExpression
from ..errors import DivisionByZeroError, StepwiseArithmeticError, UnknownNodeKindError
from ..object import is_signal, to_number

logger = logging.getLogger(__name__)


def truncating_divide(a, b):
    """Integer division rounding toward zero: ``-5 / 2 == -2``."""
    if b == 0:
        raise DivisionByZeroError(a)
    if isinstance(a, int) and isinstance(b, int):
        q = abs(a) // abs(b)
        return q if (a < 0) == (b < 0) else -q
    try:
        return math.trunc(a / b)
    except (OverflowError, ValueError) as e:
        raise StepwiseArithmeticError(f"Cannot divide {a!r} by {b!r}: {e}") from e


def _compare(op):
    return lambda a, b: 1 if op(a, b) else 0


ARITHMETIC_OPERATORS = {
    "multiply": operator.mul,
    "divide": truncating_divide,
    "add": operator.add,
    "subtract": operator.sub,
    "eq": _compare(operator.eq),
    "neq": _compare(operator.ne),
    "lt": _compare(operator.lt),
    "lte": _compare(operator.le),
    "gt": _compare(operator.gt),
    "gte": _compare(operator.ge),
}


class ExpressionEvaluatorMixin:
    """Handles evaluation of expressions: literals, operators and calls."""

    async def eval_expression(self, node, env, frame):
        node_type = type(node)

        if node_type is Literal:
            return node.value

        elif node_type is CallExpression:
            return await self.eval_call_expression(node, env, frame)

        elif node_type is BinaryExpression:
            return await self.eval_binary_expression(node, env, frame)

        elif node_type is UnaryExpression:
            return await self.eval_unary_expression(node, env, frame)

        raise UnknownNodeKindError(node_type.__name__, where="expression")

    async def eval_unary_expression(self, node, env, frame):
        value = await self.eval_expression(node.operand, env, frame)
        if is_signal(value):
            return value

        if node.operator == "not":
            return 0 if to_number(value) else 1
        elif node.operator == "negate":
            # identity: the sign is deliberately left as-is
            return value

        raise UnknownNodeKindError(node.operator, where="unary operator")

    async def eval_binary_expression(self, node, env, frame):
        op = node.operator

        # Logical operators (short-circuiting)
        if op == "or":
            left = await self.eval_expression(node.left, env, frame)
            if is_signal(left):
                return left
            left = to_number(left)
            if left:
                return left
            right = await self.eval_expression(node.right, env, frame)
            return right if is_signal(right) else to_number(right)

        elif op == "and":
            left = await self.eval_expression(node.left, env, frame)
            if is_signal(left):
                return left
            if not to_number(left):
                return 0
            right = await self.eval_expression(node.right, env, frame)
            return right if is_signal(right) else to_number(right)

        fn = ARITHMETIC_OPERATORS.get(op)
        if fn is None:
            raise UnknownNodeKindError(op, where="binary operator")

        left = await self.eval_expression(node.left, env, frame)
        if is_signal(left):
            return left
        right = await self.eval_expression(node.right, env, frame)
        if is_signal(right):
            return right

        result = fn(to_number(left), to_number(right))
        logger.debug("%r %s %r -> %r", left, op, right, result)
        return result
