# src/stepwise/evaluator/statements.py
import asyncio
import logging

from ..ast_nodes import (
    CallStatement, ProcedureStatement, InfiniteLoopStatement,
    WhileLoopStatement, CountLoopStatement, ConditionalStatement,
)
from ..errors import UnknownNodeKindError
from ..object import BreakSignal, Procedure, is_signal, is_truthy, to_number

logger = logging.getLogger(__name__)


class StatementEvaluatorMixin:
    """Block sequencing, statement dispatch, loops and conditionals."""

    async def eval_block(self, block, env, frame):
        for stmt in block:
            res = await self.eval_statement(stmt, env, frame)
            env.executed += 1
            if is_signal(res):
                logger.debug("signal %r leaves block after %s", res, type(stmt).__name__)
                return res
            interval = self.config.yield_interval
            if interval and env.executed % interval == 0:
                await asyncio.sleep(0)
        return None

    async def eval_statement(self, stmt, env, frame):
        node_type = type(stmt)
        logger.debug("statement %s", node_type.__name__)

        if node_type is CallStatement:
            res = await self.eval_call_expression(stmt.expr, env, frame)
            return res if is_signal(res) else None

        elif node_type is ProcedureStatement:
            return self.eval_procedure_statement(stmt, env)

        elif node_type is InfiniteLoopStatement:
            return await self.eval_infinite_loop(stmt, env, frame)

        elif node_type is WhileLoopStatement:
            return await self.eval_while_loop(stmt, env, frame)

        elif node_type is CountLoopStatement:
            return await self.eval_count_loop(stmt, env, frame)

        elif node_type is ConditionalStatement:
            return await self.eval_conditional(stmt, env, frame)

        raise UnknownNodeKindError(node_type.__name__, where="statement")

    def eval_procedure_statement(self, stmt, env):
        logger.debug("define procedure %s(%s)", stmt.name, ", ".join(stmt.parameters))
        env.define_procedure(stmt.name, Procedure(stmt, self, env))
        return None

    # === LOOPS ===

    async def _run_loop_body(self, stmt, env, frame):
        """Run one iteration. Returns (stop, outcome) with break consumed here."""
        res = await self.eval_block(stmt.body, env, frame)
        if isinstance(res, BreakSignal):
            logger.debug("break intercepted by %s", type(stmt).__name__)
            return True, None
        if is_signal(res):
            return True, res
        return False, None

    async def eval_infinite_loop(self, stmt, env, frame):
        while True:
            stop, res = await self._run_loop_body(stmt, env, frame)
            if stop:
                return res

    async def eval_while_loop(self, stmt, env, frame):
        while True:
            cond = await self.eval_expression(stmt.test, env, frame)
            if is_signal(cond):
                return cond
            if not is_truthy(cond):
                return None
            stop, res = await self._run_loop_body(stmt, env, frame)
            if stop:
                return res

    async def eval_count_loop(self, stmt, env, frame):
        i = 0
        while True:
            # re-read every iteration; never cached at loop entry
            count = await self.eval_expression(stmt.count, env, frame)
            if is_signal(count):
                return count
            if not i < to_number(count):
                return None
            i += 1
            stop, res = await self._run_loop_body(stmt, env, frame)
            if stop:
                return res

    # === CONDITIONALS ===

    async def eval_conditional(self, stmt, env, frame):
        for branch in stmt.tests:
            cond = await self.eval_expression(branch.test, env, frame)
            if is_signal(cond):
                return cond
            if is_truthy(cond):
                return await self.eval_block(branch.then, env, frame)
        return await self.eval_block(stmt.otherwise, env, frame)
