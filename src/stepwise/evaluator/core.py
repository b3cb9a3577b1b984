# src/stepwise/evaluator/core.py
import logging
import sys

from .. import event_loop
from ..ast_nodes import Program
from ..config import RuntimeConfig
from ..environment import Environment
from ..errors import UnknownNodeKindError, UnmatchedSignalError
from ..object import EndSignal, RunResult, is_signal
from .expressions import ExpressionEvaluatorMixin
from .statements import StatementEvaluatorMixin
from .functions import FunctionEvaluatorMixin

logger = logging.getLogger(__name__)

# Python frames one procedure level can occupy (block, statement, call, invoke)
FRAMES_PER_CALL = 16
RECURSION_HEADROOM = 1000


def reserve_recursion(max_call_depth):
    """Raise the interpreter recursion limit so ``max_call_depth`` levels fit."""
    if not max_call_depth:
        return
    needed = max_call_depth * FRAMES_PER_CALL + RECURSION_HEADROOM
    if sys.getrecursionlimit() < needed:
        logger.debug("raising recursion limit to %d", needed)
        sys.setrecursionlimit(needed)


class Interpreter(ExpressionEvaluatorMixin, StatementEvaluatorMixin, FunctionEvaluatorMixin):
    """Runs a syntax tree against a table of native callables.

    Subscribe to ``"position"`` to receive a :class:`~stepwise.object.Position`
    immediately before every call is invoked::

        interp = Interpreter({"print": print})
        interp.on("position", lambda pos: ...)
        interp.run_sync(program)
    """

    def __init__(self, natives=None, config=None):
        FunctionEvaluatorMixin.__init__(self, natives)
        self.config = config or RuntimeConfig()
        self._event_handlers = {}

    # ── Events ─────────────────────────────────────────────────────────

    def on(self, event, handler):
        """Register an event handler. The evaluator emits ``position``."""
        self._event_handlers.setdefault(event, []).append(handler)
        return handler

    def off(self, event, handler):
        handlers = self._event_handlers.get(event, [])
        if handler in handlers:
            handlers.remove(handler)

    def _emit(self, event, data=None):
        for handler in list(self._event_handlers.get(event, [])):
            try:
                handler(data)
            except Exception as e:
                logger.error("Event handler error (%s): %s", event, e)

    # ── Entry points ───────────────────────────────────────────────────

    async def run(self, program):
        """Execute ``program`` with a fresh global table and an empty frame."""
        if not isinstance(program, Program):
            raise UnknownNodeKindError(type(program).__name__, where="program")

        reserve_recursion(self.config.max_call_depth)
        env = Environment()
        logger.debug("run: %d top-level statements", len(program.body))
        res = await self.eval_block(program.body, env, {})

        if isinstance(res, EndSignal):
            logger.debug("run: end() after %d statements", env.executed)
            return RunResult(ended=True, statements=env.executed)
        if is_signal(res):
            raise UnmatchedSignalError(res)
        return RunResult(ended=False, statements=env.executed)

    def run_sync(self, program, timeout=None):
        """Blocking wrapper that drives :meth:`run` on the shared event loop.

        On timeout the run is cancelled at its next suspension point (an async
        native or a ``yield_interval`` yield) and ``TimeoutError`` is raised.
        """
        return event_loop.submit(self.run(program), timeout=timeout)


def run(program, natives=None, config=None):
    """Convenience entry point: build an interpreter and run synchronously."""
    return Interpreter(natives, config).run_sync(program)
