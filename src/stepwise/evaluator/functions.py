# src/stepwise/evaluator/functions.py
import inspect
import logging

from ..errors import (
    CallDepthExceededError, NotCallableError, UnresolvedReferenceError,
)
from ..object import (
    BreakSignal, EndSignal, Position, ReturnSignal, is_signal,
)

logger = logging.getLogger(__name__)

CONTROL_NATIVES = ("true", "false", "return", "break", "end")


class FunctionEvaluatorMixin:
    """Handles call expressions, procedure invocation and the control natives."""

    def __init__(self, natives=None):
        self.natives = dict(natives) if natives is not None else {}
        self._register_control_natives()

    def _register_control_natives(self):
        def _true(*a):
            return 1

        def _false(*a):
            return 0

        def _return(*a):
            # omitted value returns 0
            return ReturnSignal(a[0] if a and a[0] else 0)

        def _break(*a):
            return BreakSignal()

        def _end(*a):
            return EndSignal()

        for name, fn in zip(CONTROL_NATIVES, (_true, _false, _return, _break, _end)):
            if name in self.natives:
                logger.debug("host native %r replaced by control primitive", name)
            self.natives[name] = fn

    def resolve_callee(self, node, env, frame):
        if node.native_name:
            try:
                return self.natives[node.native_name]
            except KeyError:
                raise UnresolvedReferenceError(node.native_name, native=True) from None
        return env.resolve_call_target(node.name, frame)

    async def eval_call_expression(self, node, env, frame):
        fn = self.resolve_callee(node, env, frame)

        args = []
        for arg_node in node.arguments:
            arg = await self.eval_expression(arg_node, env, frame)
            if is_signal(arg):
                return arg
            args.append(arg)

        self._emit("position", Position(node.line, node.column))

        if not callable(fn):
            if args:
                raise NotCallableError(node.target, fn)
            return fn
        return await self.apply_function(fn, args)

    async def apply_function(self, fn, args):
        logger.debug("apply %r with %r", fn, args)
        result = fn(*args)
        if inspect.isawaitable(result):
            result = await result
        if isinstance(result, bool):
            return int(result)
        return result

    async def invoke_procedure(self, procedure, args):
        env = procedure.env
        limit = self.config.max_call_depth
        if limit and env.call_depth >= limit:
            raise CallDepthExceededError(procedure.name, limit)

        frame = env.new_frame(procedure.parameters, args)
        env.call_depth += 1
        try:
            res = await self.eval_block(procedure.statement.body, env, frame)
        except RecursionError:
            raise CallDepthExceededError(procedure.name, limit) from None
        finally:
            env.call_depth -= 1

        if isinstance(res, ReturnSignal):
            logger.debug("return %r intercepted by %s", res.value, procedure.name)
            return res.value
        if is_signal(res):
            # break/end are not scoped to the procedure boundary
            return res
        return 0
