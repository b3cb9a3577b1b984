"""
Stepwise error hierarchy.

Every failure the evaluator can produce derives from :class:`StepwiseError`.
None of these are interceptable by the language itself; they abort the
current run and reach the caller of ``Interpreter.run``.
"""


class StepwiseError(Exception):
    """Base class for all evaluator failures."""


class UnresolvedReferenceError(StepwiseError):
    """A call target (native or user/local name) does not resolve."""

    def __init__(self, name, native=False):
        self.name = name
        self.native = native
        kind = "native" if native else "variable"
        super().__init__(f"Unknown {kind} '{name}'.")


class NotCallableError(StepwiseError):
    """A plain value was invoked with arguments."""

    def __init__(self, name, value):
        self.name = name
        self.value = value
        super().__init__(f"'{name}' is not callable (value {value!r}).")


class UnmatchedSignalError(StepwiseError):
    """A break or return escaped the top of the program."""

    def __init__(self, signal):
        self.signal = signal
        super().__init__(f"Unhandled {signal.kind} outside of any handler.")


class StepwiseArithmeticError(StepwiseError):
    pass


class DivisionByZeroError(StepwiseArithmeticError):
    def __init__(self, dividend):
        self.dividend = dividend
        super().__init__(f"Division by zero ({dividend!r} / 0).")


class ValueTypeError(StepwiseError):
    """A non-numeric value reached an operator or a condition."""

    def __init__(self, value):
        self.value = value
        super().__init__(f"Expected a number, got {type(value).__name__} {value!r}.")


class UnknownNodeKindError(StepwiseError):
    """The syntax tree carries a node kind or operator outside the known set."""

    def __init__(self, kind, where="node"):
        self.kind = kind
        super().__init__(f"Unknown {where} kind: {kind!r}")


class CallDepthExceededError(StepwiseError):
    def __init__(self, name, limit):
        self.name = name
        self.limit = limit
        if limit:
            super().__init__(f"Call depth limit {limit} exceeded while calling '{name}'.")
        else:
            super().__init__(f"Recursion too deep while calling '{name}'.")


class ConfigError(StepwiseError):
    pass
