# object.py
"""Runtime objects: values, callables and control signals."""

from dataclasses import dataclass

from .errors import ValueTypeError


class Undefined:
    """Marker bound to procedure parameters that received no argument."""
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self): return "undefined"
    def __bool__(self): return False

UNDEFINED = Undefined()


def to_number(value):
    """Coerce a native result to the language's numeric value."""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        return value
    if value is None:
        return 0
    raise ValueTypeError(value)


def is_truthy(value):
    return to_number(value) != 0


# ---- Control signals ---------------------------------------------------------

class Signal:
    """Out-of-band outcome of a statement or expression (return/break/end)."""
    kind = "signal"

    def __repr__(self):
        return f"{self.__class__.__name__}()"

class ReturnSignal(Signal):
    kind = "return"

    def __init__(self, value=0):
        self.value = value

    def __repr__(self):
        return f"ReturnSignal({self.value!r})"

class BreakSignal(Signal):
    kind = "break"

class EndSignal(Signal):
    kind = "end"


def is_signal(obj):
    return isinstance(obj, Signal)


# ---- Callables -------------------------------------------------------------

class Procedure:
    """A user-defined procedure bound to the interpreter and run that defined it."""

    def __init__(self, statement, interpreter, env):
        self.statement = statement
        self.interpreter = interpreter
        self.env = env

    @property
    def name(self):
        return self.statement.name

    @property
    def parameters(self):
        return self.statement.parameters

    async def __call__(self, *args):
        return await self.interpreter.invoke_procedure(self, args)

    def __repr__(self):
        params = ", ".join(self.parameters)
        return f"<procedure {self.name}({params})>"


# ---- Events and results ----------------------------------------------------

@dataclass(frozen=True)
class Position:
    line: int
    column: int


@dataclass
class RunResult:
    ended: bool = False
    statements: int = 0
