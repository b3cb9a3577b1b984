"""Stepwise: an asynchronous evaluator for a small imperative language."""

from .ast_nodes import Program, from_dict, load_program
from .config import RuntimeConfig, load_config
from .errors import (
    StepwiseError, UnresolvedReferenceError, NotCallableError,
    UnmatchedSignalError, StepwiseArithmeticError, DivisionByZeroError,
    ValueTypeError, UnknownNodeKindError, CallDepthExceededError, ConfigError,
)
from .evaluator import Interpreter, run
from .object import Position, RunResult

__version__ = "0.1.0"
