# src/stepwise/evaluator/__init__.py
from .core import Interpreter, run
from .expressions import truncating_divide

__all__ = ['Interpreter', 'run', 'truncating_divide']
