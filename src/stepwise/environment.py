# environment.py

import logging

from .errors import UnresolvedReferenceError
from .object import UNDEFINED

logger = logging.getLogger(__name__)


class Environment:
    """Global procedure table for one run.

    Local frames are plain dicts owned by the executing procedure call; they
    are not chained, so a procedure body never sees its caller's frame.
    ``call_depth`` and ``executed`` are the run's nesting and statement counters.
    """

    def __init__(self):
        self.store = {}
        self.call_depth = 0
        self.executed = 0

    # ---- Mapping protocol helpers -------------------------------------------------

    def __contains__(self, name):
        return name in self.store

    def __getitem__(self, name):
        return self.store[name]

    def __iter__(self):
        return iter(self.store)

    def __len__(self):
        return len(self.store)

    def keys(self):
        return self.store.keys()

    def items(self):
        return self.store.items()

    # ---- Core environment operations ---------------------------------------------

    def define_procedure(self, name, procedure):
        """Insert or replace a global binding."""
        if name in self.store:
            logger.debug("redefining procedure %s", name)
        self.store[name] = procedure

    def resolve_call_target(self, name, frame):
        """Look up ``name``: global table first, then the local frame.

        A parameter bound to the missing-argument marker counts as unresolved.
        """
        if name in self.store:
            return self.store[name]
        if frame is not None and name in frame:
            value = frame[name]
            if value is UNDEFINED:
                raise UnresolvedReferenceError(name)
            return value
        raise UnresolvedReferenceError(name)

    @staticmethod
    def new_frame(parameters, args):
        """Bind ``args`` positionally; extras are dropped, missing ones left undefined."""
        frame = {}
        for i, param in enumerate(parameters):
            frame[param] = args[i] if i < len(args) else UNDEFINED
        return frame
