"""Host natives used by the command line runner."""

import asyncio
import random as _random
import time as _time


def build_stdlib(console):
    """Return a fresh native table writing output through ``console``.

    The interpreter adds the control primitives on top of this table.
    """

    def _print(*a):
        console.print(" ".join(str(v) for v in a), markup=False, highlight=False)
        return 0

    async def _sleep(*a):
        ms = a[0] if a else 0
        await asyncio.sleep(max(ms, 0) / 1000)
        return 0

    def _rand(*a):
        upper = int(a[0]) if a else 2
        if upper <= 0:
            return 0
        return _random_source.randrange(upper)

    def _now(*a):
        return int(_time.time() * 1000)

    _random_source = _random.Random()

    return {
        "print": _print,
        "sleep": _sleep,
        "random": _rand,
        "time": _now,
    }
