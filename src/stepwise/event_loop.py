"""
Stepwise shared event loop.

A single persistent asyncio loop on a daemon thread, used by synchronous
callers (``Interpreter.run_sync``, the CLI) to drive program runs without
creating a throw-away loop per run. Async hosts should ``await
Interpreter.run`` on their own loop instead.

Usage:
    from stepwise.event_loop import submit, shutdown

    result = submit(interpreter.run(program))
    shutdown()
"""

from __future__ import annotations

import asyncio
import atexit
import threading
from concurrent.futures import Future as ConcurrentFuture
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import Any, Coroutine, Optional, TypeVar

T = TypeVar("T")

# ---------------------------------------------------------------------------
# Module-level singleton
# ---------------------------------------------------------------------------
_loop: Optional[asyncio.AbstractEventLoop] = None
_thread: Optional[threading.Thread] = None
_lock = threading.Lock()
_started = threading.Event()


def _loop_thread_main() -> None:
    global _loop
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    _loop = loop
    loop.call_soon(_started.set)
    loop.run_forever()
    # run_forever returned: shutdown() was called
    pending = asyncio.all_tasks(loop)
    for task in pending:
        task.cancel()
    if pending:
        loop.run_until_complete(asyncio.gather(*pending, return_exceptions=True))
    loop.run_until_complete(loop.shutdown_asyncgens())
    loop.close()


def _ensure_loop() -> asyncio.AbstractEventLoop:
    global _thread
    if _started.is_set() and _loop is not None and _loop.is_running():
        return _loop
    with _lock:
        if _started.is_set() and _loop is not None and _loop.is_running():
            return _loop
        _started.clear()
        _thread = threading.Thread(
            target=_loop_thread_main,
            name="stepwise-event-loop",
            daemon=True,
        )
        _thread.start()
        _started.wait()
    assert _loop is not None
    return _loop


def get_event_loop() -> asyncio.AbstractEventLoop:
    """Return the shared loop, starting it lazily."""
    return _ensure_loop()


def is_loop_thread() -> bool:
    return _thread is not None and threading.current_thread() is _thread


def submit(coro: Coroutine[Any, Any, T], *, timeout: Optional[float] = None) -> T:
    """Run *coro* on the shared loop and block until it finishes.

    Exceptions raised by the coroutine are re-raised here. Calling this from
    the loop thread itself would deadlock, so that raises ``RuntimeError``.
    When *timeout* expires the coroutine is cancelled before the timeout
    error is re-raised.
    """
    if is_loop_thread():
        coro.close()
        raise RuntimeError("submit() called from the stepwise event loop thread; await instead")
    loop = _ensure_loop()
    future: ConcurrentFuture[T] = asyncio.run_coroutine_threadsafe(coro, loop)
    try:
        return future.result(timeout=timeout)
    except FutureTimeoutError:
        future.cancel()
        raise


def shutdown(timeout: float = 5.0) -> None:
    """Stop the shared loop and join its thread. Safe to call repeatedly."""
    global _loop, _thread
    with _lock:
        if _loop is not None and _loop.is_running():
            _loop.call_soon_threadsafe(_loop.stop)
        if _thread is not None and _thread.is_alive():
            _thread.join(timeout=timeout)
        _loop = None
        _thread = None
        _started.clear()


atexit.register(shutdown)
