"""Drive non-suspending coroutines to completion without an event loop."""

from __future__ import annotations

import typing

_T = typing.TypeVar("_T")


def iter_coroutine(coro: typing.Coroutine[None, None, _T]) -> _T:
    """
    Run ``coro`` synchronously and return its result.

    The blocking client shares its ``async def`` core with the asyncio client.
    Over a blocking transport nothing in that core awaits a real suspension
    point, so a single ``send(None)`` runs it to completion.

    Raises:
        RuntimeError: If the coroutine yields to an event loop.
    """
    try:
        yielded = coro.send(None)
    except StopIteration as done:
        return done.value  # type: ignore [no-any-return]
    # Suspended: unwind it so its finally blocks and context managers run.
    coro.close()
    raise RuntimeError(f"coroutine {coro!r} suspended on {yielded!r} without an event loop")


__all__ = ["iter_coroutine"]
