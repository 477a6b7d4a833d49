from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Dict, Generic, Hashable, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class AsyncMemo(Generic[K, V]):
    """Process-lifetime memo of ``key -> in-flight or completed task``.

    Concurrent ``get`` calls for one key share a single underlying fetch.
    A fetch that raises is forgotten so a later call can try again; fetchers
    that want failures cached should return a sentinel value instead.
    """

    def __init__(self, fetch: Callable[[K], Awaitable[V]]) -> None:
        self._fetch = fetch
        self._tasks: Dict[K, asyncio.Future] = {}

    def __contains__(self, key: K) -> bool:
        return key in self._tasks

    def __len__(self) -> int:
        return len(self._tasks)

    async def get(self, key: K) -> V:
        task = self._tasks.get(key)
        if task is None:
            task = asyncio.ensure_future(self._fetch(key))
            self._tasks[key] = task
            task.add_done_callback(lambda t, k=key: self._forget_failed(k, t))
        # shield: one cancelled caller must not cancel the fetch others share
        return await asyncio.shield(task)

    def _forget_failed(self, key: K, task: asyncio.Future) -> None:
        if task.cancelled() or task.exception() is not None:
            if self._tasks.get(key) is task:
                del self._tasks[key]
