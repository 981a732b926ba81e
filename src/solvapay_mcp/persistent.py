"""Persistent session helper for the MCP bridge."""

from __future__ import annotations

import asyncio
import contextlib
from contextlib import AbstractAsyncContextManager

from mcp.client.session import ClientSession

from .constants import ERROR_SESSION_ENDED, SESSION_CLOSE_TIMEOUT


class _PersistentSession:
    """Keep an MCP client session alive in a background task.

    The transport's task group has to be exited by the task that entered it,
    so the session context runs in its own task and ``close`` only signals it.
    """

    def __init__(self, cm: AbstractAsyncContextManager[ClientSession]):
        self._cm = cm
        self._task: asyncio.Task | None = None
        self._ready = asyncio.Event()
        self._stop = asyncio.Event()
        self.session: ClientSession | None = None

    async def start(self) -> ClientSession:
        if self._task is None:
            self._task = asyncio.create_task(self._runner())
        ready = asyncio.ensure_future(self._ready.wait())
        try:
            await asyncio.wait({ready, self._task}, return_when=asyncio.FIRST_COMPLETED)
        except asyncio.CancelledError:
            await self._cancel_runner()
            raise
        finally:
            ready.cancel()
        if not self._ready.is_set() or self.session is None:
            # Runner exited before the handshake finished; surface its error
            self._task.result()
            raise RuntimeError(ERROR_SESSION_ENDED)
        return self.session

    async def _runner(self) -> None:
        try:
            async with self._cm as session:
                self.session = session
                self._ready.set()
                await self._stop.wait()
        finally:
            self.session = None

    async def _cancel_runner(self) -> None:
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._task

    async def close(self, timeout: float = SESSION_CLOSE_TIMEOUT) -> None:
        if self._task is None:
            return
        self._stop.set()
        try:
            await asyncio.wait_for(asyncio.shield(self._task), timeout=timeout)
        except TimeoutError:
            await self._cancel_runner()
            raise
