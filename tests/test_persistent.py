"""Tests for the background session helper."""

import asyncio
from contextlib import asynccontextmanager

import pytest

from solvapay_mcp.persistent import _PersistentSession


class SlowSession:
    """Session context whose enter or exit can be made to hang."""

    def __init__(self, hang_on_enter=False, hang_on_exit=False):
        self.hang_on_enter = hang_on_enter
        self.hang_on_exit = hang_on_exit
        self.entered = asyncio.Event()
        self.torn_down = False

    @asynccontextmanager
    async def open(self):
        self.entered.set()
        try:
            if self.hang_on_enter:
                await asyncio.Event().wait()
            yield "session"
            if self.hang_on_exit:
                await asyncio.Event().wait()
        finally:
            self.torn_down = True


@pytest.mark.asyncio
async def test_start_and_close():
    slow = SlowSession()
    client = _PersistentSession(slow.open())

    assert await client.start() == "session"
    await client.close()

    assert slow.torn_down
    assert client.session is None


@pytest.mark.asyncio
async def test_close_timeout_waits_for_cancelled_runner():
    slow = SlowSession(hang_on_exit=True)
    client = _PersistentSession(slow.open())
    await client.start()

    with pytest.raises(TimeoutError):
        await client.close(timeout=0.01)

    assert client._task.done()
    assert slow.torn_down


@pytest.mark.asyncio
async def test_cancelled_start_cancels_runner():
    slow = SlowSession(hang_on_enter=True)
    client = _PersistentSession(slow.open())

    starting = asyncio.create_task(client.start())
    await slow.entered.wait()
    starting.cancel()

    with pytest.raises(asyncio.CancelledError):
        await starting

    assert client._task.done()
    assert slow.torn_down


@pytest.mark.asyncio
async def test_start_reraises_runner_error():
    @asynccontextmanager
    async def failing():
        raise ConnectionError("Connection refused")
        yield

    client = _PersistentSession(failing())

    with pytest.raises(ConnectionError, match="Connection refused"):
        await client.start()
