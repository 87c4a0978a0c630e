"""Broadcast stream of language change events.

Every listener sees every emitted code. Listeners stay attached until they
cancel; the stream never drops idle listeners on its own.

Two ways to listen:

    subscription = helper.stream.listen(lambda code: ...)
    subscription.cancel()

    async for code in helper.stream.subscribe():
        ...

Python 3.13+.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator, Callable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .codes import LanguageCode

__all__ = [
    "ChangeStream",
    "Listener",
    "QueueListener",
]

logger = logging.getLogger(__name__)

_CLOSED = object()


class Listener:
    """Callback attached to a ChangeStream."""

    __slots__ = ("_callback", "_stream")

    def __init__(self, stream: ChangeStream, callback: Callable[[LanguageCode], object]) -> None:
        self._stream = stream
        self._callback = callback

    @property
    def active(self) -> bool:
        return self in self._stream._listeners

    def cancel(self) -> None:
        """Detach from the stream. Safe to call more than once."""
        self._stream._detach(self)

    def _deliver(self, code: LanguageCode) -> None:
        self._callback(code)

    def _close(self) -> None:
        pass


class QueueListener(Listener):
    """Async-iterable listener backed by an unbounded asyncio.Queue.

    Iteration ends when the stream closes or the listener is cancelled.
    """

    __slots__ = ("_queue",)

    def __init__(self, stream: ChangeStream) -> None:
        self._queue: asyncio.Queue[object] = asyncio.Queue()
        super().__init__(stream, self._queue.put_nowait)

    def __aiter__(self) -> AsyncIterator[LanguageCode]:
        return self._iterate()

    async def _iterate(self) -> AsyncIterator[LanguageCode]:
        while True:
            item = await self._queue.get()
            if item is _CLOSED:
                return
            yield item  # type: ignore[misc]

    def cancel(self) -> None:
        if self.active:
            super().cancel()
            self._close()

    def _close(self) -> None:
        self._queue.put_nowait(_CLOSED)


class ChangeStream:
    """Multi-listener broadcast of committed language codes."""

    __slots__ = ("_closed", "_listeners")

    def __init__(self) -> None:
        self._listeners: dict[Listener, None] = {}
        self._closed = False

    def __len__(self) -> int:
        return len(self._listeners)

    @property
    def closed(self) -> bool:
        return self._closed

    def listen(self, callback: Callable[[LanguageCode], object]) -> Listener:
        """Attach ``callback``; it is called synchronously on every emit."""
        return self._attach(Listener(self, callback))

    def subscribe(self) -> QueueListener:
        """Attach a listener that can be consumed with ``async for``.

        Must be called from a running event loop.
        """
        return self._attach(QueueListener(self))

    def emit(self, code: LanguageCode) -> None:
        """Deliver ``code`` to every listener, in attach order.

        A failing callback is logged and does not stop delivery to the rest.
        """
        if self._closed:
            logger.debug("Dropping %s, stream is closed", code)
            return
        for listener in tuple(self._listeners):
            try:
                listener._deliver(code)
            except Exception:
                logger.exception("Change listener failed for %s", code)

    def close(self) -> None:
        """Detach every listener and end every ``async for`` loop."""
        self._closed = True
        listeners = tuple(self._listeners)
        self._listeners.clear()
        for listener in listeners:
            listener._close()

    def _attach[L: Listener](self, listener: L) -> L:
        if self._closed:
            msg = "ChangeStream is closed"
            raise RuntimeError(msg)
        self._listeners[listener] = None
        return listener

    def _detach(self, listener: Listener) -> None:
        self._listeners.pop(listener, None)
