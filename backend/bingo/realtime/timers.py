from __future__ import annotations

import logging
from typing import Callable

from flask_socketio import SocketIO

logger = logging.getLogger(__name__)


class BackgroundTimer:
    """One-shot timer running as a Socket.IO background task.

    The task waits on an event from the server's async driver, so ``cancel``
    wakes it and the task exits right away instead of sleeping out the delay.
    """

    def __init__(self, socketio: SocketIO, delay_sec: float, callback: Callable[[], None]):
        self._delay_sec = delay_sec
        self._callback = callback
        self._wakeup = socketio.server.eio.create_event()
        self.cancelled = False
        self.task = socketio.start_background_task(self._run)

    def cancel(self) -> None:
        self.cancelled = True
        self._wakeup.set()

    def _run(self) -> None:
        self._wakeup.wait(self._delay_sec)
        if self.cancelled:
            return
        try:
            self._callback()
        except Exception:
            logger.exception("Background timer callback failed")


def socketio_scheduler(socketio: SocketIO) -> Callable[[float, Callable[[], None]], BackgroundTimer]:
    def schedule(delay_sec: float, callback: Callable[[], None]) -> BackgroundTimer:
        return BackgroundTimer(socketio, delay_sec, callback)

    return schedule
