# scheduler.py
from __future__ import annotations

from dataclasses import dataclass
from itertools import count
from typing import Callable, Dict, List, Optional, Protocol
import logging
import threading

import pygame  # type: ignore

logger = logging.getLogger(__name__)

Callback = Callable[[], None]

# pygame event type carrying scheduled ticks
TICK_EVENT = pygame.USEREVENT + 1

_handle_ids = count(1)


class TickHandle:
    """Cancelable handle for a repeating schedule."""

    def __init__(self, interval: float):
        self.id = next(_handle_ids)
        self.interval = interval
        self._cancelled = threading.Event()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def cancel(self) -> None:
        self._cancelled.set()

    def __repr__(self) -> str:
        state = "cancelled" if self.cancelled else "active"
        return f"<TickHandle #{self.id} every {self.interval}s {state}>"


class Scheduler(Protocol):
    def schedule_repeating(self, interval: float, callback: Callback) -> TickHandle: ...
    def cancel(self, handle: TickHandle) -> None: ...


def _check_interval(interval: float) -> None:
    if interval <= 0:
        raise ValueError(f"interval must be positive, got {interval}")


# ---------- Manual (tests / headless stepping) ----------
@dataclass
class _Timer:
    handle: TickHandle
    callback: Callback
    next_due: float

class ManualScheduler:
    """
    Deterministic scheduler driven by the caller.
    advance(seconds) moves a virtual clock and runs every callback that
    falls due, in due order; fire() runs each live callback once.
    """

    EPS = 1e-9

    def __init__(self):
        self.now = 0.0
        self._timers: List[_Timer] = []

    def schedule_repeating(self, interval: float, callback: Callback) -> TickHandle:
        _check_interval(interval)
        handle = TickHandle(interval)
        self._timers.append(_Timer(handle, callback, self.now + interval))
        return handle

    def cancel(self, handle: TickHandle) -> None:
        handle.cancel()
        self._timers = [t for t in self._timers if t.handle is not handle]

    @property
    def active(self) -> List[TickHandle]:
        return [t.handle for t in self._timers if not t.handle.cancelled]

    def fire(self) -> int:
        """Invoke every live callback once; returns how many ran."""
        ran = 0
        for timer in list(self._timers):
            if timer.handle.cancelled:
                continue
            timer.callback()
            ran += 1
        return ran

    def advance(self, seconds: float) -> int:
        target = self.now + seconds
        ran = 0
        while True:
            due = [t for t in self._timers
                   if not t.handle.cancelled and t.next_due <= target + self.EPS]
            if not due:
                break
            timer = min(due, key=lambda t: t.next_due)
            self.now = timer.next_due
            timer.next_due += timer.handle.interval
            timer.callback()
            ran += 1
        self.now = target
        return ran


# ---------- Background thread ----------
class ThreadScheduler:
    """One daemon thread per schedule; callbacks run off the caller's thread."""

    def __init__(self, name: str = "snakegame-tick"):
        self.name = name
        self._threads: Dict[int, threading.Thread] = {}

    def schedule_repeating(self, interval: float, callback: Callback) -> TickHandle:
        _check_interval(interval)
        handle = TickHandle(interval)
        thread = threading.Thread(
            target=self._run, args=(handle, callback), name=f"{self.name}-{handle.id}", daemon=True
        )
        self._threads[handle.id] = thread
        thread.start()
        return handle

    def cancel(self, handle: TickHandle) -> None:
        # Never joins: the cancelling thread may hold a lock the callback is waiting on.
        handle.cancel()
        self._threads.pop(handle.id, None)

    @staticmethod
    def _run(handle: TickHandle, callback: Callback) -> None:
        while not handle._cancelled.wait(handle.interval):
            try:
                callback()
            except Exception:
                logger.exception("Scheduled callback failed (%r)", handle)


# ---------- pygame event loop ----------
class PygameScheduler:
    """
    Ticks delivered through the pygame event queue, so they run on the
    thread that pumps events. Only one timer is live at a time; events
    still queued from a cancelled timer are dropped in dispatch().
    """

    def __init__(self, event_type: int = TICK_EVENT):
        self.event_type = event_type
        self._handle: Optional[TickHandle] = None
        self._callback: Optional[Callback] = None

    def schedule_repeating(self, interval: float, callback: Callback) -> TickHandle:
        _check_interval(interval)
        if self._handle is not None:
            self.cancel(self._handle)
        handle = TickHandle(interval)
        self._handle, self._callback = handle, callback
        millis = max(1, int(round(interval * 1000)))
        pygame.time.set_timer(pygame.event.Event(self.event_type, handle_id=handle.id), millis)
        return handle

    def cancel(self, handle: TickHandle) -> None:
        handle.cancel()
        if handle is self._handle:
            pygame.time.set_timer(self.event_type, 0)
            self._handle, self._callback = None, None

    def dispatch(self, event: pygame.event.Event) -> bool:
        """Run the tick callback for a timer event; returns True if the event was ours."""
        if event.type != self.event_type:
            return False
        handle, callback = self._handle, self._callback
        if handle is None or callback is None or handle.cancelled:
            return True
        if getattr(event, "handle_id", None) != handle.id:
            return True
        callback()
        return True
