# termspotter/display/TimerRegistry.py
import itertools
import logging
import threading
from typing import Any, Callable, Dict, Optional

TimerFactory = Callable[[float, Callable[[], None]], Any]


class TimerRegistry:
    """Owns every pending timer of a lecture session.

    Each scheduled callback gets an integer handle kept in the registry until
    it fires or is cancelled. Session resets call cancel_all(), so a timer
    from a previous lecture can never clear a new lecture's display or expire
    a term surfaced after the reset.

    Callbacks run under the shared session lock. A timer that already left
    the registry when it acquires the lock (cancelled while waiting) does
    nothing.

    Args:
        lock: Lock shared with the owning session; a private RLock if None
        timer_factory: Callable (interval_sec, function) -> object with
            start()/cancel(); threading.Timer by default
    """

    def __init__(self, lock: Optional[threading.RLock] = None,
                 timer_factory: Optional[TimerFactory] = None) -> None:
        self._lock = lock if lock is not None else threading.RLock()
        self._timer_factory: TimerFactory = timer_factory if timer_factory is not None else threading.Timer
        self._timers: Dict[int, Any] = {}
        self._ids = itertools.count(1)

    def schedule(self, delay_sec: float, callback: Callable[[], None]) -> int:
        """Schedule callback after delay_sec.

        Returns:
            Handle for cancel()
        """
        with self._lock:
            handle = next(self._ids)
            timer = self._timer_factory(delay_sec, lambda: self._fire(handle, callback))
            if hasattr(timer, 'daemon'):
                timer.daemon = True
            self._timers[handle] = timer
            timer.start()
            return handle

    def cancel(self, handle: Optional[int]) -> bool:
        """Cancel a pending timer.

        Unknown, fired or already cancelled handles are a no-op.

        Returns:
            True if a pending timer was cancelled
        """
        if handle is None:
            return False
        with self._lock:
            timer = self._timers.pop(handle, None)
        if timer is None:
            return False
        timer.cancel()
        return True

    def cancel_all(self) -> int:
        """Cancel every pending timer.

        Returns:
            Number of timers cancelled
        """
        with self._lock:
            timers = list(self._timers.values())
            self._timers.clear()
        for timer in timers:
            timer.cancel()
        if timers:
            logging.debug(f"TimerRegistry: cancelled {len(timers)} pending timers")
        return len(timers)

    def is_pending(self, handle: Optional[int]) -> bool:
        with self._lock:
            return handle in self._timers

    def pending_count(self) -> int:
        with self._lock:
            return len(self._timers)

    def _fire(self, handle: int, callback: Callable[[], None]) -> None:
        with self._lock:
            if self._timers.pop(handle, None) is None:
                return
            try:
                callback()
            except Exception as e:
                logging.error(f"TimerRegistry: timer callback failed: {e}", exc_info=True)
