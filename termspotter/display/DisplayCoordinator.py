# termspotter/display/DisplayCoordinator.py
import logging
import time
from typing import Callable, Dict, Optional

from termspotter.display.RecencyFilter import RecencyFilter
from termspotter.display.SurfacedTermPublisher import SurfacedTermPublisher
from termspotter.display.TimerRegistry import TimerRegistry
from termspotter.types import DisplayState, DisplayStatus, SurfacedTerm, TermEntry


class DisplayCoordinator:
    """Keeps at most one definition visible at a time.

    State Machine:
    - IDLE + match found -> SHOWING: mark term recent, schedule auto-clear at
      now + display duration, publish the term
    - SHOWING + match found -> SHOWING: new match suppressed (not an error)
    - SHOWING + deadline elapsed -> IDLE: publish display cleared
    - SHOWING + clear() -> IDLE: cancel auto-clear, publish display cleared
    - any + reset() -> IDLE: cancel auto-clear, clear recency, publish display
      cleared if a definition was showing

    The coordinator is the only writer of display state. Callers serialize
    access through the session lock; the auto-clear timer runs under the
    same lock via TimerRegistry.

    Args:
        publisher: SurfacedTermPublisher receiving display events
        recency: RecencyFilter marked when a term is surfaced
        timers: TimerRegistry shared with the owning session
        config: Configuration dictionary (uses timing.display_duration_ms)
        clock: Monotonic clock returning seconds
        verbose: Enable verbose logging
    """

    def __init__(self, publisher: SurfacedTermPublisher,
                 recency: RecencyFilter,
                 timers: TimerRegistry,
                 config: Optional[Dict] = None,
                 clock: Callable[[], float] = time.monotonic,
                 verbose: bool = False) -> None:
        timing = (config or {}).get("timing", {})
        self.display_duration_sec: float = timing.get("display_duration_ms", 5000) / 1000.0
        self.publisher: SurfacedTermPublisher = publisher
        self.recency: RecencyFilter = recency
        self.timers: TimerRegistry = timers
        self.clock: Callable[[], float] = clock
        self.verbose: bool = verbose

        self._status: DisplayStatus = DisplayStatus.IDLE
        self._current: Optional[SurfacedTerm] = None
        self._deadline: Optional[float] = None
        self._clear_handle: Optional[int] = None

    def on_match_found(self, entry: TermEntry, matched_text: str = "") -> Optional[SurfacedTerm]:
        """Surface a matched term unless the display is busy or the term is on cooldown.

        Args:
            entry: Matched TermEntry
            matched_text: Fragment text that triggered the match

        Returns:
            SurfacedTerm if the term was surfaced, None if suppressed
        """
        if self._status is DisplayStatus.SHOWING:
            if self.verbose:
                logging.debug(
                    f"DisplayCoordinator: '{entry.display_term}' suppressed, "
                    f"'{self._current.display_term}' still showing"
                )
            return None

        if self.recency.is_recent(entry.display_term):
            if self.verbose:
                logging.debug(f"DisplayCoordinator: '{entry.display_term}' suppressed, on cooldown")
            return None

        now = self.clock()
        surfaced = SurfacedTerm(
            display_term=entry.display_term,
            definition=entry.definition,
            matched_text=matched_text,
            surfaced_at=now,
        )

        self.recency.mark_recent(entry.display_term)
        self._status = DisplayStatus.SHOWING
        self._current = surfaced
        self._deadline = now + self.display_duration_sec
        self._clear_handle = self.timers.schedule(self.display_duration_sec, self._on_deadline_elapsed)

        logging.info(f"DisplayCoordinator: surfacing '{entry.display_term}' (matched '{matched_text}')")
        self.publisher.publish_term_surfaced(surfaced)
        return surfaced

    def _on_deadline_elapsed(self) -> None:
        self._clear_handle = None
        if self._status is not DisplayStatus.SHOWING:
            return
        if self.verbose:
            logging.debug(f"DisplayCoordinator: auto-clear '{self._current.display_term}'")
        self._go_idle()
        self.publisher.publish_display_cleared()

    def clear(self) -> bool:
        """Clear the visible definition before its deadline.

        Returns:
            True if a definition was showing
        """
        if self._status is not DisplayStatus.SHOWING:
            return False
        self.timers.cancel(self._clear_handle)
        self._clear_handle = None
        self._go_idle()
        self.publisher.publish_display_cleared()
        return True

    def reset(self) -> None:
        """Return to IDLE at a session boundary and forget recent terms."""
        was_showing = self._status is DisplayStatus.SHOWING
        self.timers.cancel(self._clear_handle)
        self._clear_handle = None
        self._go_idle()
        self.recency.clear_all()
        if was_showing:
            self.publisher.publish_display_cleared()

    def _go_idle(self) -> None:
        self._status = DisplayStatus.IDLE
        self._current = None
        self._deadline = None

    def is_showing(self) -> bool:
        return self._status is DisplayStatus.SHOWING

    def state(self) -> DisplayState:
        return DisplayState(
            status=self._status,
            current_term=self._current.display_term if self._current else None,
            clear_deadline=self._deadline,
        )
