# termspotter/display/SurfacedTermPublisher.py
import logging
import threading
from typing import Any, List

from termspotter.protocols import TermDisplaySubscriber
from termspotter.types import SurfacedTerm


class SurfacedTermPublisher:
    """Delivers the coordinator's display decisions to every display surface.

    Surfaces are notified in subscription order. A surface that raises is
    logged and skipped; the remaining surfaces and the fragment stream carry
    on. Subscribing is guarded by its own lock, so surfaces may subscribe or
    unsubscribe from inside a callback.

    Args:
        verbose: Log subscription changes and every delivered event
    """

    def __init__(self, verbose: bool = False) -> None:
        self.verbose: bool = verbose
        self._surfaces: List[TermDisplaySubscriber] = []
        self._surfaces_lock = threading.Lock()

    def subscribe(self, surface: TermDisplaySubscriber) -> None:
        """Add a display surface. Subscribing twice is a no-op."""
        with self._surfaces_lock:
            if surface in self._surfaces:
                return
            self._surfaces.append(surface)
        if self.verbose:
            logging.debug(f"SurfacedTermPublisher: {type(surface).__name__} subscribed")

    def unsubscribe(self, surface: TermDisplaySubscriber) -> None:
        with self._surfaces_lock:
            if surface not in self._surfaces:
                return
            self._surfaces.remove(surface)
        if self.verbose:
            logging.debug(f"SurfacedTermPublisher: {type(surface).__name__} unsubscribed")

    def publish_term_surfaced(self, term: SurfacedTerm) -> int:
        """Send a surfaced term to every surface.

        Returns:
            Number of surfaces that accepted the event
        """
        return self._notify('on_term_surfaced', term)

    def publish_display_cleared(self) -> int:
        """Tell every surface to drop the visible definition.

        Returns:
            Number of surfaces that accepted the event
        """
        return self._notify('on_display_cleared')

    def _notify(self, event: str, *args: Any) -> int:
        with self._surfaces_lock:
            surfaces = tuple(self._surfaces)

        delivered = 0
        for surface in surfaces:
            try:
                getattr(surface, event)(*args)
            except Exception as e:
                logging.error(f"Subscriber {type(surface).__name__} failed {event}: {e}", exc_info=True)
                continue
            delivered += 1

        if self.verbose:
            logging.debug(f"SurfacedTermPublisher: {event} delivered to {delivered}/{len(surfaces)} surfaces")
        return delivered

    def subscriber_count(self) -> int:
        with self._surfaces_lock:
            return len(self._surfaces)
