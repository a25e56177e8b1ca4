"""Protocol definitions for term spotter consumers.

This module defines structural interfaces using Python's Protocol for duck typing.
"""

from typing import Protocol
from termspotter.types import SurfacedTerm


class TermDisplaySubscriber(Protocol):
    """Subscriber interface for display events.

    Components implementing this protocol receive the display decisions made
    by DisplayCoordinator. The protocol uses structural subtyping, so classes
    don't need explicit inheritance - just matching method signatures.

    Thread Safety:
        Implementations may be called from timer threads (auto-clear) as well
        as from the thread feeding transcription fragments. Calls are made
        while the owning session lock is held, so implementations must not block.
    """

    def on_term_surfaced(self, term: SurfacedTerm) -> None:
        """Render a definition.

        Called at most once per cooldown window per term. The consumer owns
        any further formatting or truncation.

        Args:
            term: SurfacedTerm with display term and definition
        """
        ...

    def on_display_cleared(self) -> None:
        """Remove the definition currently shown.

        Called when the auto-clear deadline elapses or the display is cleared
        explicitly.
        """
        ...
