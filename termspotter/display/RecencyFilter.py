# termspotter/display/RecencyFilter.py
import logging
from typing import Dict, Iterator, List, Optional

from termspotter.display.TimerRegistry import TimerRegistry


class RecencyFilter:
    """Tracks which terms are on cooldown and suppresses re-triggering them.

    Marking happens synchronously when a term is surfaced. The term then
    waits for the end of its utterance: when a final fragment is processed,
    schedule_cooldown() starts one expiry timer per term marked during that
    utterance. Expiry runs from the timer, never by polling.

    Invariant: a display term in the set is never surfaced again until
    expire() or clear_all() removes it.

    Args:
        timers: TimerRegistry shared with the owning session
        config: Configuration dictionary (uses timing.cooldown_ms)
        verbose: Enable verbose logging
    """

    def __init__(self, timers: TimerRegistry, config: Optional[Dict] = None, verbose: bool = False) -> None:
        timing = (config or {}).get("timing", {})
        self.cooldown_sec: float = timing.get("cooldown_ms", 10000) / 1000.0
        self.timers: TimerRegistry = timers
        self.verbose: bool = verbose

        self._recent: set[str] = set()
        self._awaiting_utterance_end: List[str] = []
        self._expiry_handles: Dict[str, int] = {}

    def is_recent(self, display_term: str) -> bool:
        return display_term in self._recent

    def mark_recent(self, display_term: str) -> None:
        """Put a term on cooldown until its utterance ends and the cooldown elapses."""
        self._recent.add(display_term)
        # A pending expiry from an earlier utterance no longer applies
        self.timers.cancel(self._expiry_handles.pop(display_term, None))
        if display_term not in self._awaiting_utterance_end:
            self._awaiting_utterance_end.append(display_term)
        if self.verbose:
            logging.debug(f"RecencyFilter: '{display_term}' marked recent")

    def schedule_cooldown(self) -> int:
        """Start expiry timers for terms marked during the current utterance.

        Called after a final fragment is processed.

        Returns:
            Number of expiry timers scheduled
        """
        terms = self._awaiting_utterance_end
        self._awaiting_utterance_end = []
        for term in terms:
            if term not in self._recent:
                continue
            self._expiry_handles[term] = self.timers.schedule(
                self.cooldown_sec, lambda t=term: self.expire(t)
            )
        if terms and self.verbose:
            logging.debug(f"RecencyFilter: cooldown {self.cooldown_sec}s started for {terms}")
        return len(terms)

    def expire(self, display_term: str) -> None:
        """Take a term off cooldown. Unknown terms are a no-op."""
        self.timers.cancel(self._expiry_handles.pop(display_term, None))
        if display_term in self._awaiting_utterance_end:
            self._awaiting_utterance_end.remove(display_term)
        if display_term in self._recent:
            self._recent.discard(display_term)
            if self.verbose:
                logging.debug(f"RecencyFilter: '{display_term}' expired")

    def clear_all(self) -> None:
        """Forget every recent term and cancel their expiry timers."""
        for handle in self._expiry_handles.values():
            self.timers.cancel(handle)
        self._expiry_handles.clear()
        self._awaiting_utterance_end = []
        self._recent.clear()

    def recent_terms(self) -> frozenset[str]:
        return frozenset(self._recent)

    def __contains__(self, display_term: object) -> bool:
        return display_term in self._recent

    def __iter__(self) -> Iterator[str]:
        return iter(set(self._recent))

    def __len__(self) -> int:
        return len(self._recent)
