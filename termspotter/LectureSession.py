# termspotter/LectureSession.py
import copy
import logging
import threading
import time
from typing import Callable, Dict, FrozenSet, List, Optional

from termspotter.Configuration import DEFAULT_CONFIG
from termspotter.LectureState import LectureState
from termspotter.display.DisplayCoordinator import DisplayCoordinator
from termspotter.display.RecencyFilter import RecencyFilter
from termspotter.display.SurfacedTermHistory import SurfacedTermHistory
from termspotter.display.SurfacedTermPublisher import SurfacedTermPublisher
from termspotter.display.TimerRegistry import TimerFactory, TimerRegistry
from termspotter.matching.MatchCache import MatchCache
from termspotter.matching.SlidingWindowMatcher import SlidingWindowMatcher
from termspotter.matching.TermIndex import TermIndex, TermSource
from termspotter.matching.TextNormalizer import TextNormalizer
from termspotter.protocols import TermDisplaySubscriber
from termspotter.types import DisplayState, MatchResult, SurfacedTerm


class LectureSession:
    """Real-time term spotting for one lecture session.

    Owns the term index, match cache, recency filter and display state of a
    single session. Nothing outside the session mutates them; all mutation
    goes through the public operations below, serialized by one RLock that
    timer callbacks share.

    Control flow per fragment:
        normalize -> MatchCache lookup for the current recent terms -> (miss)
        SlidingWindowMatcher against TermIndex minus recent terms -> (match)
        DisplayCoordinator decides whether to surface -> subscribers notified.
        The cache entry is stored whether or not the term was surfaced.

    Observer Pattern:
    - Subscribes to its LectureState; any lifecycle transition resets the session
    - Publishes display events via SurfacedTermPublisher

    Args:
        config: Configuration dictionary (see Configuration.DEFAULT_CONFIG)
        text_normalizer: Optional text normalizer shared by index and fragments
        timer_factory: Optional (interval_sec, function) -> timer, threading.Timer by default
        clock: Monotonic clock returning seconds
        verbose: Enable verbose logging
    """

    def __init__(self, config: Optional[Dict] = None,
                 text_normalizer: Optional[TextNormalizer] = None,
                 timer_factory: Optional[TimerFactory] = None,
                 clock: Callable[[], float] = time.monotonic,
                 verbose: bool = False) -> None:
        self.config: Dict = config if config is not None else copy.deepcopy(DEFAULT_CONFIG)
        self.verbose: bool = verbose
        self._lock: threading.RLock = threading.RLock()
        self._closed: bool = False

        self.text_normalizer: TextNormalizer = text_normalizer if text_normalizer is not None else TextNormalizer()
        self.timers: TimerRegistry = TimerRegistry(lock=self._lock, timer_factory=timer_factory)
        self.matcher: SlidingWindowMatcher = SlidingWindowMatcher(config=self.config, verbose=verbose)
        self.cache: MatchCache = MatchCache(verbose=verbose)
        self.recency: RecencyFilter = RecencyFilter(timers=self.timers, config=self.config, verbose=verbose)
        self.publisher: SurfacedTermPublisher = SurfacedTermPublisher(verbose=verbose)
        self.coordinator: DisplayCoordinator = DisplayCoordinator(
            publisher=self.publisher,
            recency=self.recency,
            timers=self.timers,
            config=self.config,
            clock=clock,
            verbose=verbose
        )

        max_recent = self.config.get("history", {}).get("max_recent_terms", 10)
        self.history: SurfacedTermHistory = SurfacedTermHistory(max_terms=max_recent)
        self.publisher.subscribe(self.history)

        self._index: TermIndex = TermIndex()

        self.lecture_state: LectureState = LectureState()
        self.lecture_state.register_component_observer(self.on_state_change)

    @property
    def term_index(self) -> TermIndex:
        with self._lock:
            return self._index

    def set_term_index(self, entries: Optional[TermSource]) -> TermIndex:
        """Replace the term index with a freshly built one.

        Pending timers are cancelled and display, recency and cache state are
        reset before the new index is built, so nothing from the previous
        index can leak into matching against the new one.

        Args:
            entries: {term: definition} mapping or iterable of term entries

        Returns:
            The new TermIndex
        """
        with self._lock:
            self._reset()
            self._index = TermIndex.build(entries, self.text_normalizer)
            if self._index.is_empty():
                logging.warning("LectureSession: term index is empty, no terms will be surfaced")
            return self._index

    def on_transcription_fragment(self, text: str, is_final: bool) -> Optional[SurfacedTerm]:
        """Process one recognizer tick.

        Fragments are processed strictly one at a time in arrival order.
        After a final fragment, cooldown timers start for the terms surfaced
        during its utterance.

        Args:
            text: Raw transcription text
            is_final: True for the authoritative result of an utterance

        Returns:
            SurfacedTerm if a term was surfaced, None otherwise
        """
        with self._lock:
            if self._closed:
                return None

            normalized = self.text_normalizer.normalize_text(text)
            if self.verbose:
                logging.debug(f"LectureSession: fragment '{normalized}' final={is_final}")

            surfaced: Optional[SurfacedTerm] = None
            if normalized:
                result = self.cache.get_or_compute(normalized, lambda skipped: self._match(normalized, skipped),
                                                   self.recency)
                if result.is_match:
                    surfaced = self.coordinator.on_match_found(result.entry, result.matched_text)

            if is_final:
                self.recency.schedule_cooldown()

            return surfaced

    def _match(self, normalized: str, skipped: FrozenSet[str]) -> MatchResult:
        return self.matcher.match(normalized, self._index, skipped)

    def on_lecture_start(self) -> None:
        """Begin a lecture. Resets the session and discards the previous term index."""
        with self._lock:
            if self.lecture_state.is_active():
                logging.info("LectureSession: lecture already active")
                return
            self.lecture_state.set_state('active')

    def on_lecture_stop(self) -> None:
        """End a lecture. Resets the session and discards the term index."""
        with self._lock:
            if not self.lecture_state.is_active():
                logging.info("LectureSession: no active lecture to stop")
                return
            self.lecture_state.set_state('idle')

    def on_state_change(self, old_state: str, new_state: str) -> None:
        """Observes LectureState and resets at every session boundary."""
        with self._lock:
            logging.info(f"LectureSession: lecture {old_state} -> {new_state}")
            self._reset()
            self.history.clear()
            self._index = TermIndex()

    def _reset(self) -> None:
        self.timers.cancel_all()
        self.coordinator.reset()
        self.cache.clear()

    def clear_display(self) -> bool:
        """Clear the visible definition before its auto-clear deadline."""
        with self._lock:
            return self.coordinator.clear()

    def subscribe(self, subscriber: TermDisplaySubscriber) -> None:
        self.publisher.subscribe(subscriber)

    def unsubscribe(self, subscriber: TermDisplaySubscriber) -> None:
        self.publisher.unsubscribe(subscriber)

    def recent_terms(self, limit: int = 3) -> List[SurfacedTerm]:
        """Most recently surfaced terms, newest first."""
        with self._lock:
            return self.history.recent(limit)

    def cache_stats(self) -> Dict[str, int]:
        with self._lock:
            return self.cache.stats()

    def display_state(self) -> DisplayState:
        with self._lock:
            return self.coordinator.state()

    def close(self) -> None:
        """Cancel pending timers. A closed session ignores further fragments."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self.timers.cancel_all()
            self.coordinator.reset()
            self.cache.clear()
