# termspotter/matching/MatchCache.py
import logging
from typing import Callable, Collection, Dict, FrozenSet, Optional

from termspotter.types import MatchResult

NO_RECENT_TERMS: FrozenSet[str] = frozenset()


class MatchCache:
    """Memoizes match results per normalized fragment.

    Partial transcripts repeat the same prefix on every recognizer tick, so
    most fragments have been scanned before. Keys must be normalized
    fragments: raw texts differing only in punctuation or case share an entry.

    Each entry first holds the result computed with no term skipped. That
    result stays valid under any recency set that does not contain its
    matched term: skipping other terms removes no earlier candidate. When the
    matched term is recent, the entry also stores the result computed with a
    snapshot of the recent terms, reused only while the recency set equals
    that snapshot. A term coming off cooldown therefore matches again on a
    fragment that was cached while it was recent.

    The cache belongs to one TermIndex and must be cleared whenever the index
    is rebuilt; a hit against a discarded index would surface terms from the
    previous lecture.

    Args:
        verbose: Enable verbose logging
    """

    def __init__(self, verbose: bool = False) -> None:
        self._entries: Dict[str, Dict[FrozenSet[str], MatchResult]] = {}
        self.hits: int = 0
        self.misses: int = 0
        self.verbose: bool = verbose

    def get_or_compute(self, fragment: str,
                       compute: Callable[[FrozenSet[str]], MatchResult],
                       recent: Optional[Collection[str]] = None) -> MatchResult:
        """Return the cached result for fragment, computing it on a miss.

        compute is called with the set of terms to skip and is not invoked
        when a stored result applies. A lookup counts as a miss if compute
        ran at least once.

        Args:
            fragment: Normalized fragment text (the cache key)
            compute: Callable (skipped_terms) -> MatchResult
            recent: Display terms currently on cooldown

        Returns:
            Match result valid for fragment under the given recent terms
        """
        results = self._entries.get(fragment)
        computed = results is None
        if results is None:
            results = self._entries[fragment] = {NO_RECENT_TERMS: compute(NO_RECENT_TERMS)}

        result = results[NO_RECENT_TERMS]
        if result.is_match and recent is not None and result.entry.display_term in recent:
            snapshot = frozenset(recent)
            filtered = results.get(snapshot)
            if filtered is None:
                filtered = results[snapshot] = compute(snapshot)
                computed = True
            result = filtered

        if computed:
            self.misses += 1
        else:
            self.hits += 1
        if self.verbose:
            logging.debug(
                f"MatchCache: {'stored' if computed else 'hit'} '{fragment}' -> is_match={result.is_match}"
            )
        return result

    def clear(self) -> None:
        """Drop every entry and reset statistics."""
        self._entries.clear()
        self.hits = 0
        self.misses = 0

    def stats(self) -> Dict[str, int]:
        return {"entries": len(self._entries), "hits": self.hits, "misses": self.misses}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, fragment: str) -> bool:
        return fragment in self._entries
