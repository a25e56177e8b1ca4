# termspotter/matching/SlidingWindowMatcher.py
import logging
from typing import Container, Dict, Optional

from termspotter.matching.TermIndex import TermIndex
from termspotter.types import MatchResult, NO_MATCH, TermEntry

DEFAULT_SUFFIX_WORDS = ("theory", "duality", "principle", "equation", "law", "effect", "model")


class SlidingWindowMatcher:
    """Finds the single term to surface for a normalized fragment.

    Algorithm:
    1. Split the fragment into words.
    2. For window sizes from min(max_window_words, word_count) down to 1,
       and for each starting offset, form the window text.
    3. For each index entry (longest term first) not in the recency set:
       a. Exact: the window contains the normalized term.
       b. Permissive (multi-word terms and windows of 2+ words only):
          - hyphenated variant of the term is in the window
          - term with hyphens replaced by spaces is in the window
          - significant suffix: the last N words (each longer than 2 chars)
            are all in the window within proximity_chars of each other
          - pattern suffix: the term ends in a domain suffix word and
            "<second-to-last> <last>" is in the window
    4. The first entry satisfying any rule wins; no scoring.

    The result depends only on (fragment, index, recency), so repeated calls
    with the same inputs return identical results. Never raises.

    Args:
        config: Configuration dictionary (uses the "matching" section)
        verbose: Enable verbose logging
    """

    def __init__(self, config: Optional[Dict] = None, verbose: bool = False) -> None:
        matching = (config or {}).get("matching", {})
        self.max_window_words: int = matching.get("max_window_words", 5)
        self.significant_words: int = matching.get("significant_words", 3)
        self.proximity_chars: int = matching.get("proximity_chars", 50)
        self.min_significant_word_length: int = matching.get("min_significant_word_length", 3)
        self.suffix_words: frozenset[str] = frozenset(matching.get("suffix_words", DEFAULT_SUFFIX_WORDS))
        self.verbose: bool = verbose

    def match(self, fragment: str, index: Optional[TermIndex],
              recency: Optional[Container[str]] = None) -> MatchResult:
        """Match a normalized fragment against the term index.

        Args:
            fragment: Normalized fragment text
            index: Term index for the current lecture (None or empty: no match)
            recency: Display terms on cooldown, skipped during matching

        Returns:
            MatchResult for the first acceptable entry, NO_MATCH otherwise
        """
        if index is None or index.is_empty() or not fragment:
            return NO_MATCH

        candidates = [entry for entry in index.lookup()
                      if recency is None or entry.display_term not in recency]
        if not candidates:
            return NO_MATCH

        words = fragment.split()
        max_size = min(self.max_window_words, len(words))

        for size in range(max_size, 0, -1):
            for offset in range(len(words) - size + 1):
                window = ' '.join(words[offset:offset + size])
                for entry in candidates:
                    matched_text = self._match_entry(window, size, entry)
                    if matched_text is not None:
                        if self.verbose:
                            logging.debug(
                                f"SlidingWindowMatcher: '{entry.display_term}' matched '{matched_text}' "
                                f"in window '{window}' (size={size}, offset={offset})"
                            )
                        return MatchResult(is_match=True, matched_text=matched_text, entry=entry)

        return NO_MATCH

    def _match_entry(self, window: str, window_size: int, entry: TermEntry) -> Optional[str]:
        """Return the matched text if entry matches window, else None."""
        term = entry.normalized_term
        if term in window:
            return term

        term_words = entry.words
        if len(term_words) < 2 or window_size < 2:
            return None

        hyphenated = '-'.join(term_words)
        if hyphenated in window:
            return hyphenated

        dehyphenated = entry.display_term.lower().replace('-', ' ')
        if dehyphenated in window:
            return dehyphenated

        span = self._significant_span(window, term_words)
        if span is not None:
            return span

        if term_words[-1] in self.suffix_words:
            pattern = f"{term_words[-2]} {term_words[-1]}"
            if pattern in window:
                return pattern

        return None

    def _significant_span(self, window: str, term_words: list[str]) -> Optional[str]:
        """Match the trailing significant words of a multi-word term.

        All significant words must be longer than 2 characters and present in
        the window, and the distance between the first and last occurrence
        must stay under proximity_chars.

        Returns:
            Window text spanning the significant words, or None
        """
        significant = term_words[-min(self.significant_words, len(term_words)):]

        positions = []
        for word in significant:
            if len(word) < self.min_significant_word_length:
                return None
            position = window.find(word)
            if position < 0:
                return None
            positions.append((position, position + len(word)))

        start = min(p[0] for p in positions)
        last_start = max(p[0] for p in positions)
        if last_start - start >= self.proximity_chars:
            return None

        end = max(p[1] for p in positions)
        return window[start:end]
