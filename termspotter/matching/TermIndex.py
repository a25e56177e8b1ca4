# termspotter/matching/TermIndex.py
import logging
from typing import Any, Iterable, Mapping, Optional, Union

from termspotter.matching.TextNormalizer import TextNormalizer
from termspotter.types import TermEntry

TermSource = Union[Mapping[str, str], Iterable[Any]]


class TermIndex:
    """Immutable, ordered table of known terms for one lecture.

    Entries are sorted by descending word count of the normalized term so
    that matching tries the most specific term first. The sort is stable:
    terms with equal word counts keep their insertion order, which keeps
    match results deterministic.

    A TermIndex is never updated in place. A new lecture builds a new index
    via TermIndex.build() and discards the previous one together with every
    cache and recency structure that referenced it.
    """

    def __init__(self, entries: tuple[TermEntry, ...] = ()) -> None:
        self._entries: tuple[TermEntry, ...] = entries

    @classmethod
    def build(cls, entries: Optional[TermSource],
              text_normalizer: Optional[TextNormalizer] = None) -> 'TermIndex':
        """Build an index from the keyword collaborator's output.

        Accepts a {term: definition} mapping, or an iterable of
        {"term": ..., "definition": ...} dicts, (term, definition) pairs or
        TermEntry objects.

        Malformed entries (non-string term, empty after normalization) are
        skipped with a warning. A term whose normalized form is already
        indexed keeps the first definition.

        Args:
            entries: Term source, None is treated as empty
            text_normalizer: Optional normalizer, defaults to TextNormalizer()

        Returns:
            New TermIndex sorted longest-term-first
        """
        normalizer = text_normalizer if text_normalizer is not None else TextNormalizer()

        if entries is None:
            pairs: Iterable[Any] = ()
        elif isinstance(entries, Mapping):
            pairs = entries.items()
        else:
            pairs = entries

        collected: list[TermEntry] = []
        seen: set[str] = set()

        for raw in pairs:
            term, definition = cls._unpack(raw)
            if not isinstance(term, str):
                logging.warning(f"TermIndex: skipping entry with non-string term: {raw!r}")
                continue

            normalized = normalizer.normalize_text(term)
            if not normalized:
                logging.warning(f"TermIndex: skipping term '{term}' (empty after normalization)")
                continue

            if normalized in seen:
                logging.debug(f"TermIndex: duplicate term '{term}' ignored, keeping first definition")
                continue

            seen.add(normalized)
            collected.append(TermEntry(
                normalized_term=normalized,
                display_term=term.strip(),
                definition=str(definition).strip() if definition is not None else "",
            ))

        # sorted() is stable: ties keep insertion order
        ordered = tuple(sorted(collected, key=lambda e: -e.word_count))
        logging.info(f"TermIndex: built with {len(ordered)} terms")
        return cls(ordered)

    @staticmethod
    def _unpack(raw: Any) -> tuple[Any, Any]:
        if isinstance(raw, TermEntry):
            return raw.display_term, raw.definition
        if isinstance(raw, Mapping):
            return raw.get("term"), raw.get("definition")
        if isinstance(raw, (tuple, list)) and len(raw) == 2:
            return raw[0], raw[1]
        return None, None

    def lookup(self) -> tuple[TermEntry, ...]:
        """Return entries ordered longest-term-first."""
        return self._entries

    def is_empty(self) -> bool:
        return not self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self):
        return iter(self._entries)
