# termspotter/display/SurfacedTermHistory.py
from typing import List

from termspotter.types import SurfacedTerm


class SurfacedTermHistory:
    """Bounded list of recently surfaced terms, newest first.

    Subscribes to SurfacedTermPublisher like any display surface. A term
    surfaced again replaces its older record (compared case-insensitively)
    and moves to the front.

    Args:
        max_terms: Maximum number of records kept
    """

    def __init__(self, max_terms: int = 10) -> None:
        self.max_terms: int = max_terms
        self._terms: List[SurfacedTerm] = []

    def on_term_surfaced(self, term: SurfacedTerm) -> None:
        key = term.display_term.lower()
        self._terms = [t for t in self._terms if t.display_term.lower() != key]
        self._terms.insert(0, term)
        del self._terms[self.max_terms:]

    def on_display_cleared(self) -> None:
        pass

    def recent(self, limit: int = 3) -> List[SurfacedTerm]:
        return self._terms[:max(limit, 0)]

    def clear(self) -> None:
        self._terms = []

    def __len__(self) -> int:
        return len(self._terms)
