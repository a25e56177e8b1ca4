"""Type definitions for term spotting and display coordination."""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional


@dataclass(frozen=True)
class TermEntry:
    """Known vocabulary item with its definition.

    Attributes:
        normalized_term: Lowercase term without punctuation, single interior spaces
        display_term: Term as supplied by the keyword collaborator
        definition: Definition text shown to the user
    """
    normalized_term: str
    display_term: str
    definition: str

    @property
    def words(self) -> list[str]:
        return self.normalized_term.split()

    @property
    def word_count(self) -> int:
        return len(self.normalized_term.split())


@dataclass(frozen=True)
class MatchResult:
    """Outcome of matching one normalized fragment against the term index.

    Attributes:
        is_match: True when a term was found
        matched_text: Window text that satisfied the matching rule ('' when no match)
        entry: Matched TermEntry, None when no match
    """
    is_match: bool
    matched_text: str = ""
    entry: Optional[TermEntry] = None


NO_MATCH = MatchResult(is_match=False)


class DisplayStatus(Enum):
    """Display coordinator states.

    State Transitions:
    IDLE → SHOWING: accepted match
    SHOWING → IDLE: auto-clear deadline elapsed, explicit clear, or session reset
    """
    IDLE = auto()
    SHOWING = auto()


@dataclass(frozen=True)
class DisplayState:
    """Snapshot of what the display surface currently shows.

    Attributes:
        status: IDLE or SHOWING
        current_term: Display term being shown, None when idle
        clear_deadline: Clock value at which the display auto-clears, None when idle
    """
    status: DisplayStatus = DisplayStatus.IDLE
    current_term: Optional[str] = None
    clear_deadline: Optional[float] = None

    @property
    def is_showing(self) -> bool:
        return self.status is DisplayStatus.SHOWING


@dataclass(frozen=True)
class TranscriptionFragment:
    """One chunk of text from the speech recognition stream."""
    text: str
    is_final: bool


@dataclass(frozen=True)
class SurfacedTerm:
    """Term that was shown to the user.

    Attributes:
        display_term: Term as supplied by the keyword collaborator
        definition: Definition text
        matched_text: Fragment text that triggered the match
        surfaced_at: Clock value when the term was surfaced
    """
    display_term: str
    definition: str
    matched_text: str
    surfaced_at: float
