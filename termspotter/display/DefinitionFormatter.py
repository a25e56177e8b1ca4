# termspotter/display/DefinitionFormatter.py
from typing import Sequence

from termspotter.types import SurfacedTerm


def truncate(text: str, max_chars: int) -> str:
    """Cut text to max_chars, appending '...' when shortened."""
    text = text.strip()
    if len(text) <= max_chars:
        return text
    return text[:max_chars].rstrip() + "..."


def format_definition(term: SurfacedTerm, max_chars: int = 100) -> str:
    """Render a surfaced term for a small text display.

    Example:
        💡 EIGENVALUE

        A scalar by which an eigenvector is scaled.
    """
    return f"💡 {term.display_term.upper()}\n\n{truncate(term.definition, max_chars)}"


def format_recent_terms(terms: Sequence[SurfacedTerm], max_chars: int = 50) -> str:
    """Render a numbered list of recent terms with short definitions."""
    if not terms:
        return "🔑 No Key Terms Yet\n\nKeep listening to detect academic concepts!"

    lines = ["🔑 Recent Key Terms", ""]
    for number, term in enumerate(terms, start=1):
        lines.append(f"{number}. {term.display_term}")
        definition = term.definition.strip()
        if len(definition) > max_chars:
            definition = definition[:max_chars - 3] + "..."
        lines.append(f"   {definition}")
    return "\n".join(lines)
