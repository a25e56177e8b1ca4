# termspotter/matching/TextNormalizer.py
import re

_NON_ALPHANUMERIC = re.compile(r'[\W_]+')


class TextNormalizer:
    """Normalizes transcription text and vocabulary terms for matching.

    Both sides of a comparison go through the same normalization so that
    recognizer output differing only in punctuation, case or spacing
    ("Wave-Particle   Duality!!" vs "wave particle duality") compares equal.
    """

    def normalize_text(self, text: str) -> str:
        """Normalize text for term matching.

        Performs the following normalization steps:
        1. Case normalization to lowercase
        2. Replace every non-alphanumeric character (punctuation, hyphens,
           underscores, whitespace) with a single space
        3. Trim leading/trailing whitespace

        Total and idempotent: normalize_text(normalize_text(x)) == normalize_text(x).

        Args:
            text: Input text to normalize

        Returns:
            Normalized text string suitable for comparison
        """
        if not text:
            return ""

        lowercased = text.lower()

        # Runs of separators collapse to one space in the same pass
        cleaned = _NON_ALPHANUMERIC.sub(' ', lowercased)

        return cleaned.strip()
