"""Tests for SlidingWindowMatcher.

Fragments are passed through TextNormalizer first, as LectureSession does.
"""

import pytest

from termspotter.matching.SlidingWindowMatcher import SlidingWindowMatcher
from termspotter.matching.TermIndex import TermIndex
from termspotter.matching.TextNormalizer import TextNormalizer
from termspotter.types import NO_MATCH


_normalizer = TextNormalizer()


def _n(text: str) -> str:
    return _normalizer.normalize_text(text)


@pytest.fixture
def matcher(config):
    return SlidingWindowMatcher(config=config)


class TestExactMatching:
    def test_longest_term_preferred(self, matcher):
        index = TermIndex.build({"field": "d1", "quantum field theory": "d2"})

        result = matcher.match(_n("We study quantum field theory"), index)

        assert result.is_match
        assert result.entry.display_term == "quantum field theory"
        assert result.matched_text == "quantum field theory"

    def test_scenario_surfaces_multi_word_term_not_suffix_term(self, matcher):
        index = TermIndex.build({"quantum field theory": "def1", "theory": "def2"})

        result = matcher.match(_n("let's discuss quantum field theory today"), index)

        assert result.entry.display_term == "quantum field theory"
        assert result.entry.definition == "def1"

    def test_single_word_term(self, matcher):
        index = TermIndex.build({"Eigenvalue": "A scalar."})

        result = matcher.match(_n("So the eigenvalue here is two."), index)

        assert result.entry.display_term == "Eigenvalue"
        assert result.matched_text == "eigenvalue"

    def test_punctuated_term_matches_spoken_form(self, matcher):
        index = TermIndex.build({"Wave-Particle Duality": "Both at once."})

        result = matcher.match(_n("the wave particle duality of light"), index)

        assert result.entry.display_term == "Wave-Particle Duality"
        assert result.matched_text == "wave particle duality"

    def test_no_match(self, matcher):
        index = TermIndex.build({"entropy": "x"})

        assert matcher.match(_n("nothing relevant was said"), index) is NO_MATCH

    def test_term_longer_than_window_matches_through_significant_words(self, matcher):
        index = TermIndex.build({"one two three four five six": "x"})

        result = matcher.match("one two three four five six", index)

        assert result.matched_text == "four five six"


class TestPermissiveMatching:
    def test_hyphenated_variant_in_raw_window(self, matcher):
        index = TermIndex.build({"wave particle duality": "x"})

        result = matcher.match("the wave-particle-duality idea", index)

        assert result.matched_text == "wave-particle-duality"

    def test_significant_words_out_of_order(self, matcher):
        index = TermIndex.build({"quantum field theory": "x"})

        result = matcher.match(_n("field quantum theory"), index)

        assert result.is_match
        assert result.matched_text == "field quantum theory"

    def test_significant_words_respect_proximity_bound(self, config):
        index = TermIndex.build({"spin orbit coupling": "x"})
        fragment = _n("coupling between electron spin orbit")

        default = SlidingWindowMatcher(config=config)
        assert default.match(fragment, index).matched_text == "coupling between electron spin orbit"

        config["matching"]["proximity_chars"] = 10
        strict = SlidingWindowMatcher(config=config)
        assert strict.match(fragment, index) is NO_MATCH

    def test_short_significant_words_disable_significant_rule(self, matcher):
        index = TermIndex.build({"theory of relativity": "x"})

        # "of" is too short to count as significant, and "relativity" is not a suffix word
        assert matcher.match(_n("relativity of theory"), index) is NO_MATCH

    def test_pattern_suffix(self, matcher):
        index = TermIndex.build({"Heisenberg Uncertainty Principle": "x"})

        result = matcher.match(_n("the uncertainty principle says"), index)

        assert result.entry.display_term == "Heisenberg Uncertainty Principle"
        assert result.matched_text == "uncertainty principle"

    def test_pattern_suffix_includes_law(self, matcher):
        index = TermIndex.build({"Newton's Third Law": "x"})

        result = matcher.match(_n("the third law states"), index)

        assert result.matched_text == "third law"

    def test_permissive_rules_skip_single_word_windows(self, matcher):
        index = TermIndex.build({"field theory": "x"})

        assert matcher.match("theory", index) is NO_MATCH

    def test_custom_suffix_words(self, config):
        config["matching"]["suffix_words"] = ["cycle"]
        matcher = SlidingWindowMatcher(config=config)
        index = TermIndex.build({"Carnot heat cycle": "x", "Krebs acid theory": "y"})

        assert matcher.match(_n("a heat cycle"), index).entry.display_term == "Carnot heat cycle"
        assert matcher.match(_n("the acid theory"), index) is NO_MATCH


class TestRecencyAndDegenerateInputs:
    def test_recent_terms_are_skipped(self, matcher):
        index = TermIndex.build({"Eigenvalue": "x"})
        fragment = _n("the eigenvalue")

        assert matcher.match(fragment, index, {"Eigenvalue"}) is NO_MATCH
        assert matcher.match(fragment, index, set()).is_match

    def test_recent_longer_term_falls_back_to_shorter(self, matcher):
        index = TermIndex.build({"quantum field theory": "def1", "theory": "def2"})

        result = matcher.match(_n("quantum field theory"), index, {"quantum field theory"})

        assert result.entry.display_term == "theory"

    @pytest.mark.parametrize("index", [None, TermIndex(), TermIndex.build({})])
    def test_empty_index_never_matches(self, matcher, index):
        assert matcher.match("quantum field theory", index) is NO_MATCH

    def test_empty_fragment(self, matcher):
        index = TermIndex.build({"entropy": "x"})

        assert matcher.match("", index) is NO_MATCH

    def test_deterministic(self, matcher):
        index = TermIndex.build({"field": "d1", "quantum field theory": "d2", "theory": "d3"})
        fragment = _n("in quantum field theory the field is fundamental")
        recency = {"d9"}

        results = {matcher.match(fragment, index, recency) for _ in range(5)}

        assert len(results) == 1

    def test_first_acceptable_window_wins(self, matcher):
        """A shorter term in an earlier window beats a longer term in a later one."""
        index = TermIndex.build({"field": "d1", "quantum field theory": "d2"})

        result = matcher.match(_n("field work then quantum field theory"), index)

        assert result.entry.display_term == "field"
