"""Matching subsystem - text normalization, term index and sliding-window matching."""
from termspotter.matching.TextNormalizer import TextNormalizer
from termspotter.matching.TermIndex import TermIndex
from termspotter.matching.SlidingWindowMatcher import SlidingWindowMatcher
from termspotter.matching.MatchCache import MatchCache

__all__ = ['TextNormalizer', 'TermIndex', 'SlidingWindowMatcher', 'MatchCache']
