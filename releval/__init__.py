"""Readers for relevance judgments, preferences and retrieval results, with preference counting and z-scores."""

__version__ = "9.0.4"