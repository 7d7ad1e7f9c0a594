"""Relevance, diversity and cross-reference engine for a personalized news feed."""

__version__ = "0.1.0"
