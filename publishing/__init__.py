"""Persistence and domain layer for authors, categories, articles and threaded comments."""

__version__ = "0.1.0"
