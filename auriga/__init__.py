"""Agent domain types, classifier and CLI configuration builders, and SQLite trace storage."""

__version__ = "0.1.9"