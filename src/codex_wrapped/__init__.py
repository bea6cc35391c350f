"""Codex Wrapped: a year in review of your Codex CLI usage."""

__version__ = "0.3.0"
