"""Recruit Signal AI: resume parsing, candidate search and outreach generation over a hosted LLM."""

__version__ = "0.1.0"
