"""Ideaboard: collect, vote on, and discuss ideas."""

__version__ = "1.0.0"
