"""Core modules for Ideaboard.

Nothing in here may import Flask; the web and CLI layers both build on it.
"""
