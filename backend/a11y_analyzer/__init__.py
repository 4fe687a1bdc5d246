"""Accessibility Analyzer — axe-core scanning with scored, prioritized reports."""

__version__ = "1.0.0"
