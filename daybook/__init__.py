"""
Daybook - Personal Daily Journal

A self-hosted Python system for writing one entry per day,
tagging it, scoring the mood, and reviewing the history.

This system exists to keep a habit, not to grade it.
"""

__version__ = "0.1.0"
