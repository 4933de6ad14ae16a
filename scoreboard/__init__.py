"""Minimal leaderboard service: submit integer scores, read the top five."""

__version__ = "0.1.0"
