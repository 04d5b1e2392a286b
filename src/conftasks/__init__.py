"""
conftasks: event task board.

Resolves week/day/time schedule rows into UTC instants, buckets them into
NOW / NEXT / UPCOMING / FUTURE / PAST for a given instant, and filters them
by person, team and free text.
"""

__version__ = "0.1.0"
