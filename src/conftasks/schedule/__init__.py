"""
Schedule subsystem.

Components:
- models.py: data structures (Task, Person, ScheduleCalendar, buckets, slot variants)
- weeks.py: ISO week label parsing and week/day date arithmetic
- resolver.py: per-task level detection and start/end resolution
- classifier.py: NOW / NEXT / UPCOMING / FUTURE / PAST grouping against an explicit now
- formatting.py: short date/time strings for display
- refresher.py: caller-side polling loop that re-runs the classification
"""
