"""
Compatibility Module: Score, rank, and suggest tracks against a reference.

- Key weighted 60%, BPM 40%, overall score rounded half up
- Ranking is stable: equal scores keep their input order
- Candidate sources are interchangeable; the scorer never sees where tracks came from
"""

__all__ = ["scoring", "selector", "suggest", "sources"]
