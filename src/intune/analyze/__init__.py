"""
Key and BPM Analysis Module: Parse metadata strings and classify track pairs.

- Pure functions over key/tempo strings supplied by an external source
- Malformed data degrades to an "unknown" result, never an exception
- Output: CompatibilityResult (label, score 0-100, reason)
"""

__all__ = ["result", "key", "bpm"]
