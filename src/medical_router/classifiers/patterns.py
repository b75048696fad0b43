# ============================================================================
# src/medical_router/classifiers/patterns.py
# ============================================================================
"""
Ordered two-part patterns

``FollowedBy(a, b)`` answers the same question as ``re.search(a + ".*" + b)``
(``.`` not crossing newlines) in linear time. A single regex with ``.*``
between two alternations backtracks quadratically on long inputs where the
first part repeats and the second never appears.
"""

from typing import Optional
import re


class FollowedBy:
    """
    ``first`` and then ``then`` later on the same line.

    Only the leftmost ``first`` of a line is tried: any later ``then``
    also follows it.
    """

    def __init__(self, first: str, then: str, flags: int = 0):
        self.first = re.compile(first, flags)
        self.then = re.compile(then, flags)
        self.pattern = f"{first}.*{then}"

    def search(self, text: str) -> Optional["re.Match[str]"]:
        for line in text.split("\n"):
            start = self.first.search(line)
            if start is None:
                continue
            found = self.then.search(line, start.end())
            if found is not None:
                return found
        return None

    def __repr__(self) -> str:
        return f"FollowedBy({self.pattern!r})"
