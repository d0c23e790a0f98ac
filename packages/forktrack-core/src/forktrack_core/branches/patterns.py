"""Glob filter for branch names."""

from __future__ import annotations

import re
from functools import lru_cache

MATCH_ALL = "*"


@lru_cache(maxsize=64)
def _compile(pattern: str) -> re.Pattern[str]:
    # Only `*` is a wildcard; every other character is literal
    return re.compile("^" + re.escape(pattern).replace(r"\*", ".*") + "$")


def match_branch(name: str, pattern: str = MATCH_ALL) -> bool:
    """True if `name` matches the glob `pattern` end to end."""
    if pattern == MATCH_ALL:
        return True
    return _compile(pattern).match(name) is not None
