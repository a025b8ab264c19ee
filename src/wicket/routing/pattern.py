"""Wildcard path patterns.

A pattern is a path template where each ``*`` captures one run of
non-``/`` characters::

    "/users/*"          matches "/users/7"        -> ("7",)
    "/users/*/posts/*"  matches "/users/7/posts/3" -> ("7", "3")
    "/files/*.txt"      matches "/files/notes.txt" -> ("notes",)

Everything except ``*`` is matched literally and the match is anchored
to the whole path.
"""

import re
from dataclasses import dataclass
from functools import lru_cache

from wicket.errors import InvalidPatternError

# One wildcard: any run of path-safe characters, possibly empty
WILDCARD = "*"
_CAPTURE = r"([^/]*)"


@dataclass(frozen=True, slots=True)
class CompiledPattern:
    """A compiled wildcard pattern. Immutable once compiled."""

    source: str
    regex: re.Pattern[str]

    @property
    def wildcards(self) -> int:
        """Number of ``*`` captures in the pattern."""
        return self.regex.groups

    def match(self, path: str) -> tuple[str, ...] | None:
        """Match *path* end-to-end.

        Returns ``None`` when the path does not match. A match returns
        the captures in wildcard order, which is an empty tuple for a
        pattern with no ``*``.
        """
        m = self.regex.fullmatch(path)
        if m is None:
            return None
        return m.groups()


def compile_pattern(pattern: str) -> CompiledPattern:
    """Compile a wildcard pattern into a matcher.

    Identical patterns share one compiled instance.
    Raises ``InvalidPatternError`` if *pattern* is not a non-empty string.
    """
    if not isinstance(pattern, str) or not pattern:
        msg = f"Route pattern must be a non-empty string, got {pattern!r}."
        raise InvalidPatternError(msg)
    return _compile(pattern)


@lru_cache(maxsize=512)
def _compile(pattern: str) -> CompiledPattern:
    literal_parts = pattern.split(WILDCARD)
    source = _CAPTURE.join(re.escape(part) for part in literal_parts)
    return CompiledPattern(source=pattern, regex=re.compile(source))
