# src/link_checker/utils/path_utils.py
import logging
import re
from functools import lru_cache
from typing import List

logger = logging.getLogger(__name__)


class PathUtils:
    """Helpers for document paths inside an in-memory file set."""

    @staticmethod
    def normalize(path: str) -> str:
        """Converts any path separator convention to forward slashes."""
        return re.sub(r"[/\\]", "/", path)

    @staticmethod
    def expand_braces(pattern: str) -> List[str]:
        """
        Expands the first '{a,b}' group of a glob, recursively.
        'docs/{a,b}/*.html' -> ['docs/a/*.html', 'docs/b/*.html']
        """
        match = re.search(r"\{([^{}]*,[^{}]*)\}", pattern)
        if not match:
            return [pattern]
        head, tail = pattern[:match.start()], pattern[match.end():]
        out: List[str] = []
        for option in match.group(1).split(","):
            out.extend(PathUtils.expand_braces(head + option + tail))
        return out

    @staticmethod
    def glob_to_regex(pattern: str) -> str:
        """
        Translates a single (brace-free) glob into a regular expression.

        '**' spans zero or more whole path segments, '*' and '?' stay inside
        one segment.
        """
        i, n = 0, len(pattern)
        out = []
        while i < n:
            c = pattern[i]
            if c == "*":
                if pattern.startswith("**", i):
                    at_segment_start = i == 0 or pattern[i - 1] == "/"
                    if at_segment_start and pattern.startswith("**/", i):
                        out.append("(?:[^/]*/)*")
                        i += 3
                        continue
                    out.append(".*")
                    i += 2
                    continue
                out.append("[^/]*")
            elif c == "?":
                out.append("[^/]")
            elif c == "[":
                end = pattern.find("]", i + 1)
                if end == -1:
                    out.append(re.escape(c))
                else:
                    body = pattern[i + 1:end]
                    if body.startswith("!"):
                        body = "^" + body[1:]
                    out.append(f"[{body}]")
                    i = end
            else:
                out.append(re.escape(c))
            i += 1
        return "".join(out)

    @staticmethod
    @lru_cache(maxsize=64)
    def compile_glob(pattern: str) -> "re.Pattern[str]":
        alternatives = [PathUtils.glob_to_regex(p) for p in PathUtils.expand_braces(pattern)]
        return re.compile(r"\A(?:" + "|".join(alternatives) + r")\Z")

    @staticmethod
    def glob_match(pattern: str, path: str) -> bool:
        return PathUtils.compile_glob(pattern).match(PathUtils.normalize(path)) is not None
