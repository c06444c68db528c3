"""Matching of binding queries against concrete resource paths.

Queries are either literal paths (`/app/trans`) or glob patterns
(`/app/trans/*.xlf`). Pattern rules:

    *       any run of characters except "/"
    **      any run of characters, "/" included
    ?       a single character except "/"
    [abc]   one character from the class
    {a,b}   one of the comma separated alternatives
    \\x     the literal character x
"""

from __future__ import annotations

import re
from functools import lru_cache

from bindery.core.query.models import WILDCARD_CHARS, QueryLanguage


def check_language(language: str | QueryLanguage) -> QueryLanguage:
    """Validate a query language name.

    Raises:
        UnsupportedLanguageError: For anything other than glob.
    """
    return QueryLanguage.parse(language)


def is_dynamic_query(query: str) -> bool:
    """Check whether a query contains glob wildcards."""
    return any(char in WILDCARD_CHARS for char in query)


def is_base_path(base_path: str, path: str) -> bool:
    """Check whether `base_path` is `path` itself or one of its ancestors.

    Args:
        base_path: Candidate directory, e.g. "/app/trans".
        path: Concrete path, e.g. "/app/trans/errors.fr.xlf".

    Returns:
        True for equal paths and for directory-prefix ancestors. A plain
        string prefix ("/app/tr" for "/app/trans") does not count.
    """
    if base_path == path:
        return True
    return path.startswith(base_path.rstrip("/") + "/")


@lru_cache(maxsize=1024)
def glob_to_regex(pattern: str) -> re.Pattern[str]:
    """Compile a glob pattern into an anchored regular expression.

    Raises:
        ValueError: If a character class or brace group is not closed.
    """
    parts: list[str] = []
    i = 0
    depth = 0
    while i < len(pattern):
        char = pattern[i]
        if char == "\\" and i + 1 < len(pattern):
            parts.append(re.escape(pattern[i + 1]))
            i += 2
            continue
        if char == "*":
            if pattern.startswith("**", i):
                parts.append(".*")
                i += 2
                continue
            parts.append("[^/]*")
        elif char == "?":
            parts.append("[^/]")
        elif char == "[":
            end = pattern.find("]", i + 1)
            if end == -1:
                raise ValueError(f"Unclosed character class in glob {pattern!r}")
            body = pattern[i + 1 : end]
            if body.startswith("!"):
                body = "^" + body[1:]
            parts.append(f"[{body}]")
            i = end + 1
            continue
        elif char == "{":
            depth += 1
            parts.append("(?:")
        elif char == "}" and depth:
            depth -= 1
            parts.append(")")
        elif char == "," and depth:
            parts.append("|")
        else:
            parts.append(re.escape(char))
        i += 1
    if depth:
        raise ValueError(f"Unclosed brace group in glob {pattern!r}")
    return re.compile("".join(parts) + r"\Z", re.DOTALL)


def glob_match(path: str, pattern: str) -> bool:
    """Check whether a path matches a glob pattern."""
    return glob_to_regex(pattern).match(path) is not None


def resource_path_matches_query(resource_path: str, query: str) -> bool:
    """Check whether a binding query selects a resource path.

    Glob queries are matched as patterns. Literal queries match the path
    itself and every path below it.

    Args:
        resource_path: Concrete resource path.
        query: Stored binding query.

    Returns:
        True if a binding with this query applies to the resource.
    """
    if is_dynamic_query(query):
        return glob_match(resource_path, query)
    return is_base_path(query, resource_path)
