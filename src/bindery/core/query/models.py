"""Query language models.

Usage:
    language = QueryLanguage.parse("glob")
    assert language is QueryLanguage.GLOB
"""

from __future__ import annotations

from enum import Enum

from bindery.errors import UnsupportedLanguageError

DEFAULT_LANGUAGE = "glob"

# Characters that turn a literal path into a pattern
WILDCARD_CHARS = frozenset("*?[{")


class QueryLanguage(Enum):
    """Languages a binding query may be written in. Only glob is supported."""

    GLOB = "glob"

    @classmethod
    def parse(cls, language: str | QueryLanguage) -> QueryLanguage:
        """Resolve a language name.

        Raises:
            UnsupportedLanguageError: If the language is not known.
        """
        if isinstance(language, QueryLanguage):
            return language
        try:
            return cls(language)
        except ValueError:
            raise UnsupportedLanguageError.for_language(
                str(language), tuple(member.value for member in cls)
            ) from None
