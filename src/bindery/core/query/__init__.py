"""Query functionality: query languages and path matching."""

from bindery.core.query.models import DEFAULT_LANGUAGE, QueryLanguage
from bindery.core.query.operations import (
    check_language,
    glob_match,
    glob_to_regex,
    is_base_path,
    is_dynamic_query,
    resource_path_matches_query,
)

__all__ = [
    # Models
    "QueryLanguage",
    "DEFAULT_LANGUAGE",
    # Operations
    "check_language",
    "glob_match",
    "glob_to_regex",
    "is_base_path",
    "is_dynamic_query",
    "resource_path_matches_query",
]
