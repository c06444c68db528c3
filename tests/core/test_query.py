"""Tests for query languages and resource path matching."""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from bindery import UnsupportedLanguageError
from bindery.core.query import (
    QueryLanguage,
    check_language,
    glob_match,
    is_base_path,
    is_dynamic_query,
    resource_path_matches_query,
)


@st.composite
def path_strategy(draw):
    """Absolute paths built from short lowercase segments."""
    segments = draw(
        st.lists(
            st.text(alphabet="abcdef.", min_size=1, max_size=5),
            min_size=1,
            max_size=4,
        )
    )
    return "/" + "/".join(segments)


def test_glob_is_the_only_language():
    assert check_language("glob") is QueryLanguage.GLOB
    assert check_language(QueryLanguage.GLOB) is QueryLanguage.GLOB


def test_other_languages_are_rejected():
    with pytest.raises(UnsupportedLanguageError, match='Supported languages are: "glob".'):
        check_language("regex")


@pytest.mark.parametrize(
    "query, dynamic",
    [("/app/trans", False), ("/app/*.xlf", True), ("/file?", True), ("/{a,b}", True)],
)
def test_is_dynamic_query(query, dynamic):
    assert is_dynamic_query(query) is dynamic


@pytest.mark.parametrize(
    "base, path, expected",
    [
        ("/app/trans", "/app/trans", True),
        ("/app/trans", "/app/trans/errors.fr.xlf", True),
        ("/app/trans/", "/app/trans/errors.fr.xlf", True),
        ("/app/tr", "/app/trans", False),
        ("/", "/anything/below", True),
        ("/app/trans/errors.fr.xlf", "/app/trans", False),
    ],
)
def test_is_base_path(base, path, expected):
    assert is_base_path(base, path) is expected


@pytest.mark.parametrize(
    "path, pattern, expected",
    [
        ("/data/file2", "/data/*", True),
        ("/data/sub/file2", "/data/*", False),
        ("/data/sub/file2", "/data/**", True),
        ("/file1", "/file?", True),
        ("/file10", "/file?", False),
        ("/a.xlf", "/*.{xlf,yml}", True),
        ("/a.yml", "/*.{xlf,yml}", True),
        ("/a.php", "/*.{xlf,yml}", False),
        ("/file1", "/file[12]", True),
        ("/file3", "/file[12]", False),
        ("/file*", "/file\\*", True),
        ("/file1", "/file\\*", False),
    ],
)
def test_glob_match(path, pattern, expected):
    assert glob_match(path, pattern) is expected


def test_unclosed_brace_is_rejected():
    with pytest.raises(ValueError):
        glob_match("/a", "/{a,b")


def test_literal_query_matches_descendants():
    """Query /app/trans applies to everything stored below it."""
    assert resource_path_matches_query("/app/trans/errors.fr.xlf", "/app/trans")
    assert resource_path_matches_query("/app/trans", "/app/trans")
    assert not resource_path_matches_query("/app/translations", "/app/trans")


def test_glob_query_does_not_match_descendants():
    assert resource_path_matches_query("/app/trans/a.xlf", "/app/trans/*")
    assert not resource_path_matches_query("/app/trans/sub/a.xlf", "/app/trans/*")


@given(path_strategy())
def test_literal_path_matches_itself(path):
    """Property: every path matches a query equal to itself."""
    assert resource_path_matches_query(path, path)


@given(path_strategy(), path_strategy())
def test_literal_path_matches_children(parent, child):
    """Property: a literal query matches all paths below it."""
    assert resource_path_matches_query(parent + child, parent)


@given(path_strategy())
def test_star_matches_any_single_segment(path):
    """Property: /* matches exactly the top-level paths."""
    assert glob_match(path, "/*") is (path.count("/") == 1)
