"""Tests for GitHub repository link extraction."""

import pytest

from plugins.github.models import RepositoryRef
from plugins.github.patterns import extract_repository


def test_extracts_owner_and_repo_from_sentence():
    ref = extract_repository("check out https://github.com/foo-bar/Baz_1 please")

    assert ref == RepositoryRef("foo-bar", "Baz_1")
    assert ref.slug == "foo-bar/Baz_1"


def test_stops_at_second_path_segment():
    assert extract_repository("github.com/a/b/issues/3") == RepositoryRef("a", "b")


def test_no_github_link():
    assert extract_repository("see https://gitlab.com/a/b") is None
    assert extract_repository("nothing to see here") is None


@pytest.mark.parametrize("text", [
    "https://github.com/a/b.",
    "(https://github.com/a/b)",
    "https://github.com/a/b.js",
    "https://github.com/a/b?tab=readme",
    "https://github.com/a/b",
])
def test_trailing_characters_terminate_repo_name(text):
    assert extract_repository(text) == RepositoryRef("a", "b")


def test_owner_only_link_does_not_match():
    assert extract_repository("https://github.com/octocat") is None


def test_only_first_link_is_used():
    ref = extract_repository("github.com/one/two and github.com/three/four")

    assert ref == RepositoryRef("one", "two")


def test_non_ascii_letter_terminates_repo_name():
    assert extract_repository("github.com/a/b中文") == RepositoryRef("a", "b")
