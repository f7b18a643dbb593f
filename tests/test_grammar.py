"""Tests for _grammar.py."""

import pytest

from tagpin._grammar import (
    GRAMMARS,
    VersionFields,
    match_date_version,
    match_semantic_version,
    match_version,
)


def test_grammars_try_date_form_first() -> None:
    """Test that the date grammar precedes the semantic grammar."""
    assert GRAMMARS == (match_date_version, match_semantic_version)


def test_match_date_version() -> None:
    """Test matching the date-tagged form."""
    assert match_date_version("4.2.2-20240901") == VersionFields(
        4, 2, 2, "20240901", None
    )


@pytest.mark.parametrize(
    "text",
    ["4.2.2", "4.2.2-2024090", "4.2.2-202409011", "4.2.2-20240901+b1", "4.2.2-beta"],
)
def test_match_date_version_rejects(text: str) -> None:
    """Test that only exactly eight digits after the core match."""
    assert match_date_version(text) is None


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("1.2.3", VersionFields(1, 2, 3)),
        ("0.0.0", VersionFields(0, 0, 0)),
        ("10.20.30", VersionFields(10, 20, 30)),
        ("1.2.3-beta.1", VersionFields(1, 2, 3, "beta.1")),
        ("1.2.3-rc-2", VersionFields(1, 2, 3, "rc-2")),
        ("1.2.3+build.5", VersionFields(1, 2, 3, None, "build.5")),
        ("1.2.3-alpha+sha.abc", VersionFields(1, 2, 3, "alpha", "sha.abc")),
    ],
)
def test_match_semantic_version(text: str, expected: VersionFields) -> None:
    """Test matching the general semantic form."""
    assert match_semantic_version(text) == expected


@pytest.mark.parametrize(
    "text",
    [
        "",
        "1",
        "1.2",
        "1.2.3.4",
        "v1.2.3",
        "-1.2.3",
        "+1.2.3",
        "1.2.3-",
        "1.2.3+",
        "1.2.3 ",
        " 1.2.3",
        "1.2.3\n",
        "1.2.3-be_ta",
        "1.2.x",
        "latest",
    ],
)
def test_match_version_rejects_partial_and_malformed(text: str) -> None:
    """Test that matching is anchored at both ends."""
    assert match_version(text) is None


def test_match_version_prefers_date_form() -> None:
    """Test that a date tag comes from the date grammar without build metadata."""
    fields = match_version("1.0.0-20240901")
    assert fields == VersionFields(1, 0, 0, "20240901", None)


def test_match_version_falls_back_to_semantic_form() -> None:
    """Test that non-date suffixes are matched by the semantic grammar."""
    assert match_version("1.0.0-20240901+meta") == VersionFields(
        1, 0, 0, "20240901", "meta"
    )
