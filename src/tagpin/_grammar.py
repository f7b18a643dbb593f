"""Version grammars.

Two grammars are supported and tried in the order of ``GRAMMARS``:

1. The date-tagged form ``MAJOR.MINOR.PATCH-YYYYMMDD`` where the suffix is
   exactly eight digits.
2. The general semantic form ``MAJOR.MINOR.PATCH[-PRE][+BUILD]``.

Every string accepted by the first grammar is also accepted by the second, so
the order is what makes a date tag come out as a date tag.
"""

import re
from collections.abc import Callable
from typing import NamedTuple, TypeAlias

_NUMBER = r"([0-9]+)"
_CORE = rf"{_NUMBER}\.{_NUMBER}\.{_NUMBER}"
_IDENTIFIER = r"[0-9A-Za-z.\-]+"

DATE_VERSION_PATTERN = re.compile(rf"{_CORE}-([0-9]{{8}})")
SEMANTIC_VERSION_PATTERN = re.compile(
    rf"{_CORE}(?:-({_IDENTIFIER}))?(?:\+({_IDENTIFIER}))?"
)


class VersionFields(NamedTuple):
    """Fields extracted from a version string by a grammar."""

    major: int
    minor: int
    patch: int
    pre_release: str | None = None
    build_metadata: str | None = None


Grammar: TypeAlias = Callable[[str], VersionFields | None]


def match_date_version(text: str) -> VersionFields | None:
    """Match ``MAJOR.MINOR.PATCH-DDDDDDDD``.

    Args:
        text: Candidate version string.

    Returns:
        Extracted fields, or None if the whole string does not match.
    """
    match = DATE_VERSION_PATTERN.fullmatch(text)
    if match is None:
        return None
    major, minor, patch, date = match.groups()
    return VersionFields(int(major), int(minor), int(patch), date, None)


def match_semantic_version(text: str) -> VersionFields | None:
    """Match ``MAJOR.MINOR.PATCH`` with optional pre-release and build metadata.

    Args:
        text: Candidate version string.

    Returns:
        Extracted fields, or None if the whole string does not match.
    """
    match = SEMANTIC_VERSION_PATTERN.fullmatch(text)
    if match is None:
        return None
    major, minor, patch, pre_release, build_metadata = match.groups()
    return VersionFields(
        int(major), int(minor), int(patch), pre_release, build_metadata
    )


GRAMMARS: tuple[Grammar, ...] = (match_date_version, match_semantic_version)


def match_version(text: str) -> VersionFields | None:
    """Return the fields from the first grammar that matches ``text``."""
    for grammar in GRAMMARS:
        fields = grammar(text)
        if fields is not None:
            return fields
    return None
