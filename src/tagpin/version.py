"""Versions parsed from tags."""

import functools
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Self

from ._grammar import match_version
from .describe import normalize_describe
from .exceptions import MalformedVersionError

DATE_VERSION_LENGTH = 8


class Ordering(IntEnum):
    """Result of comparing two versions."""

    LESS = -1
    EQUAL = 0
    GREATER = 1


@functools.total_ordering
@dataclass(frozen=True)
class Version:
    """A version parsed from a tag.

    Ordering follows semantic versioning: numeric ``major``, ``minor`` and
    ``patch``, then a release sorts above any pre-release of the same core,
    and two pre-releases compare as plain strings. Date suffixes get no
    special treatment, so ``1.0.0-20240901`` and ``1.0.0-beta`` compare by
    their characters.

    Attributes:
        major: Major version number.
        minor: Minor version number.
        patch: Patch version number.
        pre_release: Text after ``-``, or None for a release.
        build_metadata: Text after ``+``. Never affects ordering or equality.
        raw: The exact text the version came from, used as a git ref.
    """

    major: int
    minor: int
    patch: int
    pre_release: str | None = None
    build_metadata: str | None = field(default=None, compare=False)
    raw: str = field(default="", compare=False)

    @classmethod
    def parse(cls, version_str: str) -> Self:
        """Parse a version string.

        Args:
            version_str: String in date-tagged or semantic form, without a
                leading ``v``.

        Returns:
            Parsed Version whose ``raw`` is ``version_str``.

        Raises:
            MalformedVersionError: If no grammar matches the whole string.
        """
        fields = match_version(version_str)
        if fields is None:
            raise MalformedVersionError(version_str)
        return cls(*fields, raw=version_str)

    @classmethod
    def from_tag(cls, tag: str) -> Self:
        """Parse a tag or describe string, keeping the tag as ``raw``.

        The tag is normalized first (ref prefix, branch path, describe suffix
        and leading ``v`` removed), but ``raw`` keeps the original text so it
        can be handed back to git unchanged.

        Raises:
            MalformedVersionError: If the normalized tag does not parse.
        """
        fields = match_version(normalize_describe(tag))
        if fields is None:
            raise MalformedVersionError(tag)
        return cls(*fields, raw=tag)

    def is_release(self: Self) -> bool:
        """Return True if the version has no pre-release part."""
        return self.pre_release is None

    def is_date_version(self: Self) -> bool:
        """Return True if the pre-release part is exactly eight ASCII digits."""
        return (
            self.pre_release is not None
            and len(self.pre_release) == DATE_VERSION_LENGTH
            and all(c in "0123456789" for c in self.pre_release)
        )

    def _sort_key(self: Self) -> tuple[int, int, int, bool, str]:
        return (
            self.major,
            self.minor,
            self.patch,
            self.pre_release is None,
            self.pre_release or "",
        )

    def __lt__(self: Self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def __str__(self: Self) -> str:
        """Return the canonical version string, without the original prefix."""
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.pre_release is not None:
            text = f"{text}-{self.pre_release}"
        if self.build_metadata is not None:
            text = f"{text}+{self.build_metadata}"
        return text


def parse_version(version_str: str) -> Version:
    """Parse a version string. See ``Version.parse``."""
    return Version.parse(version_str)


def compare(a: Version, b: Version) -> Ordering:
    """Compare two versions.

    Args:
        a: Left-hand version.
        b: Right-hand version.

    Returns:
        Ordering.LESS, Ordering.EQUAL or Ordering.GREATER.
    """
    if a < b:
        return Ordering.LESS
    if b < a:
        return Ordering.GREATER
    return Ordering.EQUAL
