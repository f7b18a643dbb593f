"""Release channels and the persisted channel marker."""

import logging
from enum import StrEnum
from pathlib import Path
from typing import Self

from .exceptions import InvalidChannelError
from .version import Version

logger = logging.getLogger(__name__)


class Channel(StrEnum):
    """Release track an installation follows.

    ``MASTER`` follows plain ``X.Y.Z`` tags and also accepts any pre-release.
    ``RELEASE`` follows date-stamped builds (``X.Y.Z-YYYYMMDD``) and plain
    releases, and ignores other pre-releases such as ``-beta``.
    """

    MASTER = "master"
    RELEASE = "release"

    @classmethod
    def from_label(cls, label: str) -> Self:
        """Parse a channel label, ignoring case and surrounding whitespace.

        Raises:
            InvalidChannelError: If the label names no channel.
        """
        try:
            return cls(label.strip().lower())
        except ValueError as e:
            raise InvalidChannelError(label, [c.value for c in cls]) from e

    def admits(self: Self, version: Version) -> bool:
        """Return True if ``version`` is a candidate on this channel."""
        if self is Channel.RELEASE:
            return version.is_release() or version.is_date_version()
        return True


def classify(version: Version) -> Channel:
    """Infer the channel an installed version belongs to.

    Date-stamped builds and other pre-releases are ``RELEASE``; a plain
    ``X.Y.Z`` tag is ``MASTER``.
    """
    if version.is_date_version():
        return Channel.RELEASE
    if version.is_release():
        return Channel.MASTER
    return Channel.RELEASE


class ChannelMarker:
    """One-line file recording the channel of an installation.

    Attributes:
        path: Location of the marker file.
    """

    def __init__(self: Self, path: Path) -> None:
        """Initialize the marker.

        Args:
            path: Location of the marker file.
        """
        self.path = path

    def exists(self: Self) -> bool:
        """Return True if the marker file is present."""
        return self.path.is_file()

    def read(self: Self) -> Channel | None:
        """Read the persisted channel.

        Returns:
            The channel, or None when no marker file exists.

        Raises:
            InvalidChannelError: If the file names no channel.
        """
        if not self.exists():
            return None
        channel = Channel.from_label(self.path.read_text(encoding="utf-8"))
        logger.debug("Read channel %s from %s", channel, self.path)
        return channel

    def write(self: Self, channel: Channel) -> None:
        """Persist ``channel``, creating parent directories as needed."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(channel.value, encoding="utf-8")
        logger.debug("Wrote channel %s to %s", channel, self.path)
