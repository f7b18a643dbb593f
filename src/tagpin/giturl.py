"""Validation and persistence of the repository URL."""

import logging
import re
from pathlib import Path
from typing import Self

logger = logging.getLogger(__name__)

GIT_URL_PATTERNS = (
    re.compile(r"^https://[^/\s]+/.+$"),
    re.compile(r"^http://[^/\s]+/.+$"),
    re.compile(r"^git@[^:\s]+:.+$"),
    re.compile(r"^ssh://git@[^/\s]+/.+$"),
    re.compile(r"^file://.+$"),
)
VALID_SCHEMES = frozenset({"http", "https", "ssh", "git", "file"})


def is_valid_git_url(url: str) -> bool:
    """Check that ``url`` looks like something ``git clone`` accepts.

    Accepted shapes are ``https://host/path``, ``http://host/path``,
    ``git@host:path``, ``ssh://git@host/path`` and ``file://path``.

    Args:
        url: URL to check. Surrounding whitespace is ignored.

    Returns:
        True if the URL has an accepted shape.
    """
    url = url.strip()
    if not url:
        return False
    if not any(pattern.match(url) for pattern in GIT_URL_PATTERNS):
        return False

    if "://" in url:
        parts = url.split("://")
        if len(parts) != 2:  # noqa: PLR2004
            return False
        scheme, rest = parts
        if scheme not in VALID_SCHEMES:
            return False
        if scheme == "file":
            return bool(rest)
        host = rest.split("/", 1)[0]
        return bool(host)

    host, _, path = url.partition(":")
    return host.startswith("git@") and bool(path)


def _canonical(url: str) -> str:
    url = url.strip().rstrip("/")
    url = url.removesuffix(".git")
    return url.lower()


def same_remote(a: str, b: str) -> bool:
    """Return True if two URLs name the same repository.

    Whitespace, a trailing slash, a trailing ``.git`` and letter case are
    ignored.
    """
    return _canonical(a) == _canonical(b)


class GitUrlStore:
    """File holding the repository URL an installation was made from.

    Attributes:
        path: Location of the URL file.
    """

    def __init__(self: Self, path: Path) -> None:
        """Initialize the store.

        Args:
            path: Location of the URL file.
        """
        self.path = path

    def read(self: Self) -> str | None:
        """Return the stored URL, or None if the file is missing or blank."""
        if not self.path.is_file():
            return None
        url = self.path.read_text(encoding="utf-8").strip()
        return url or None

    def write(self: Self, url: str) -> None:
        """Store ``url``, creating parent directories as needed."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(url.strip(), encoding="utf-8")
        logger.info("Saved repository URL to %s", self.path)
