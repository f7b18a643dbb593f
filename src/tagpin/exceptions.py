"""Exceptions raised by tagpin."""

from collections.abc import Sequence
from typing import Self


class TagpinError(Exception):
    """Base exception for all tagpin errors."""


class MalformedVersionError(TagpinError, ValueError):
    """Raised when a string matches none of the supported version grammars."""

    def __init__(self: Self, version: str) -> None:
        """Initialize the error.

        Args:
            version: The string that failed to parse.
        """
        self.version = version
        super().__init__(f"Invalid version format: {version}")


class NoCandidateVersionsError(TagpinError):
    """Raised when no tag survives parsing and channel filtering."""

    def __init__(self: Self, channel: str) -> None:
        """Initialize the error.

        Args:
            channel: Channel the resolution was attempted for.
        """
        self.channel = channel
        super().__init__(f"No valid versions found for channel {channel}")


class InvalidChannelError(TagpinError, ValueError):
    """Raised when a channel label is neither master nor release."""

    def __init__(self: Self, label: str, available: Sequence[str]) -> None:
        """Initialize the error.

        Args:
            label: The rejected label.
            available: Labels that would have been accepted.
        """
        self.label = label
        self.available = tuple(available)
        super().__init__(
            f"Invalid channel: {label}. Available channels: {', '.join(available)}"
        )


class GitCommandError(TagpinError):
    """Raised when a mandatory git command fails."""

    def __init__(
        self: Self, args: Sequence[str], returncode: int, stderr: str = ""
    ) -> None:
        """Initialize the error.

        Args:
            args: Arguments passed to git.
            returncode: Exit status of the git process.
            stderr: Captured standard error.
        """
        self.command = tuple(args)
        self.returncode = returncode
        self.stderr = stderr.strip()
        message = f"git {' '.join(args)} failed with exit status {returncode}"
        if self.stderr:
            message = f"{message}: {self.stderr}"
        super().__init__(message)


class NotInstalledError(TagpinError):
    """Raised when an operation needs an installed program directory."""

    def __init__(self: Self, program_dir: object) -> None:
        """Initialize the error.

        Args:
            program_dir: Directory that was expected to hold a git checkout.
        """
        self.program_dir = program_dir
        super().__init__(
            f"Application not installed at {program_dir}. Run 'tagpin install' first"
        )


class InvalidGitUrlError(TagpinError, ValueError):
    """Raised when a git URL is malformed."""

    def __init__(self: Self, url: str) -> None:
        """Initialize the error.

        Args:
            url: The rejected URL.
        """
        self.url = url
        super().__init__(f"Invalid git URL: {url}")


class CheckoutError(TagpinError):
    """Raised when every checkout strategy failed for a ref."""

    def __init__(self: Self, ref: str, attempted: Sequence[str]) -> None:
        """Initialize the error.

        Args:
            ref: The ref that could not be checked out.
            attempted: Names of the strategies tried, in order.
        """
        self.ref = ref
        self.attempted = tuple(attempted)
        super().__init__(
            f"Could not switch to {ref}; tried: {', '.join(attempted) or 'nothing'}"
        )


class ConfigError(TagpinError):
    """Raised when configuration cannot be loaded or is invalid."""


class UnreachableRemoteError(TagpinError):
    """Raised when a repository URL cannot be contacted."""

    def __init__(self: Self, url: str) -> None:
        """Initialize the error.

        Args:
            url: The URL that could not be reached.
        """
        self.url = url
        super().__init__(f"Repository is not reachable: {url}")
