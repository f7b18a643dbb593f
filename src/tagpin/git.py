"""Thin wrapper around the ``git`` command line."""

import logging
import subprocess
from collections.abc import Callable
from pathlib import Path
from typing import Any, Self, TypeAlias

from .describe import split_tag_lines, tag_from_ls_remote_line
from .exceptions import GitCommandError

logger = logging.getLogger(__name__)

Runner: TypeAlias = Callable[..., subprocess.CompletedProcess[str]]

DEFAULT_TIMEOUT = 300


class GitRepository:
    """Git operations on a single working tree.

    Commands run without ``check=True``; callers decide which failures are
    fatal. Methods returning ``bool`` report whether git exited with status 0.

    Attributes:
        path: Working tree the commands run in.
        runner: Callable with the signature of ``subprocess.run``.
    """

    def __init__(self: Self, path: Path, runner: Runner = subprocess.run) -> None:
        """Initialize the repository wrapper.

        Args:
            path: Working tree the commands run in.
            runner: Replacement for ``subprocess.run``, mainly for tests.
        """
        self.path = path
        self.runner = runner

    @property
    def exists(self: Self) -> bool:
        """True if ``path`` is a directory containing ``.git``."""
        return self.path.is_dir() and (self.path / ".git").exists()

    def run(
        self: Self, *args: str, cwd: Path | None = None
    ) -> subprocess.CompletedProcess[str]:
        """Run ``git`` with ``args`` and return the completed process.

        A missing git executable is reported as a failed process with
        return code 127, and a command that outlives the timeout with
        return code 124, rather than raised.
        """
        command = ["git", *args]
        logger.debug("Running %s", " ".join(command))
        kwargs: dict[str, Any] = {
            "capture_output": True,
            "text": True,
            "timeout": DEFAULT_TIMEOUT,
        }
        try:
            return self.runner(command, cwd=cwd or self.path, **kwargs)
        except FileNotFoundError as e:
            return subprocess.CompletedProcess(command, 127, "", str(e))
        except subprocess.TimeoutExpired as e:
            logger.warning("%s timed out after %ss", " ".join(command), e.timeout)
            return subprocess.CompletedProcess(command, 124, "", str(e))

    def succeeded(self: Self, *args: str, cwd: Path | None = None) -> bool:
        """Run ``git`` with ``args`` and report whether it exited with 0."""
        result = self.run(*args, cwd=cwd)
        if result.returncode != 0:
            logger.debug(
                "git %s exited with %d: %s",
                " ".join(args),
                result.returncode,
                result.stderr.strip(),
            )
        return result.returncode == 0

    def output(self: Self, *args: str, cwd: Path | None = None) -> str:
        """Run ``git`` with ``args`` and return stripped stdout.

        Raises:
            GitCommandError: If git exits with a non-zero status.
        """
        result = self.run(*args, cwd=cwd)
        if result.returncode != 0:
            raise GitCommandError(args, result.returncode, result.stderr)
        return result.stdout.strip()

    def describe(self: Self) -> str:
        """Return ``git describe --tags`` for the current checkout."""
        return self.output("describe", "--tags")

    def local_tags(self: Self, limit: int | None = None) -> list[str]:
        """List local tags, newest version first.

        Args:
            limit: Keep at most this many tags.

        Returns:
            Tag names, or an empty list if git fails.
        """
        result = self.run("tag", "-l", "--sort=-version:refname")
        if result.returncode != 0:
            logger.warning("Listing local tags failed: %s", result.stderr.strip())
            return []
        tags = split_tag_lines(result.stdout)
        return tags if limit is None else tags[:limit]

    def remote_tags(self: Self, remote: str = "origin") -> list[str]:
        """List tag names advertised by ``remote``.

        Returns:
            Tag names, or an empty list if git fails.
        """
        result = self.run("ls-remote", "--tags", "--refs", remote)
        if result.returncode != 0:
            logger.warning("Listing remote tags failed: %s", result.stderr.strip())
            return []
        tags = []
        for line in split_tag_lines(result.stdout):
            tag = tag_from_ls_remote_line(line)
            if tag is not None:
                tags.append(tag)
        return tags

    def remote_tag_lines(self: Self, remote: str = "origin") -> list[str]:
        """Return raw ``ls-remote --tags`` lines, or an empty list on failure."""
        result = self.run("ls-remote", "--tags", remote)
        if result.returncode != 0:
            return []
        return split_tag_lines(result.stdout)

    def fetch_tags(self: Self) -> None:
        """Prune stale remote refs and fetch all tags from origin.

        Raises:
            GitCommandError: If both the origin fetch and the fallback fetch
                of all remotes fail.
        """
        self.succeeded("remote", "prune", "origin")
        result = self.run("fetch", "origin", "--tags", "--force", "--prune-tags")
        if result.returncode == 0:
            return
        logger.warning("Fetching tags from origin failed: %s", result.stderr.strip())
        fallback = ("fetch", "--all", "--tags", "--force")
        result = self.run(*fallback)
        if result.returncode != 0:
            raise GitCommandError(fallback, result.returncode, result.stderr)

    def refetch_tags(self: Self) -> None:
        """Fetch tags from origin, overwriting local ones.

        Raises:
            GitCommandError: If the fetch fails.
        """
        self.output("fetch", "origin", "--tags", "--force")

    def delete_local_tags(self: Self) -> int:
        """Delete every local tag and return how many were deleted."""
        deleted = 0
        for tag in self.local_tags():
            if self.succeeded("tag", "-d", tag):
                deleted += 1
        return deleted

    def checkout(self: Self, ref: str) -> bool:
        """Check out ``ref``."""
        return self.succeeded("checkout", ref)

    def reset_hard(self: Self, ref: str) -> bool:
        """Hard reset the working tree to ``ref``."""
        return self.succeeded("reset", "--hard", ref)

    def fetch_refspec(self: Self, refspec: str, remote: str = "origin") -> bool:
        """Fetch a single refspec from ``remote``."""
        return self.succeeded("fetch", remote, refspec)

    def fetch_all(self: Self) -> bool:
        """Fetch every remote."""
        return self.succeeded("fetch", "--all")

    def clean_worktree(self: Self) -> None:
        """Discard local modifications and untracked files. Failures are ignored."""
        self.succeeded("reset", "--hard", "HEAD")
        self.succeeded("clean", "-fd")
        self.succeeded("checkout", ".")

    def clone(self: Self, url: str) -> None:
        """Clone ``url`` into ``path``.

        Raises:
            GitCommandError: If the clone fails.
        """
        parent = self.path.parent
        parent.mkdir(parents=True, exist_ok=True)
        self.output("clone", url, str(self.path), cwd=parent)

    def mark_safe_directory(self: Self) -> bool:
        """Add ``path`` to the global ``safe.directory`` list."""
        return self.succeeded(
            "config", "--global", "--add", "safe.directory", str(self.path)
        )

    def get_remote_url(self: Self, remote: str = "origin") -> str:
        """Return the URL of ``remote``.

        Raises:
            GitCommandError: If the remote does not exist.
        """
        return self.output("remote", "get-url", remote)

    def set_remote_url(self: Self, url: str, remote: str = "origin") -> None:
        """Point ``remote`` at ``url``.

        Raises:
            GitCommandError: If git refuses.
        """
        self.output("remote", "set-url", remote, url)

    def can_reach(self: Self, url: str) -> bool:
        """Return True if ``git ls-remote --heads url`` succeeds."""
        return self.succeeded("ls-remote", "--heads", url, cwd=Path.cwd())
