"""Shared fixtures."""

import subprocess
from collections.abc import Sequence
from pathlib import Path
from typing import Any, Self

import pytest

from tagpin.config import InstallerConfig
from tagpin.exceptions import GitCommandError
from tagpin.git import GitRepository
from tagpin.installer import Installer


class FakeGit:
    """In-memory stand-in for GitRepository.

    ``failing`` names operations that report failure: "checkout", "reset",
    "fetch_refspec" and "fetch_all".
    """

    def __init__(self: Self, path: Path) -> None:
        self.path = path
        self.describe_output: str | None = "v1.0.0"
        self.remote: list[str] = []
        self.local: list[str] = []
        self.remote_url = "https://example.com/app.git"
        self.reachable = True
        self.fetch_ok = True
        self.failing: set[str] = set()
        self.head: str | None = None
        self.calls: list[tuple[str, ...]] = []

    @property
    def exists(self: Self) -> bool:
        return (self.path / ".git").exists()

    def describe(self: Self) -> str:
        self.calls.append(("describe",))
        if self.describe_output is None:
            raise GitCommandError(("describe", "--tags"), 128, "No names found")
        return self.describe_output

    def local_tags(self: Self, limit: int | None = None) -> list[str]:
        tags = list(self.local)
        return tags if limit is None else tags[:limit]

    def remote_tags(self: Self, remote: str = "origin") -> list[str]:
        return list(self.remote)

    def remote_tag_lines(self: Self, remote: str = "origin") -> list[str]:
        return [f"0123abcd\trefs/tags/{tag}" for tag in self.remote]

    def fetch_tags(self: Self) -> None:
        self.calls.append(("fetch_tags",))
        if not self.fetch_ok:
            raise GitCommandError(("fetch", "--all", "--tags", "--force"), 1)

    def refetch_tags(self: Self) -> None:
        self.calls.append(("refetch_tags",))
        self.local = list(self.remote)

    def delete_local_tags(self: Self) -> int:
        deleted = len(self.local)
        self.local = []
        return deleted

    def checkout(self: Self, ref: str) -> bool:
        self.calls.append(("checkout", ref))
        if "checkout" in self.failing:
            return False
        self.head = ref
        return True

    def reset_hard(self: Self, ref: str) -> bool:
        self.calls.append(("reset", ref))
        if "reset" in self.failing:
            return False
        self.head = ref.removeprefix("tags/")
        return True

    def fetch_refspec(self: Self, refspec: str, remote: str = "origin") -> bool:
        self.calls.append(("fetch_refspec", refspec))
        return "fetch_refspec" not in self.failing

    def fetch_all(self: Self) -> bool:
        self.calls.append(("fetch_all",))
        return "fetch_all" not in self.failing

    def clean_worktree(self: Self) -> None:
        # git clean -fd removes untracked files such as git.txt
        self.calls.append(("clean_worktree",))
        (self.path / "git.txt").unlink(missing_ok=True)

    def clone(self: Self, url: str) -> None:
        self.calls.append(("clone", url))
        (self.path / ".git").mkdir(parents=True)
        self.remote_url = url

    def mark_safe_directory(self: Self) -> bool:
        return True

    def get_remote_url(self: Self, remote: str = "origin") -> str:
        return self.remote_url

    def set_remote_url(self: Self, url: str, remote: str = "origin") -> None:
        self.calls.append(("set_remote_url", url))
        self.remote_url = url

    def can_reach(self: Self, url: str) -> bool:
        return self.reachable


class FakeRunner:
    """Stand-in for subprocess.run keyed on git arguments."""

    def __init__(
        self: Self, responses: dict[tuple[str, ...], tuple[int, str, str]] | None = None
    ) -> None:
        self.responses = responses or {}
        self.calls: list[tuple[list[str], Path | None]] = []

    def __call__(
        self: Self, command: Sequence[str], cwd: Path | None = None, **kwargs: Any
    ) -> subprocess.CompletedProcess[str]:
        self.calls.append((list(command), cwd))
        returncode, stdout, stderr = self.responses.get(tuple(command[1:]), (0, "", ""))
        return subprocess.CompletedProcess(list(command), returncode, stdout, stderr)

    def commands(self: Self) -> list[tuple[str, ...]]:
        return [tuple(command[1:]) for command, _ in self.calls]


@pytest.fixture
def config(tmp_path: Path) -> InstallerConfig:
    """Config rooted in a temporary home directory."""
    return InstallerConfig(home=tmp_path)


@pytest.fixture
def fake_git(config: InstallerConfig) -> FakeGit:
    """Fake git for the configured program directory."""
    return FakeGit(config.program_dir)


@pytest.fixture
def installer(config: InstallerConfig, fake_git: FakeGit) -> Installer:
    """Installer backed by the fake git."""
    return Installer(config, git=fake_git)  # type: ignore[arg-type]


@pytest.fixture
def installed(installer: Installer, config: InstallerConfig) -> Installer:
    """Installer whose program directory already holds a checkout."""
    (config.program_dir / ".git").mkdir(parents=True)
    return installer


@pytest.fixture
def fake_runner() -> FakeRunner:
    """Runner that succeeds with empty output unless told otherwise."""
    return FakeRunner()


@pytest.fixture
def repo(tmp_path: Path, fake_runner: FakeRunner) -> GitRepository:
    """GitRepository driven by the fake runner."""
    return GitRepository(tmp_path / "repo", runner=fake_runner)
