"""Install, upgrade and inspect a tag-pinned program directory."""

import logging
import shutil
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Self

from .channel import Channel, ChannelMarker, classify
from .checkout import checkout_strategies, run_cascade
from .config import InstallerConfig
from .describe import normalize_describe
from .exceptions import (
    ConfigError,
    GitCommandError,
    InvalidChannelError,
    InvalidGitUrlError,
    MalformedVersionError,
    NotInstalledError,
    TagpinError,
    UnreachableRemoteError,
)
from .git import GitRepository
from .giturl import GitUrlStore, is_valid_git_url, same_remote
from .resolver import resolve_latest
from .version import Version

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UpgradeResult:
    """Outcome of an upgrade.

    Attributes:
        previous: Version installed before the upgrade.
        target: Latest version on the channel.
        strategy: Checkout strategy that switched the tree, or None if
            nothing had to change.
    """

    previous: Version
    target: Version
    strategy: str | None = None

    @property
    def changed(self: Self) -> bool:
        """True if the working tree was moved to a different version."""
        return self.strategy is not None


@dataclass(frozen=True)
class StatusReport:
    """Snapshot of an installation. Lookups that failed are None."""

    app_name: str
    program_dir: Path
    installed: bool
    git_url: str | None = None
    channel: Channel | None = None
    current: Version | None = None
    latest: Version | None = None

    @property
    def update_available(self: Self) -> bool:
        """True if both versions are known and differ."""
        return (
            self.current is not None
            and self.latest is not None
            and self.current != self.latest
        )


@dataclass(frozen=True)
class TagListing:
    """Tags known locally and on the remote."""

    local: list[str] = field(default_factory=list)
    remote: list[str] = field(default_factory=list)


class Installer:
    """Operations on one application's program directory.

    Attributes:
        config: Locations and defaults.
        git: Git wrapper for the program directory.
        marker: Channel marker inside the program directory.
        url_store: Repository URL file inside the program directory.
    """

    def __init__(
        self: Self, config: InstallerConfig, git: GitRepository | None = None
    ) -> None:
        """Initialize the installer.

        Args:
            config: Locations and defaults.
            git: Git wrapper to use. Defaults to one for the program directory.
        """
        self.config = config
        self.git = git or GitRepository(config.program_dir)
        self.marker = ChannelMarker(config.channel_file)
        self.url_store = GitUrlStore(config.git_url_file)

    def is_installed(self: Self) -> bool:
        """Return True if the program directory is a git checkout."""
        return self.git.exists

    def require_installed(self: Self) -> None:
        """Raise NotInstalledError unless the program directory is a checkout."""
        if not self.is_installed():
            raise NotInstalledError(self.config.program_dir)

    def known_git_url(self: Self, provided: str | None = None) -> str | None:
        """Return the stored URL, else the provided or configured one."""
        return self.url_store.read() or provided or self.config.git_url

    def git_url(
        self: Self, provided: str | None = None, persist: bool = True
    ) -> str:
        """Determine the repository URL to install from.

        A URL already stored in the program directory wins. Otherwise the
        provided (or configured) URL is used; it is checked, with problems
        only logged, and stored for later runs.

        Args:
            provided: URL given on the command line.
            persist: Store a newly chosen URL in the program directory.

        Returns:
            The repository URL.

        Raises:
            ConfigError: If no URL is stored, provided or configured.
        """
        stored = self.url_store.read()
        if stored is not None:
            logger.info("Using repository URL from %s: %s", self.url_store.path, stored)
            return stored

        url = provided or self.config.git_url
        if url is None:
            raise ConfigError(
                f"No repository URL found. Pass --git-url or create "
                f"{self.url_store.path}"
            )

        if not is_valid_git_url(url):
            logger.warning("Repository URL looks malformed, trying anyway: %s", url)
        if not self.git.can_reach(url):
            logger.warning("Repository is not reachable, trying anyway: %s", url)

        if persist:
            self.url_store.write(url)
        return url

    def ensure_remote(self: Self, provided: str | None = None) -> None:
        """Point ``origin`` at the expected URL if it points elsewhere.

        Does nothing when nothing is installed or no URL is known.
        """
        if not self.is_installed():
            return

        expected = self.known_git_url(provided)
        if expected is None:
            logger.debug("No repository URL known, leaving origin as is")
            return

        try:
            current = self.git.get_remote_url()
        except GitCommandError as e:
            logger.warning("Could not read origin URL: %s", e)
            return

        if same_remote(expected, current):
            return

        logger.info("Updating origin from %s to %s", current, expected)
        self.git.set_remote_url(expected)

    def current_channel(self: Self, provided: str | None = None) -> Channel:
        """Return the channel of the installation.

        The marker file is authoritative. Without one, the channel is
        inferred from the tag the checkout describes to and then persisted.
        A describe output that does not parse counts as ``RELEASE``.

        Raises:
            InvalidChannelError: If the marker file holds an unknown label.
            NotInstalledError: If there is no marker and nothing installed.
            GitCommandError: If fetching or describing fails.
        """
        channel = self.marker.read()
        if channel is not None:
            return channel

        self.require_installed()
        logger.info("No channel marker, inferring channel from tags")
        self.ensure_remote(provided)
        self.git.fetch_tags()

        described = normalize_describe(self.git.describe())
        try:
            channel = classify(Version.parse(described))
        except MalformedVersionError:
            logger.warning("Cannot parse %r, assuming %s", described, Channel.RELEASE)
            channel = Channel.RELEASE

        self.marker.write(channel)
        return channel

    def resolve_channel(
        self: Self, explicit: Channel | None = None, provided: str | None = None
    ) -> Channel:
        """Pick the channel an operation should use.

        An explicit channel wins. Otherwise the installation's channel is
        used, falling back to ``RELEASE`` when it cannot be determined.

        Raises:
            InvalidChannelError: If the marker file holds an unknown label.
        """
        if explicit is not None:
            return explicit
        try:
            return self.current_channel(provided)
        except InvalidChannelError:
            raise
        except TagpinError as e:
            logger.warning("Using %s channel: %s", Channel.RELEASE, e)
            return Channel.RELEASE

    def current_version(self: Self, provided: str | None = None) -> Version:
        """Return the version the checkout describes to.

        Raises:
            NotInstalledError: If nothing is installed.
            GitCommandError: If ``git describe`` fails.
            MalformedVersionError: If the described tag is not a version.
        """
        self.require_installed()
        self.ensure_remote(provided)
        described = self.git.describe()
        logger.debug("git describe: %s", described)
        return Version.parse(normalize_describe(described))

    def latest_version(
        self: Self, channel: Channel, provided: str | None = None
    ) -> Version:
        """Return the newest version available on ``channel``.

        Remote tags are the primary candidate list and local tags the
        fallback.

        Raises:
            NotInstalledError: If nothing is installed.
            GitCommandError: If tags cannot be fetched.
            NoCandidateVersionsError: If no tag qualifies.
        """
        self.require_installed()
        self.ensure_remote(provided)
        self.git.fetch_tags()
        return resolve_latest(
            channel,
            self.git.remote_tags(),
            self.git.local_tags(self.config.local_tag_limit),
        )

    def switch_to(self: Self, version: Version) -> str:
        """Move the working tree to ``version`` and return the strategy used."""
        return run_cascade(version.raw, checkout_strategies(self.git, version.raw))

    def install(self: Self, channel: Channel, provided: str | None = None) -> Version:
        """Clone the repository and check out the latest version on ``channel``.

        Any previous program directory is removed first.

        Returns:
            The installed version.
        """
        url = self.git_url(provided, persist=False)
        logger.info("Installing %s (%s) from %s", self.config.app_name, channel, url)

        if self.config.program_dir.exists():
            shutil.rmtree(self.config.program_dir)
        self.git.clone(url)
        self.git.mark_safe_directory()
        if self.url_store.read() is None:
            self.url_store.write(url)

        latest = self.latest_version(channel, url)
        self.switch_to(latest)
        self.marker.write(channel)
        logger.info("Installed %s", latest.raw)
        return latest

    def upgrade(
        self: Self, channel: Channel, provided: str | None = None
    ) -> UpgradeResult:
        """Move the installation to the latest version on ``channel``.

        Local modifications are discarded. The URL and channel files survive
        the cleanup.
        """
        self.require_installed()
        current = self.current_version(provided)
        latest = self.latest_version(channel, provided)

        if current == latest:
            logger.info("Already at latest version %s", latest.raw)
            return UpgradeResult(current, latest)

        stored_url = self.url_store.read()
        self.git.clean_worktree()
        try:
            strategy = self.switch_to(latest)
        finally:
            if stored_url is not None and self.url_store.read() is None:
                self.url_store.write(stored_url)
        self.marker.write(channel)

        logger.info("Upgraded %s -> %s", current.raw, latest.raw)
        return UpgradeResult(current, latest, strategy)

    def uninstall(self: Self) -> list[Path]:
        """Remove the program directory and launcher links.

        Returns:
            Paths that were removed.
        """
        removed = []
        if self.config.program_dir.exists():
            shutil.rmtree(self.config.program_dir)
            removed.append(self.config.program_dir)
        for link in (self.config.startup_bin, self.config.installer_bin):
            if link.is_symlink() or link.exists():
                link.unlink()
                removed.append(link)
        return removed

    def force_refresh(self: Self) -> int:
        """Drop all local tags and fetch them again from origin.

        Returns:
            Number of local tags deleted.
        """
        self.require_installed()
        deleted = self.git.delete_local_tags()
        logger.info("Deleted %d local tags", deleted)
        self.git.refetch_tags()
        return deleted

    def update_git_url(self: Self, url: str) -> None:
        """Store a new repository URL and retarget ``origin``.

        Raises:
            InvalidGitUrlError: If the URL is malformed.
            UnreachableRemoteError: If the repository cannot be contacted.
        """
        if not is_valid_git_url(url):
            raise InvalidGitUrlError(url)
        if not self.git.can_reach(url):
            raise UnreachableRemoteError(url)

        self.url_store.write(url)
        if self.is_installed():
            self.git.set_remote_url(url)
            logger.info("Updated origin to %s", url)

    def status(self: Self) -> StatusReport:
        """Collect what can be determined about the installation."""
        report = StatusReport(
            app_name=self.config.app_name,
            program_dir=self.config.program_dir,
            installed=self.is_installed(),
            git_url=self.known_git_url(),
        )
        if not report.installed:
            return report

        try:
            channel = self.current_channel()
        except TagpinError as e:
            logger.warning("Cannot determine channel: %s", e)
            return report

        current = latest = None
        try:
            current = self.current_version()
        except TagpinError as e:
            logger.warning("Cannot determine current version: %s", e)
        try:
            latest = self.latest_version(channel)
        except TagpinError as e:
            logger.warning("Cannot determine latest version: %s", e)

        return replace(report, channel=channel, current=current, latest=latest)

    def tag_listing(self: Self, limit: int = 20) -> TagListing:
        """List local tags and raw remote tag lines, at most ``limit`` each."""
        self.require_installed()
        return TagListing(
            local=self.git.local_tags(limit),
            remote=self.git.remote_tag_lines()[:limit],
        )
