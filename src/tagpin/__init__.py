"""tagpin - install and upgrade a Git-tracked application by channel tags.

Parses tag names into ordered versions, infers the release channel of an
installation and resolves the latest version available on a channel.
"""

from ._version import __version__
from .channel import Channel, ChannelMarker, classify
from .checkout import CheckoutStrategy, checkout_strategies, run_cascade
from .config import InstallerConfig, load_config
from .describe import normalize_describe
from .exceptions import (
    CheckoutError,
    ConfigError,
    GitCommandError,
    InvalidChannelError,
    InvalidGitUrlError,
    MalformedVersionError,
    NoCandidateVersionsError,
    NotInstalledError,
    TagpinError,
    UnreachableRemoteError,
)
from .git import GitRepository
from .installer import Installer, StatusReport, TagListing, UpgradeResult
from .resolver import Selection, collect_versions, resolve_latest, select_candidates
from .version import Ordering, Version, compare, parse_version

__all__ = [
    "Channel",
    "ChannelMarker",
    "CheckoutError",
    "CheckoutStrategy",
    "ConfigError",
    "GitCommandError",
    "GitRepository",
    "Installer",
    "InstallerConfig",
    "InvalidChannelError",
    "InvalidGitUrlError",
    "MalformedVersionError",
    "NoCandidateVersionsError",
    "NotInstalledError",
    "Ordering",
    "Selection",
    "StatusReport",
    "TagListing",
    "TagpinError",
    "UnreachableRemoteError",
    "UpgradeResult",
    "Version",
    "__version__",
    "checkout_strategies",
    "classify",
    "collect_versions",
    "compare",
    "load_config",
    "normalize_describe",
    "parse_version",
    "resolve_latest",
    "run_cascade",
    "select_candidates",
]
