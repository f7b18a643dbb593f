"""Selection of the latest version for a channel."""

import logging
from collections.abc import Iterable
from enum import Enum

from .channel import Channel
from .exceptions import MalformedVersionError, NoCandidateVersionsError
from .version import Version

logger = logging.getLogger(__name__)


class Selection(Enum):
    """Which candidate list supplies the working set."""

    USE_A = "a"
    USE_B = "b"


def select_candidates(count_a: int, count_b: int) -> Selection:
    """Pick the candidate list with more surviving versions.

    The lists come from two enumerations of the same tag set. A shorter list
    usually means one of them came back incomplete, so the longer one is used
    as a whole. Ties go to the first list.

    Args:
        count_a: Versions surviving parsing and filtering from the first list.
        count_b: Versions surviving parsing and filtering from the second list.

    Returns:
        Selection.USE_A or Selection.USE_B.
    """
    if count_a >= count_b:
        return Selection.USE_A
    return Selection.USE_B


def collect_versions(channel: Channel, tags: Iterable[str]) -> list[Version]:
    """Parse tags and keep the ones the channel admits.

    Tags that do not parse are skipped.

    Args:
        channel: Channel whose filter applies.
        tags: Raw tag names.

    Returns:
        Parsed versions in input order, each with ``raw`` set to its tag.
    """
    versions = []
    for tag in tags:
        try:
            version = Version.from_tag(tag)
        except MalformedVersionError:
            logger.debug("Skipping tag %r: not a version", tag)
            continue
        if not channel.admits(version):
            logger.debug("Skipping tag %r: not on channel %s", tag, channel)
            continue
        versions.append(version)
    return versions


def resolve_latest(
    channel: Channel, candidates_a: Iterable[str], candidates_b: Iterable[str]
) -> Version:
    """Resolve the highest version on a channel from two candidate lists.

    Args:
        channel: Channel to resolve for.
        candidates_a: Tag names from the primary enumeration. Wins ties.
        candidates_b: Tag names from the fallback enumeration.

    Returns:
        The highest version of the selected list, the last one if several
        compare equal. Its ``raw`` is the tag text exactly as it appeared in
        the input.

    Raises:
        NoCandidateVersionsError: If the selected list is empty after
            filtering.

    Example:
        >>> resolve_latest(Channel.RELEASE, ["v1.0.0", "v1.1.0"], ["v1.0.5"]).raw
        'v1.1.0'
    """
    versions_a = collect_versions(channel, candidates_a)
    versions_b = collect_versions(channel, candidates_b)

    selection = select_candidates(len(versions_a), len(versions_b))
    versions = versions_a if selection is Selection.USE_A else versions_b
    logger.debug(
        "Candidates for %s: %d from list a, %d from list b, using %s",
        channel,
        len(versions_a),
        len(versions_b),
        selection.name,
    )

    if not versions:
        raise NoCandidateVersionsError(channel.value)

    # the last of equal candidates wins
    latest = sorted(versions)[-1]
    logger.info("Latest %s version: %s", channel, latest.raw)
    return latest
