"""Normalization of tag names and ``git describe`` output."""

import re

TAG_REF_PREFIX = "refs/tags/"

# "-<commits since tag>-g<abbreviated hash>" as appended by git describe
DESCRIBE_SUFFIX_PATTERN = re.compile(r"-[0-9]+-g[0-9a-f]+$")


def _strip_once(version: str) -> str:
    version = version.removeprefix(TAG_REF_PREFIX)
    if "/" in version:
        version = version.rsplit("/", 1)[-1]
    version = DESCRIBE_SUFFIX_PATTERN.sub("", version)
    if len(version) > 1 and version.startswith("v"):
        version = version[1:]
    return version


def normalize_describe(raw: str) -> str:
    """Reduce a tag, ref or describe line to a bare version string.

    Steps, in order:

    1. Drop a leading ``refs/tags/``.
    2. Keep only the last ``/``-separated segment (``release/4.2.2`` becomes
       ``4.2.2``).
    3. Drop a trailing describe suffix such as ``-5-g1a2b3c4``.
    4. Drop a single leading ``v`` if something follows it.

    The steps are repeated until the string stops changing, so normalizing
    an already normalized string returns it unchanged. Well-formed tags
    settle after one pass. Never raises; the result may still fail to parse
    as a version.

    Args:
        raw: Tag name, ref name or describe output.

    Returns:
        Normalized string.

    Example:
        >>> normalize_describe("refs/tags/v4.2.2-5-g1a2b3c4")
        '4.2.2'
    """
    version = raw
    while True:
        stripped = _strip_once(version)
        if stripped == version:
            return version
        version = stripped


def tag_from_ls_remote_line(line: str) -> str | None:
    """Extract the tag name from a ``<hash>\\trefs/tags/<tag>`` line.

    Returns:
        Text between the first ``refs/tags/`` and the next one, or None if
        the line has none.
    """
    parts = line.split(TAG_REF_PREFIX)
    if len(parts) < 2:  # noqa: PLR2004
        return None
    tag = parts[1].strip()
    return tag or None


def split_tag_lines(output: str) -> list[str]:
    """Split newline-delimited git output into non-empty, stripped lines."""
    return [line.strip() for line in output.splitlines() if line.strip()]
