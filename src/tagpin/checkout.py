"""Ordered fallbacks for moving a working tree to a tag."""

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .exceptions import CheckoutError

if TYPE_CHECKING:
    from .git import GitRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CheckoutStrategy:
    """A named attempt at switching the working tree.

    Attributes:
        name: Short label used in logs and errors.
        attempt: Callable returning True on success.
    """

    name: str
    attempt: Callable[[], bool]


def run_cascade(ref: str, strategies: Iterable[CheckoutStrategy]) -> str:
    """Run strategies in order until one succeeds.

    Args:
        ref: The ref being switched to, used in logs and errors.
        strategies: Attempts to make, in order.

    Returns:
        Name of the strategy that succeeded.

    Raises:
        CheckoutError: If every strategy failed.
    """
    attempted = []
    for strategy in strategies:
        attempted.append(strategy.name)
        logger.debug("Switching to %s with %s", ref, strategy.name)
        if strategy.attempt():
            logger.info("Switched to %s with %s", ref, strategy.name)
            return strategy.name
        logger.warning("Switching to %s with %s failed", ref, strategy.name)
    raise CheckoutError(ref, attempted)


def checkout_strategies(git: "GitRepository", ref: str) -> list[CheckoutStrategy]:
    """Build the standard cascade for switching ``git`` to ``ref``.

    1. ``checkout`` the ref directly.
    2. Fetch exactly that tag, then hard reset to it.
    3. Fetch everything, then hard reset to it.
    4. Hard reset to the qualified ``tags/<ref>`` path.
    """

    def fetch_then_reset() -> bool:
        return git.fetch_refspec(f"refs/tags/{ref}:refs/tags/{ref}") and git.reset_hard(
            ref
        )

    def fetch_all_then_reset() -> bool:
        return git.fetch_all() and git.reset_hard(ref)

    return [
        CheckoutStrategy("checkout", lambda: git.checkout(ref)),
        CheckoutStrategy("fetch+reset", fetch_then_reset),
        CheckoutStrategy("fetch-all+reset", fetch_all_then_reset),
        CheckoutStrategy("tags-path", lambda: git.reset_hard(f"tags/{ref}")),
    ]
