"""Branch name parsing."""

from __future__ import annotations

import logging

from codecks_tracker.card_label import CardLabelCodec, default_codec
from codecks_tracker.exceptions import CardLabelError

logger = logging.getLogger(__name__)


def full_to_short_name(full_branch_name: str) -> str:
    """
    Return the leaf branch of a nested branch name.

    "/main/nem-123/nem-5h7" becomes "nem-5h7"; names without a slash are
    returned unchanged.
    """
    if full_branch_name is None:
        raise TypeError("full_branch_name must not be None")

    return full_branch_name.rsplit("/", 1)[-1]


def extract_task_from_short_name(short_branch_name: str, branch_prefix: str | None) -> str | None:
    """
    Strip the branch prefix and return the task ID, or None if the prefix does not match.

    Without a prefix every branch name is a potential task ID; only a request
    to the tracker can tell whether it really is one.
    """
    branch_prefix = branch_prefix or ""
    if not short_branch_name.startswith(branch_prefix):
        return None

    return short_branch_name[len(branch_prefix) :]


def extract_task_from_full_name(full_branch_name: str, branch_prefix: str | None) -> str | None:
    """Extract the task ID from a nested branch name such as "/main/cd-1rj"."""
    short_branch_name = full_to_short_name(full_branch_name)
    return extract_task_from_short_name(short_branch_name, branch_prefix)


def label_for_branch(
    full_branch_name: str,
    branch_prefix: str | None,
    codec: CardLabelCodec | None = None,
) -> str | None:
    """Return the card label of a branch if it has one that decodes."""
    task_id = extract_task_from_full_name(full_branch_name, branch_prefix)
    if not task_id:
        return None

    codec = codec or default_codec
    try:
        codec.decode(task_id)
    except CardLabelError as e:
        logger.debug(f"Branch {full_branch_name} does not name a card: {e}")
        return None
    return task_id
