"""Git branch lookup for resolving the card a working copy belongs to."""

from __future__ import annotations

import logging
from pathlib import Path

import git

from codecks_tracker.branch_name import label_for_branch
from codecks_tracker.card_label import CardLabelCodec, default_codec

logger = logging.getLogger(__name__)


def current_branch_name(path: Path | None = None) -> str:
    """Return the active branch of the git repository containing ``path``."""
    repo = git.Repo(path or Path.cwd(), search_parent_directories=True)
    if repo.head.is_detached:
        raise ValueError(f"HEAD of {repo.working_dir} is detached, no branch is checked out")
    return repo.active_branch.name


class BranchResolver:
    """Resolves the card label of the branch checked out in a repository."""

    def __init__(
        self,
        path: Path | None = None,
        branch_prefix: str | None = None,
        codec: CardLabelCodec | None = None,
    ):
        self.path = path or Path.cwd()
        self.branch_prefix = branch_prefix or ""
        self.codec = codec or default_codec

    def branch_name(self) -> str:
        return current_branch_name(self.path)

    def task_id(self) -> str | None:
        """Return the card label of the current branch, or None."""
        try:
            branch = self.branch_name()
        except (git.InvalidGitRepositoryError, git.NoSuchPathError, ValueError) as e:
            logger.warning(f"Could not read current branch in {self.path}: {e}")
            return None
        return label_for_branch(branch, self.branch_prefix, self.codec)

    def seq(self) -> int | None:
        """Return the sequence number of the card of the current branch, or None."""
        label = self.task_id()
        return None if label is None else self.codec.decode(label)
