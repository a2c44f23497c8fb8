"""Unit tests for codecks_tracker.git_branch module."""

from __future__ import annotations

import subprocess
from pathlib import Path

import git
import pytest

from codecks_tracker.git_branch import BranchResolver, current_branch_name


def checkout(repo_dir: Path, branch: str) -> None:
    subprocess.run(
        ["git", "checkout", "-b", branch], cwd=repo_dir, check=True, capture_output=True
    )


class TestCurrentBranchName:
    """Tests for current_branch_name."""

    def test_current_branch(self, temp_repo_dir: Path) -> None:
        """Test reading the checked out branch."""
        checkout(temp_repo_dir, "cd-13c")
        assert current_branch_name(temp_repo_dir) == "cd-13c"

    def test_from_subdirectory(self, temp_repo_dir: Path) -> None:
        """Test that parent directories are searched for the repository."""
        checkout(temp_repo_dir, "cd-1as")
        subdir = temp_repo_dir / "src" / "game"
        subdir.mkdir(parents=True)

        assert current_branch_name(subdir) == "cd-1as"

    def test_detached_head(self, temp_repo_dir: Path) -> None:
        """Test that a detached HEAD raises."""
        subprocess.run(
            ["git", "checkout", "--detach"], cwd=temp_repo_dir, check=True, capture_output=True
        )
        with pytest.raises(ValueError):
            current_branch_name(temp_repo_dir)

    def test_not_a_repository(self, tmp_path: Path) -> None:
        """Test a directory outside any repository."""
        with pytest.raises(git.InvalidGitRepositoryError):
            current_branch_name(tmp_path)


class TestBranchResolver:
    """Tests for BranchResolver."""

    def test_task_id(self, temp_repo_dir: Path) -> None:
        """Test resolving the label of the current branch."""
        checkout(temp_repo_dir, "cd-13c")
        resolver = BranchResolver(temp_repo_dir, "cd-")

        assert resolver.branch_name() == "cd-13c"
        assert resolver.task_id() == "13c"
        assert resolver.seq() == 67

    def test_nested_branch_name(self, temp_repo_dir: Path) -> None:
        """Test that git branch folders are treated like nested branches."""
        checkout(temp_repo_dir, "feature/cd-1k5")
        resolver = BranchResolver(temp_repo_dir, "cd-")

        assert resolver.task_id() == "1k5"
        assert resolver.seq() == 481

    def test_prefix_mismatch(self, temp_repo_dir: Path) -> None:
        """Test a branch without the prefix."""
        checkout(temp_repo_dir, "feature-13c")
        resolver = BranchResolver(temp_repo_dir, "cd-")

        assert resolver.task_id() is None
        assert resolver.seq() is None

    def test_branch_is_not_a_label(self, temp_repo_dir: Path) -> None:
        """Test a default branch name that is not a card label."""
        checkout(temp_repo_dir, "develop")

        assert BranchResolver(temp_repo_dir).task_id() is None

    def test_not_a_repository(self, tmp_path: Path) -> None:
        """Test that a missing repository gives no task."""
        assert BranchResolver(tmp_path, "cd-").task_id() is None

    def test_missing_path(self, tmp_path: Path) -> None:
        """Test that a path that does not exist gives no task."""
        assert BranchResolver(tmp_path / "missing", "cd-").task_id() is None
