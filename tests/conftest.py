"""Shared test fixtures for codecks tracker tests."""

from __future__ import annotations

import subprocess
from collections.abc import Generator
from pathlib import Path

import pytest

from codecks_tracker.card_repositories.in_memory_repository import InMemoryCardRepository
from codecks_tracker.extensions.codecks_extension import CodecksExtension
from codecks_tracker.models import Card, ExtensionConfig, User


@pytest.fixture
def sample_users() -> list[User]:
    """Users of the sample account."""
    return [
        User(id="user-ada", email="ada@example.com"),
        User(id="user-bob", email="bob@example.com"),
    ]


@pytest.fixture
def sample_cards() -> list[Card]:
    """Sample cards, one per status."""
    return [
        Card(
            card_id="2e8ec154-521f-11ec-be97-07520a644149",
            account_seq=67,
            title="Start documentation",
            content="Write the first chapter",
            status="not_started",
            assignee_id="user-ada",
        ),
        Card(
            card_id="3f9fd265-521f-11ec-be97-07520a644149",
            account_seq=274,
            title="Fix jump physics",
            content="Player clips through platforms",
            status="started",
            assignee_id="user-bob",
        ),
        Card(
            card_id="40a0e376-521f-11ec-be97-07520a644149",
            account_seq=290,
            title="Ship demo",
            content=None,
            status="done",
            assignee_id="user-ada",
        ),
        Card(
            card_id="51b1f487-521f-11ec-be97-07520a644149",
            account_seq=481,
            title="Unassigned idea",
            content="",
            status="not_started",
            assignee_id=None,
        ),
    ]


@pytest.fixture
def sample_locations() -> dict[str, tuple[str, str]]:
    """Project and deck of each sample card."""
    return {
        "2e8ec154-521f-11ec-be97-07520a644149": ("Tea Shop", "Preproduction"),
        "3f9fd265-521f-11ec-be97-07520a644149": ("Tea Shop", "Gameplay"),
        "40a0e376-521f-11ec-be97-07520a644149": ("Tea Shop", "Gameplay"),
        "51b1f487-521f-11ec-be97-07520a644149": ("Side Project", "Ideas"),
    }


@pytest.fixture
def sample_config() -> ExtensionConfig:
    """Sample configuration for testing."""
    return ExtensionConfig(
        branch_prefix="cd-",
        account_name="mystudio",
        email="ada@example.com",
        password="hunter2",
    )


@pytest.fixture
def repository(
    sample_config: ExtensionConfig,
    sample_cards: list[Card],
    sample_users: list[User],
    sample_locations: dict[str, tuple[str, str]],
) -> InMemoryCardRepository:
    """In-memory repository holding the sample account."""
    return InMemoryCardRepository(
        sample_config,
        cards=sample_cards,
        users=sample_users,
        account_id="account-1",
        locations=sample_locations,
        password="hunter2",
    )


@pytest.fixture
def extension(
    sample_config: ExtensionConfig, repository: InMemoryCardRepository
) -> CodecksExtension:
    """Extension wired to the in-memory repository."""
    return CodecksExtension(sample_config, repository)


@pytest.fixture
def temp_repo_dir(tmp_path: Path) -> Generator[Path, None, None]:
    """Create a temporary git repository for testing."""
    repo_dir = tmp_path / "test-repo"
    repo_dir.mkdir()

    # Initialize git repo
    subprocess.run(["git", "init"], cwd=repo_dir, check=True, capture_output=True)
    subprocess.run(
        ["git", "config", "user.email", "test@example.com"],
        cwd=repo_dir,
        check=True,
        capture_output=True,
    )
    subprocess.run(
        ["git", "config", "user.name", "Test User"],
        cwd=repo_dir,
        check=True,
        capture_output=True,
    )

    readme = repo_dir / "README.md"
    readme.write_text("# Test Repository\n")
    subprocess.run(["git", "add", "."], cwd=repo_dir, check=True, capture_output=True)
    subprocess.run(
        ["git", "commit", "-m", "Initial commit"],
        cwd=repo_dir,
        check=True,
        capture_output=True,
    )

    yield repo_dir
