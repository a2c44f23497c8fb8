"""Issue tracker extension contract expected by the version-control host."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from codecks_tracker.models import Changeset, ExtensionConfig, Task


class AbstractIssueTrackerExtension(ABC):
    """
    Base class for issue tracker extensions.

    Task IDs are the card labels shown in the tracker; the host treats them
    as opaque strings.
    """

    @abstractmethod
    def get_extension_name(self) -> str: ...

    @abstractmethod
    def connect(self) -> None:
        """Log in with the current configuration."""
        ...

    @abstractmethod
    def disconnect(self) -> None: ...

    @abstractmethod
    def test_connection(self, config: ExtensionConfig) -> bool:
        """Check that ``config`` allows logging in."""
        ...

    @abstractmethod
    def get_task_for_branch(self, full_branch_name: str) -> Task | None: ...

    @abstractmethod
    def get_tasks_for_branches(self, full_branch_names: list[str]) -> dict[str, Task | None]: ...

    @abstractmethod
    def load_tasks(self, task_ids: list[str]) -> list[Task]: ...

    @abstractmethod
    def get_pending_tasks(self, assignee: str | None = None) -> list[Task]:
        """Return open tasks, optionally only those of the configured user."""
        ...

    @abstractmethod
    def mark_task_as_open(self, task_id: str, assignee: str) -> None: ...

    @abstractmethod
    def open_task_externally(self, task_id: str) -> None: ...

    @abstractmethod
    def log_checkin_result(self, changeset: Changeset, tasks: list[Task]) -> None: ...

    @abstractmethod
    def update_linked_tasks_to_changeset(
        self, changeset: Changeset, task_ids: list[str]
    ) -> None: ...
