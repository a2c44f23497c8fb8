"""Decorator that decides which errors reach the host."""

from __future__ import annotations

import logging
import typing

from codecks_tracker.extensions.abstract_extension import AbstractIssueTrackerExtension

if typing.TYPE_CHECKING:
    from codecks_tracker.models import Changeset, ExtensionConfig, Task

logger = logging.getLogger(__name__)


class ExtensionErrorHandler(AbstractIssueTrackerExtension):
    """
    Applies the host-facing error policy to a wrapped extension.

    The host shows every raised error in a popup. Errors from calls the user
    did not trigger directly (connecting, selecting a branch, loading linked
    tasks) are logged and replaced by an empty result. Connection tests and
    pending task listings still raise, so the host can display the message.
    """

    def __init__(self, extension: AbstractIssueTrackerExtension):
        self.extension = extension

    @typing.override
    def get_extension_name(self) -> str:
        return self.extension.get_extension_name()

    @typing.override
    def connect(self) -> None:
        try:
            self.extension.connect()
        except Exception:
            logger.exception("Connect failed")

    @typing.override
    def disconnect(self) -> None:
        self.extension.disconnect()

    @typing.override
    def test_connection(self, config: ExtensionConfig) -> bool:
        try:
            return self.extension.test_connection(config)
        except Exception:
            logger.exception("Connection test failed")
            raise

    @typing.override
    def get_task_for_branch(self, full_branch_name: str) -> Task | None:
        try:
            return self.extension.get_task_for_branch(full_branch_name)
        except Exception as e:
            logger.warning(f"Error fetching task for branch {full_branch_name}: {e}")
            return None

    @typing.override
    def get_tasks_for_branches(self, full_branch_names: list[str]) -> dict[str, Task | None]:
        return {name: self.get_task_for_branch(name) for name in full_branch_names}

    @typing.override
    def load_tasks(self, task_ids: list[str]) -> list[Task]:
        try:
            return self.extension.load_tasks(task_ids)
        except Exception as e:
            # Most likely a task ID that matches no card.
            logger.warning(f"Error loading tasks {task_ids}: {e}")
            return []

    @typing.override
    def get_pending_tasks(self, assignee: str | None = None) -> list[Task]:
        return self.extension.get_pending_tasks(assignee)

    @typing.override
    def mark_task_as_open(self, task_id: str, assignee: str) -> None:
        self.extension.mark_task_as_open(task_id, assignee)

    @typing.override
    def open_task_externally(self, task_id: str) -> None:
        self.extension.open_task_externally(task_id)

    @typing.override
    def log_checkin_result(self, changeset: Changeset, tasks: list[Task]) -> None:
        self.extension.log_checkin_result(changeset, tasks)

    @typing.override
    def update_linked_tasks_to_changeset(self, changeset: Changeset, task_ids: list[str]) -> None:
        self.extension.update_linked_tasks_to_changeset(changeset, task_ids)
