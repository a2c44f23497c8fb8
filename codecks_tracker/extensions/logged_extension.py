"""Decorator that logs every call made by the host."""

from __future__ import annotations

import logging
import typing

from codecks_tracker.extensions.abstract_extension import AbstractIssueTrackerExtension

if typing.TYPE_CHECKING:
    from codecks_tracker.models import Changeset, ExtensionConfig, Task


class LoggedIssueTrackerExtension(AbstractIssueTrackerExtension):
    """Logs each interface call at INFO level before delegating it."""

    def __init__(self, extension: AbstractIssueTrackerExtension):
        self.extension = extension
        self.log = logging.getLogger(f"codecks_tracker.{extension.get_extension_name()}")
        self.log.info("Extension logging initialized.")

    @typing.override
    def get_extension_name(self) -> str:
        return self.extension.get_extension_name()

    @typing.override
    def connect(self) -> None:
        self.log.info("Connect.")
        self.extension.connect()

    @typing.override
    def disconnect(self) -> None:
        self.log.info("Disconnect.")
        self.extension.disconnect()

    @typing.override
    def test_connection(self, config: ExtensionConfig) -> bool:
        self.log.info(f"Test connection:\n{config.to_log_string()}")
        return self.extension.test_connection(config)

    @typing.override
    def get_task_for_branch(self, full_branch_name: str) -> Task | None:
        self.log.info(f"Get task for branch: {full_branch_name}")
        return self.extension.get_task_for_branch(full_branch_name)

    @typing.override
    def get_tasks_for_branches(self, full_branch_names: list[str]) -> dict[str, Task | None]:
        self.log.info("Get tasks for branches:\n" + "\n".join(full_branch_names))
        return self.extension.get_tasks_for_branches(full_branch_names)

    @typing.override
    def load_tasks(self, task_ids: list[str]) -> list[Task]:
        self.log.info("Load tasks:\n" + "\n".join(task_ids))
        return self.extension.load_tasks(task_ids)

    @typing.override
    def get_pending_tasks(self, assignee: str | None = None) -> list[Task]:
        if assignee is None:
            self.log.info("Get pending tasks.")
        else:
            # The host passes its own user; the configured Codecks user is used instead.
            self.log.info("Get pending tasks for assigned Codecks user.")
        return self.extension.get_pending_tasks(assignee)

    @typing.override
    def mark_task_as_open(self, task_id: str, assignee: str) -> None:
        self.log.info(f"Mark task {task_id} of assignee {assignee} as open.")
        self.extension.mark_task_as_open(task_id, assignee)

    @typing.override
    def open_task_externally(self, task_id: str) -> None:
        self.log.info(f"Open task externally: {task_id}")
        self.extension.open_task_externally(task_id)

    @typing.override
    def log_checkin_result(self, changeset: Changeset, tasks: list[Task]) -> None:
        self.log.info(f"Log checkin result for changeset:\n{changeset.to_log_string()}")
        self.extension.log_checkin_result(changeset, tasks)

    @typing.override
    def update_linked_tasks_to_changeset(self, changeset: Changeset, task_ids: list[str]) -> None:
        self.log.info(f"Update linked tasks to changeset: {changeset.to_log_string()}")
        self.extension.update_linked_tasks_to_changeset(changeset, task_ids)
