"""Creates configured extension instances for the host."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pydantic import SecretStr

from codecks_tracker.extensions.codecks_extension import EXTENSION_NAME, CodecksExtension
from codecks_tracker.extensions.error_handler import ExtensionErrorHandler
from codecks_tracker.extensions.logged_extension import LoggedIssueTrackerExtension
from codecks_tracker.models import ExtensionConfig

if TYPE_CHECKING:
    from codecks_tracker.card_repositories.abstract_card_repository import AbstractCardRepository
    from codecks_tracker.extensions.abstract_extension import AbstractIssueTrackerExtension

logger = logging.getLogger(__name__)


def get_issue_tracker_name() -> str:
    return EXTENSION_NAME


def _is_empty(value: object) -> bool:
    if value is None:
        return True
    if isinstance(value, SecretStr):
        return not value.get_secret_value()
    if isinstance(value, str):
        return not value.strip()
    return False


def get_configuration(stored: ExtensionConfig | None = None) -> ExtensionConfig:
    """
    Return the configuration to show in the host preferences.

    Stored values replace the defaults unless they are empty. There is no way
    to tell whether a stored value was set by the user, only whether it is
    empty.
    """
    defaults = ExtensionConfig()
    if stored is None:
        return defaults

    values = {}
    for name in ExtensionConfig.model_fields:
        value = getattr(stored, name)
        values[name] = getattr(defaults, name) if _is_empty(value) else value
    return ExtensionConfig.model_validate(values)


def create_extension(
    config: ExtensionConfig, repository: AbstractCardRepository
) -> AbstractIssueTrackerExtension:
    """Create the extension, wrapped in the error policy and optional call logging."""
    extension: AbstractIssueTrackerExtension = CodecksExtension(config, repository)
    extension = ExtensionErrorHandler(extension)

    if config.enable_log:
        extension = LoggedIssueTrackerExtension(extension)

    logger.debug(f"Created {EXTENSION_NAME} extension (logging={config.enable_log})")
    return extension
