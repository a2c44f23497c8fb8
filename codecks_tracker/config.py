"""Configuration management."""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml
from pydantic import ValidationError

from codecks_tracker.exceptions import ConfigurationError
from codecks_tracker.models import ExtensionConfig

logger = logging.getLogger(__name__)

ENV_OVERRIDES = {
    "account_name": "CODECKS_ACCOUNT",
    "email": "CODECKS_EMAIL",
    "password": "CODECKS_PASSWORD",
}


def load_config(config_path: Path | None = None) -> ExtensionConfig:
    """
    Load configuration from a YAML file or use defaults.

    Empty credentials are filled from CODECKS_ACCOUNT, CODECKS_EMAIL and
    CODECKS_PASSWORD.
    """
    data: dict[str, object] = {}
    if config_path and config_path.exists():
        try:
            with open(config_path) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {config_path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigurationError(f"Expected a mapping in {config_path}")
    elif config_path:
        logger.debug(f"No configuration at {config_path}, using defaults")

    for field, env_name in ENV_OVERRIDES.items():
        if not data.get(field) and os.getenv(env_name):
            data[field] = os.getenv(env_name)

    try:
        return ExtensionConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e


def save_config(config: ExtensionConfig, config_path: Path, include_secrets: bool = False) -> None:
    """Save configuration to YAML file."""
    config_path.parent.mkdir(parents=True, exist_ok=True)

    data = config.model_dump(mode="json", exclude={"password"})
    if include_secrets:
        data["password"] = config.password.get_secret_value()

    with open(config_path, "w") as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False)
