"""Data models for the Codecks tracker extension."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator

DEFAULT_API_BASE_URL = "https://api.codecks.io/"

BRANCH_PREFIX = "Branch Prefix"
API_BASE_URL = "API Base URL"
ACCOUNT_NAME = "Account Name"
EMAIL = "E-Mail"
PASSWORD = "Password"
ENABLE_LOG = "Enable Log"
PROJECT_FILTER = "Project Filter"
DECK_FILTER = "Deck Filter"


class WorkingMode(StrEnum):
    """How the host links tasks: one per branch or one per changeset."""

    NONE = "none"
    TASK_ON_BRANCH = "task_on_branch"
    TASK_ON_CHANGESET = "task_on_changeset"


class ParameterType(StrEnum):
    """Kind of input the host shows for a configuration parameter."""

    TEXT = "text"
    HOST = "host"
    USER = "user"
    PASSWORD = "password"
    BOOLEAN = "boolean"
    BRANCH_PREFIX = "branch_prefix"


class ConfigParameter(BaseModel):
    """A single setting as presented in the host preferences."""

    name: str
    value: str = ""
    type: ParameterType = ParameterType.TEXT
    is_global: bool = False


class ExtensionConfig(BaseModel):
    """
    Settings the user configures for the extension.

    Filters are disabled by an empty string.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    branch_prefix: str = ""
    api_base_url: str = DEFAULT_API_BASE_URL
    account_name: str = ""
    email: str = ""
    password: SecretStr = SecretStr("")
    enable_log: bool = False
    working_mode: WorkingMode = WorkingMode.TASK_ON_BRANCH
    advanced_filters: bool = False
    project_filter: str = ""
    deck_filter: str = ""

    @field_validator(
        "branch_prefix", "account_name", "email", "project_filter", "deck_filter", mode="before"
    )
    @classmethod
    def none_to_empty(cls, v: str | None) -> str:
        return "" if v is None else v

    @field_validator("working_mode", mode="after")
    @classmethod
    def default_working_mode(cls, v: WorkingMode) -> WorkingMode:
        """The host reports "none" before the user picked a mode."""
        if v is WorkingMode.NONE:
            return WorkingMode.TASK_ON_BRANCH
        return v

    @property
    def effective_project_filter(self) -> str:
        return self.project_filter if self.advanced_filters else ""

    @property
    def effective_deck_filter(self) -> str:
        return self.deck_filter if self.advanced_filters else ""

    def parameters(self) -> list[ConfigParameter]:
        """Return the parameters shown in the host preferences window."""
        params = [
            # No default prefix: an empty value must stay distinguishable from "not set yet".
            ConfigParameter(
                name=BRANCH_PREFIX,
                value=self.branch_prefix,
                type=ParameterType.BRANCH_PREFIX,
                is_global=True,
            ),
            ConfigParameter(
                name=API_BASE_URL,
                value=self.api_base_url,
                type=ParameterType.HOST,
                is_global=True,
            ),
            ConfigParameter(name=ACCOUNT_NAME, value=self.account_name, type=ParameterType.TEXT),
            ConfigParameter(name=EMAIL, value=self.email, type=ParameterType.USER),
            ConfigParameter(
                name=PASSWORD,
                value=str(self.password),
                type=ParameterType.PASSWORD,
            ),
            ConfigParameter(
                name=ENABLE_LOG,
                value=str(self.enable_log).lower(),
                type=ParameterType.BOOLEAN,
            ),
        ]
        if self.advanced_filters:
            params.append(ConfigParameter(name=PROJECT_FILTER, value=self.project_filter))
            params.append(ConfigParameter(name=DECK_FILTER, value=self.deck_filter))
        return params

    def to_log_string(self) -> str:
        """Describe the configuration for the log, leaving out the password."""
        lines = [f"Working Mode: {self.working_mode.value}", "Parameters:"]
        for param in self.parameters():
            if param.type is ParameterType.PASSWORD:
                continue
            lines.append(f"{param.name}={param.value}")
        return "\n".join(lines)


class Card(BaseModel):
    """A Codecks card as returned by the API."""

    model_config = ConfigDict(populate_by_name=True)

    card_id: str = Field(alias="cardId")
    account_seq: int = Field(alias="accountSeq")
    title: str = ""
    content: str | None = ""
    status: str = ""
    assignee_id: str | None = Field(default=None, alias="assigneeId")


class User(BaseModel):
    """A Codecks user."""

    id: str
    email: str


class Task(BaseModel):
    """A task as exchanged with the host; ``id`` is the card label."""

    id: str
    title: str = ""
    description: str = ""
    status: str = ""
    owner: str = ""


class Changeset(BaseModel):
    """A host changeset. Only used for logging."""

    id: int | None = None
    guid: str | None = None
    comment: str = ""
    owner: str = ""
    repository: str = ""
    branch: str = ""
    date: datetime | None = None

    def to_log_string(self) -> str:
        return "\n".join(f"{name}={value}" for name, value in self.model_dump().items())
