"""Card repository contract: the gateway to the Codecks API."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from codecks_tracker.models import Card

if TYPE_CHECKING:
    from codecks_tracker.models import ExtensionConfig


class AbstractCardRepository(ABC):
    """
    Base class for card repositories.

    Responses use the API's normalised shape: one mapping per entity type,
    keyed by id, e.g. ``{"card": {guid: {...}}, "userEmail": {id: {...}}}``.
    """

    config: ExtensionConfig

    @abstractmethod
    def __init__(self, config: ExtensionConfig) -> None:
        """Initialize the repository."""
        ...

    @abstractmethod
    def login(self) -> None:
        """Log in with the configured credentials. Raises ConnectionFailedError."""
        raise NotImplementedError

    @abstractmethod
    def load_account_id(self) -> str:
        """Return the id of the configured account."""
        raise NotImplementedError

    @abstractmethod
    def post_query(self, query: dict[str, Any]) -> dict[str, Any]:
        """Send a query document and return the normalised response."""
        raise NotImplementedError

    @abstractmethod
    def dispatch(self, path: str, payload: dict[str, Any]) -> dict[str, Any]:
        """Send a mutation to a dispatch endpoint such as ``cards/update``."""
        raise NotImplementedError


def cards_from_response(data: dict[str, Any]) -> list[Card]:
    """Extract the cards of a query response."""
    return [Card.model_validate(card) for card in (data.get("card") or {}).values()]


def users_from_response(data: dict[str, Any]) -> dict[str, str]:
    """Map user id to e-mail address from a query response."""
    return {
        entry["userId"]: entry["email"]
        for entry in (data.get("userEmail") or {}).values()
        if entry.get("userId")
    }
