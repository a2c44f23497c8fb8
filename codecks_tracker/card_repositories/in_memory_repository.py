"""Card repository that answers queries from cards held in memory."""

from __future__ import annotations

import json
import logging
import re
import typing
from collections.abc import Iterable
from typing import Any

from codecks_tracker.card_repositories.abstract_card_repository import AbstractCardRepository
from codecks_tracker.exceptions import CardNotFoundError, ConnectionFailedError
from codecks_tracker.queries import account_id_query

if typing.TYPE_CHECKING:
    from codecks_tracker.models import Card, ExtensionConfig, User

logger = logging.getLogger(__name__)

RELATION_PATTERN = re.compile(r"^(?P<name>\w+)(?:\((?P<arg>.*)\))?$", re.DOTALL)


def parse_relation(key: str) -> tuple[str, Any]:
    """Split a relation key like ``cards({"accountSeq":1})`` into name and argument."""
    match = RELATION_PATTERN.match(key)
    if not match:
        raise ValueError(f"Not a relation key: {key}")
    arg = match.group("arg")
    if arg is None:
        return match.group("name"), None
    try:
        return match.group("name"), json.loads(arg)
    except json.JSONDecodeError:
        # account(<id>) takes a bare id
        return match.group("name"), arg


class InMemoryCardRepository(AbstractCardRepository):
    """
    Repository backed by lists of cards and users.

    ``locations`` maps a card GUID to its ``(project, deck)`` for project and
    deck filters. When ``password`` is given, logging in requires the
    configured e-mail and password to match it.
    """

    def __init__(
        self,
        config: ExtensionConfig,
        cards: Iterable[Card] = (),
        users: Iterable[User] = (),
        account_id: str = "account-1",
        locations: dict[str, tuple[str, str]] | None = None,
        password: str | None = None,
    ):
        self.config = config
        self.cards = {card.card_id: card for card in cards}
        self.users = {user.id: user for user in users}
        self.account_id = account_id
        self.locations = locations or {}
        self.password = password
        self.logged_in = False
        self.dispatched: list[tuple[str, dict[str, Any]]] = []

    @typing.override
    def login(self) -> None:
        if not self.config.account_name:
            raise ConnectionFailedError("Connection failed. Check the issue tracker configuration.")
        if self.password is not None and (
            self.config.password.get_secret_value() != self.password
            or self.config.email not in {user.email for user in self.users.values()}
        ):
            raise ConnectionFailedError("Login rejected for the configured e-mail and password.")
        self.logged_in = True
        logger.debug(f"Logged in to account {self.config.account_name}")

    @typing.override
    def load_account_id(self) -> str:
        return str(self.post_query(account_id_query())["_root"]["account"])

    @typing.override
    def post_query(self, query: dict[str, Any]) -> dict[str, Any]:
        # Hosts may call in without connecting first.
        if not self.logged_in:
            self.login()

        result: dict[str, Any] = {"_root": {"account": self.account_id}}
        for key, selection in query.get("query", {}).items():
            name, arg = parse_relation(key)
            if name == "account" and arg is not None:
                if str(arg) == self.account_id:
                    self._select_users(result)
            else:
                self._walk(selection, result, project=None, deck=None)
        return result

    @typing.override
    def dispatch(self, path: str, payload: dict[str, Any]) -> dict[str, Any]:
        if not self.logged_in:
            self.login()

        self.dispatched.append((path, payload))
        if path == "cards/update":
            card = self.cards.get(payload["id"])
            if card is None:
                raise CardNotFoundError(f"No card with id {payload['id']}")
            self.cards[card.card_id] = card.model_copy(
                update={key: value for key, value in payload.items() if key == "status"}
            )
            return {}
        raise ValueError(f"Unsupported dispatch path: {path}")

    def _walk(
        self,
        selection: Any,
        result: dict[str, Any],
        project: dict[str, Any] | None,
        deck: dict[str, Any] | None,
    ) -> None:
        if isinstance(selection, list):
            for item in selection:
                self._walk(item, result, project, deck)
            return
        if not isinstance(selection, dict):
            return

        for key, value in selection.items():
            name, arg = parse_relation(key)
            if name == "projects":
                self._walk(value, result, arg, deck)
            elif name == "decks":
                self._walk(value, result, project, arg)
            elif name == "cards":
                self._select_cards(result, arg or {}, project, deck)
            else:
                self._walk(value, result, project, deck)

    def _select_cards(
        self,
        result: dict[str, Any],
        condition: dict[str, Any],
        project: dict[str, Any] | None,
        deck: dict[str, Any] | None,
    ) -> None:
        selected = result.setdefault("card", {})
        for card in self.cards.values():
            if not self._in_location(card, project, deck):
                continue
            if self._matches(card, condition):
                selected[card.card_id] = card.model_dump(by_alias=True)

    def _in_location(
        self, card: Card, project: dict[str, Any] | None, deck: dict[str, Any] | None
    ) -> bool:
        if not project and not deck:
            return True
        card_project, card_deck = self.locations.get(card.card_id, ("", ""))
        if project and project.get("name") != card_project:
            return False
        return not (deck and deck.get("title") != card_deck)

    def _matches(self, card: Card, condition: dict[str, Any]) -> bool:
        for field, expected in condition.items():
            if field == "$and":
                if not all(self._matches(card, sub) for sub in expected):
                    return False
            elif field == "visibility":
                continue
            elif field == "accountSeq":
                allowed = expected if isinstance(expected, list) else [expected]
                if card.account_seq not in allowed:
                    return False
            elif field == "assigneeId":
                allowed = expected if isinstance(expected, list) else [expected]
                if card.assignee_id not in allowed:
                    return False
            elif field == "assignee":
                email = expected.get("primaryEmail", {}).get("email")
                user = self.users.get(card.assignee_id or "")
                if user is None or user.email != email:
                    return False
            elif field == "status":
                if isinstance(expected, dict):
                    if expected.get("op") == "neq" and card.status == expected.get("value"):
                        return False
                elif card.status != expected:
                    return False
            else:
                raise ValueError(f"Unsupported card filter: {field}")
        return True

    def _select_users(self, result: dict[str, Any]) -> None:
        users = result.setdefault("user", {})
        emails = result.setdefault("userEmail", {})
        for user in self.users.values():
            email_id = f"email-{user.id}"
            users[user.id] = {"id": user.id, "primaryEmail": email_id}
            emails[email_id] = {"userId": user.id, "email": user.email}
