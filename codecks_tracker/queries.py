"""
Query builders for the Codecks API.

Queries are GraphQL-like JSON documents. Relations are selected with keys
such as ``cards({"accountSeq":67})``: the filter is JSON text embedded in a
JSON key, so it is serialised separately and then used as a dict key.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from typing import Any

CARD_FIELDS = ["title", "cardId", "content", "status", "assigneeId", "accountSeq"]
USER_FIELDS = ["id", "name", "fullName", {"primaryEmail": ["email"]}]

VISIBLE = {"visibility": "default"}
NOT_DONE = {"status": {"op": "neq", "value": "done"}}


def _compact(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"))


def relation(name: str, condition: dict[str, Any] | None = None) -> str:
    """Return a relation key, optionally with an embedded filter."""
    if not condition:
        return name
    return f"{name}({_compact(condition)})"


def _root_query(selection: list[Any]) -> dict[str, Any]:
    return {"query": {"_root": [{"account": selection}]}}


def card_filter(**conditions: Any) -> dict[str, Any]:
    """Filter for visible cards with extra equality conditions."""
    return {**conditions, **VISIBLE}


def card_by_seq_query(seq: int) -> dict[str, Any]:
    """Query the card with the given ``accountSeq``."""
    return _root_query([{relation("cards", card_filter(accountSeq=seq)): CARD_FIELDS}])


def cards_by_seqs_query(seqs: Iterable[int]) -> dict[str, Any]:
    """Query all cards whose ``accountSeq`` is in ``seqs``."""
    return _root_query([{relation("cards", {"accountSeq": list(seqs)}): CARD_FIELDS}])


def pending_cards_query(
    project: str | None = None,
    deck: str | None = None,
    assignee_id: str | None = None,
    assignee_email: str | None = None,
) -> dict[str, Any]:
    """
    Query all visible cards that are not done.

    Blank filters are left out. ``assignee_id`` takes precedence over
    ``assignee_email``.
    """
    conditions: list[dict[str, Any]] = [VISIBLE, NOT_DONE]
    if assignee_id and assignee_id.strip():
        conditions.append({"assigneeId": [assignee_id]})
    elif assignee_email and assignee_email.strip():
        conditions.append({"assignee": {"primaryEmail": {"email": assignee_email}}})

    project_filter = {"name": project} if project and project.strip() else None
    deck_filter = {"title": deck} if deck and deck.strip() else None

    cards = {relation("cards", {"$and": conditions}): CARD_FIELDS}
    decks = {relation("decks", deck_filter): [cards]}
    return _root_query([{relation("projects", project_filter): [decks]}])


def account_id_query() -> dict[str, Any]:
    """Query the id of the account the session belongs to."""
    return {"query": {"_root": [{"account": ["id"]}]}}


def account_users_query(account_id: str) -> dict[str, Any]:
    """Query every user with a role in the account, including their e-mail."""
    return {"query": {f"account({account_id})": [{"roles": [{"user": USER_FIELDS}]}]}}


def card_status_update(card_id: str, status: str = "started") -> dict[str, Any]:
    """Payload for ``dispatch/cards/update``. ``card_id`` is the card GUID."""
    return {"id": card_id, "status": status}


def card_browser_url(account: str, label: str) -> str:
    """Short URL of a card in the web app."""
    return f"https://{account}.codecks.io/card/{label}"
