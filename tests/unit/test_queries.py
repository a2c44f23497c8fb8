"""Unit tests for codecks_tracker.queries module."""

from __future__ import annotations

import json

from codecks_tracker.queries import (
    CARD_FIELDS,
    account_id_query,
    account_users_query,
    card_browser_url,
    card_by_seq_query,
    card_status_update,
    cards_by_seqs_query,
    pending_cards_query,
    relation,
)


def _cards_key(query: dict) -> str:
    """Return the single key of the account selection."""
    (selection,) = query["query"]["_root"][0]["account"]
    (key,) = selection
    return key


class TestRelation:
    """Tests for relation keys."""

    def test_without_condition(self) -> None:
        """Test a plain relation."""
        assert relation("decks") == "decks"

    def test_with_condition(self) -> None:
        """Test that the filter is embedded as compact JSON."""
        assert relation("cards", {"accountSeq": 67}) == 'cards({"accountSeq":67})'

    def test_empty_condition(self) -> None:
        """Test that an empty filter is left out."""
        assert relation("projects", {}) == "projects"


class TestCardQueries:
    """Tests for card queries."""

    def test_card_by_seq(self) -> None:
        """Test the query for a single card."""
        query = card_by_seq_query(67)
        assert query == {
            "query": {
                "_root": [
                    {
                        "account": [
                            {'cards({"accountSeq":67,"visibility":"default"})': CARD_FIELDS}
                        ]
                    }
                ]
            }
        }

    def test_card_by_seq_is_json(self) -> None:
        """Test that the query serialises with escaped filter quotes."""
        text = json.dumps(card_by_seq_query(67), separators=(",", ":"))
        assert '"cards({\\"accountSeq\\":67,\\"visibility\\":\\"default\\"})"' in text

    def test_cards_by_seqs(self) -> None:
        """Test the query for several cards."""
        assert _cards_key(cards_by_seqs_query([67, 274])) == 'cards({"accountSeq":[67,274]})'

    def test_cards_by_seqs_accepts_generators(self) -> None:
        """Test that any iterable of sequence numbers works."""
        key = _cards_key(cards_by_seqs_query(n for n in (1, 2)))
        assert key == 'cards({"accountSeq":[1,2]})'


class TestPendingCardsQuery:
    """Tests for pending_cards_query."""

    @staticmethod
    def _unwrap(query: dict) -> tuple[str, str, str]:
        (projects,) = query["query"]["_root"][0]["account"]
        (projects_key,) = projects
        (decks,) = projects[projects_key]
        (decks_key,) = decks
        (cards,) = decks[decks_key]
        (cards_key,) = cards
        return projects_key, decks_key, cards_key

    def test_without_filters(self) -> None:
        """Test that blank filters are left out."""
        projects_key, decks_key, cards_key = self._unwrap(pending_cards_query())
        assert projects_key == "projects"
        assert decks_key == "decks"
        condition = json.loads(cards_key[len("cards(") : -1])
        assert condition == {
            "$and": [
                {"visibility": "default"},
                {"status": {"op": "neq", "value": "done"}},
            ]
        }

    def test_whitespace_filters_are_blank(self) -> None:
        """Test that whitespace-only filters are ignored."""
        assert pending_cards_query(project="  ", deck="", assignee_id=" ") == pending_cards_query()

    def test_project_and_deck(self) -> None:
        """Test project and deck filters."""
        projects_key, decks_key, _ = self._unwrap(
            pending_cards_query(project="Tea Shop", deck="Gameplay")
        )
        assert projects_key == 'projects({"name":"Tea Shop"})'
        assert decks_key == 'decks({"title":"Gameplay"})'

    def test_assignee_id(self) -> None:
        """Test filtering by assignee id."""
        _, _, cards_key = self._unwrap(pending_cards_query(assignee_id="user-ada"))
        condition = json.loads(cards_key[len("cards(") : -1])
        assert {"assigneeId": ["user-ada"]} in condition["$and"]

    def test_assignee_email(self) -> None:
        """Test filtering by assignee e-mail."""
        _, _, cards_key = self._unwrap(pending_cards_query(assignee_email="ada@example.com"))
        condition = json.loads(cards_key[len("cards(") : -1])
        assert {"assignee": {"primaryEmail": {"email": "ada@example.com"}}} in condition["$and"]

    def test_assignee_id_wins(self) -> None:
        """Test that the assignee id is preferred over the e-mail."""
        _, _, cards_key = self._unwrap(
            pending_cards_query(assignee_id="user-ada", assignee_email="ada@example.com")
        )
        assert "primaryEmail" not in cards_key


class TestOtherQueries:
    """Tests for account queries, payloads and URLs."""

    def test_account_id_query(self) -> None:
        """Test the account id query."""
        assert account_id_query() == {"query": {"_root": [{"account": ["id"]}]}}

    def test_account_users_query(self) -> None:
        """Test the users query."""
        query = account_users_query("account-1")
        roles = query["query"]["account(account-1)"][0]["roles"]
        assert {"primaryEmail": ["email"]} in roles[0]["user"]

    def test_card_status_update(self) -> None:
        """Test the status update payload."""
        assert card_status_update("guid-1") == {"id": "guid-1", "status": "started"}
        assert card_status_update("guid-1", "done") == {"id": "guid-1", "status": "done"}

    def test_card_browser_url(self) -> None:
        """Test the short card URL."""
        assert card_browser_url("mystudio", "1w4") == "https://mystudio.codecks.io/card/1w4"
