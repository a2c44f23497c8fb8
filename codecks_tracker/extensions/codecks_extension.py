"""Codecks issue tracker extension."""

from __future__ import annotations

import logging
import typing
import webbrowser

from codecks_tracker.branch_name import extract_task_from_full_name
from codecks_tracker.card_label import CardLabelCodec, default_codec
from codecks_tracker.card_repositories.abstract_card_repository import (
    cards_from_response,
    users_from_response,
)
from codecks_tracker.exceptions import CardLabelError, CardNotFoundError, UserNotFoundError
from codecks_tracker.extensions.abstract_extension import AbstractIssueTrackerExtension
from codecks_tracker.models import Task
from codecks_tracker.queries import (
    account_users_query,
    card_browser_url,
    card_by_seq_query,
    card_status_update,
    cards_by_seqs_query,
    pending_cards_query,
)

if typing.TYPE_CHECKING:
    from codecks_tracker.card_repositories.abstract_card_repository import AbstractCardRepository
    from codecks_tracker.models import Card, Changeset, ExtensionConfig

logger = logging.getLogger(__name__)

EXTENSION_NAME = "Codecks"


class CodecksExtension(AbstractIssueTrackerExtension):
    """
    Links branches and tasks to Codecks cards.

    The Codecks API is undocumented, so requests mirror what the web app
    sends. Cards have two identifiers: a GUID (``cardId``) that mutations
    need, and ``accountSeq`` from which the user-facing label is derived.
    """

    def __init__(
        self,
        config: ExtensionConfig,
        repository: AbstractCardRepository,
        codec: CardLabelCodec | None = None,
    ):
        self.config = config
        self.repository = repository
        self.codec = codec or default_codec
        # card label -> card GUID
        self.card_guid_lookup: dict[str, str] = {}

    @typing.override
    def get_extension_name(self) -> str:
        return EXTENSION_NAME

    @typing.override
    def connect(self) -> None:
        self._try_connect(self.config)

    @typing.override
    def disconnect(self) -> None:
        pass

    @typing.override
    def test_connection(self, config: ExtensionConfig) -> bool:
        return self._try_connect(config)

    def _try_connect(self, config: ExtensionConfig) -> bool:
        """Log in and confirm the session with a simple request."""
        self.repository.config = config
        try:
            self.repository.login()
            return len(self.repository.load_account_id()) > 0
        except Exception as e:
            # The host also connects when switching workspaces, where a failed
            # login is expected and must not surface as an error.
            logger.warning(f"Could not connect to Codecks account {config.account_name}: {e}")
            return False

    @typing.override
    def get_pending_tasks(self, assignee: str | None = None) -> list[Task]:
        """
        Return all cards that are not done.

        The host passes its own user name as ``assignee``; cards are instead
        filtered by the Codecks user of the configured e-mail address.
        """
        users = self._load_users()
        assignee_id = None
        if assignee is not None:
            assignee_id = self._find_user_id(users, self.config.email)

        query = pending_cards_query(
            project=self.config.effective_project_filter,
            deck=self.config.effective_deck_filter,
            assignee_id=assignee_id,
        )
        cards = cards_from_response(self.repository.post_query(query))
        self._cache_card_guids(cards)
        return [self._build_task(card, users) for card in cards]

    @typing.override
    def get_task_for_branch(self, full_branch_name: str) -> Task | None:
        task_id = extract_task_from_full_name(full_branch_name, self.config.branch_prefix)
        if not task_id:
            return None

        try:
            seq = self.codec.decode(task_id)
        except CardLabelError as e:
            logger.debug(f"Branch {full_branch_name} does not name a card: {e}")
            return None

        card = self._fetch_card(seq)
        if card is None:
            return None
        return self._build_task(card, self._load_users())

    @typing.override
    def get_tasks_for_branches(self, full_branch_names: list[str]) -> dict[str, Task | None]:
        return {name: self.get_task_for_branch(name) for name in full_branch_names}

    @typing.override
    def load_tasks(self, task_ids: list[str]) -> list[Task]:
        if not task_ids:
            return []

        try:
            seqs = [self.codec.decode(task_id) for task_id in task_ids]
        except CardLabelError as e:
            # Not worth a request if a task ID is not even a label.
            logger.debug(f"Not loading tasks {task_ids}: {e}")
            return []

        users = self._load_users()
        cards = cards_from_response(self.repository.post_query(cards_by_seqs_query(seqs)))
        self._cache_card_guids(cards)
        return [self._build_task(card, users) for card in cards]

    @typing.override
    def mark_task_as_open(self, task_id: str, assignee: str) -> None:
        """Set the card status to started. Updates need the card GUID, not the label."""
        card_id = self.card_guid_lookup.get(task_id)
        if card_id is None:
            card = self._fetch_card(self.codec.decode(task_id))
            if card is None:
                raise CardNotFoundError(f"No card found for task {task_id}")
            card_id = card.card_id

        self.repository.dispatch("cards/update", card_status_update(card_id, "started"))

    @typing.override
    def open_task_externally(self, task_id: str) -> None:
        url = card_browser_url(self.config.account_name, task_id)
        logger.debug(f"Opening {url}")
        webbrowser.open(url)

    @typing.override
    def log_checkin_result(self, changeset: Changeset, tasks: list[Task]) -> None:
        # Check-ins are not reported to Codecks.
        logger.debug(f"Check-in of changeset {changeset.id} for tasks {[t.id for t in tasks]}")

    @typing.override
    def update_linked_tasks_to_changeset(self, changeset: Changeset, task_ids: list[str]) -> None:
        logger.debug(f"Changeset {changeset.id} linked to tasks {task_ids}")

    def _fetch_card(self, seq: int) -> Card | None:
        cards = cards_from_response(self.repository.post_query(card_by_seq_query(seq)))
        self._cache_card_guids(cards)
        # accountSeq is unique within the account
        return cards[0] if cards else None

    def _load_users(self) -> dict[str, str]:
        account_id = self.repository.load_account_id()
        return users_from_response(self.repository.post_query(account_users_query(account_id)))

    @staticmethod
    def _find_user_id(users: dict[str, str], email: str) -> str:
        for user_id, user_email in users.items():
            if user_email == email:
                return user_id
        raise UserNotFoundError(f"Failed to find user by mail: {email}")

    def _cache_card_guids(self, cards: list[Card]) -> None:
        for card in cards:
            self.card_guid_lookup[self.codec.encode(card.account_seq)] = card.card_id

    def _build_task(self, card: Card, users: dict[str, str]) -> Task:
        return Task(
            id=self.codec.encode(card.account_seq),
            title=card.title,
            description=card.content or "",
            status=card.status,
            owner=users.get(card.assignee_id, "") if card.assignee_id else "",
        )
