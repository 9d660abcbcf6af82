# services/assignment_service.py

import logging
import random
import re
import uuid
from typing import Callable, List, Optional, Sequence

from humanai_study.core.errors import AssignmentEnvironmentError, StoreUnavailableError
from humanai_study.models.schemas.assignment import AssignmentModel, ConditionId
from humanai_study.models.schemas.event import UUID_PATTERN
from humanai_study.repositories.identity_stores import KeyValueStore


logger = logging.getLogger(__name__)

PARTICIPANT_ID_KEY = "humanai_participant_id"
CONDITION_ID_KEY = "humanai_condition_id"
SESSION_ID_KEY = "humanai_session_id"
SHOWN_KEY_PREFIX = "humanai_shown_"

CONDITIONS: Sequence[ConditionId] = ("A", "B")

_UUID_RE = re.compile(UUID_PATTERN)


def parse_participant_id(value: Optional[str]) -> Optional[str]:
    if value and _UUID_RE.fullmatch(value):
        return value
    return None


def parse_condition_id(value: Optional[str]) -> Optional[ConditionId]:
    if value in CONDITIONS:
        return value
    return None


def _write_quietly(store: KeyValueStore, key: str, value: str) -> None:
    try:
        store.write(key, value)
    except StoreUnavailableError as e:
        logger.debug("Ignoring %s write failure for %s: %s", store.name, key, e)


def _remove_quietly(store: KeyValueStore, key: str) -> None:
    try:
        store.remove(key)
    except StoreUnavailableError as e:
        logger.debug("Ignoring %s removal failure for %s: %s", store.name, key, e)


class SessionContext:
    """
    Caller-owned state for one page lifetime.

    The session id is created on first access and then reused for as long
    as this object lives. It is mirrored into the session-scoped store but
    never read back from it, so a new context always means a new session.
    """

    def __init__(self, store: KeyValueStore):
        self.store = store
        self._session_id: Optional[str] = None

    @property
    def session_id(self) -> str:
        if self._session_id is None:
            self._session_id = str(uuid.uuid4())
            _write_quietly(self.store, SESSION_ID_KEY, self._session_id)
        return self._session_id

    def shown_key(self, trial_index: int) -> str:
        return f"{SHOWN_KEY_PREFIX}{self.session_id}_{trial_index}"

    def mark_trial_shown(self, trial_index: int) -> None:
        _write_quietly(self.store, self.shown_key(trial_index), "1")

    def trial_was_shown(self, trial_index: int) -> bool:
        return self.store.read(self.shown_key(trial_index)) == "1"

    def clear(self) -> None:
        """Drops the session id and every shown marker, whichever session set it."""
        for key in self.store.keys():
            if key.startswith(SHOWN_KEY_PREFIX):
                _remove_quietly(self.store, key)
        _remove_quietly(self.store, SESSION_ID_KEY)
        self._session_id = None


class AssignmentResolver:
    def __init__(
        self,
        stores: Sequence[KeyValueStore],
        session: SessionContext,
        choose: Optional[Callable[[Sequence[ConditionId]], ConditionId]] = None,
    ):
        """
        Args:
            stores: durable stores in priority order, primary first.
            session: the caller's session context.
            choose: picks a condition for a new participant (uniform by default).
        """
        self.stores: List[KeyValueStore] = list(stores)
        self.session = session
        self.choose = choose or random.choice

    def _read_first(self, key: str, parse):
        for store in self.stores:
            value = parse(store.read(key))
            if value is not None:
                return value
        return None

    def _persist(self, participant_id: str, condition_id: ConditionId) -> None:
        """
        Writes the identity to each store in turn until one reads it back
        unchanged. Stores after the confirming one are left untouched.
        """
        for store in self.stores:
            _write_quietly(store, PARTICIPANT_ID_KEY, participant_id)
            _write_quietly(store, CONDITION_ID_KEY, condition_id)

            if (
                store.read(PARTICIPANT_ID_KEY) == participant_id
                and store.read(CONDITION_ID_KEY) == condition_id
            ):
                return
            logger.info("%s store did not persist identity, falling back", store.name)

        logger.warning("No store persisted identity for participant %s", participant_id)

    def resolve(self) -> AssignmentModel:
        """
        Gets the client's assignment, ensuring idempotency.

        1. Read participant and condition from the stores in priority order.
        2. If either is missing, generate it.
        3. Persist both, falling back down the store list.
        """
        if not self.stores:
            raise AssignmentEnvironmentError(
                "Assignment must be resolved where durable client storage is available."
            )

        participant_id = self._read_first(PARTICIPANT_ID_KEY, parse_participant_id)
        if participant_id is None:
            participant_id = str(uuid.uuid4())
            logger.info("Created participant %s", participant_id)

        condition_id = self._read_first(CONDITION_ID_KEY, parse_condition_id)
        if condition_id is None:
            condition_id = self.choose(CONDITIONS)
            logger.info("Assigned participant %s to condition %s", participant_id, condition_id)

        self._persist(participant_id, condition_id)

        return AssignmentModel(
            participant_id=participant_id,
            condition_id=condition_id,
            session_id=self.session.session_id,
        )

    def reset(self) -> bool:
        """
        Clears identity from every durable store and the session context.
        Returns True to tell the caller to reload.
        """
        for store in self.stores:
            _remove_quietly(store, PARTICIPANT_ID_KEY)
            _remove_quietly(store, CONDITION_ID_KEY)
        self.session.clear()
        logger.info("Assignment reset")
        return True
