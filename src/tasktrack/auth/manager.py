# src/tasktrack/auth/manager.py

from __future__ import annotations

import logging

from ..core.clock import Clock, utc_now
from ..core.errors import DuplicateEmailError, InvalidCredentialsError
from ..core.ids import IdFactory, generate_id
from ..core.ports import CredentialVerifier, StorageAdapter
from ..storage.codec import decode_json, decode_record_list, encode_json
from .credentials import PlaintextCredentials
from .models import User

logger = logging.getLogger(__name__)

USERS_KEY = "users"
CURRENT_USER_KEY = "currentUser"


class AuthManager:
    """
    Registered users + the current session.

    Every mutation writes to storage first and updates memory second, so a
    failing adapter leaves the manager exactly as it was.

    The session is a snapshot: a separate User rebuilt from the serialized
    record at login time, not the live entity from the collection.
    """

    def __init__(
        self,
        storage: StorageAdapter,
        *,
        credentials: CredentialVerifier | None = None,
        id_factory: IdFactory = generate_id,
        clock: Clock = utc_now,
    ) -> None:
        self._storage = storage
        self._credentials = credentials or PlaintextCredentials()
        self._new_id = id_factory
        self._now = clock

        self._users: dict[str, User] = {}
        self._current: User | None = None
        self.load_from_storage()

    # ---- persistence ----

    def load_from_storage(self) -> None:
        users: dict[str, User] = {}
        for record in decode_record_list(self._storage.load(USERS_KEY), key=USERS_KEY):
            try:
                user = User.from_record(record)
            except (KeyError, TypeError, ValueError):
                logger.warning("Skipping malformed user record id=%s", record.get("id"))
                continue
            users[user.id] = user

        current: User | None = None
        data = decode_json(self._storage.load(CURRENT_USER_KEY), key=CURRENT_USER_KEY)
        if isinstance(data, dict):
            try:
                current = User.from_record(data)
            except (KeyError, TypeError, ValueError):
                logger.warning("Ignoring malformed session record.")

        self._users = users
        self._current = current
        logger.info(
            "AuthManager loaded users=%d session=%s",
            len(users),
            current.id if current else None,
        )

    def _write_users(self, users: dict[str, User]) -> None:
        self._storage.save(USERS_KEY, encode_json([u.to_record() for u in users.values()]))

    def _write_session(self, session: User | None) -> None:
        if session is None:
            self._storage.remove(CURRENT_USER_KEY)
        else:
            self._storage.save(CURRENT_USER_KEY, encode_json(session.to_record()))

    # ---- public API ----

    def register(self, name: str, email: str, password: str) -> User:
        """Create a user. Raises DuplicateEmailError. Does not log the user in."""
        if self._find_by_email(email) is not None:
            raise DuplicateEmailError(email)

        user = User(
            id=self._new_id(),
            name=name,
            email=email,
            password=self._credentials.encode(password),
            created_at=self._now(),
        )
        users = {**self._users, user.id: user}
        self._write_users(users)
        self._users = users
        logger.info("User registered id=%s email=%s", user.id, email)
        return user

    def login(self, email: str, password: str) -> User:
        user = self._find_by_email(email)
        if user is None or not self._credentials.verify(user.password, password):
            logger.info("Login rejected email=%s", email)
            raise InvalidCredentialsError()

        snapshot = User.from_record(user.to_record())
        self._write_session(snapshot)
        self._current = snapshot
        logger.info("User logged in id=%s", user.id)
        return user

    def logout(self) -> None:
        self._write_session(None)
        previous, self._current = self._current, None
        logger.info("User logged out id=%s", previous.id if previous else None)

    def get_current_user(self) -> User | None:
        return self._current

    @property
    def is_logged_in(self) -> bool:
        return self._current is not None

    def get_all_users(self) -> list[User]:
        return list(self._users.values())

    def resolve_user(self, user_id: str) -> User | None:
        """Look up the user behind a created_by / assigned_to id."""
        return self._users.get(user_id)

    def _find_by_email(self, email: str) -> User | None:
        for user in self._users.values():
            if user.email == email:
                return user
        return None
