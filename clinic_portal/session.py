"""Session store: the stored role and token of whoever is using the UI.

Both values live in a mutable mapping, normally ``st.session_state``, under
the ``userRole`` and ``token`` keys. Views read the store at the moment they
render or handle an action; nothing subscribes to it.
"""

from collections.abc import MutableMapping
from enum import Enum

from clinic_portal.logging_config import get_logger

logger = get_logger(__name__)

ROLE_KEY = "userRole"
TOKEN_KEY = "token"

SESSION_INVALID_MESSAGE = "Session expired or invalid login. Please log in again."


class Role(str, Enum):
    NONE = "none"
    PATIENT = "patient"
    LOGGED_PATIENT = "loggedPatient"
    DOCTOR = "doctor"
    ADMIN = "admin"

    @classmethod
    def parse(cls, value) -> "Role":
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return cls.NONE

    @property
    def is_authenticated(self) -> bool:
        return self in AUTHENTICATED_ROLES


AUTHENTICATED_ROLES = frozenset({Role.LOGGED_PATIENT, Role.DOCTOR, Role.ADMIN})


class SessionStore:
    def __init__(self, storage: MutableMapping):
        self._storage = storage

    def get_role(self) -> Role:
        return Role.parse(self._storage.get(ROLE_KEY))

    def get_token(self) -> str | None:
        token = self._storage.get(TOKEN_KEY)
        return token or None

    def set_session(self, role: Role, token: str | None) -> None:
        role = Role.parse(role)
        if role.is_authenticated and not token:
            raise ValueError(f"role {role.value!r} requires a token")
        self._storage.update({ROLE_KEY: role.value, TOKEN_KEY: token})
        logger.info("Session started for role %s", role.value)

    def set_role(self, role: Role) -> None:
        """Store a role that needs no credential (the anonymous patient)."""
        role = Role.parse(role)
        if role.is_authenticated and not self.get_token():
            raise ValueError(f"role {role.value!r} requires a token")
        self._storage[ROLE_KEY] = role.value

    def clear_role(self) -> None:
        self._storage.pop(ROLE_KEY, None)

    def clear(self, *scoped_keys: str) -> None:
        """Remove role and token, plus any ``scoped_keys`` held for this session."""
        for key in (ROLE_KEY, TOKEN_KEY, *scoped_keys):
            self._storage.pop(key, None)
        logger.info("Session cleared")

    def is_valid(self) -> bool:
        return not (self.get_role().is_authenticated and not self.get_token())

    def ensure_valid(self) -> bool:
        """Check the role/token invariant, clearing the session when it fails.

        Must run at every page entry point before role-specific markup.
        """
        if self.is_valid():
            return True
        logger.warning("Role %s stored without a token, clearing session", self.get_role().value)
        self.clear()
        return False
