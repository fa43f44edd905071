"""Pages of the portal and moving between them.

A page is named by the ``page`` query parameter; the site root has none.
Moving to another page rewrites the query parameters and reruns the script,
so nothing after :meth:`Navigator.go` executes inside the Streamlit app.
"""

from collections.abc import Callable, MutableMapping

from clinic_portal.logging_config import get_logger
from clinic_portal.session import Role, SessionStore

logger = get_logger(__name__)

ROOT = "/"
ADMIN_DASHBOARD = "adminDashboard"
DOCTOR_DASHBOARD = "doctorDashboard"
PATIENT_DASHBOARD = "patientDashboard"
LOGGED_PATIENT_DASHBOARD = "loggedPatientDashboard"
PATIENT_APPOINTMENTS = "patientAppointments"

PAGES = (
    ROOT,
    ADMIN_DASHBOARD,
    DOCTOR_DASHBOARD,
    PATIENT_DASHBOARD,
    LOGGED_PATIENT_DASHBOARD,
    PATIENT_APPOINTMENTS,
)

DASHBOARDS = {
    Role.ADMIN: ADMIN_DASHBOARD,
    Role.DOCTOR: DOCTOR_DASHBOARD,
    Role.PATIENT: PATIENT_DASHBOARD,
    Role.LOGGED_PATIENT: LOGGED_PATIENT_DASHBOARD,
}

# Roles that may view each page; the root is open to everyone.
PAGE_ROLES = {
    ADMIN_DASHBOARD: frozenset({Role.ADMIN}),
    DOCTOR_DASHBOARD: frozenset({Role.DOCTOR}),
    PATIENT_DASHBOARD: frozenset({Role.NONE, Role.PATIENT, Role.LOGGED_PATIENT}),
    LOGGED_PATIENT_DASHBOARD: frozenset({Role.LOGGED_PATIENT}),
    PATIENT_APPOINTMENTS: frozenset({Role.LOGGED_PATIENT}),
}

# Pages whose URL carries the token of the role that owns them.
SESSION_PAGES = {
    ADMIN_DASHBOARD: Role.ADMIN,
    DOCTOR_DASHBOARD: Role.DOCTOR,
    LOGGED_PATIENT_DASHBOARD: Role.LOGGED_PATIENT,
    PATIENT_APPOINTMENTS: Role.LOGGED_PATIENT,
}

PAGE_KEY = "page"
TOKEN_PARAM = "token"
FLASH_KEY = "flash"


def page_allows(page: str, role: Role) -> bool:
    return page == ROOT or role in PAGE_ROLES.get(page, ())


class Navigator:
    def __init__(self, state: MutableMapping, query_params: MutableMapping, rerun: Callable[[], None]):
        self._state = state
        self._params = query_params
        self._rerun = rerun

    @property
    def page(self) -> str:
        page = self._params.get(PAGE_KEY) or self._state.get(PAGE_KEY) or ROOT
        return page if page in PAGES else ROOT

    @property
    def token(self) -> str | None:
        return self._params.get(TOKEN_PARAM) or None

    def go(self, page: str, token: str | None = None, flash: str | None = None) -> None:
        """Move to ``page``; ``flash`` is shown once on the page rendered next."""
        logger.info("Navigating to %s", page)
        self._state[PAGE_KEY] = page
        self._params.clear()
        if page != ROOT:
            self._params[PAGE_KEY] = page
        if token:
            self._params[TOKEN_PARAM] = token
        if flash:
            self._state[FLASH_KEY] = flash
        self._rerun()

    def pop_flash(self) -> str | None:
        return self._state.pop(FLASH_KEY, None)


class RoleSelector:
    """In-page role selection hook used by the role picker and after login."""

    def __init__(self, store: SessionStore, nav: Navigator, modals):
        self.store = store
        self.nav = nav
        self.modals = modals

    def __call__(self, role: Role) -> None:
        role = Role.parse(role)
        token = self.store.get_token()

        match role:
            case Role.ADMIN | Role.DOCTOR:
                if self.store.get_role() is role and token:
                    self.nav.go(DASHBOARDS[role], token=token)
                else:
                    self.modals.open("adminLogin" if role is Role.ADMIN else "doctorLogin")
            case Role.LOGGED_PATIENT:
                if token:
                    self.nav.go(LOGGED_PATIENT_DASHBOARD, token=token)
                else:
                    self.modals.open("patientLogin")
            case Role.PATIENT:
                self.store.set_role(Role.PATIENT)
                self.nav.go(PATIENT_DASHBOARD)
            case Role.NONE:
                self.nav.go(ROOT)


def restore_session(store: SessionStore, nav: Navigator) -> bool:
    """Rebuild the session from a dashboard URL after a page load.

    Dashboard URLs carry the token of the role that owns them. A session
    already holding a token is left alone.
    """
    if store.get_token():
        return False
    role = SESSION_PAGES.get(nav.page)
    token = nav.token
    if role is None or not token:
        return False
    logger.info("Restoring %s session from the page URL", role.value)
    store.set_session(role, token)
    return True
