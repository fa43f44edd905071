import pytest

from clinic_portal.navigation import (
    ADMIN_DASHBOARD,
    DOCTOR_DASHBOARD,
    LOGGED_PATIENT_DASHBOARD,
    PATIENT_APPOINTMENTS,
    PATIENT_DASHBOARD,
    ROOT,
)
from clinic_portal.session import ROLE_KEY, SESSION_INVALID_MESSAGE, TOKEN_KEY, Role
from clinic_portal.views.header import (
    ACCESS_DENIED_MESSAGE,
    LOGOUT_ACTIONS,
    HeaderAction,
    HeaderHandlers,
    header_actions,
    render_header,
    resolve_header,
)

from conftest import RecordingNavigator


@pytest.mark.parametrize("role", [Role.NONE, Role.PATIENT])
def test_no_logout_for_unauthenticated_roles(role):
    assert not LOGOUT_ACTIONS & set(header_actions(role))


@pytest.mark.parametrize("role", [Role.ADMIN, Role.DOCTOR, Role.LOGGED_PATIENT])
def test_logout_offered_to_authenticated_roles(role):
    assert LOGOUT_ACTIONS & set(header_actions(role))


def test_actions_per_role():
    assert header_actions(Role.ADMIN) == (HeaderAction.ADD_DOCTOR, HeaderAction.LOGOUT)
    assert header_actions(Role.DOCTOR) == (HeaderAction.DOCTOR_HOME, HeaderAction.LOGOUT)
    assert header_actions(Role.PATIENT) == (HeaderAction.LOGIN, HeaderAction.SIGN_UP)
    assert header_actions(Role.LOGGED_PATIENT) == (
        HeaderAction.HOME,
        HeaderAction.APPOINTMENTS,
        HeaderAction.LOGOUT_PATIENT,
    )
    assert header_actions(Role.NONE) == (HeaderAction.ROLE_SELECTION,)


def test_root_page_resets_role(state, store):
    store.set_session(Role.ADMIN, "tok")

    header = resolve_header(store, ROOT)

    assert header.minimal
    assert header.actions == ()
    assert ROLE_KEY not in state
    assert state[TOKEN_KEY] == "tok"


@pytest.mark.parametrize("role", ["admin", "doctor", "loggedPatient"])
@pytest.mark.parametrize("page", [ADMIN_DASHBOARD, DOCTOR_DASHBOARD, LOGGED_PATIENT_DASHBOARD])
def test_missing_token_redirects_before_any_actions(store, state, role, page):
    state[ROLE_KEY] = role

    header = resolve_header(store, page)

    assert header.redirect == SESSION_INVALID_MESSAGE
    assert header.actions == ()
    assert state == {}


def test_valid_session_renders_role_actions(store):
    store.set_session(Role.DOCTOR, "tok")
    header = resolve_header(store, DOCTOR_DASHBOARD)
    assert not header.redirect
    assert header.actions == header_actions(Role.DOCTOR)


@pytest.mark.parametrize("role, page", [
    (Role.NONE, DOCTOR_DASHBOARD),
    (Role.PATIENT, DOCTOR_DASHBOARD),
    (Role.PATIENT, ADMIN_DASHBOARD),
    (Role.NONE, PATIENT_APPOINTMENTS),
])
def test_page_of_another_role_redirects(store, role, page):
    store.set_role(role)

    header = resolve_header(store, page)

    assert header.redirect == ACCESS_DENIED_MESSAGE
    assert header.actions == ()


def test_logged_in_roles_cannot_open_each_others_pages(store):
    store.set_session(Role.LOGGED_PATIENT, "tok")
    assert resolve_header(store, ADMIN_DASHBOARD).redirect == ACCESS_DENIED_MESSAGE
    assert not resolve_header(store, PATIENT_APPOINTMENTS).redirect

@pytest.fixture
def selected_roles():
    return []


@pytest.fixture
def handlers(store, nav, modals, selected_roles):
    return HeaderHandlers(store, nav, modals, selected_roles.append)


def test_logout_clears_session_and_goes_to_root(state, store, nav, handlers):
    store.set_session(Role.ADMIN, "tok")

    handlers.perform(HeaderAction.LOGOUT)

    assert state == {}
    assert nav.visits == [(ROOT, None, None)]


def test_patient_logout_goes_to_patient_dashboard(state, store, nav, handlers):
    store.set_session(Role.LOGGED_PATIENT, "tok")

    handlers.perform(HeaderAction.LOGOUT_PATIENT)

    assert state == {}
    assert nav.visits == [(PATIENT_DASHBOARD, None, None)]


@pytest.mark.parametrize("action, modal", [
    (HeaderAction.ADD_DOCTOR, "addDoctor"),
    (HeaderAction.LOGIN, "patientLogin"),
    (HeaderAction.SIGN_UP, "patientSignup"),
])
def test_modal_actions(handlers, modals, action, modal):
    handlers.perform(action)
    assert modals.kind == modal


def test_doctor_home_uses_role_selection(handlers, selected_roles):
    handlers.perform(HeaderAction.DOCTOR_HOME)
    assert selected_roles == [Role.DOCTOR]


def test_logged_patient_navigation_keeps_token_in_url(store, handlers, nav):
    store.set_session(Role.LOGGED_PATIENT, "tok")

    handlers.perform(HeaderAction.HOME)
    handlers.perform(HeaderAction.APPOINTMENTS)
    handlers.perform(HeaderAction.ROLE_SELECTION)

    assert nav.visits == [
        (LOGGED_PATIENT_DASHBOARD, "tok", None),
        (PATIENT_APPOINTMENTS, "tok", None),
        (ROOT, None, None),
    ]


@pytest.mark.parametrize("action", [HeaderAction.LOGOUT, HeaderAction.LOGOUT_PATIENT])
def test_logout_closes_panels_opened_under_the_session(state, store, modals, handlers, action):
    store.set_session(Role.ADMIN, "tok")
    modals.open("addDoctor")
    state.update(pending_delete=1, pending_cancel=3)

    handlers.perform(action)

    assert modals.kind is None
    assert state == {}


def test_redirect_drops_open_panels(state, store, modals):
    nav = RecordingNavigator(page=ADMIN_DASHBOARD)
    state[ROLE_KEY] = "admin"
    modals.open("addDoctor")
    state["pending_delete"] = 1

    assert not render_header(store, nav, modals, lambda role: None)

    assert modals.kind is None
    assert state == {}
    assert nav.visits == [(ROOT, None, SESSION_INVALID_MESSAGE)]
