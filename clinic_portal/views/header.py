"""Role-driven header, rendered in the sidebar of every page."""

from dataclasses import dataclass
from enum import Enum

import streamlit as st

from clinic_portal.navigation import (
    LOGGED_PATIENT_DASHBOARD,
    PATIENT_APPOINTMENTS,
    PATIENT_DASHBOARD,
    ROOT,
    page_allows,
)
from clinic_portal.session import SESSION_INVALID_MESSAGE, Role
from clinic_portal.views.appointment_table import TABLE_KEY
from clinic_portal.views.common import render_logo
from clinic_portal.views.doctor_card import PENDING_DELETE_KEY
from clinic_portal.views.patient_appointments import PATIENT_APPOINTMENTS_KEY, PENDING_CANCEL_KEY

ACCESS_DENIED_MESSAGE = "Please log in to access this page."

# Session state that belongs to whoever is logged in.
SESSION_SCOPED_KEYS = (PENDING_DELETE_KEY, PENDING_CANCEL_KEY, TABLE_KEY, PATIENT_APPOINTMENTS_KEY)


class HeaderAction(Enum):
    ADD_DOCTOR = "add_doctor"
    DOCTOR_HOME = "doctor_home"
    LOGIN = "login"
    SIGN_UP = "sign_up"
    HOME = "home"
    APPOINTMENTS = "appointments"
    LOGOUT = "logout"
    LOGOUT_PATIENT = "logout_patient"
    ROLE_SELECTION = "role_selection"


LABELS = {
    HeaderAction.ADD_DOCTOR: "Add Doctor",
    HeaderAction.DOCTOR_HOME: "Home",
    HeaderAction.LOGIN: "Login",
    HeaderAction.SIGN_UP: "Sign Up",
    HeaderAction.HOME: "Home",
    HeaderAction.APPOINTMENTS: "Appointments",
    HeaderAction.LOGOUT: "Logout",
    HeaderAction.LOGOUT_PATIENT: "Logout",
    HeaderAction.ROLE_SELECTION: "Role Selection",
}

LOGOUT_ACTIONS = frozenset({HeaderAction.LOGOUT, HeaderAction.LOGOUT_PATIENT})


def header_actions(role: Role) -> tuple[HeaderAction, ...]:
    match role:
        case Role.ADMIN:
            return (HeaderAction.ADD_DOCTOR, HeaderAction.LOGOUT)
        case Role.DOCTOR:
            return (HeaderAction.DOCTOR_HOME, HeaderAction.LOGOUT)
        case Role.PATIENT:
            return (HeaderAction.LOGIN, HeaderAction.SIGN_UP)
        case Role.LOGGED_PATIENT:
            return (HeaderAction.HOME, HeaderAction.APPOINTMENTS, HeaderAction.LOGOUT_PATIENT)
        case _:
            return (HeaderAction.ROLE_SELECTION,)


@dataclass(frozen=True)
class HeaderState:
    minimal: bool = False
    redirect: str | None = None
    actions: tuple[HeaderAction, ...] = ()


def resolve_header(store, page: str) -> HeaderState:
    """Decide what the header shows for ``page``.

    The root page resets the stored role. An invalid session is cleared and
    reported as a redirect before any role is looked at, and so is a page
    the stored role does not own. ``redirect`` holds the message to show.
    """
    if page == ROOT:
        store.clear_role()
        return HeaderState(minimal=True)

    if not store.ensure_valid():
        return HeaderState(redirect=SESSION_INVALID_MESSAGE)

    role = store.get_role()
    if not page_allows(page, role):
        return HeaderState(redirect=ACCESS_DENIED_MESSAGE)

    return HeaderState(actions=header_actions(role))


def end_session(store, modals) -> None:
    """Drop the session together with every panel opened under it."""
    modals.close()
    store.clear(*SESSION_SCOPED_KEYS)


class HeaderHandlers:
    def __init__(self, store, nav, modals, select_role):
        self.store = store
        self.nav = nav
        self.modals = modals
        self.select_role = select_role

    def logout(self):
        end_session(self.store, self.modals)
        self.nav.go(ROOT)

    def logout_patient(self):
        end_session(self.store, self.modals)
        self.nav.go(PATIENT_DASHBOARD)

    def perform(self, action: HeaderAction):
        match action:
            case HeaderAction.ADD_DOCTOR:
                self.modals.open("addDoctor")
            case HeaderAction.DOCTOR_HOME:
                self.select_role(Role.DOCTOR)
            case HeaderAction.LOGIN:
                self.modals.open("patientLogin")
            case HeaderAction.SIGN_UP:
                self.modals.open("patientSignup")
            case HeaderAction.HOME:
                self.nav.go(LOGGED_PATIENT_DASHBOARD, token=self.store.get_token())
            case HeaderAction.APPOINTMENTS:
                self.nav.go(PATIENT_APPOINTMENTS, token=self.store.get_token())
            case HeaderAction.LOGOUT:
                self.logout()
            case HeaderAction.LOGOUT_PATIENT:
                self.logout_patient()
            case HeaderAction.ROLE_SELECTION:
                self.nav.go(ROOT)


def render_header(store, nav, modals, select_role) -> bool:
    """Render the header; ``False`` means the page must stop rendering."""
    state = resolve_header(store, nav.page)
    if state.redirect:
        end_session(store, modals)
        nav.go(ROOT, flash=state.redirect)
        return False

    render_logo(st.sidebar)
    if state.minimal:
        return True

    handlers = HeaderHandlers(store, nav, modals, select_role)
    for action in state.actions:
        st.sidebar.button(
            LABELS[action],
            key=f"header_{action.value}",
            on_click=handlers.perform,
            args=(action,),
            use_container_width=True,
        )
    return True
