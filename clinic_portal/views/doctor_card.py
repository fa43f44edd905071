"""A doctor's card and the actions the current role may take on it."""

from enum import Enum

import streamlit as st

from clinic_portal.api import doctors as doctors_api
from clinic_portal.api import patients as patients_api
from clinic_portal.logging_config import get_logger
from clinic_portal.navigation import PATIENT_DASHBOARD
from clinic_portal.session import Role
from clinic_portal.views.booking import open_booking_overlay
from clinic_portal.views.common import Notice, post
from clinic_portal.views.modals import PATIENT_LOGIN

logger = get_logger(__name__)

PENDING_DELETE_KEY = "pending_delete"


class CardAction(Enum):
    DELETE = "delete"
    BOOK = "book"


def card_actions(role: Role) -> tuple[CardAction, ...]:
    match role:
        case Role.ADMIN:
            return (CardAction.DELETE,)
        case Role.PATIENT | Role.NONE | Role.LOGGED_PATIENT:
            return (CardAction.BOOK,)
        case _:
            return ()


class DoctorCardActions:
    def __init__(self, store, nav, modals, listing, state):
        self.store = store
        self.nav = nav
        self.modals = modals
        self.listing = listing
        self._state = state

    def pending_delete(self):
        return self._state.get(PENDING_DELETE_KEY)

    def request_delete(self, doctor) -> None:
        self._state[PENDING_DELETE_KEY] = doctor.id

    def cancel_delete(self) -> None:
        self._state.pop(PENDING_DELETE_KEY, None)

    def confirm_delete(self, doctor) -> Notice | None:
        if self.pending_delete() != doctor.id:
            return None
        self.cancel_delete()

        token = self.store.get_token()
        if not token:
            return Notice.error("Admin token not found. Please login.")

        result = doctors_api.delete_doctor(doctor.id, token)
        if result.success:
            logger.info("Doctor %s deleted", doctor.id)
            self.listing.remove(doctor.id)
            return Notice.success("Doctor deleted")
        return Notice.error(f"Failed to delete doctor: {result.message or 'Request failed'}")

    def book(self, doctor) -> Notice | None:
        match self.store.get_role():
            case Role.PATIENT | Role.NONE:
                return self._book_as_visitor(doctor)
            case Role.LOGGED_PATIENT:
                return self._book_as_logged_patient(doctor)
            case _:
                return None

    def _book_as_visitor(self, doctor):
        token = self.store.get_token()
        if not token:
            self.modals.open(PATIENT_LOGIN)
            return None

        patient = patients_api.get_patient_data(token)
        if patient is None:
            return Notice.error("Unable to fetch patient data. Please login again.")
        open_booking_overlay(self.modals, doctor, patient)
        return None

    def _book_as_logged_patient(self, doctor):
        token = self.store.get_token()
        if not token:
            self.nav.go(PATIENT_DASHBOARD, flash="Session expired or not logged in.")
            return None

        patient = patients_api.get_patient_data(token)
        if patient is None:
            return Notice.error("Unable to fetch patient data.")
        open_booking_overlay(self.modals, doctor, patient)
        return None


def _run(handler, *args):
    post(st.session_state, handler(*args))


def render_doctor_card(doctor, role: Role, actions: DoctorCardActions) -> None:
    with st.container(border=True):
        st.markdown(f"### {doctor.name}")
        if doctor.specialty:
            st.caption(doctor.specialty)
        if doctor.email:
            st.write(doctor.email)
        if doctor.available_times:
            st.markdown("\n".join(f"- {t}" for t in doctor.available_times))
        else:
            st.write("No available times")

        for action in card_actions(role):
            if action is CardAction.DELETE:
                pending = actions.pending_delete() == doctor.id
                st.button(
                    "Delete",
                    key=f"delete_{doctor.id}",
                    disabled=pending,
                    on_click=actions.request_delete,
                    args=(doctor,),
                )
                if pending:
                    st.warning("Are you sure you want to delete this doctor?")
                    confirm_col, cancel_col = st.columns(2)
                    confirm_col.button(
                        "Confirm",
                        key=f"confirm_delete_{doctor.id}",
                        on_click=_run,
                        args=(actions.confirm_delete, doctor),
                    )
                    cancel_col.button("Cancel", key=f"cancel_delete_{doctor.id}", on_click=actions.cancel_delete)
            elif action is CardAction.BOOK:
                st.button("Book Now", key=f"book_{doctor.id}", on_click=_run, args=(actions.book, doctor))
