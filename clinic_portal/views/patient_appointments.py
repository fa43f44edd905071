"""The logged-in patient's own appointments."""

import streamlit as st

from clinic_portal.api import appointments as appointments_api
from clinic_portal.api import patients as patients_api
from clinic_portal.errors import ApiError
from clinic_portal.logging_config import get_logger
from clinic_portal.views.common import Notice, post

logger = get_logger(__name__)

PATIENT_APPOINTMENTS_KEY = "patient_appointments"
PENDING_CANCEL_KEY = "pending_cancel"
CONDITION_KEY = "patient_appointments_condition"
DOCTOR_NAME_KEY = "patient_appointments_doctor"

CONDITIONS = ["future", "past"]

NO_APPOINTMENTS = "No appointments found."
LOAD_ERROR = "Unable to load your appointments. Try again later."


class PatientAppointments:
    def __init__(self, state, store):
        self._state = state
        self.store = store
        self._view = state.setdefault(
            PATIENT_APPOINTMENTS_KEY, {"appointments": [], "message": None, "loaded": False}
        )

    @property
    def appointments(self):
        return list(self._view["appointments"])

    @property
    def message(self) -> str | None:
        return self._view["message"]

    @property
    def loaded(self) -> bool:
        return self._view["loaded"]

    def _show(self, appointments):
        self._view.update(
            appointments=list(appointments),
            message=None if appointments else NO_APPOINTMENTS,
            loaded=True,
        )

    def _fail(self, message):
        self._view.update(appointments=[], message=message, loaded=True)

    def load(self) -> None:
        token = self.store.get_token()
        patient = patients_api.get_patient_data(token) if token else None
        if patient is None:
            self._fail("Unable to fetch patient data.")
            return
        try:
            self._show(patients_api.get_patient_appointments(patient.id, token))
        except ApiError as e:
            logger.error("Error loading patient appointments: %s", e.message)
            self._fail(LOAD_ERROR)

    def filter(self, condition=None, doctor_name=None) -> None:
        condition = (condition or "").strip() or None
        doctor_name = (doctor_name or "").strip() or None
        if condition is None and doctor_name is None:
            self.load()
            return
        token = self.store.get_token()
        if not token:
            self._fail("Unable to fetch patient data.")
            return
        try:
            self._show(patients_api.filter_patient_appointments(condition, doctor_name, token))
        except ApiError as e:
            logger.error("Error filtering patient appointments: %s", e.message)
            self._fail(LOAD_ERROR)

    def pending_cancel(self):
        return self._state.get(PENDING_CANCEL_KEY)

    def request_cancel(self, appointment) -> None:
        self._state[PENDING_CANCEL_KEY] = appointment.id

    def dismiss_cancel(self) -> None:
        self._state.pop(PENDING_CANCEL_KEY, None)

    def confirm_cancel(self, appointment) -> Notice | None:
        if self.pending_cancel() != appointment.id:
            return None
        self.dismiss_cancel()

        token = self.store.get_token()
        if not token:
            return Notice.error("Session expired. Please log in again.")

        result = appointments_api.cancel_appointment(appointment.id, token)
        if not result.success:
            return Notice.error(f"Failed to cancel appointment: {result.message or 'Request failed'}")

        remaining = [a for a in self._view["appointments"] if a.id != appointment.id]
        self._show(remaining)
        return Notice.success("Appointment cancelled")


def _on_filter_change(view):
    state = st.session_state
    view.filter(state.get(CONDITION_KEY), state.get(DOCTOR_NAME_KEY))


def _confirm(view, appointment):
    post(st.session_state, view.confirm_cancel(appointment))


def render_patient_appointments(view: PatientAppointments) -> None:
    st.header("Your Appointments")

    name_col, condition_col = st.columns([3, 1])
    name_col.text_input(
        "Search by doctor name",
        key=DOCTOR_NAME_KEY,
        placeholder="Doctor name",
        on_change=_on_filter_change,
        args=(view,),
    )
    condition_col.selectbox(
        "Appointments",
        CONDITIONS,
        index=None,
        placeholder="All",
        format_func=str.capitalize,
        key=CONDITION_KEY,
        on_change=_on_filter_change,
        args=(view,),
    )

    if not view.loaded:
        view.load()

    appointments = view.appointments
    if not appointments:
        st.info(view.message or NO_APPOINTMENTS)
        return

    for appointment in appointments:
        with st.container(border=True):
            info_col, action_col = st.columns([4, 1])
            info_col.markdown(f"**Dr. {appointment.doctor_name}**")
            info_col.caption(appointment.appointment_time)

            pending = view.pending_cancel() == appointment.id
            action_col.button(
                "Cancel",
                key=f"cancel_{appointment.id}",
                disabled=pending,
                on_click=view.request_cancel,
                args=(appointment,),
            )
            if pending:
                st.warning("Cancel this appointment?")
                yes_col, no_col = st.columns(2)
                yes_col.button("Yes, cancel", key=f"confirm_cancel_{appointment.id}", on_click=_confirm, args=(view, appointment))
                no_col.button("Keep", key=f"keep_{appointment.id}", on_click=view.dismiss_cancel)
