from datetime import date

import streamlit as st

from clinic_portal.api import appointments as appointments_api
from clinic_portal.logging_config import get_logger
from clinic_portal.models import Doctor, Patient
from clinic_portal.views.common import Notice, post, show
from clinic_portal.views.modals import BOOKING

logger = get_logger(__name__)


def open_booking_overlay(modals, doctor: Doctor, patient: Patient) -> None:
    modals.open(BOOKING, doctor=doctor.to_json(), patient=patient.to_json())


def slot_start(slot: str) -> str:
    """``"09:00-10:00"`` -> ``"09:00:00"``."""
    start = slot.split("-")[0].strip()
    return start if start.count(":") == 2 else f"{start}:00"


class BookingOverlay:
    def __init__(self, store, modals):
        self.store = store
        self.modals = modals

    @property
    def doctor(self) -> Doctor:
        return Doctor.from_json(self.modals.context.get("doctor") or {})

    @property
    def patient(self) -> Patient:
        return Patient.from_json(self.modals.context.get("patient") or {})

    def book(self, appointment_date: date | None, slot: str | None) -> Notice | None:
        if self.modals.kind != BOOKING:
            return None
        if appointment_date is None or not slot:
            return Notice.error("Please select a date and a time slot.")

        token = self.store.get_token()
        if not token:
            return Notice.error("Session expired. Please log in again.")

        appointment = {
            "doctor": {"id": self.doctor.id},
            "patient": {"id": self.patient.id},
            "appointmentTime": f"{appointment_date.isoformat()}T{slot_start(slot)}",
            "status": 0,
        }
        result = appointments_api.book_appointment(appointment, token)
        if not result.success:
            return Notice.error(f"Failed to book appointment: {result.message or 'Request failed'}")

        logger.info("Appointment booked with doctor %s", self.doctor.id)
        self.modals.close()
        return Notice.success("Appointment booked successfully")


def render_booking_overlay(overlay: BookingOverlay) -> None:
    doctor, patient = overlay.doctor, overlay.patient

    with st.container(border=True):
        st.button("✖ Close", key="booking_close", on_click=overlay.modals.close)
        st.subheader("Book Appointment")
        st.text_input("Patient", value=patient.name, disabled=True, key="booking_patient")
        st.text_input("Doctor", value=doctor.name, disabled=True, key="booking_doctor")
        st.text_input("Specialty", value=doctor.specialty, disabled=True, key="booking_specialty")

        with st.form("booking_form"):
            appointment_date = st.date_input("Date", min_value=date.today(), key="booking_date")
            slot = st.selectbox(
                "Time",
                list(doctor.available_times),
                index=None,
                placeholder="Select time",
                key="booking_slot",
            )
            submitted = st.form_submit_button("Confirm Booking")

    if submitted:
        notice = overlay.book(appointment_date, slot)
        if overlay.modals.kind != BOOKING:
            post(st.session_state, notice)
            st.rerun()
        show(notice)
