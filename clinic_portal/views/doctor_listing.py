"""Doctor roster with name/time/specialty filters."""

import streamlit as st

from clinic_portal.api import doctors as doctors_api
from clinic_portal.config import SPECIALTIES
from clinic_portal.errors import ApiError
from clinic_portal.logging_config import get_logger
from clinic_portal.views.common import Notice, post
from clinic_portal.views.doctor_card import render_doctor_card

logger = get_logger(__name__)

LISTING_KEY = "doctor_listing"
NAME_FILTER_KEY = "filter_name"
TIME_FILTER_KEY = "filter_time"
SPECIALTY_FILTER_KEY = "filter_specialty"

NO_DOCTORS = "No doctors available."
NO_MATCH = "No doctors found with the given filters."
FILTER_ERROR = "An error occurred while filtering doctors."

TIME_OPTIONS = ["AM", "PM"]


def normalize(value):
    """Blank input means the criterion is unset."""
    if value is None:
        return None
    value = str(value).strip()
    return value or None


class DoctorListing:
    def __init__(self, state):
        self._listing = state.setdefault(LISTING_KEY, {"doctors": [], "message": None, "loaded": False})

    @property
    def doctors(self):
        return list(self._listing["doctors"])

    @property
    def message(self) -> str | None:
        return self._listing["message"]

    @property
    def loaded(self) -> bool:
        return self._listing["loaded"]

    def _show(self, doctors, empty_message):
        self._listing["doctors"] = list(doctors)
        self._listing["message"] = None if doctors else empty_message
        self._listing["loaded"] = True

    def load_all(self) -> None:
        # get_doctors() logs failures and reads them as an empty roster
        self._show(doctors_api.get_doctors(), NO_DOCTORS)

    def filter(self, name=None, time=None, specialty=None) -> Notice | None:
        name, time, specialty = normalize(name), normalize(time), normalize(specialty)
        if name is None and time is None and specialty is None:
            self.load_all()
            return None

        try:
            doctors = doctors_api.filter_doctors(name, time, specialty)
        except ApiError as e:
            logger.error("Failed to filter doctors: %s", e.message)
            return Notice.error(FILTER_ERROR)

        self._show(doctors, NO_MATCH)
        return None

    def remove(self, doctor_id) -> bool:
        doctors = self._listing["doctors"]
        kept = [d for d in doctors if d.id != doctor_id]
        if len(kept) == len(doctors):
            return False
        self._listing["doctors"] = kept
        if not kept:
            self._listing["message"] = NO_DOCTORS
        return True


def _on_filter_change(listing):
    state = st.session_state
    post(state, listing.filter(
        state.get(NAME_FILTER_KEY),
        state.get(TIME_FILTER_KEY),
        state.get(SPECIALTY_FILTER_KEY),
    ))


def render_doctor_listing(listing: DoctorListing, actions, role) -> None:
    if not listing.loaded:
        listing.load_all()

    name_col, time_col, specialty_col = st.columns([2, 1, 1])
    name_col.text_input(
        "Search by name",
        key=NAME_FILTER_KEY,
        placeholder="Doctor name",
        on_change=_on_filter_change,
        args=(listing,),
    )
    time_col.selectbox(
        "Available time",
        TIME_OPTIONS,
        index=None,
        placeholder="Any time",
        key=TIME_FILTER_KEY,
        on_change=_on_filter_change,
        args=(listing,),
    )
    specialty_col.selectbox(
        "Specialty",
        SPECIALTIES,
        index=None,
        placeholder="Any specialty",
        key=SPECIALTY_FILTER_KEY,
        on_change=_on_filter_change,
        args=(listing,),
    )

    doctors = listing.doctors
    if not doctors:
        st.info(listing.message or NO_DOCTORS)
        return

    columns = st.columns(3)
    for i, doctor in enumerate(doctors):
        with columns[i % 3]:
            render_doctor_card(doctor, role, actions)
