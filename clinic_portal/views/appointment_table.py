"""The doctor's appointment table, filtered by date and patient name.

Filtering happens on the backend: every trigger re-fetches with the full
current date, name and token.
"""

from datetime import date

import streamlit as st

from clinic_portal.api import appointments as appointments_api
from clinic_portal.errors import ApiError
from clinic_portal.logging_config import get_logger
from clinic_portal.models import AppointmentRow

logger = get_logger(__name__)

TABLE_KEY = "appointment_table"
DATE_PICKER_KEY = "appointment_date_picker"
SEARCH_KEY = "appointment_search"

NO_APPOINTMENTS = "No Appointments found for the selected date."
LOAD_ERROR = "Error loading appointments. Try again later."
NOT_LOGGED_IN = "Session expired or not logged in."


class AppointmentTable:
    def __init__(self, state, store, today=date.today):
        self._state = state
        self.store = store
        self._today = today
        self._table = state.setdefault(TABLE_KEY, {
            "selected_date": today().isoformat(),
            "patient_name": None,
            "rows": [],
            "message": None,
            "loaded": False,
        })

    @property
    def selected_date(self) -> str:
        return self._table["selected_date"]

    @property
    def patient_name(self) -> str | None:
        return self._table["patient_name"]

    @property
    def rows(self) -> list[AppointmentRow]:
        return list(self._table["rows"])

    @property
    def message(self) -> str | None:
        return self._table["message"]

    @property
    def loaded(self) -> bool:
        return self._table["loaded"]

    def set_date(self, value) -> None:
        if value:
            self._table["selected_date"] = value.isoformat() if isinstance(value, date) else str(value)
        self.load()

    def show_today(self) -> None:
        today = self._today()
        self._table["selected_date"] = today.isoformat()
        # keep the date picker in step with the stored date
        self._state[DATE_PICKER_KEY] = today
        self.load()

    def search(self, text) -> None:
        text = (text or "").strip()
        self._table["patient_name"] = text or None
        self.load()

    def load(self) -> None:
        token = self.store.get_token()
        if not token:
            self._table.update(rows=[], message=NOT_LOGGED_IN, loaded=True)
            return
        try:
            appointments = appointments_api.get_all_appointments(self.selected_date, self.patient_name, token)
            rows = [AppointmentRow.from_json(a) for a in appointments]
        except ApiError as e:
            logger.error("Error loading appointments: %s", e.message)
            self._table.update(rows=[], message=LOAD_ERROR, loaded=True)
            return

        self._table.update(rows=rows, message=None if rows else NO_APPOINTMENTS, loaded=True)


def _row_record(row: AppointmentRow) -> dict:
    return {
        "Patient ID": str(row.patient.id),
        "Name": row.patient.name,
        "Phone": row.patient.phone,
        "Email": row.patient.email,
        "Time": row.appointment_time,
    }


def render_appointment_table(table: AppointmentTable) -> None:
    st.header("Patient Appointments")

    if DATE_PICKER_KEY not in st.session_state:
        st.session_state[DATE_PICKER_KEY] = date.fromisoformat(table.selected_date)

    search_col, date_col, today_col = st.columns([3, 2, 1], vertical_alignment="bottom")
    search_col.text_input(
        "Search by patient name",
        key=SEARCH_KEY,
        placeholder="Patient name",
        on_change=lambda: table.search(st.session_state.get(SEARCH_KEY)),
    )
    date_col.date_input(
        "Date",
        key=DATE_PICKER_KEY,
        on_change=lambda: table.set_date(st.session_state.get(DATE_PICKER_KEY)),
    )
    today_col.button("Today", key="appointments_today", on_click=table.show_today, use_container_width=True)

    if not table.loaded:
        table.load()

    rows = table.rows
    if not rows:
        st.info(table.message or NO_APPOINTMENTS)
        return
    st.dataframe([_row_record(r) for r in rows], hide_index=True, use_container_width=True)
