import streamlit as st

from clinic_portal.config import APP_ICON, APP_TITLE
from clinic_portal.logging_config import get_logger, setup_logging
from clinic_portal.navigation import (
    ADMIN_DASHBOARD,
    DOCTOR_DASHBOARD,
    LOGGED_PATIENT_DASHBOARD,
    PATIENT_APPOINTMENTS,
    PATIENT_DASHBOARD,
    ROOT,
    Navigator,
    RoleSelector,
    restore_session,
)
from clinic_portal.session import SessionStore
from clinic_portal.views.appointment_table import AppointmentTable, render_appointment_table
from clinic_portal.views.booking import BookingOverlay, render_booking_overlay
from clinic_portal.views.common import render_notices
from clinic_portal.views.doctor_card import DoctorCardActions
from clinic_portal.views.doctor_listing import DoctorListing, render_doctor_listing
from clinic_portal.views.header import render_header
from clinic_portal.views.modals import BOOKING, AuthWorkflow, ModalController, render_modal
from clinic_portal.views.patient_appointments import PatientAppointments, render_patient_appointments
from clinic_portal.views.role_selection import render_role_selection

setup_logging()
logger = get_logger(__name__)

st.set_page_config(page_title=APP_TITLE, page_icon=APP_ICON, layout="wide")

store = SessionStore(st.session_state)
nav = Navigator(st.session_state, st.query_params, st.rerun)
modals = ModalController(st.session_state)
select_role = RoleSelector(store, nav, modals)
listing = DoctorListing(st.session_state)

# ---------------- Session ----------------
restore_session(store, nav)

# ---------------- Header (session and page checks first) ----------------
if not render_header(store, nav, modals, select_role):
    st.stop()

flash = nav.pop_flash()
if flash:
    st.warning(flash)
render_notices(st.session_state)

page = nav.page

# ---------------- Modals ----------------
if modals.kind == BOOKING:
    render_booking_overlay(BookingOverlay(store, modals))
else:
    workflow = AuthWorkflow(
        store,
        nav,
        modals,
        select_role=select_role if page == ROOT else None,
        reload_doctors=listing.load_all,
    )
    render_modal(modals, workflow)

# ---------------- Pages ----------------
if page == ROOT:
    render_role_selection(select_role)

elif page in (ADMIN_DASHBOARD, PATIENT_DASHBOARD, LOGGED_PATIENT_DASHBOARD):
    actions = DoctorCardActions(store, nav, modals, listing, st.session_state)
    render_doctor_listing(listing, actions, store.get_role())

elif page == DOCTOR_DASHBOARD:
    render_appointment_table(AppointmentTable(st.session_state, store))

elif page == PATIENT_APPOINTMENTS:
    render_patient_appointments(PatientAppointments(st.session_state, store))
