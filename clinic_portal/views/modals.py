"""Modal forms: admin/doctor/patient login, patient signup and add doctor.

A modal is an inline panel whose kind and context live in session state.
:class:`ModalController` is handed to every view that needs to open one.
"""

from collections.abc import Callable
from dataclasses import dataclass

import streamlit as st

from clinic_portal.api import auth as auth_api
from clinic_portal.api import doctors as doctors_api
from clinic_portal.config import AVAILABILITY_SLOTS, SPECIALTIES
from clinic_portal.errors import ClinicPortalError, ValidationError
from clinic_portal.logging_config import get_logger
from clinic_portal.navigation import DASHBOARDS
from clinic_portal.session import Role
from clinic_portal.views.common import Notice, post, show

logger = get_logger(__name__)

MODAL_KEY = "modal"

ADMIN_LOGIN = "adminLogin"
DOCTOR_LOGIN = "doctorLogin"
PATIENT_LOGIN = "patientLogin"
PATIENT_SIGNUP = "patientSignup"
ADD_DOCTOR = "addDoctor"
BOOKING = "booking"


class ModalController:
    def __init__(self, state):
        self._state = state

    def open(self, kind: str, **context) -> None:
        self._state[MODAL_KEY] = {"kind": kind, **context}

    def close(self) -> None:
        self._state.pop(MODAL_KEY, None)

    @property
    def kind(self) -> str | None:
        modal = self._state.get(MODAL_KEY)
        return modal["kind"] if modal else None

    @property
    def context(self) -> dict:
        return dict(self._state.get(MODAL_KEY) or {})


@dataclass(frozen=True)
class LoginForm:
    title: str
    role: Role
    fields: tuple[str, ...]
    submit: Callable[..., str]


LOGIN_FORMS = {
    ADMIN_LOGIN: LoginForm("Admin Login", Role.ADMIN, ("username", "password"), auth_api.admin_login),
    DOCTOR_LOGIN: LoginForm("Doctor Login", Role.DOCTOR, ("email", "password"), auth_api.doctor_login),
    PATIENT_LOGIN: LoginForm("Patient Login", Role.LOGGED_PATIENT, ("email", "password"), auth_api.patient_login),
}

SIGNUP_FIELDS = ("name", "email", "password", "phone", "address")
DOCTOR_FIELDS = ("name", "specialty", "email", "password", "phone")

FIELD_LABELS = {
    "username": "Username",
    "password": "Password",
    "email": "Email",
    "name": "Name",
    "phone": "Phone",
    "address": "Address",
    "specialty": "Specialty",
}


def require(values: dict, fields) -> None:
    missing = [FIELD_LABELS.get(f, f) for f in fields if not str(values.get(f) or "").strip()]
    if missing:
        raise ValidationError("Please fill in all required fields: " + ", ".join(missing))


class AuthWorkflow:
    def __init__(self, store, nav, modals, select_role=None, reload_doctors=None):
        self.store = store
        self.nav = nav
        self.modals = modals
        self.select_role = select_role
        self.reload_doctors = reload_doctors

    def login(self, kind: str, values: dict) -> Notice:
        form = LOGIN_FORMS[kind]
        try:
            require(values, form.fields)
            token = form.submit(*(values[f].strip() if f != "password" else values[f] for f in form.fields))
        except ClinicPortalError as e:
            logger.warning("%s failed: %s", form.title, e.message)
            return Notice.error(e.message)

        self._start_session(form.role, token)
        return Notice.success("Login successful")

    def signup(self, values: dict) -> Notice:
        try:
            require(values, SIGNUP_FIELDS)
            patient = {f: values[f].strip() if f != "password" else values[f] for f in SIGNUP_FIELDS}
            message, token = auth_api.patient_signup(patient)
        except ClinicPortalError as e:
            logger.warning("Patient signup failed: %s", e.message)
            return Notice.error(e.message)

        if token:
            self._start_session(Role.LOGGED_PATIENT, token)
            return Notice.success(message)

        self.modals.open(PATIENT_LOGIN)
        return Notice.success("Signup successful! Please log in.")

    def add_doctor(self, values: dict) -> Notice | None:
        if self.modals.kind != ADD_DOCTOR:
            return None
        try:
            require(values, DOCTOR_FIELDS)
        except ValidationError as e:
            return Notice.error(e.message)

        token = self.store.get_token()
        if not token:
            return Notice.error("Admin token not found. Please log in as admin.")

        doctor = {f: values[f].strip() if f != "password" else values[f] for f in DOCTOR_FIELDS}
        doctor["availableTimes"] = list(values.get("availableTimes") or [])

        result = doctors_api.save_doctor(doctor, token)
        if not result.success:
            return Notice.error(f"Failed to add doctor: {result.message or 'Request failed'}")

        self.modals.close()
        if self.reload_doctors is not None:
            self.reload_doctors()
        return Notice.success("Doctor added successfully")

    def _start_session(self, role: Role, token: str) -> None:
        self.store.set_session(role, token)
        self.modals.close()
        if self.select_role is not None:
            self.select_role(role)
        else:
            self.nav.go(DASHBOARDS[role], token=token)


def _field(kind, name, container=st):
    label = FIELD_LABELS.get(name, name)
    if name == "password":
        return container.text_input(label, type="password", key=f"{kind}_{name}")
    return container.text_input(label, key=f"{kind}_{name}")


def _render_login(kind, workflow):
    form = LOGIN_FORMS[kind]
    with st.form(f"{kind}_form"):
        st.subheader(form.title)
        values = {name: _field(kind, name) for name in form.fields}
        if st.form_submit_button("Login"):
            return workflow.login(kind, values)
    return None


def _render_signup(workflow):
    with st.form(f"{PATIENT_SIGNUP}_form"):
        st.subheader("Patient Signup")
        values = {name: _field(PATIENT_SIGNUP, name) for name in SIGNUP_FIELDS}
        if st.form_submit_button("Signup"):
            return workflow.signup(values)
    return None


def _render_add_doctor(workflow):
    with st.form(f"{ADD_DOCTOR}_form"):
        st.subheader("Add Doctor")
        values = {}
        values["name"] = _field(ADD_DOCTOR, "name")
        values["specialty"] = st.selectbox(
            "Specialty", SPECIALTIES, index=None, placeholder="Select specialty", key=f"{ADD_DOCTOR}_specialty"
        ) or ""
        values["email"] = _field(ADD_DOCTOR, "email")
        values["password"] = _field(ADD_DOCTOR, "password")
        values["phone"] = _field(ADD_DOCTOR, "phone")
        values["availableTimes"] = st.multiselect("Availability", AVAILABILITY_SLOTS, key=f"{ADD_DOCTOR}_availability")
        if st.form_submit_button("Save"):
            return workflow.add_doctor(values)
    return None


def render_modal(modals: ModalController, workflow: AuthWorkflow) -> None:
    """Render the open auth/add-doctor modal, if any."""
    kind = modals.kind
    if kind is None:
        return

    with st.container(border=True):
        st.button("✖ Close", key=f"{kind}_close", on_click=modals.close)
        if kind in LOGIN_FORMS:
            notice = _render_login(kind, workflow)
        elif kind == PATIENT_SIGNUP:
            notice = _render_signup(workflow)
        elif kind == ADD_DOCTOR:
            notice = _render_add_doctor(workflow)
        else:
            return

    # the modal was closed or replaced: show the outcome on the fresh render
    if notice is not None and modals.kind != kind:
        post(st.session_state, notice)
        st.rerun()
    show(notice)
