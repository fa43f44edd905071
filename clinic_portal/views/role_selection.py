import streamlit as st

from clinic_portal.session import Role

ROLE_CHOICES = (
    (Role.ADMIN, "Admin"),
    (Role.DOCTOR, "Doctor"),
    (Role.PATIENT, "Patient"),
)


def render_role_selection(select_role) -> None:
    st.title("Select Your Role")
    for role, label in ROLE_CHOICES:
        st.button(label, key=f"select_{role.value}", on_click=select_role, args=(role,), use_container_width=True)
