import pytest

from clinic_portal.models import Doctor
from clinic_portal.navigation import PATIENT_DASHBOARD
from clinic_portal.session import ROLE_KEY, Role
from clinic_portal.views.doctor_card import CardAction, DoctorCardActions, card_actions
from clinic_portal.views.doctor_listing import DoctorListing
from clinic_portal.views.modals import BOOKING, PATIENT_LOGIN

from conftest import FakeResponse


@pytest.fixture
def listing(backend, state, doctors_json):
    backend.add("GET", "doctor", FakeResponse(200, {"doctors": doctors_json}))
    listing = DoctorListing(state)
    listing.load_all()
    return listing


@pytest.fixture
def actions(store, nav, modals, listing, state):
    return DoctorCardActions(store, nav, modals, listing, state)


@pytest.fixture
def smith(doctors_json):
    return Doctor.from_json(doctors_json[0])


def test_card_actions_per_role():
    assert card_actions(Role.ADMIN) == (CardAction.DELETE,)
    assert card_actions(Role.PATIENT) == (CardAction.BOOK,)
    assert card_actions(Role.NONE) == (CardAction.BOOK,)
    assert card_actions(Role.LOGGED_PATIENT) == (CardAction.BOOK,)
    assert card_actions(Role.DOCTOR) == ()


# ---------------- delete ----------------

def test_delete_success_removes_card_without_reload(backend, store, actions, listing, smith):
    store.set_session(Role.ADMIN, "tok")
    backend.add("DELETE", "doctor/1/tok", FakeResponse(200, {"message": "Deleted"}))
    calls_before = len(backend.calls)

    actions.request_delete(smith)
    notice = actions.confirm_delete(smith)

    assert notice.level == "success"
    assert [d.id for d in listing.doctors] == [2]
    assert backend.paths()[calls_before:] == ["doctor/1/tok"]


def test_delete_failure_keeps_card_and_shows_reason(backend, store, actions, listing, smith):
    store.set_session(Role.ADMIN, "tok")
    backend.add("DELETE", "doctor/1/tok", FakeResponse(409, {"message": "Doctor has appointments"}))

    actions.request_delete(smith)
    notice = actions.confirm_delete(smith)

    assert notice.level == "error"
    assert "Doctor has appointments" in notice.text
    assert [d.id for d in listing.doctors] == [1, 2]


def test_delete_failure_without_server_message_gives_reason(backend, store, actions, smith):
    store.set_session(Role.ADMIN, "tok")
    backend.add("DELETE", "doctor/1/tok", FakeResponse(500, text=""))

    actions.request_delete(smith)
    notice = actions.confirm_delete(smith)

    assert notice.text == "Failed to delete doctor: Request failed"


def test_delete_requires_confirmation(backend, store, actions, smith):
    store.set_session(Role.ADMIN, "tok")

    assert actions.confirm_delete(smith) is None
    assert "DELETE" not in [m for m, _, _ in backend.calls]


def test_cancelled_confirmation_sends_nothing(backend, store, actions, smith):
    store.set_session(Role.ADMIN, "tok")

    actions.request_delete(smith)
    actions.cancel_delete()

    assert actions.confirm_delete(smith) is None
    assert "DELETE" not in [m for m, _, _ in backend.calls]


def test_repeated_confirm_sends_one_request(backend, store, actions, smith):
    store.set_session(Role.ADMIN, "tok")
    backend.add("DELETE", "doctor/1/tok", FakeResponse(200, {"message": "Deleted"}))

    actions.request_delete(smith)
    actions.confirm_delete(smith)
    actions.confirm_delete(smith)

    assert backend.paths("DELETE") == ["doctor/1/tok"]


def test_delete_without_token_aborts(backend, state, actions, listing, smith):
    state[ROLE_KEY] = "admin"

    actions.request_delete(smith)
    notice = actions.confirm_delete(smith)

    assert notice.text == "Admin token not found. Please login."
    assert backend.paths("DELETE") == []
    assert len(listing.doctors) == 2


# ---------------- book ----------------

def test_visitor_without_token_gets_login_prompt(backend, store, actions, modals, smith):
    store.set_role(Role.PATIENT)

    assert actions.book(smith) is None
    assert modals.kind == PATIENT_LOGIN
    assert backend.paths("GET") == ["doctor"]


def test_visitor_with_token_opens_booking_overlay(backend, state, actions, modals, smith, patient_json):
    state.update({ROLE_KEY: "patient", "token": "tok"})
    backend.add("GET", "patient/tok", FakeResponse(200, {"patient": patient_json}))

    actions.book(smith)

    assert modals.kind == BOOKING
    assert modals.context["doctor"]["id"] == 1
    assert modals.context["patient"]["id"] == 7


def test_visitor_profile_failure_asks_to_log_in_again(backend, state, actions, modals, smith):
    state.update({"token": "tok"})
    backend.add("GET", "patient/tok", FakeResponse(401, {"message": "Invalid token"}))

    notice = actions.book(smith)

    assert notice.text == "Unable to fetch patient data. Please login again."
    assert modals.kind is None


def test_logged_patient_books(backend, store, actions, modals, smith, patient_json):
    store.set_session(Role.LOGGED_PATIENT, "tok")
    backend.add("GET", "patient/tok", FakeResponse(200, {"patient": patient_json}))

    assert actions.book(smith) is None
    assert modals.kind == BOOKING


def test_logged_patient_without_token_is_sent_to_patient_dashboard(state, actions, nav, modals, smith):
    state[ROLE_KEY] = "loggedPatient"

    actions.book(smith)

    assert nav.visits == [(PATIENT_DASHBOARD, None, "Session expired or not logged in.")]
    assert modals.kind is None


def test_logged_patient_profile_failure_keeps_overlay_closed(backend, store, actions, modals, smith):
    store.set_session(Role.LOGGED_PATIENT, "tok")
    backend.add("GET", "patient/tok", FakeResponse(500, {}))

    notice = actions.book(smith)

    assert notice.text == "Unable to fetch patient data."
    assert modals.kind is None


def test_doctor_cannot_book(store, actions, modals, smith):
    store.set_session(Role.DOCTOR, "tok")
    assert actions.book(smith) is None
    assert modals.kind is None
