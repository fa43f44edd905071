import json

import pytest
import requests

from clinic_portal.config import API_URL
from clinic_portal.navigation import ROOT
from clinic_portal.session import SessionStore
from clinic_portal.views.modals import ModalController


class FakeResponse:
    def __init__(self, status_code=200, json_data=None, text=None):
        self.status_code = status_code
        self._json = json_data
        if text is None:
            text = json.dumps(json_data) if json_data is not None else ""
        self.text = text
        self.reason = "OK" if self.ok else "Error"

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        if self._json is None:
            return json.loads(self.text)
        return self._json


class FakeBackend:
    """Stands in for ``requests.request``; routes are keyed by method and path."""

    def __init__(self):
        self.routes = {}
        self.calls = []

    def add(self, method, path, response):
        self.routes[(method, path)] = response

    def paths(self, method=None):
        return [path for m, path, _ in self.calls if method is None or m == method]

    def __call__(self, method, url, **kwargs):
        assert url.startswith(API_URL + "/")
        path = url[len(API_URL) + 1:]
        self.calls.append((method, path, kwargs.get("json")))
        response = self.routes.get((method, path))
        if response is None:
            return FakeResponse(404, {"message": f"no route for {method} {path}"})
        if isinstance(response, Exception):
            raise response
        return response


class RecordingNavigator:
    def __init__(self, page=ROOT):
        self.page = page
        self.visits = []

    def go(self, page, token=None, flash=None):
        self.visits.append((page, token, flash))
        self.page = page


@pytest.fixture
def backend(monkeypatch):
    fake = FakeBackend()
    monkeypatch.setattr(requests, "request", fake)
    return fake


@pytest.fixture
def connection_error():
    return requests.exceptions.ConnectionError("connection refused")


@pytest.fixture
def state():
    return {}


@pytest.fixture
def store(state):
    return SessionStore(state)


@pytest.fixture
def nav():
    return RecordingNavigator()


@pytest.fixture
def modals(state):
    return ModalController(state)


DOCTORS = [
    {
        "id": 1,
        "name": "Dr. Smith",
        "specialty": "cardiologist",
        "email": "smith@clinic.test",
        "availableTimes": ["09:00-10:00", "10:00-11:00"],
    },
    {
        "id": 2,
        "name": "Dr. Jones",
        "specialty": "dermatologist",
        "email": "jones@clinic.test",
        "availableTimes": [],
    },
]

PATIENT = {"id": 7, "name": "Ann Patient", "phone": "5550100", "email": "ann@mail.test", "address": "1 Main St"}


@pytest.fixture
def doctors_json():
    return [dict(d) for d in DOCTORS]


@pytest.fixture
def patient_json():
    return dict(PATIENT)
