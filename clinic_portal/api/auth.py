"""Login and signup round trips.

Each call returns the token (or the server message for signup) and raises
:class:`ApiError` with the server's message, or a generic one, on failure.
"""

from clinic_portal.api.client import api_request, read_json, server_message
from clinic_portal.errors import ApiError

ADMIN_LOGIN_API = "admin/login"
DOCTOR_LOGIN_API = "doctor/login"
PATIENT_LOGIN_API = "patient/login"
PATIENT_SIGNUP_API = "patient"

MISSING_TOKEN_MESSAGE = "Login succeeded but token not returned by server."


def extract_token(data) -> str | None:
    """Token from the top level or from a nested ``data`` object."""
    if not isinstance(data, dict):
        return None
    token = data.get("token")
    if not token and isinstance(data.get("data"), dict):
        token = data["data"].get("token")
    return token or None


def _login(endpoint, payload, failure_message) -> str:
    res = api_request("POST", endpoint, payload)
    if not res.ok:
        raise ApiError(server_message(res, failure_message), res.status_code)

    token = extract_token(read_json(res))
    if not token:
        raise ApiError(MISSING_TOKEN_MESSAGE, res.status_code)
    return token


def admin_login(username: str, password: str) -> str:
    return _login(ADMIN_LOGIN_API, {"username": username, "password": password}, "Invalid admin credentials")


def doctor_login(email: str, password: str) -> str:
    return _login(DOCTOR_LOGIN_API, {"email": email, "password": password}, "Invalid doctor credentials")


def patient_login(email: str, password: str) -> str:
    return _login(PATIENT_LOGIN_API, {"email": email, "password": password}, "Invalid patient credentials")


def patient_signup(patient: dict) -> tuple[str, str | None]:
    """Create a patient account.

    Returns the server message and the token when the backend issues one
    with the signup response.
    """
    res = api_request("POST", PATIENT_SIGNUP_API, patient)
    if not res.ok:
        raise ApiError(server_message(res, "Signup failed"), res.status_code)

    data = read_json(res)
    if isinstance(data, dict) and data.get("success") is False:
        raise ApiError(data.get("message") or "Signup failed", res.status_code)
    return server_message(res, "Signup successful"), extract_token(data)
