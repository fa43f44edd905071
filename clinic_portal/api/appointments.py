from clinic_portal.api.client import (
    APPOINTMENT_FILTER_UNSET,
    ApiResult,
    api_request,
    path_segment,
    read_json,
    server_message,
)
from clinic_portal.errors import ApiError
from clinic_portal.logging_config import get_logger

logger = get_logger(__name__)

APPOINTMENT_API = "appointments"


def extract_appointments(data) -> list[dict]:
    """Accept a bare list, ``{appointments: [...]}`` or ``{data: {appointments: [...]}}``."""
    if isinstance(data, list):
        return data
    if not isinstance(data, dict):
        return []
    if isinstance(data.get("appointments"), list):
        return data["appointments"]
    nested = data.get("data")
    if isinstance(nested, dict) and isinstance(nested.get("appointments"), list):
        return nested["appointments"]
    return []


def appointments_path(date: str, patient_name: str | None, token: str) -> str:
    name = path_segment(patient_name) if patient_name else APPOINTMENT_FILTER_UNSET
    return f"{APPOINTMENT_API}/{path_segment(date)}/{name}/{path_segment(token)}"


def get_all_appointments(date: str, patient_name: str | None, token: str) -> list[dict]:
    """A doctor's appointments on ``date``, filtered by patient name on the server.

    Raises :class:`ApiError` on any failure.
    """
    res = api_request("GET", appointments_path(date, patient_name, token))
    if not res.ok:
        raise ApiError(server_message(res), res.status_code)
    return extract_appointments(read_json(res))


def book_appointment(appointment: dict, token: str) -> ApiResult:
    try:
        res = api_request("POST", f"{APPOINTMENT_API}/{path_segment(token)}", appointment)
    except ApiError as e:
        logger.error("Error booking appointment: %s", e.message)
        return ApiResult(False, e.message)
    return ApiResult(res.ok, server_message(res, default=""))


def cancel_appointment(appointment_id, token: str) -> ApiResult:
    try:
        res = api_request("DELETE", f"{APPOINTMENT_API}/{path_segment(appointment_id)}/{path_segment(token)}")
    except ApiError as e:
        logger.error("Error cancelling appointment: %s", e.message)
        return ApiResult(False, e.message)
    return ApiResult(res.ok, server_message(res, default=""))
