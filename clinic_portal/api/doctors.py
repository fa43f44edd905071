from clinic_portal.api.client import (
    DOCTOR_FILTER_UNSET,
    ApiResult,
    api_request,
    path_segment,
    read_json,
    server_message,
)
from clinic_portal.errors import ApiError
from clinic_portal.logging_config import get_logger
from clinic_portal.models import Doctor

logger = get_logger(__name__)

DOCTOR_API = "doctor"


def _doctors_from(data) -> list[Doctor]:
    items = data.get("doctors") if isinstance(data, dict) else None
    return [Doctor.from_json(d) for d in items or []]


def get_doctors() -> list[Doctor]:
    """Full roster. Never raises: failures are logged and read as empty."""
    try:
        res = api_request("GET", DOCTOR_API)
    except ApiError as e:
        logger.error("Error fetching doctors: %s", e.message)
        return []

    if not res.ok:
        logger.error("Failed to fetch doctors: %s", server_message(res, res.reason or str(res.status_code)))
        return []
    return _doctors_from(read_json(res))


def filter_path(name=None, time=None, specialty=None) -> str:
    segments = [
        path_segment(value) if value else DOCTOR_FILTER_UNSET
        for value in (name, time, specialty)
    ]
    return f"{DOCTOR_API}/filter/" + "/".join(segments)


def filter_doctors(name=None, time=None, specialty=None) -> list[Doctor]:
    """Doctors matching the given criteria; unset criteria are left empty.

    A non-success status is logged and reads as no match. Transport failures
    propagate as :class:`ApiError` so the view can tell the user.
    """
    res = api_request("GET", filter_path(name, time, specialty))
    if not res.ok:
        logger.error("Failed to filter doctors: %s", res.reason or res.status_code)
        return []
    return _doctors_from(read_json(res))


def save_doctor(doctor: dict, token: str) -> ApiResult:
    try:
        res = api_request("POST", f"{DOCTOR_API}/{path_segment(token)}", doctor)
    except ApiError as e:
        logger.error("Error saving doctor: %s", e.message)
        return ApiResult(False, e.message)
    return ApiResult(res.ok, server_message(res, default=""))


def delete_doctor(doctor_id, token: str) -> ApiResult:
    try:
        res = api_request("DELETE", f"{DOCTOR_API}/{path_segment(doctor_id)}/{path_segment(token)}")
    except ApiError as e:
        logger.error("Error deleting doctor: %s", e.message)
        return ApiResult(False, e.message)
    return ApiResult(res.ok, server_message(res, default=""))
