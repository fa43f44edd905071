from clinic_portal.api.appointments import extract_appointments
from clinic_portal.api.client import (
    APPOINTMENT_FILTER_UNSET,
    api_request,
    path_segment,
    read_json,
    server_message,
)
from clinic_portal.errors import ApiError
from clinic_portal.logging_config import get_logger
from clinic_portal.models import Patient, PatientAppointment

logger = get_logger(__name__)

PATIENT_API = "patient"


def get_patient_data(token: str) -> Patient | None:
    """Profile of the patient owning ``token``, or ``None`` if it can't be fetched."""
    try:
        res = api_request("GET", f"{PATIENT_API}/{path_segment(token)}")
    except ApiError as e:
        logger.error("Error fetching patient details: %s", e.message)
        return None

    if not res.ok:
        logger.error("Failed to fetch patient details: %s", server_message(res))
        return None

    data = read_json(res)
    if not isinstance(data, dict):
        return None
    record = data.get("patient", data)
    if not isinstance(record, dict) or not record:
        return None
    return Patient.from_json(record)


def get_patient_appointments(patient_id, token: str, user: str = "patient") -> list[PatientAppointment]:
    res = api_request("GET", f"{PATIENT_API}/{path_segment(patient_id)}/{path_segment(user)}/{path_segment(token)}")
    if not res.ok:
        raise ApiError(server_message(res), res.status_code)
    return [PatientAppointment.from_json(a) for a in extract_appointments(read_json(res))]


def filter_patient_appointments(condition: str | None, name: str | None, token: str) -> list[PatientAppointment]:
    condition_segment = path_segment(condition) if condition else APPOINTMENT_FILTER_UNSET
    name_segment = path_segment(name) if name else APPOINTMENT_FILTER_UNSET
    res = api_request("GET", f"{PATIENT_API}/filter/{condition_segment}/{name_segment}/{path_segment(token)}")
    if not res.ok:
        raise ApiError(server_message(res), res.status_code)
    return [PatientAppointment.from_json(a) for a in extract_appointments(read_json(res))]
