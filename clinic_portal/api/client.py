from dataclasses import dataclass
from urllib.parse import quote

import requests

from clinic_portal.config import API_TIMEOUT, API_URL
from clinic_portal.errors import ApiError
from clinic_portal.logging_config import get_logger

logger = get_logger(__name__)

# The two filter endpoints spell "no filter" differently. Call sites must use
# these constants instead of improvising.
DOCTOR_FILTER_UNSET = ""
APPOINTMENT_FILTER_UNSET = "null"

GENERIC_FAILURE = "Request failed. Please try again."


@dataclass(frozen=True)
class ApiResult:
    success: bool
    message: str = ""


def path_segment(value) -> str:
    return quote(str(value), safe="")


def api_request(method, endpoint, data=None):
    """Send a request to the backend and return the response.

    ``endpoint`` is joined to the configured base URL. Transport failures are
    raised as :class:`ApiError`; HTTP error statuses are returned to the
    caller, which decides how to degrade.
    """
    url = f"{API_URL}/{endpoint.lstrip('/')}"
    logger.debug("%s %s", method, endpoint.split("/")[0])

    kwargs = {"timeout": API_TIMEOUT}
    if data is not None:
        kwargs["json"] = data

    try:
        return requests.request(method, url, **kwargs)
    except requests.exceptions.RequestException as e:
        logger.error("Could not reach backend for %s %s: %s", method, url.split("?")[0], e.__class__.__name__)
        raise ApiError("Could not connect to backend.") from e


def read_json(res):
    """Response body as JSON, or ``{}`` when the body is empty or not JSON."""
    try:
        return res.json()
    except ValueError:
        return {}


def server_message(res, default=GENERIC_FAILURE) -> str:
    try:
        data = res.json()
    except ValueError:
        data = None

    if isinstance(data, dict):
        return str(data["message"]) if data.get("message") else default
    if isinstance(data, str) and data:
        return data
    if data is None:
        # Some endpoints answer with a bare text body
        text = (getattr(res, "text", "") or "").strip()
        if text:
            return text
    return default
