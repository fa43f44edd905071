class ClinicPortalError(Exception):
    """Base class for errors surfaced to the user."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ClinicPortalError):
    """Required local input is missing; raised before any request is sent."""


class ApiError(ClinicPortalError):
    """Non-success response or transport failure from the backend."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code
