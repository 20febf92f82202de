from __future__ import annotations


class DomainError(Exception):
    """Base exception for business rule violations.

    ``status_code`` is the HTTP status the controller layer answers with.
    """

    status_code = 500


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    status_code = 400


class NotFoundError(DomainError):
    """Raised when a referenced user or record does not exist."""

    status_code = 404


class ConflictError(DomainError):
    """Raised when the action would duplicate an existing record."""

    status_code = 400


class GeofenceViolation(DomainError):
    """Raised when a check-in happens too far from the office."""

    status_code = 400


class StorageError(DomainError):
    """Raised when the image storage backend fails."""

    status_code = 500


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""

    status_code = 401


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""

    status_code = 403


class InvalidMonthFormat(ValidationError):
    def __init__(self, value: object = None):
        super().__init__("Invalid or missing month. Expected format: YYYY-MM")
        self.value = value


class ImageRequired(ValidationError):
    def __init__(self):
        super().__init__("Image file is required.")


class NegativeDuration(ValidationError):
    def __init__(self):
        super().__init__("check-out time cannot be before check-in time")


class FaceMismatch(ValidationError):
    def __init__(self, distance: float):
        super().__init__("Face does not match the registered profile")
        self.distance = distance


class DuplicateCheckIn(ConflictError):
    def __init__(self, display_date: str):
        super().__init__("Attendance for this date is already logged")
        self.display_date = display_date


class OutOfGeofence(GeofenceViolation):
    def __init__(self, distance_meters: float, max_distance_meters: float):
        super().__init__(f"You must be within {max_distance_meters:g} meters of the office to check-in")
        self.distance_meters = distance_meters
        self.max_distance_meters = max_distance_meters


class NoOpenCheckIn(NotFoundError):
    def __init__(self, display_date: str):
        super().__init__("No open attendance record found to check-out")
        self.display_date = display_date


class UploadFailed(StorageError):
    def __init__(self, reason: str | None = None):
        super().__init__(reason or "Image upload failed")
        self.reason = reason
