"""Domain errors raised by CarBlock services.

Each error carries the HTTP status it maps to; the API layer renders all of
them as ``{"error": message}``.
"""


class CarBlockError(Exception):
    status_code = 500
    default_message = "Request failed"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidPlate(CarBlockError):
    status_code = 400
    default_message = "Invalid plate format"


class InvalidStatus(CarBlockError):
    status_code = 400
    default_message = "Invalid status"


class SenderUnknown(CarBlockError):
    status_code = 400
    default_message = "Sender is not registered"


class SelfAlert(CarBlockError):
    status_code = 400
    default_message = "Cannot alert your own car"


class Forbidden(CarBlockError):
    status_code = 403
    default_message = "Not authorized"


class NotFound(CarBlockError):
    status_code = 404
    default_message = "Not found"


class PlateNotRegistered(CarBlockError):
    status_code = 404
    default_message = "Plate not registered in system"


class AlreadyBlocked(CarBlockError):
    status_code = 409
    default_message = "This car is already reported as blocking someone"


class InvalidTransition(CarBlockError):
    status_code = 409
    default_message = "Alert cannot move to that status"


class ContactConflict(CarBlockError):
    status_code = 409
    default_message = "Already registered to another user"


class RateLimited(CarBlockError):
    status_code = 429
    default_message = "Rate limit: too many alerts, try again in a minute"


class StorageError(CarBlockError):
    status_code = 500
    default_message = "Failed to save changes"


class NotificationError(CarBlockError):
    """Email or push delivery failed. Logged by the dispatcher, never surfaced."""

    status_code = 502
    default_message = "Notification delivery failed"
