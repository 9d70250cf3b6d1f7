"""Service-layer exceptions mapped to HTTP responses at the API boundary."""

from fastapi import status


class ServiceError(Exception):
    """Base error raised by services with a user-facing message."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    default_message: str = "Request could not be processed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFoundError(ServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Resource not found"


class ConflictError(ServiceError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Duplicate entry"


class ValidationFailedError(ServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid input"


class UnauthorizedError(ServiceError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Not authenticated"


class ForbiddenError(ServiceError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "You do not have access to this resource"


class PayloadTooLargeError(ServiceError):
    status_code = 413
    default_message = "Payload too large"


# Domain rule violations


class DuplicateApplicationError(ConflictError):
    default_message = "You have already applied to this job"


class ApplicationLimitExceededError(ServiceError):
    def __init__(self, limit: int):
        self.limit = limit
        super().__init__(f"You have reached the maximum of {limit} applications per event")


class AlreadyJoinedEventError(ConflictError):
    default_message = "Your company has already joined this event"


class StandNumberTakenError(ConflictError):
    def __init__(self, stand_number: str):
        self.stand_number = stand_number
        super().__init__(f"Stand number {stand_number} is already taken for this event")


class NotParticipatingError(ForbiddenError):
    default_message = "Your company is not participating in this event"


class EventHasJobsError(ConflictError):
    default_message = "Cannot leave an event while your company still has jobs posted for it"
