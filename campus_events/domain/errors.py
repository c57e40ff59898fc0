"""Domain error codes for the campus events module."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    VALIDATION_FAILED = "VALIDATION_FAILED"
    EVENT_NOT_FOUND = "EVENT_NOT_FOUND"
    REGISTRATION_NOT_FOUND = "REGISTRATION_NOT_FOUND"
    FORBIDDEN = "FORBIDDEN"
    DEADLINE_EXPIRED = "DEADLINE_EXPIRED"
    DUPLICATE_REGISTRATION = "DUPLICATE_REGISTRATION"
    CAPACITY_EXCEEDED = "CAPACITY_EXCEEDED"
    INFRASTRUCTURE_FAILURE = "INFRASTRUCTURE_FAILURE"


@dataclass(frozen=True)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"

    @property
    def retriable(self) -> bool:
        return False


class ValidationError(DomainError):
    """Raised when input is malformed or out of range. Names the offending field."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(code=ErrorCode.VALIDATION_FAILED, message=message)
        self.field = field


class NotFoundError(DomainError):
    """Raised when a referenced entity does not exist."""


class EventNotFoundError(NotFoundError):
    """Raised when an event is not found (or is inactive where that matters)."""

    def __init__(self, event_id: str) -> None:
        super().__init__(
            code=ErrorCode.EVENT_NOT_FOUND,
            message="Event not found",
        )
        self.event_id = event_id


class RegistrationNotFoundError(NotFoundError):
    """Raised when a registration does not exist for the caller."""

    def __init__(self, registration_id: str) -> None:
        super().__init__(
            code=ErrorCode.REGISTRATION_NOT_FOUND,
            message="Registration not found",
        )
        self.registration_id = registration_id


class ForbiddenError(DomainError):
    """Raised when the caller is authenticated but not allowed to act."""

    def __init__(self, message: str = "Not authorized to perform this action") -> None:
        super().__init__(code=ErrorCode.FORBIDDEN, message=message)


class DeadlineExpiredError(DomainError):
    """Raised when registering after the event's registration deadline."""

    def __init__(self, event_id: str) -> None:
        super().__init__(
            code=ErrorCode.DEADLINE_EXPIRED,
            message="Registration deadline has passed",
        )
        self.event_id = event_id


class DuplicateRegistrationError(DomainError):
    """Raised when the student already holds an active registration."""

    def __init__(self, event_id: str) -> None:
        super().__init__(
            code=ErrorCode.DUPLICATE_REGISTRATION,
            message="Already registered for this event",
        )
        self.event_id = event_id


class CapacityExceededError(DomainError):
    """Raised when the event has no free slots left."""

    def __init__(self, event_id: str) -> None:
        super().__init__(
            code=ErrorCode.CAPACITY_EXCEEDED,
            message="Event is full",
        )
        self.event_id = event_id


class InfrastructureError(DomainError):
    """Raised when the backing store fails. The caller may retry."""

    def __init__(self, message: str = "Storage is temporarily unavailable") -> None:
        super().__init__(code=ErrorCode.INFRASTRUCTURE_FAILURE, message=message)

    @property
    def retriable(self) -> bool:
        return True
