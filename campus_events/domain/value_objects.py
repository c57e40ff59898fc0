"""Domain primitives that enforce validity at creation time."""

from dataclasses import dataclass
from enum import Enum
from typing import Self
from uuid import UUID, uuid4


@dataclass(frozen=True)
class EventId:
    """Unique identifier for an Event."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    @classmethod
    def new(cls) -> Self:
        return cls(value=uuid4())

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class RegistrationId:
    """Unique identifier for a Registration."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    @classmethod
    def new(cls) -> Self:
        return cls(value=uuid4())

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Capacity:
    """Non-negative integer representing capacity."""

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValueError("Capacity must be an integer")
        if self.value < 0:
            raise ValueError("Capacity cannot be negative")

    def admits(self, taken: int) -> bool:
        """Whether one more slot fits when `taken` slots are already used."""
        return taken < self.value


class Category(Enum):
    """Recognized event categories."""

    TECHNICAL = "technical"
    CULTURAL = "cultural"
    SPORTS = "sports"
    ACADEMIC = "academic"
    OTHER = "other"


class RegistrationStatus(Enum):
    """Registration states. The only transition is REGISTERED -> CANCELLED."""

    REGISTERED = "registered"
    CANCELLED = "cancelled"


class Role(Enum):
    """Closed set of caller roles supplied by the identity gate."""

    STUDENT = "student"
    COORDINATOR = "coordinator"


@dataclass(frozen=True)
class Principal:
    """An already-authenticated caller."""

    id: str
    role: Role

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Principal id cannot be empty")
        if not isinstance(self.role, Role):
            raise ValueError("Principal role must be a Role")

    @property
    def is_student(self) -> bool:
        return self.role is Role.STUDENT

    @property
    def is_coordinator(self) -> bool:
        return self.role is Role.COORDINATOR


@dataclass(frozen=True)
class EventPolicy:
    """Configurable limits applied when events are created or updated."""

    max_participants_limit: int = 1000
    default_max_participants: int = 100

    def __post_init__(self) -> None:
        if self.max_participants_limit < 1:
            raise ValueError("max_participants_limit must be positive")
        if not 1 <= self.default_max_participants <= self.max_participants_limit:
            raise ValueError("default_max_participants must be within the limit")
