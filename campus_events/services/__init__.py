from campus_events.services.admission_service import AdmissionService
from campus_events.services.capacity import CapacityAccountant
from campus_events.services.event_service import EventLifecycleService

__all__ = [
    "AdmissionService",
    "CapacityAccountant",
    "EventLifecycleService",
]
