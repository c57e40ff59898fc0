"""Django signals for cache invalidation."""

from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from campus_events.cache import EVENT_LIST_KEY, event_detail_key, invalidate
from campus_events.models import Event, Registration


@receiver([post_save, post_delete], sender=Event)
def invalidate_event_cache(sender, instance, **kwargs):
    """Invalidate the list and detail caches when an event is saved or deleted."""
    invalidate(EVENT_LIST_KEY, event_detail_key(instance.pk))


@receiver([post_save, post_delete], sender=Registration)
def invalidate_registration_cache(sender, instance, **kwargs):
    """Invalidate the event detail cache, whose registration count just changed."""
    invalidate(event_detail_key(instance.event_id))
