"""Django signals for cache invalidation.

Covers writes that bypass the service layer, such as the admin.
"""

from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from events.cache import EventCache
from events.models import Attendance, Event


@receiver([post_save, post_delete], sender=Event)
def invalidate_event_cache(sender, instance: Event, **kwargs) -> None:
    """Invalidate caches when an event is saved or deleted."""
    EventCache().invalidate(str(instance.pk))


@receiver([post_save, post_delete], sender=Attendance)
def invalidate_attendance_cache(sender, instance: Attendance, **kwargs) -> None:
    """Invalidate caches when an RSVP is added or removed."""
    EventCache().invalidate(str(instance.event_id))
