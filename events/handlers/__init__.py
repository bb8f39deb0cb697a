from events.handlers.views import CancelRsvpView, EventDetailView, EventListView, RsvpView

__all__ = ["CancelRsvpView", "EventDetailView", "EventListView", "RsvpView"]
