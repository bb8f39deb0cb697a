from django.urls import path

from events.handlers import CancelRsvpView, EventDetailView, EventListView, RsvpView

urlpatterns = [
    path("events", EventListView.as_view(), name="event-list"),
    path("events/<str:event_id>", EventDetailView.as_view(), name="event-detail"),
    path("events/<str:event_id>/rsvp", RsvpView.as_view(), name="event-rsvp"),
    path(
        "events/<str:event_id>/cancel-rsvp",
        CancelRsvpView.as_view(),
        name="event-cancel-rsvp",
    ),
]
