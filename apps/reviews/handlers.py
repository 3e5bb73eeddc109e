"""Review event handlers."""

from shared.application.message_bus import MessageBus, message_bus

from .events import ReviewReceived


def notify_provider_owner(event: ReviewReceived) -> None:
    from apps.notifications.models import Notification
    from apps.notifications.services import create_in_app_notification
    from apps.users.models import User

    owner = User.objects.get(pk=event.owner_id)
    create_in_app_notification(
        owner,
        type=Notification.Type.REVIEW_RECEIVED,
        title="New review",
        message=f"{event.target_name} received a {event.rating}-star review.",
        data={"review_id": event.review_id, "target": event.target, "rating": event.rating},
    )


def register_handlers(bus: MessageBus = message_bus) -> None:
    bus.register_event_handler(ReviewReceived, notify_provider_owner)
