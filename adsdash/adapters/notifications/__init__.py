from adsdash.adapters.notifications.base import AbstractNotificationSink

__all__ = ["AbstractNotificationSink"]
