from shared.infrastructure.messaging.event_bus import EventBus

__all__ = ["EventBus"]
