"""Availability event publishing.

A small publish/subscribe registry restricted to the AdapterStatus
vocabulary. Adapters own one emitter each instead of inheriting a
generic event surface.
"""

import logging
from dataclasses import dataclass

from .models import AdapterStatus, StatusEvent
from .ports import StatusListener

logger = logging.getLogger(__name__)


def coerce_status(status: AdapterStatus | str) -> AdapterStatus:
    """Resolve a status name to an AdapterStatus.

    Raises:
        ValueError: If the name is not ONLINE or OFFLINE.
    """
    if isinstance(status, AdapterStatus):
        return status
    try:
        return AdapterStatus(str(status).upper())
    except ValueError:
        raise ValueError(
            f"Unknown status '{status}'. Expected one of: "
            f"{', '.join(s.value for s in AdapterStatus)}"
        ) from None


@dataclass
class _Subscription:
    listener: StatusListener
    once: bool = False


class StatusEmitter:
    """Delivers StatusEvents to listeners registered per status."""

    def __init__(self) -> None:
        self._subscriptions: dict[AdapterStatus, list[_Subscription]] = {
            status: [] for status in AdapterStatus
        }

    def subscribe(
        self, status: AdapterStatus | str, listener: StatusListener
    ) -> None:
        """Call listener on every event with this status."""
        self._subscriptions[coerce_status(status)].append(_Subscription(listener))

    def once(self, status: AdapterStatus | str, listener: StatusListener) -> None:
        """Call listener on the next event with this status only."""
        self._subscriptions[coerce_status(status)].append(
            _Subscription(listener, once=True)
        )

    def unsubscribe(
        self, status: AdapterStatus | str, listener: StatusListener
    ) -> None:
        """Remove the earliest registration of listener, if any."""
        subscriptions = self._subscriptions[coerce_status(status)]
        for subscription in subscriptions:
            if subscription.listener == listener:
                subscriptions.remove(subscription)
                return

    def listener_count(self, status: AdapterStatus | str) -> int:
        return len(self._subscriptions[coerce_status(status)])

    def emit(self, event: StatusEvent) -> int:
        """Deliver an event to its status's listeners in registration order.

        A failing listener is logged and skipped.

        Returns:
            Number of listeners that handled the event without raising.
        """
        subscriptions = self._subscriptions[event.status]
        current = list(subscriptions)
        subscriptions[:] = [s for s in subscriptions if not s.once]

        delivered = 0
        for subscription in current:
            try:
                subscription.listener(event)
                delivered += 1
            except Exception as e:
                logger.error(
                    f"Status listener failed for {event.status.value} "
                    f"({event.adapter_id}): {e}",
                    exc_info=True,
                )

        return delivered
