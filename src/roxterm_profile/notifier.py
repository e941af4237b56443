"""Typed change notification for profiles.

Each value domain has its own channel. Handlers run synchronously in the
order they subscribed; a handler that raises is logged and skipped so the
remaining handlers still see the event.
"""

from collections.abc import Callable
from dataclasses import dataclass

from roxterm_profile.logger import get_logger
from roxterm_profile.types import ChangeEvent, Domain

logger = get_logger(__name__)

ChangeHandler = Callable[[ChangeEvent], object]


@dataclass(frozen=True)
class HandlerFailure:
    """A handler that raised while receiving an event."""

    event: ChangeEvent
    handler: ChangeHandler
    error: Exception


class ChangeNotifier:
    """Per-domain publish/subscribe channels."""

    def __init__(self) -> None:
        """Initialize notifier with an empty channel per domain."""
        self._channels: dict[Domain, list[ChangeHandler]] = {
            domain: [] for domain in Domain
        }
        self._failures: list[HandlerFailure] = []

    def subscribe(self, channel: Domain, handler: ChangeHandler) -> None:
        """Register ``handler`` for events of ``channel``.

        Subscribing the same handler twice delivers each event to it twice.
        """
        if not callable(handler):
            msg = f"handler must be callable, got {type(handler).__name__}"
            raise TypeError(msg)
        self._channels[channel].append(handler)

    def unsubscribe(self, channel: Domain, handler: ChangeHandler) -> bool:
        """Remove the earliest registration of ``handler``.

        Returns:
            True if a registration was removed

        """
        handlers = self._channels[channel]
        try:
            handlers.remove(handler)
        except ValueError:
            return False
        return True

    def handlers(self, channel: Domain) -> tuple[ChangeHandler, ...]:
        """Handlers currently registered for ``channel``."""
        return tuple(self._channels[channel])

    @property
    def failures(self) -> tuple[HandlerFailure, ...]:
        """Handler failures recorded so far."""
        return tuple(self._failures)

    def clear_failures(self) -> None:
        """Forget recorded handler failures."""
        self._failures.clear()

    def publish(self, event: ChangeEvent) -> int:
        """Deliver ``event`` to every handler of its domain.

        Handlers added or removed during delivery take effect from the next
        event.

        Returns:
            Number of handlers that returned without raising

        """
        delivered = 0
        for handler in tuple(self._channels[event.domain]):
            try:
                handler(event)
            except Exception as e:  # noqa: BLE001
                logger.exception(
                    "Change handler %r failed for %s", handler, event
                )
                self._failures.append(HandlerFailure(event, handler, e))
            else:
                delivered += 1
        return delivered
