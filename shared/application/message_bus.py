"""
Message Bus

Commands go to exactly one handler and return its result to the caller.
Events fan out to every subscriber of their type; one failing subscriber
does not keep the others from running.
"""

from collections import defaultdict
from typing import Any, Callable, DefaultDict, Dict, Iterable, List, Type
import logging

from shared.domain.base import DomainEvent
from shared.domain.exceptions import DomainError

logger = logging.getLogger(__name__)

CommandHandler = Callable[[Any], Any]
EventHandler = Callable[[DomainEvent], None]


def _name(handler) -> str:
    return getattr(handler, '__qualname__', None) or repr(handler)


class MessageBus:

    def __init__(self):
        self._command_handlers: Dict[Type, CommandHandler] = {}
        self._event_handlers: DefaultDict[Type[DomainEvent], List[EventHandler]] = defaultdict(list)

    # ----- registration -----

    def register_command_handler(self, command_type: Type, handler: CommandHandler):
        """Raises ValueError if ``command_type`` already has a handler."""
        if command_type in self._command_handlers:
            raise ValueError(f"{command_type.__name__} already has a handler")
        self._command_handlers[command_type] = handler
        logger.debug("%s -> %s", command_type.__name__, _name(handler))

    def has_command_handler(self, command_type: Type) -> bool:
        return command_type in self._command_handlers

    def register_event_handler(self, event_type: Type[DomainEvent], handler: EventHandler):
        """Subscribe ``handler`` to ``event_type``; subscribing twice has no effect."""
        subscribers = self._event_handlers[event_type]
        if handler not in subscribers:
            subscribers.append(handler)
            logger.debug("%s subscribed to %s", _name(handler), event_type.__name__)

    def unregister_event_handler(self, event_type: Type[DomainEvent], handler: EventHandler):
        subscribers = self._event_handlers.get(event_type)
        if subscribers and handler in subscribers:
            subscribers.remove(handler)

    # ----- dispatch -----

    def handle_command(self, command: Any) -> Any:
        command_type = type(command)
        try:
            handler = self._command_handlers[command_type]
        except KeyError:
            raise ValueError(f"No handler registered for {command_type.__name__}") from None

        logger.info("Handling %s", command_type.__name__)
        try:
            return handler(command)
        except DomainError as e:
            # Domain refusals are reported by the caller
            logger.info("%s refused: %s", command_type.__name__, e)
            raise
        except Exception:
            logger.exception("%s failed", command_type.__name__)
            raise

    def publish_events(self, events: Iterable[DomainEvent]):
        for event in events:
            subscribers = list(self._event_handlers.get(type(event), ()))
            if not subscribers:
                logger.debug("Nobody subscribed to %s", type(event).__name__)
                continue

            logger.info("Publishing %s (ID: %s)", type(event).__name__, event.event_id)
            for handler in subscribers:
                try:
                    handler(event)
                except Exception:
                    logger.exception(
                        "Subscriber %s failed on %s %s",
                        _name(handler),
                        type(event).__name__,
                        event.event_id,
                    )


# Process-wide bus; wired by apps.bookings.services.bootstrap
message_bus = MessageBus()
