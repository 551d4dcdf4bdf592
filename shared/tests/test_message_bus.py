from dataclasses import dataclass

import pytest

from shared.application.message_bus import MessageBus
from shared.domain.base import DomainEvent


@dataclass(frozen=True, kw_only=True)
class SomethingHappened(DomainEvent):
    value: int


@dataclass
class DoSomething:
    value: int


def test_command_is_routed_to_its_handler():
    bus = MessageBus()
    bus.register_command_handler(DoSomething, lambda command: command.value * 2)

    assert bus.has_command_handler(DoSomething)
    assert bus.handle_command(DoSomething(value=21)) == 42


def test_command_handler_can_only_be_registered_once():
    bus = MessageBus()
    bus.register_command_handler(DoSomething, lambda command: None)

    with pytest.raises(ValueError):
        bus.register_command_handler(DoSomething, lambda command: None)


def test_unknown_command_is_rejected():
    with pytest.raises(ValueError):
        MessageBus().handle_command(DoSomething(value=1))


def test_handler_errors_propagate_to_caller():
    def failing(command):
        raise RuntimeError("boom")

    bus = MessageBus()
    bus.register_command_handler(DoSomething, failing)

    with pytest.raises(RuntimeError):
        bus.handle_command(DoSomething(value=1))


def test_failing_event_handler_does_not_stop_the_others():
    received = []

    def failing(event):
        raise RuntimeError("boom")

    bus = MessageBus()
    bus.register_event_handler(SomethingHappened, failing)
    bus.register_event_handler(SomethingHappened, received.append)

    event = SomethingHappened(value=7)
    bus.publish_events([event])

    assert received == [event]


def test_event_handler_registration_is_idempotent():
    received = []

    bus = MessageBus()
    bus.register_event_handler(SomethingHappened, received.append)
    bus.register_event_handler(SomethingHappened, received.append)
    bus.publish_events([SomethingHappened(value=1)])

    assert len(received) == 1

    bus.unregister_event_handler(SomethingHappened, received.append)
    bus.publish_events([SomethingHappened(value=2)])

    assert len(received) == 1
