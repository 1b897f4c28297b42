"""
Event records emitted by state-changing wallet calls

Records are buffered per call and only delivered once the call commits, so
listeners never observe an event for a reverted call.
"""

import logging
from dataclasses import dataclass, asdict
from typing import Callable, ClassVar, List

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Event:
    name: ClassVar[str] = "Event"

    def to_dict(self) -> dict:
        data = asdict(self)
        for key, value in data.items():
            if isinstance(value, bytes):
                data[key] = "0x" + value.hex()
        return {'event': self.name, 'args': data}


@dataclass(frozen=True)
class ContractOwnerChange(Event):
    name: ClassVar[str] = "ContractOwnerChange"
    old_owner: str
    new_owner: str


@dataclass(frozen=True)
class NewPartner(Event):
    name: ClassVar[str] = "NewPartner"
    partner: str


@dataclass(frozen=True)
class SubmitTransaction(Event):
    name: ClassVar[str] = "SubmitTransaction"
    sender: str
    tx_id: int
    to: str
    value: int
    data: bytes


@dataclass(frozen=True)
class ConfirmTransaction(Event):
    name: ClassVar[str] = "ConfirmTransaction"
    sender: str
    tx_id: int


@dataclass(frozen=True)
class RevokeConfirmation(Event):
    name: ClassVar[str] = "RevokeConfirmation"
    sender: str
    tx_id: int


@dataclass(frozen=True)
class ExecuteTransaction(Event):
    name: ClassVar[str] = "ExecuteTransaction"
    sender: str
    tx_id: int


Listener = Callable[[Event], None]


class EventNotifier:
    """Delivers committed events to subscribed listeners and keeps a log"""

    def __init__(self):
        self._listeners: List[Listener] = []
        self._history: List[Event] = []

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        self._listeners.remove(listener)

    def publish(self, events: List[Event]) -> None:
        for event in events:
            self._history.append(event)
            logger.debug("event %s %s", event.name, event.to_dict()['args'])
            for listener in list(self._listeners):
                listener(event)

    def get_history(self) -> List[Event]:
        return self._history.copy()
