"""Notifications emitted after successful transitions."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Hashable, List, Union

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Created:
    pet_id: Hashable


@dataclass(frozen=True)
class Fed:
    pet_id: Hashable
    hunger: int
    delta: int  # hunger actually gained after clamping


@dataclass(frozen=True)
class Trained:
    pet_id: Hashable
    experience: int
    level: int


Event = Union[Created, Fed, Trained]
Listener = Callable[[Event], None]


class EventBus:
    def __init__(self):
        self._listeners: List[Listener] = []

    def subscribe(self, listener: Listener) -> Listener:
        self._listeners.append(listener)
        return listener

    def emit(self, event: Event) -> None:
        # the transition is already committed; a broken listener must not undo it
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                logger.exception("event listener %r failed on %r", listener, event)
