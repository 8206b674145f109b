"""
Interaction controller: feed, train and the read-only query.

Every operation settles decay against the caller-supplied `now` first.
Mutations then commit the settled stats together with the action's effect
as one new record, under the pet's lock, and emit their event. A failed
operation writes nothing and emits nothing.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Hashable, Protocol

from .config import GameRules
from .decay import settle
from .errors import TooHungry, Unauthorized
from .events import EventBus, Fed, Trained
from .level import level_for
from .ownership import AdminSettings
from .store import PetRecord, PetStore

logger = logging.getLogger(__name__)


class OwnershipOracle(Protocol):
    def is_owner(self, pet_id: Hashable, caller: str) -> bool: ...


@dataclass(frozen=True)
class PetView:
    """Decayed projection of a stored record; nothing committed."""

    experience: int
    hunger: int
    happiness: int
    last_interaction: int  # the stored baseline, not advanced
    level: int


class PetController:
    def __init__(
        self,
        store: PetStore,
        owners: OwnershipOracle,
        rules: GameRules,
        admin: AdminSettings,
        bus: EventBus,
    ):
        self.store = store
        self.owners = owners
        self.rules = rules
        self.admin = admin
        self.bus = bus

    def _authorize(self, pet_id: Hashable, caller: str) -> None:
        if not self.owners.is_owner(pet_id, caller):
            logger.info("rejected %s on pet %s: not the owner", caller, pet_id)
            raise Unauthorized(pet_id)

    def feed(self, pet_id: Hashable, caller: str, now: int) -> Fed:
        self._authorize(pet_id, caller)

        with self.store.locked(pet_id):
            record = self.store.get(pet_id)
            decayed = settle(record, now, self.rules)
            hunger = min(decayed.hunger + self.rules.feed_replenish, self.rules.max_stat)
            self.store.commit(
                pet_id,
                replace(
                    record,
                    hunger=hunger,
                    happiness=decayed.happiness,
                    last_interaction=decayed.last_interaction,
                ),
            )
            event = Fed(pet_id, hunger=hunger, delta=hunger - decayed.hunger)
            self.bus.emit(event)

        logger.debug("fed pet %s: %r", pet_id, event)
        return event

    def train(self, pet_id: Hashable, caller: str, now: int) -> Trained:
        self._authorize(pet_id, caller)

        with self.store.locked(pet_id):
            record = self.store.get(pet_id)
            decayed = settle(record, now, self.rules)
            if decayed.hunger == 0:
                # settled decay is dropped too; the next call starts from the old baseline
                raise TooHungry(pet_id)

            experience = record.experience + self.rules.train_xp_gain
            self.store.commit(
                pet_id,
                PetRecord(
                    experience=experience,
                    hunger=decayed.hunger,
                    happiness=max(decayed.happiness - self.rules.train_happiness_cost, 0),
                    last_interaction=decayed.last_interaction,
                ),
            )
            event = Trained(
                pet_id,
                experience=experience,
                level=level_for(experience, self.admin.xp_per_level),
            )
            self.bus.emit(event)

        logger.debug("trained pet %s: %r", pet_id, event)
        return event

    def query(self, pet_id: Hashable, now: int) -> PetView:
        record = self.store.get(pet_id)
        decayed = settle(record, now, self.rules)
        return PetView(
            experience=record.experience,
            hunger=decayed.hunger,
            happiness=decayed.happiness,
            last_interaction=record.last_interaction,
            level=level_for(record.experience, self.admin.xp_per_level),
        )

    def level(self, pet_id: Hashable) -> int:
        return level_for(self.store.get(pet_id).experience, self.admin.xp_per_level)
