"""Wiring of the store, its collaborators and the controller into one unit."""

from __future__ import annotations

from typing import Optional

from .config import GameRules
from .controller import PetController
from .events import EventBus
from .ownership import AdminSettings, Minter, OwnerRegistry
from .store import PetStore


class PetService:
    def __init__(
        self,
        rules: Optional[GameRules] = None,
        *,
        xp_per_level: int = 50,
        minting_allowed: bool = True,
    ):
        self.rules = rules or GameRules()
        self.store = PetStore()
        self.owners = OwnerRegistry()
        self.admin = AdminSettings(xp_per_level, minting_allowed)
        self.bus = EventBus()
        self.controller = PetController(
            self.store, self.owners, self.rules, self.admin, self.bus
        )
        self.minter = Minter(
            self.store, self.owners, self.admin, self.bus, self.rules.max_stat
        )

    # shortcuts used by the API layer
    def mint(self, owner: str, now: int, metadata_uri: str = "", pet_id=None):
        return self.minter.mint(owner, now, metadata_uri, pet_id)

    def feed(self, pet_id, caller: str, now: int):
        return self.controller.feed(pet_id, caller, now)

    def train(self, pet_id, caller: str, now: int):
        return self.controller.train(pet_id, caller, now)

    def query(self, pet_id, now: int):
        return self.controller.query(pet_id, now)

    def level(self, pet_id) -> int:
        return self.controller.level(pet_id)
