"""
Collaborators around the stat core: who owns which pet, the admin knobs,
and the mint flow that ties them to the store.
"""

from __future__ import annotations

import logging
import threading
from typing import Dict, Hashable, Optional, Tuple

from .errors import CreationDisabled, NotFound
from .events import Created, EventBus
from .store import PetRecord, PetStore

logger = logging.getLogger(__name__)


class OwnerRegistry:
    """Owner and metadata URI per pet id, plus the id counter for new mints."""

    def __init__(self):
        self._owners: Dict[Hashable, str] = {}
        self._uris: Dict[Hashable, str] = {}
        self._counter = 0
        self._lock = threading.Lock()

    def next_id(self) -> int:
        with self._lock:
            while self._counter in self._owners:
                self._counter += 1
            return self._counter

    def register(self, pet_id: Hashable, owner: str, metadata_uri: str = "") -> None:
        with self._lock:
            self._owners[pet_id] = str(owner)
            self._uris[pet_id] = metadata_uri

    def owner_of(self, pet_id: Hashable) -> str:
        with self._lock:
            try:
                return self._owners[pet_id]
            except KeyError:
                raise NotFound(pet_id) from None

    def is_owner(self, pet_id: Hashable, caller: str) -> bool:
        with self._lock:
            owner = self._owners.get(pet_id)
        return owner is not None and owner == str(caller)

    def metadata_uri(self, pet_id: Hashable) -> str:
        with self._lock:
            try:
                return self._uris[pet_id]
            except KeyError:
                raise NotFound(pet_id) from None


class AdminSettings:
    """Runtime-adjustable configuration owned by the administrator."""

    def __init__(self, xp_per_level: int = 50, minting_allowed: bool = True):
        self._lock = threading.Lock()
        self._xp_per_level = 0
        self.xp_per_level = xp_per_level
        self._minting_allowed = bool(minting_allowed)

    @property
    def xp_per_level(self) -> int:
        with self._lock:
            return self._xp_per_level

    @xp_per_level.setter
    def xp_per_level(self, value: int) -> None:
        value = int(value)
        if value <= 0:
            raise ValueError("xp_per_level must be positive")
        with self._lock:
            self._xp_per_level = value

    @property
    def minting_allowed(self) -> bool:
        with self._lock:
            return self._minting_allowed

    @minting_allowed.setter
    def minting_allowed(self, value: bool) -> None:
        with self._lock:
            self._minting_allowed = bool(value)


class Minter:
    """Creation entry point: the minting gate, ownership and a fresh record."""

    def __init__(
        self,
        store: PetStore,
        owners: OwnerRegistry,
        admin: AdminSettings,
        bus: EventBus,
        max_stat: int,
    ):
        self.store = store
        self.owners = owners
        self.admin = admin
        self.bus = bus
        self.max_stat = max_stat
        self._lock = threading.Lock()

    def mint(
        self,
        owner: str,
        now: int,
        metadata_uri: str = "",
        pet_id: Optional[Hashable] = None,
    ) -> Tuple[Hashable, PetRecord]:
        if not self.admin.minting_allowed:
            raise CreationDisabled(pet_id)

        with self._lock:
            if pet_id is None:
                pet_id = self.owners.next_id()
            record = self.store.create(pet_id, now, self.max_stat)  # AlreadyExists → nothing registered
            self.owners.register(pet_id, owner, metadata_uri)

        logger.info("minted pet %s for %s", pet_id, owner)
        self.bus.emit(Created(pet_id))
        return pet_id, record
