"""In-memory keyed store of pet stat records."""

from __future__ import annotations

import threading
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Dict, Hashable, Iterator, List

from .errors import AlreadyExists, NotFound


@dataclass(frozen=True)
class PetRecord:
    experience: int
    hunger: int
    happiness: int
    last_interaction: int  # seconds since epoch, decay settled up to here


class PetStore:
    """
    Single owner of every PetRecord.

    Records are immutable, so `get` hands out a snapshot and a transition
    replaces the whole record through `commit`. Callers doing
    read-modify-write must hold `locked(pet_id)` for the duration.
    """

    def __init__(self):
        self._records: Dict[Hashable, PetRecord] = {}
        self._locks: Dict[Hashable, threading.RLock] = {}
        self._guard = threading.Lock()

    def _lock_for(self, pet_id: Hashable) -> threading.RLock:
        with self._guard:
            lock = self._locks.get(pet_id)
            if lock is None:
                lock = self._locks[pet_id] = threading.RLock()
            return lock

    @contextmanager
    def locked(self, pet_id: Hashable) -> Iterator[None]:
        with self._lock_for(pet_id):
            yield

    def create(self, pet_id: Hashable, now: int, max_stat: int) -> PetRecord:
        record = PetRecord(
            experience=0, hunger=max_stat, happiness=max_stat, last_interaction=now
        )
        with self.locked(pet_id), self._guard:
            if pet_id in self._records:
                raise AlreadyExists(pet_id)
            self._records[pet_id] = record
        return record

    def get(self, pet_id: Hashable) -> PetRecord:
        with self._guard:
            try:
                return self._records[pet_id]
            except KeyError:
                raise NotFound(pet_id) from None

    def commit(self, pet_id: Hashable, record: PetRecord) -> None:
        with self._guard:
            if pet_id not in self._records:
                raise NotFound(pet_id)
            self._records[pet_id] = record

    def __contains__(self, pet_id: Hashable) -> bool:
        with self._guard:
            return pet_id in self._records

    def __len__(self) -> int:
        with self._guard:
            return len(self._records)

    def ids(self) -> List[Hashable]:
        with self._guard:
            return list(self._records)
