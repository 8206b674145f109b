"""
Time-based stat decay.

Stats drop by a fixed rate for every *completed* decay interval since the
last settled timestamp. The settled timestamp only moves by whole intervals,
so the partial interval in progress carries over to the next call.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, NamedTuple

if TYPE_CHECKING:
    from .config import GameRules
    from .store import PetRecord


class Decay(NamedTuple):
    hunger: int
    happiness: int
    last_interaction: int
    intervals: int


def compute_decay(
    hunger: int,
    happiness: int,
    last_interaction: int,
    now: int,
    *,
    interval: int,
    rate: int,
) -> Decay:
    if interval <= 0:
        raise ValueError("decay interval must be positive")
    if rate < 0:
        raise ValueError("decay rate must not be negative")

    elapsed = max(now - last_interaction, 0)  # clock went backwards → nothing elapsed
    intervals = elapsed // interval
    if intervals == 0:
        return Decay(hunger, happiness, last_interaction, 0)

    total = intervals * rate
    return Decay(
        hunger=max(hunger - total, 0),
        happiness=max(happiness - total, 0),
        last_interaction=last_interaction + intervals * interval,
        intervals=intervals,
    )


def settle(record: "PetRecord", now: int, rules: "GameRules") -> Decay:
    """Decay a stored record up to `now` under the given rules."""
    return compute_decay(
        record.hunger,
        record.happiness,
        record.last_interaction,
        now,
        interval=rules.decay_interval,
        rate=rules.decay_rate,
    )
