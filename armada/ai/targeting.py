"""Difficulty-to-strategy selection and the public choose_target entry point."""

from __future__ import annotations

import random
from collections.abc import Sequence

from armada.ai.hunt_target import HuntTargetTargeting
from armada.ai.probability_target import ProbabilityTargeting
from armada.ai.random_shot import RandomShotTargeting
from armada.ai.strategy import TargetingStrategy
from armada.core.board import Board
from armada.core.models import DEFAULT_FLEET, Coord, Difficulty, ShipClass

_STRATEGIES: dict[Difficulty, TargetingStrategy] = {
    Difficulty.LOW: RandomShotTargeting(),
    Difficulty.MID: HuntTargetTargeting(),
    Difficulty.HIGH: ProbabilityTargeting(),
}


def build_targeting(difficulty: Difficulty | str) -> TargetingStrategy:
    """Return the targeting strategy for a skill tier."""
    if not isinstance(difficulty, Difficulty):
        difficulty = Difficulty.parse(difficulty)
    return _STRATEGIES[difficulty]


def choose_target(
    difficulty: Difficulty | str,
    opponent_board: Board,
    sunk_ship_classes: Sequence[ShipClass],
    remaining_ship_classes: Sequence[ShipClass] | None,
    rng: random.Random,
) -> Coord:
    """Pick the next coordinate to fire at using only what an opponent can observe."""
    if remaining_ship_classes is None:
        remaining_ship_classes = remaining_after(sunk_ship_classes)
    strategy = build_targeting(difficulty)
    return strategy.choose(opponent_board.observed(), remaining_ship_classes, rng)


def remaining_after(sunk_ship_classes: Sequence[ShipClass], fleet: Sequence[ShipClass] = DEFAULT_FLEET) -> list[ShipClass]:
    """Fleet composition left once the given classes are sunk."""
    remaining = list(fleet)
    for ship_class in sunk_ship_classes:
        if ship_class in remaining:
            remaining.remove(ship_class)
    return remaining
