"""Random fleet placement by rejection sampling."""

from __future__ import annotations

import logging
import random
from collections.abc import Sequence

from armada.core.board import Board, ShipInstance, build_ship
from armada.core.errors import PlacementExhaustedError
from armada.core.models import BOARD_SIZE, DEFAULT_FLEET, Coord, Orientation, ShipClass

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 2000
DEFAULT_MAX_FLEET_RETRIES = 50


def place_randomly(
    seat_id: int,
    ship_class: ShipClass,
    already_placed: Sequence[ShipInstance],
    rng: random.Random,
    *,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    size: int = BOARD_SIZE,
) -> ShipInstance | None:
    """Draw anchors and orientations until one fits; None once the attempt budget is spent."""
    board = Board.from_ships(seat_id, already_placed, size=size)
    for _ in range(max_attempts):
        orientation = rng.choice([Orientation.HORIZONTAL, Orientation.VERTICAL])
        anchor = Coord(col=rng.randrange(size), row=rng.randrange(size))
        if board.can_place(ship_class, anchor, orientation):
            return build_ship(ship_class, anchor, orientation)
    logger.warning(
        "placement_exhausted seat=%s ship=%s attempts=%d", seat_id, ship_class.id, max_attempts
    )
    return None


def random_fleet(
    seat_id: int,
    rng: random.Random,
    *,
    fleet: Sequence[ShipClass] = DEFAULT_FLEET,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    max_fleet_retries: int = DEFAULT_MAX_FLEET_RETRIES,
    size: int = BOARD_SIZE,
) -> list[ShipInstance]:
    """Generate a complete non-overlapping fleet, restarting from scratch on exhaustion."""
    for attempt in range(1, max_fleet_retries + 1):
        generated = _generate_fleet(seat_id, rng, fleet, max_attempts, size)
        if generated is not None:
            if attempt > 1:
                logger.info("fleet_generated seat=%s retries=%d", seat_id, attempt - 1)
            return generated
    raise PlacementExhaustedError(
        f"Failed to generate a fleet for seat {seat_id} after {max_fleet_retries} retries."
    )


def _generate_fleet(
    seat_id: int,
    rng: random.Random,
    fleet: Sequence[ShipClass],
    max_attempts: int,
    size: int,
) -> list[ShipInstance] | None:
    placed: list[ShipInstance] = []
    for ship_class in fleet:
        ship = place_randomly(seat_id, ship_class, placed, rng, max_attempts=max_attempts, size=size)
        if ship is None:
            return None
        placed.append(ship)
    return placed
