from __future__ import annotations

import logging
import random

import pytest

from armada.core.models import DEFAULT_FLEET, Coord, Difficulty, Orientation, Seat, SeatRole
from armada.core.session import (
    GameSession,
    begin_placement,
    confirm_placement,
    create_session,
    place_ship,
)

# One ship per even row, flush left.
STACKED_LAYOUT: tuple[tuple[Coord, Orientation], ...] = (
    (Coord(0, 0), Orientation.HORIZONTAL),
    (Coord(0, 2), Orientation.HORIZONTAL),
    (Coord(0, 4), Orientation.HORIZONTAL),
    (Coord(0, 6), Orientation.HORIZONTAL),
    (Coord(0, 8), Orientation.HORIZONTAL),
)


def make_seats(count: int = 2) -> list[Seat]:
    seats = [Seat(0, "Alice", SeatRole.HUMAN)]
    tiers = (Difficulty.LOW, Difficulty.MID, Difficulty.HIGH)
    for index in range(1, count):
        seats.append(Seat(index, f"Bot {index}", SeatRole.COMPUTER, tiers[(index - 1) % len(tiers)]))
    return seats


def make_combat_session(seats: list[Seat], **kwargs) -> GameSession:
    session = create_session(seats, **kwargs)
    begin_placement(session)
    for seat in session.seats:
        for ship_class, (anchor, orientation) in zip(DEFAULT_FLEET, STACKED_LAYOUT):
            place_ship(session, seat.id, ship_class, anchor, orientation)
        confirm_placement(session, seat.id)
    return session


def sink_fleet(session: GameSession, attacker_id: int, target_id: int) -> None:
    from armada.core.shot_resolution import resolve_attack

    for ship in list(session.board(target_id).ships):
        for cell in ship.cells:
            resolve_attack(session, attacker_id, target_id, cell)


@pytest.fixture
def seeded_rng() -> random.Random:
    return random.Random(1337)


@pytest.fixture
def two_seat_session() -> GameSession:
    return make_combat_session(make_seats(2))


@pytest.fixture
def four_seat_session() -> GameSession:
    return make_combat_session(make_seats(4))


@pytest.fixture(autouse=True)
def _restore_root_logging():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    from armada.infra.logging import shutdown_logging

    shutdown_logging()
    root.handlers[:] = handlers
    root.setLevel(level)
