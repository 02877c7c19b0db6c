"""Seating and placement orchestration for human and computer seats."""

from __future__ import annotations

import random
from collections.abc import Iterable

from armada.core.board import Board
from armada.core.errors import PlacementExhaustedError
from armada.core.models import Phase, Seat
from armada.core.session import (
    GameSession,
    begin_placement,
    confirm_placement,
    create_session,
    randomize_fleet,
)
from armada.infra.config import GameConfig
from armada.infra.logging import get_logger

logger = get_logger(__name__)


def start_session(seats: Iterable[Seat], rng: random.Random, config: GameConfig) -> GameSession:
    """Create a session, open placement and place every computer fleet the pointer reaches."""
    session = create_session(seats, attack_mode=config.attack_mode)
    begin_placement(session)
    prepare_computer_fleets(session, rng, config)
    logger.info(
        "session_started seats=%s phase=%s attack_mode=%s",
        list(session.seat_ids),
        session.phase.value,
        session.attack_mode.value,
    )
    return session


def prepare_computer_fleets(session: GameSession, rng: random.Random, config: GameConfig) -> None:
    """Randomize and confirm fleets while the placement pointer sits on a computer seat."""
    while session.phase is Phase.PLACEMENT and session.placement_seat_id is not None:
        seat = session.seat(session.placement_seat_id)
        if not seat.is_computer:
            return
        randomize_seat_fleet(session, seat.id, rng, config)
        confirm_placement(session, seat.id)


def randomize_seat_fleet(
    session: GameSession, seat_id: int, rng: random.Random, config: GameConfig
) -> Board:
    """Random layout for one seat using the configured attempt budgets."""
    try:
        return randomize_fleet(
            session,
            seat_id,
            rng,
            max_attempts=config.placement_max_attempts,
            max_fleet_retries=config.fleet_max_retries,
        )
    except PlacementExhaustedError:
        logger.exception("fleet_randomize_failed seat=%s", seat_id)
        raise


def confirm_seat_fleet(session: GameSession, seat_id: int, rng: random.Random, config: GameConfig) -> None:
    """Confirm a human seat's fleet, then let following computer seats place theirs."""
    confirm_placement(session, seat_id)
    prepare_computer_fleets(session, rng, config)
