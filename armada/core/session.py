"""Game session state, seating and placement lifecycle."""

from __future__ import annotations

import random
import threading
from collections.abc import Iterable
from dataclasses import dataclass, field

from armada.core.board import Board, ShipInstance
from armada.core.errors import RuleViolation
from armada.core.models import (
    BOARD_SIZE,
    DEFAULT_FLEET,
    AttackMode,
    AttackOutcome,
    Coord,
    Difficulty,
    Orientation,
    Phase,
    Seat,
    SeatRole,
    ShipClass,
)
from armada.core.placement import DEFAULT_MAX_ATTEMPTS, DEFAULT_MAX_FLEET_RETRIES, random_fleet

MIN_SEATS = 2
MAX_SEATS = 4


@dataclass(slots=True)
class GameSession:
    """Canonical state of one game."""

    seats: tuple[Seat, ...]
    boards: dict[int, Board]
    phase: Phase = Phase.SEATING
    attack_mode: AttackMode = AttackMode.SINGLE
    current_seat_id: int | None = None
    winner_id: int | None = None
    placement_seat_id: int | None = None
    confirmed_seat_ids: set[int] = field(default_factory=set)
    last_attack: tuple[AttackOutcome, ...] = ()
    history: list[str] = field(default_factory=list)
    lock: threading.RLock = field(default_factory=threading.RLock, repr=False, compare=False)

    @property
    def seat_ids(self) -> tuple[int, ...]:
        return tuple(seat.id for seat in self.seats)

    def seat(self, seat_id: int) -> Seat:
        for seat in self.seats:
            if seat.id == seat_id:
                return seat
        raise RuleViolation(f"Seat {seat_id} is not an active seat.")

    def board(self, seat_id: int) -> Board:
        board = self.boards.get(seat_id)
        if board is None:
            raise RuleViolation(f"Seat {seat_id} has no board.")
        return board

    def seat_name(self, seat_id: int | None) -> str:
        if seat_id is None:
            return "nobody"
        return self.seat(seat_id).name


def default_seats() -> list[Seat]:
    """Four-slot default seating: one human, one low-tier computer, two empty slots."""
    return [
        Seat(0, "Player 1", SeatRole.HUMAN),
        Seat(1, "Player 2", SeatRole.COMPUTER, Difficulty.LOW),
        Seat(2, "Player 3", SeatRole.INACTIVE),
        Seat(3, "Player 4", SeatRole.INACTIVE),
    ]


def create_session(
    seats: Iterable[Seat],
    *,
    attack_mode: AttackMode = AttackMode.SINGLE,
    size: int = BOARD_SIZE,
) -> GameSession:
    """Create a session in the seating phase with one empty board per active seat."""
    active = _active_seats(seats)
    return GameSession(
        seats=active,
        boards={seat.id: Board(seat_id=seat.id, size=size) for seat in active},
        phase=Phase.SEATING,
        attack_mode=attack_mode,
    )


def update_seating(session: GameSession, seats: Iterable[Seat]) -> GameSession:
    """Replace the seat list; every board is reset."""
    with session.lock:
        require_phase(session, Phase.SEATING)
        active = _active_seats(seats)
        size = _board_size(session)
        session.seats = active
        session.boards = {seat.id: Board(seat_id=seat.id, size=size) for seat in active}
        session.current_seat_id = None
        session.placement_seat_id = None
        session.confirmed_seat_ids.clear()
        return session


def begin_placement(session: GameSession) -> GameSession:
    """Leave seating; the placement pointer starts at the first seat."""
    with session.lock:
        require_phase(session, Phase.SEATING)
        session.phase = Phase.PLACEMENT
        session.placement_seat_id = session.seats[0].id
        session.confirmed_seat_ids.clear()
        session.history.append("Placement started.")
        return session


def place_ship(
    session: GameSession,
    seat_id: int,
    ship_class: ShipClass,
    anchor: Coord,
    orientation: Orientation,
) -> ShipInstance:
    """Place one ship on a seat's board during placement."""
    with session.lock:
        _require_editable(session, seat_id)
        return session.board(seat_id).place(ship_class, anchor, orientation)


def clear_fleet(session: GameSession, seat_id: int) -> Board:
    """Remove every ship from a seat's board."""
    with session.lock:
        _require_editable(session, seat_id)
        old = session.board(seat_id)
        session.boards[seat_id] = Board(seat_id=seat_id, size=old.size)
        return session.boards[seat_id]


def randomize_fleet(
    session: GameSession,
    seat_id: int,
    rng: random.Random,
    *,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    max_fleet_retries: int = DEFAULT_MAX_FLEET_RETRIES,
) -> Board:
    """Replace a seat's fleet with a random complete layout; the old board survives a failure."""
    with session.lock:
        _require_editable(session, seat_id)
        size = session.board(seat_id).size
        ships = random_fleet(
            seat_id,
            rng,
            max_attempts=max_attempts,
            max_fleet_retries=max_fleet_retries,
            size=size,
        )
        session.boards[seat_id] = Board.from_ships(seat_id, ships, size=size)
        return session.boards[seat_id]


def confirm_placement(session: GameSession, seat_id: int) -> GameSession:
    """Mark the pointer seat ready and move to the next seat, or start combat after the last."""
    with session.lock:
        require_phase(session, Phase.PLACEMENT)
        if seat_id != session.placement_seat_id:
            raise RuleViolation(
                f"Seat {seat_id} cannot confirm; placement belongs to seat {session.placement_seat_id}."
            )
        if not session.board(seat_id).fleet_complete():
            raise RuleViolation(f"Seat {seat_id} has not placed its whole fleet.")

        order = session.seat_ids
        index = order.index(seat_id)
        if index + 1 < len(order):
            session.confirmed_seat_ids.add(seat_id)
            session.placement_seat_id = order[index + 1]
            return session

        incomplete = [other for other in order if not session.board(other).fleet_complete()]
        if incomplete:
            raise RuleViolation(f"Seats {incomplete} do not have a complete fleet.")
        session.confirmed_seat_ids.add(seat_id)
        session.placement_seat_id = None
        session.phase = Phase.COMBAT
        session.current_seat_id = order[0]
        session.history.append(f"Battle started. {session.seat_name(order[0])} fires first.")
        return session


def snapshot(session: GameSession) -> dict[str, object]:
    """Plain-data projection of the session for renderers and persistence."""
    with session.lock:
        return {
            "phase": session.phase.value,
            "attack_mode": session.attack_mode.value,
            "current_seat_id": session.current_seat_id,
            "winner_id": session.winner_id,
            "placement_seat_id": session.placement_seat_id,
            "confirmed_seat_ids": sorted(session.confirmed_seat_ids),
            "seats": [
                {
                    "id": seat.id,
                    "name": seat.name,
                    "role": seat.role.value,
                    "difficulty": seat.difficulty.value if seat.difficulty else None,
                }
                for seat in session.seats
            ],
            "boards": {
                seat_id: {
                    "cells": board.cells.tolist(),
                    "ships": [
                        {
                            "id": ship.id,
                            "anchor": [ship.anchor.col, ship.anchor.row],
                            "orientation": ship.orientation.value,
                            "hits": sorted([hit.col, hit.row] for hit in ship.hits),
                            "sunk": ship.sunk,
                        }
                        for ship in board.ships
                    ],
                }
                for seat_id, board in session.boards.items()
            },
            "history": list(session.history),
        }


def fleet_for(session: GameSession, seat_id: int) -> tuple[ShipClass, ...]:
    """Ship classes a seat still has to place."""
    placed = {ship.id for ship in session.board(seat_id).ships}
    return tuple(ship_class for ship_class in DEFAULT_FLEET if ship_class.id not in placed)


def _active_seats(seats: Iterable[Seat]) -> tuple[Seat, ...]:
    active = tuple(seat for seat in seats if seat.active)
    ids = [seat.id for seat in active]
    if len(set(ids)) != len(ids):
        raise RuleViolation(f"Duplicate seat ids: {ids}.")
    if not MIN_SEATS <= len(active) <= MAX_SEATS:
        raise RuleViolation(f"A game needs {MIN_SEATS}-{MAX_SEATS} active seats, got {len(active)}.")
    return active


def _require_editable(session: GameSession, seat_id: int) -> None:
    require_phase(session, Phase.PLACEMENT)
    session.seat(seat_id)
    if seat_id in session.confirmed_seat_ids:
        raise RuleViolation(f"Seat {seat_id} has already confirmed its fleet.")


def _board_size(session: GameSession) -> int:
    for board in session.boards.values():
        return board.size
    return BOARD_SIZE


def require_phase(session: GameSession, *phases: Phase) -> None:
    """Raise RuleViolation unless the session is in one of the phases."""
    if session.phase not in phases:
        expected = "/".join(phase.value for phase in phases)
        raise RuleViolation(f"Operation requires phase {expected}, session is {session.phase.value}.")
