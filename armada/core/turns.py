"""Turn rotation among seats that still have a living fleet."""

from __future__ import annotations

from armada.core.models import Phase
from armada.core.session import GameSession


def living_seat_ids(session: GameSession) -> list[int]:
    """Seats with at least one unsunk ship, in seating order."""
    return [seat.id for seat in session.seats if session.boards[seat.id].has_living_fleet()]


def next_seat_id(session: GameSession) -> int | None:
    """Return the next seat to act after the current one, or None if nobody can act."""
    order = session.seat_ids
    if session.current_seat_id in order:
        start = order.index(session.current_seat_id) + 1
    else:
        start = 0
    for step in range(len(order)):
        candidate = order[(start + step) % len(order)]
        if session.boards[candidate].has_living_fleet():
            return candidate
    return None


def advance(session: GameSession) -> int | None:
    """Move the turn to the next living seat; concluded sessions are left untouched."""
    with session.lock:
        if session.phase is not Phase.COMBAT:
            return session.current_seat_id
        candidate = next_seat_id(session)
        if candidate is not None:
            session.current_seat_id = candidate
        return session.current_seat_id
