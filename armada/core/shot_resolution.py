"""Shot outcome evaluation and end-of-game detection."""

from __future__ import annotations

import logging
from dataclasses import replace

from armada.core.errors import RuleViolation
from armada.core.models import AttackOutcome, CellStatus, Coord, Phase
from armada.core.session import GameSession, require_phase
from armada.core.turns import living_seat_ids

logger = logging.getLogger(__name__)


def resolve_attack(session: GameSession, attacker_id: int, target_id: int, coord: Coord) -> AttackOutcome:
    """Resolve one shot from attacker at target's board."""
    with session.lock:
        require_phase(session, Phase.COMBAT)
        session.seat(attacker_id)
        session.seat(target_id)
        if attacker_id == target_id:
            raise RuleViolation(f"Seat {attacker_id} cannot fire at its own board.")
        board = session.board(target_id)
        if not board.in_bounds(coord):
            raise RuleViolation(f"{coord} is outside the {board.size}x{board.size} board.")

        if board.is_resolved(coord):
            return AttackOutcome(
                attacker_id=attacker_id,
                target_id=target_id,
                coord=coord,
                already_resolved=True,
            )

        status, ship = board.apply_shot(coord)
        outcome = AttackOutcome(
            attacker_id=attacker_id,
            target_id=target_id,
            coord=coord,
            hit=ship is not None,
            ship_name=ship.name if ship is not None else None,
            sunk_ship_id=ship.id if status is CellStatus.SUNK and ship is not None else None,
            sunk_ship_name=ship.name if status is CellStatus.SUNK and ship is not None else None,
        )
        session.history.append(_describe(session, outcome))
        logger.debug(
            "attack_resolved attacker=%s target=%s col=%d row=%d status=%s",
            attacker_id,
            target_id,
            coord.col,
            coord.row,
            status.name,
        )

        if status is CellStatus.SUNK and board.fleet_sunk():
            outcome = _conclude_if_decided(session, outcome)
        session.last_attack = (outcome,)
        return outcome


def fire_at_all(session: GameSession, attacker_id: int, coord: Coord) -> tuple[AttackOutcome, ...]:
    """Fire one coordinate at every living opponent in seating order."""
    with session.lock:
        require_phase(session, Phase.COMBAT)
        session.seat(attacker_id)
        outcomes: list[AttackOutcome] = []
        for target_id in living_seat_ids(session):
            if target_id == attacker_id:
                continue
            outcomes.append(resolve_attack(session, attacker_id, target_id, coord))
            if session.phase is Phase.CONCLUDED:
                break
        session.last_attack = tuple(outcomes)
        return session.last_attack


def _conclude_if_decided(session: GameSession, outcome: AttackOutcome) -> AttackOutcome:
    session.history.append(f"{session.seat_name(outcome.target_id)} has lost every ship.")
    living = living_seat_ids(session)
    if len(living) > 1:
        logger.info("seat_eliminated seat=%s living=%s", outcome.target_id, living)
        return outcome

    session.phase = Phase.CONCLUDED
    session.winner_id = living[0] if living else None
    session.current_seat_id = None
    if session.winner_id is None:
        session.history.append("Every fleet is sunk. The game is a draw.")
    else:
        session.history.append(f"{session.seat_name(session.winner_id)} wins.")
    logger.info("session_concluded winner=%s", session.winner_id)
    return replace(outcome, session_concluded=True, winner_id=session.winner_id)


def _describe(session: GameSession, outcome: AttackOutcome) -> str:
    prefix = (
        f"{session.seat_name(outcome.attacker_id)} fired at "
        f"{session.seat_name(outcome.target_id)} ({outcome.coord.col}, {outcome.coord.row})"
    )
    if outcome.sunk_ship_name is not None:
        return f"{prefix}: sunk {outcome.sunk_ship_name}."
    if outcome.hit:
        return f"{prefix}: hit."
    return f"{prefix}: miss."
