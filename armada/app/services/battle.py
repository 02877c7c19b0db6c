"""Battle flow orchestration: human shots, computer turns and headless play."""

from __future__ import annotations

import random
from dataclasses import dataclass

from armada.ai.targeting import choose_target
from armada.core.errors import RuleViolation
from armada.core.models import AttackMode, AttackOutcome, Coord, Phase
from armada.core.session import GameSession, require_phase
from armada.core.shot_resolution import fire_at_all, resolve_attack
from armada.core.turns import advance, living_seat_ids
from armada.infra.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class TurnResult:
    """Outcome of one seat's action."""

    seat_id: int
    outcomes: tuple[AttackOutcome, ...]
    next_seat_id: int | None
    concluded: bool
    winner_id: int | None

    @property
    def repeated(self) -> bool:
        """True when every shot landed on an already-resolved cell and the turn was kept."""
        return bool(self.outcomes) and all(outcome.already_resolved for outcome in self.outcomes)


@dataclass(frozen=True, slots=True)
class PlannedShot:
    """A computer seat's decision, not yet committed."""

    seat_id: int
    target_id: int
    coord: Coord


def fire(session: GameSession, attacker_id: int, target_id: int | None, coord: Coord) -> TurnResult:
    """Resolve the current seat's shot and pass the turn unless it repeated or ended the game."""
    with session.lock:
        require_phase(session, Phase.COMBAT)
        if attacker_id != session.current_seat_id:
            raise RuleViolation(f"It is seat {session.current_seat_id}'s turn, not seat {attacker_id}'s.")

        if session.attack_mode is AttackMode.BROADCAST:
            outcomes = fire_at_all(session, attacker_id, coord)
        else:
            if target_id is None:
                raise RuleViolation("Single-target play needs a target seat.")
            outcomes = (resolve_attack(session, attacker_id, target_id, coord),)

        concluded = session.phase is Phase.CONCLUDED
        repeated = bool(outcomes) and all(outcome.already_resolved for outcome in outcomes)
        if not concluded and not repeated:
            advance(session)
        return TurnResult(
            seat_id=attacker_id,
            outcomes=outcomes,
            next_seat_id=session.current_seat_id,
            concluded=concluded,
            winner_id=session.winner_id,
        )


def choose_opponent(session: GameSession, seat_id: int, rng: random.Random) -> int:
    """Uniform choice among opponents that still have a living fleet."""
    opponents = [candidate for candidate in living_seat_ids(session) if candidate != seat_id]
    if not opponents:
        raise RuleViolation(f"Seat {seat_id} has no living opponent.")
    return rng.choice(opponents)


def plan_ai_shot(session: GameSession, rng: random.Random) -> PlannedShot:
    """Decide the current computer seat's shot without touching session state."""
    with session.lock:
        require_phase(session, Phase.COMBAT)
        seat_id = session.current_seat_id
        if seat_id is None:
            raise RuleViolation("No seat is due to act.")
        seat = session.seat(seat_id)
        if not seat.is_computer or seat.difficulty is None:
            raise RuleViolation(f"Seat {seat_id} is not computer-controlled.")

        target_id = choose_opponent(session, seat_id, rng)
        board = session.board(target_id)
        coord = choose_target(
            seat.difficulty,
            board,
            board.sunk_ship_classes(),
            board.remaining_ship_classes(),
            rng,
        )
        return PlannedShot(seat_id=seat_id, target_id=target_id, coord=coord)


def run_ai_turn(session: GameSession, rng: random.Random) -> TurnResult:
    """Plan and commit one computer turn."""
    shot = plan_ai_shot(session, rng)
    result = fire(session, shot.seat_id, shot.target_id, shot.coord)
    logger.debug(
        "ai_turn seat=%s target=%s col=%d row=%d next=%s",
        shot.seat_id,
        shot.target_id,
        shot.coord.col,
        shot.coord.row,
        result.next_seat_id,
    )
    return result


def play_until_concluded(session: GameSession, rng: random.Random, *, max_turns: int) -> int:
    """Run computer turns until the game ends or a human seat is due; return turns played."""
    turns = 0
    while session.phase is Phase.COMBAT:
        seat_id = session.current_seat_id
        if seat_id is None or not session.seat(seat_id).is_computer:
            break
        if turns >= max_turns:
            logger.warning("turn_budget_exhausted turns=%d", turns)
            raise RuntimeError(f"Game did not conclude within {max_turns} turns.")
        run_ai_turn(session, rng)
        turns += 1
    return turns
