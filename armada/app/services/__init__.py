"""Application service-layer helpers."""

from armada.app.services.battle import (
    PlannedShot,
    TurnResult,
    choose_opponent,
    fire,
    plan_ai_shot,
    play_until_concluded,
    run_ai_turn,
)
from armada.app.services.setup import (
    confirm_seat_fleet,
    prepare_computer_fleets,
    randomize_seat_fleet,
    start_session,
)

__all__ = [
    "PlannedShot",
    "TurnResult",
    "choose_opponent",
    "confirm_seat_fleet",
    "fire",
    "plan_ai_shot",
    "play_until_concluded",
    "prepare_computer_fleets",
    "randomize_seat_fleet",
    "run_ai_turn",
    "start_session",
]
