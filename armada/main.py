"""Command-line entry point: play computer seats against each other."""

from __future__ import annotations

import argparse
import random
from collections.abc import Sequence
from dataclasses import replace

from armada.app.services.battle import play_until_concluded
from armada.app.services.setup import start_session
from armada.core.models import AttackMode, Difficulty, Seat, SeatRole
from armada.core.session import MAX_SEATS, MIN_SEATS
from armada.infra.config import load_default_env_files, load_game_config
from armada.infra.logging import get_logger, setup_logging, shutdown_logging

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="armada", description="Run a headless computer-only match.")
    parser.add_argument(
        "--seats",
        default="high,mid",
        help="Comma-separated difficulty per seat (low|mid|high or easy|normal|hard), 2-4 entries.",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed (overrides ARMADA_SEED).")
    parser.add_argument(
        "--attack-mode",
        choices=[mode.value.lower() for mode in AttackMode],
        default=None,
        help="Fire at one chosen opponent or at every living opponent.",
    )
    parser.add_argument("--no-log-file", action="store_true", help="Log to the console only.")
    return parser


def parse_seats(raw: str) -> list[Seat]:
    """Build computer seats from a comma-separated difficulty list."""
    names = [part.strip() for part in raw.split(",") if part.strip()]
    if not MIN_SEATS <= len(names) <= MAX_SEATS:
        raise argparse.ArgumentTypeError(f"Expected {MIN_SEATS}-{MAX_SEATS} seats, got {len(names)}.")
    seats: list[Seat] = []
    for index, name in enumerate(names):
        try:
            difficulty = Difficulty.parse(name)
        except ValueError as exc:
            raise argparse.ArgumentTypeError(str(exc)) from exc
        seats.append(Seat(index, f"Player {index + 1} ({difficulty.value.lower()})", SeatRole.COMPUTER, difficulty))
    return seats


def main(argv: Sequence[str] | None = None) -> int:
    """Run one match and print the result."""
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        seats = parse_seats(args.seats)
    except argparse.ArgumentTypeError as exc:
        parser.error(str(exc))

    load_default_env_files(override_existing=False)
    setup_logging(to_file=not args.no_log_file)
    config = load_game_config()
    if args.attack_mode is not None:
        config = replace(config, attack_mode=AttackMode(args.attack_mode.upper()))
    seed = args.seed if args.seed is not None else config.seed
    rng = random.Random(seed)

    try:
        session = start_session(seats, rng, config)
        turns = play_until_concluded(session, rng, max_turns=config.max_turns)
        logger.info("match_finished turns=%d winner=%s seed=%s", turns, session.winner_id, seed)
        for line in session.history[-3:]:
            print(line)
        if session.winner_id is None:
            print(f"Draw after {turns} turns.")
        else:
            print(f"Winner: {session.seat_name(session.winner_id)} after {turns} turns.")
    finally:
        shutdown_logging()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
