import random

import pytest

from armada.ai.hunt_target import HuntTargetTargeting
from armada.ai.probability_target import ProbabilityTargeting
from armada.ai.random_shot import RandomShotTargeting
from armada.ai.targeting import build_targeting, choose_target, remaining_after
from armada.core.board import Board
from armada.core.errors import RuleViolation
from armada.core.models import CARRIER, DEFAULT_FLEET, DESTROYER, Coord, Difficulty
from armada.core.placement import random_fleet


def _board_with_one_open_cell(open_cell: Coord) -> Board:
    board = Board(seat_id=1)
    for row in range(10):
        for col in range(10):
            coord = Coord(col, row)
            if coord != open_cell:
                board.apply_shot(coord)
    return board


@pytest.mark.parametrize("difficulty", list(Difficulty))
@pytest.mark.parametrize("open_cell", [Coord(3, 7), Coord(3, 4)])
def test_last_open_cell_is_always_chosen(difficulty: Difficulty, open_cell: Coord) -> None:
    board = _board_with_one_open_cell(open_cell)
    for seed in range(5):
        assert choose_target(difficulty, board, [], list(DEFAULT_FLEET), random.Random(seed)) == open_cell


def test_fully_resolved_board_raises() -> None:
    board = Board(seat_id=1)
    for row in range(10):
        for col in range(10):
            board.apply_shot(Coord(col, row))
    with pytest.raises(RuleViolation):
        choose_target(Difficulty.LOW, board, [], None, random.Random(1))


@pytest.mark.parametrize("difficulty", list(Difficulty))
@pytest.mark.parametrize("seed", [1, 2, 3])
def test_full_game_never_picks_a_resolved_cell(difficulty: Difficulty, seed: int) -> None:
    rng = random.Random(seed)
    board = Board.from_ships(1, random_fleet(1, rng))
    shots = 0
    while not board.fleet_sunk():
        coord = choose_target(difficulty, board, board.sunk_ship_classes(), board.remaining_ship_classes(), rng)
        assert not board.is_resolved(coord)
        board.apply_shot(coord)
        shots += 1
        assert shots <= 100
    assert shots >= sum(ship_class.length for ship_class in DEFAULT_FLEET)


def test_stronger_tiers_do_not_need_more_shots_on_average() -> None:
    def average_shots(difficulty: Difficulty) -> float:
        total = 0
        for seed in range(8):
            rng = random.Random(seed)
            board = Board.from_ships(1, random_fleet(1, random.Random(1000 + seed)))
            while not board.fleet_sunk():
                board.apply_shot(choose_target(difficulty, board, board.sunk_ship_classes(), None, rng))
                total += 1
        return total / 8

    assert average_shots(Difficulty.HIGH) <= average_shots(Difficulty.LOW)


def test_build_targeting_accepts_aliases() -> None:
    assert isinstance(build_targeting("easy"), RandomShotTargeting)
    assert isinstance(build_targeting("normal"), HuntTargetTargeting)
    assert isinstance(build_targeting("Hard"), ProbabilityTargeting)
    assert isinstance(build_targeting(Difficulty.MID), HuntTargetTargeting)
    with pytest.raises(ValueError):
        build_targeting("impossible")


def test_remaining_after_removes_one_instance_per_sunk_class() -> None:
    remaining = remaining_after([CARRIER, DESTROYER])
    assert CARRIER not in remaining
    assert DESTROYER not in remaining
    assert len(remaining) == 3
