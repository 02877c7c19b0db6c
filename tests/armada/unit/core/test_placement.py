import random

import pytest

from armada.core.board import Board, build_ship
from armada.core.errors import PlacementExhaustedError
from armada.core.models import DEFAULT_FLEET, DESTROYER, Coord, Orientation, ShipClass
from armada.core.placement import place_randomly, random_fleet


@pytest.mark.parametrize("seed", range(25))
def test_random_fleet_is_in_bounds_and_disjoint(seed: int) -> None:
    ships = random_fleet(0, random.Random(seed))
    assert [ship.id for ship in ships] == [ship_class.id for ship_class in DEFAULT_FLEET]
    seen: set[Coord] = set()
    for ship in ships:
        for cell in ship.cells:
            assert 0 <= cell.col < 10 and 0 <= cell.row < 10
            assert cell not in seen
            seen.add(cell)
    board = Board.from_ships(0, ships)
    assert board.fleet_complete()


def test_place_randomly_respects_existing_ships(seeded_rng) -> None:
    # Only columns 5-9 are free on every row.
    existing = [
        build_ship(ShipClass(f"filler-{row}", "Filler", 5), Coord(0, row), Orientation.HORIZONTAL)
        for row in range(10)
    ]
    ship = place_randomly(0, DESTROYER, existing, seeded_rng)
    assert ship is not None
    assert all(cell.col >= 5 for cell in ship.cells)


def test_place_randomly_returns_none_when_budget_is_spent(seeded_rng) -> None:
    full = [
        build_ship(ShipClass(f"row-{row}", "Row", 10), Coord(0, row), Orientation.HORIZONTAL)
        for row in range(10)
    ]
    assert place_randomly(0, DESTROYER, full, seeded_rng, max_attempts=50) is None


def test_random_fleet_raises_when_every_retry_fails(seeded_rng) -> None:
    too_long = (ShipClass("giant", "Giant", 11),)
    with pytest.raises(PlacementExhaustedError):
        random_fleet(0, seeded_rng, fleet=too_long, max_attempts=5, max_fleet_retries=3)


def test_random_fleet_is_reproducible_for_a_seed() -> None:
    first = random_fleet(0, random.Random(99))
    second = random_fleet(0, random.Random(99))
    assert [ship.cells for ship in first] == [ship.cells for ship in second]
