import random

import pytest

from armada.core.board import Board
from armada.core.errors import PlacementExhaustedError, RuleViolation
from armada.core.models import CARRIER, DEFAULT_FLEET, Coord, Difficulty, Orientation, Phase, Seat, SeatRole
from armada.core.session import (
    begin_placement,
    clear_fleet,
    confirm_placement,
    create_session,
    default_seats,
    fleet_for,
    place_ship,
    randomize_fleet,
    snapshot,
    update_seating,
)
from tests.armada.conftest import STACKED_LAYOUT, make_seats


def test_create_session_drops_inactive_seats() -> None:
    session = create_session(default_seats())
    assert session.seat_ids == (0, 1)
    assert set(session.boards) == {0, 1}
    assert session.phase is Phase.SEATING
    assert session.seat(1).difficulty is Difficulty.LOW


@pytest.mark.parametrize("count", [0, 1, 5])
def test_create_session_rejects_bad_seat_counts(count: int) -> None:
    seats = [Seat(index, f"P{index}", SeatRole.HUMAN) for index in range(count)]
    with pytest.raises(RuleViolation):
        create_session(seats)


def test_create_session_rejects_duplicate_ids() -> None:
    with pytest.raises(RuleViolation):
        create_session([Seat(1, "a", SeatRole.HUMAN), Seat(1, "b", SeatRole.HUMAN)])


def test_seat_difficulty_follows_role() -> None:
    assert Seat(0, "c", SeatRole.COMPUTER).difficulty is Difficulty.LOW
    assert Seat(0, "h", SeatRole.HUMAN, Difficulty.HIGH).difficulty is None


def test_update_seating_resets_boards() -> None:
    session = create_session(make_seats(2))
    old_board = session.board(0)
    update_seating(session, make_seats(3))
    assert session.seat_ids == (0, 1, 2)
    assert session.board(0) is not old_board
    assert all(not board.ships for board in session.boards.values())


def test_update_seating_is_rejected_after_placement_begins() -> None:
    session = create_session(make_seats(2))
    begin_placement(session)
    with pytest.raises(RuleViolation):
        update_seating(session, make_seats(3))


def test_placement_pointer_follows_seating_order(seeded_rng) -> None:
    session = create_session(make_seats(3))
    begin_placement(session)
    assert session.placement_seat_id == 0
    with pytest.raises(RuleViolation):
        confirm_placement(session, 1)

    for expected_next in (1, 2):
        seat_id = session.placement_seat_id
        randomize_fleet(session, seat_id, seeded_rng)
        confirm_placement(session, seat_id)
        assert session.placement_seat_id == expected_next

    randomize_fleet(session, 2, seeded_rng)
    confirm_placement(session, 2)
    assert session.phase is Phase.COMBAT
    assert session.current_seat_id == 0
    assert session.placement_seat_id is None


def test_place_ship_and_clear_fleet() -> None:
    session = create_session(make_seats(2))
    begin_placement(session)
    place_ship(session, 0, CARRIER, Coord(0, 0), Orientation.VERTICAL)
    assert CARRIER not in fleet_for(session, 0)
    with pytest.raises(RuleViolation):
        place_ship(session, 0, CARRIER, Coord(5, 0), Orientation.VERTICAL)
    clear_fleet(session, 0)
    assert not session.board(0).ships
    assert len(fleet_for(session, 0)) == 5


def test_place_ship_outside_placement_phase_is_rejected() -> None:
    session = create_session(make_seats(2))
    with pytest.raises(RuleViolation):
        place_ship(session, 0, CARRIER, Coord(0, 0), Orientation.VERTICAL)


def test_randomize_fleet_failure_keeps_previous_board() -> None:
    session = create_session(make_seats(2))
    begin_placement(session)
    place_ship(session, 0, CARRIER, Coord(0, 0), Orientation.VERTICAL)
    board = session.board(0)
    with pytest.raises(PlacementExhaustedError):
        randomize_fleet(session, 0, random.Random(1), max_attempts=0, max_fleet_retries=1)
    assert session.board(0) is board
    assert len(board.ships) == 1


def test_snapshot_is_plain_data(two_seat_session) -> None:
    data = snapshot(two_seat_session)
    assert data["phase"] == "COMBAT"
    assert data["current_seat_id"] == 0
    assert [seat["id"] for seat in data["seats"]] == [0, 1]
    board = data["boards"][1]
    assert len(board["cells"]) == 10
    assert board["ships"][0]["id"] == "carrier"
    assert board["ships"][0]["hits"] == []


def _place_stacked_fleet(session, seat_id: int) -> None:
    for ship_class, (anchor, orientation) in zip(DEFAULT_FLEET, STACKED_LAYOUT):
        place_ship(session, seat_id, ship_class, anchor, orientation)


def test_confirmed_seat_cannot_edit_its_fleet(seeded_rng) -> None:
    session = create_session(make_seats(2))
    begin_placement(session)
    _place_stacked_fleet(session, 0)
    confirm_placement(session, 0)

    with pytest.raises(RuleViolation):
        clear_fleet(session, 0)
    with pytest.raises(RuleViolation):
        randomize_fleet(session, 0, seeded_rng)
    with pytest.raises(RuleViolation):
        place_ship(session, 0, CARRIER, Coord(9, 0), Orientation.VERTICAL)
    assert session.board(0).fleet_complete()

    _place_stacked_fleet(session, 1)
    confirm_placement(session, 1)
    assert session.phase is Phase.COMBAT
    assert session.board(session.current_seat_id).has_living_fleet()
    assert snapshot(session)["confirmed_seat_ids"] == [0, 1]


def test_seats_ahead_of_the_pointer_may_still_edit(seeded_rng) -> None:
    session = create_session(make_seats(3))
    begin_placement(session)
    randomize_fleet(session, 2, seeded_rng)
    clear_fleet(session, 2)
    assert not session.board(2).ships


def test_combat_needs_every_fleet_complete() -> None:
    session = create_session(make_seats(2))
    begin_placement(session)
    _place_stacked_fleet(session, 0)
    confirm_placement(session, 0)
    # Wipe the confirmed board behind the session's back.
    session.boards[0] = Board(seat_id=0)
    _place_stacked_fleet(session, 1)
    with pytest.raises(RuleViolation):
        confirm_placement(session, 1)
    assert session.phase is Phase.PLACEMENT
    assert session.confirmed_seat_ids == {0}
