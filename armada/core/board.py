"""Board state representation and mutation helpers."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

import numpy as np

from armada.core.errors import RuleViolation
from armada.core.models import (
    BOARD_SIZE,
    DEFAULT_FLEET,
    CellStatus,
    Coord,
    Orientation,
    ShipClass,
    cells_for_placement,
    in_bounds,
)

_ALLOWED_TRANSITIONS: dict[CellStatus, frozenset[CellStatus]] = {
    CellStatus.EMPTY: frozenset({CellStatus.OCCUPIED, CellStatus.MISS}),
    CellStatus.OCCUPIED: frozenset({CellStatus.HIT}),
    CellStatus.HIT: frozenset({CellStatus.SUNK}),
    CellStatus.MISS: frozenset(),
    CellStatus.SUNK: frozenset(),
}


@dataclass(slots=True)
class ShipInstance:
    """A placed ship and the hits it has taken."""

    ship_class: ShipClass
    anchor: Coord
    orientation: Orientation
    cells: tuple[Coord, ...]
    hits: set[Coord] = field(default_factory=set)

    @property
    def id(self) -> str:
        return self.ship_class.id

    @property
    def name(self) -> str:
        return self.ship_class.name

    @property
    def length(self) -> int:
        return self.ship_class.length

    @property
    def sunk(self) -> bool:
        return len(self.hits) == self.length

    def record_hit(self, coord: Coord) -> bool:
        """Add a hit and return whether this hit sank the ship."""
        if coord not in self.cells:
            raise RuleViolation(f"{coord} is not part of {self.id}.")
        was_sunk = self.sunk
        self.hits.add(coord)
        return self.sunk and not was_sunk


def build_ship(ship_class: ShipClass, anchor: Coord, orientation: Orientation) -> ShipInstance:
    """Create an unplaced ship instance with its derived cells."""
    return ShipInstance(
        ship_class=ship_class,
        anchor=anchor,
        orientation=orientation,
        cells=tuple(cells_for_placement(ship_class, anchor, orientation)),
    )


@dataclass(slots=True)
class Board:
    """Numpy-backed board owned by one seat."""

    seat_id: int
    size: int = BOARD_SIZE
    cells: np.ndarray = field(
        default_factory=lambda: np.zeros((BOARD_SIZE, BOARD_SIZE), dtype=np.int8)
    )
    owners: np.ndarray = field(
        default_factory=lambda: np.zeros((BOARD_SIZE, BOARD_SIZE), dtype=np.int16)
    )
    ships: list[ShipInstance] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.cells.shape != (self.size, self.size):
            self.cells = np.zeros((self.size, self.size), dtype=np.int8)
        if self.owners.shape != (self.size, self.size):
            self.owners = np.zeros((self.size, self.size), dtype=np.int16)

    @classmethod
    def from_ships(cls, seat_id: int, ships: Iterable[ShipInstance], size: int = BOARD_SIZE) -> Board:
        """Synthesize a fresh board holding copies of the given placements."""
        board = cls(seat_id=seat_id, size=size)
        for ship in ships:
            board.place(ship.ship_class, ship.anchor, ship.orientation)
        return board

    def in_bounds(self, coord: Coord) -> bool:
        """Return whether the coordinate is in board bounds."""
        return in_bounds(coord, self.size)

    def status_at(self, coord: Coord) -> CellStatus:
        self._require_in_bounds(coord)
        return CellStatus(int(self.cells[coord.row, coord.col]))

    def is_resolved(self, coord: Coord) -> bool:
        """Return whether this cell was previously targeted."""
        return self.status_at(coord).resolved

    def ship_at(self, coord: Coord) -> ShipInstance | None:
        self._require_in_bounds(coord)
        index = int(self.owners[coord.row, coord.col])
        if index == 0:
            return None
        return self.ships[index - 1]

    def can_place(self, ship_class: ShipClass, anchor: Coord, orientation: Orientation) -> bool:
        """Return whether a placement is in bounds and non-overlapping."""
        for cell in cells_for_placement(ship_class, anchor, orientation):
            if not self.in_bounds(cell):
                return False
            if self.cells[cell.row, cell.col] == CellStatus.OCCUPIED:
                return False
        return True

    def place(self, ship_class: ShipClass, anchor: Coord, orientation: Orientation) -> ShipInstance:
        """Place a ship on the board."""
        if any(ship.id == ship_class.id for ship in self.ships):
            raise RuleViolation(f"{ship_class.id} is already placed on board {self.seat_id}.")
        if not self.can_place(ship_class, anchor, orientation):
            raise RuleViolation(f"Invalid placement for {ship_class.id} at {anchor} {orientation.value}.")
        ship = build_ship(ship_class, anchor, orientation)
        if any(self.cells[cell.row, cell.col] != CellStatus.EMPTY for cell in ship.cells):
            raise RuleViolation(f"Board {self.seat_id} has already been fired upon.")
        self.ships.append(ship)
        owner_index = len(self.ships)
        for cell in ship.cells:
            self._transition(cell, CellStatus.OCCUPIED)
            self.owners[cell.row, cell.col] = owner_index
        return ship

    def apply_shot(self, coord: Coord) -> tuple[CellStatus, ShipInstance | None]:
        """Apply a shot to an unresolved cell; return resulting status and ship struck."""
        status = self.status_at(coord)
        if status is CellStatus.EMPTY:
            self._transition(coord, CellStatus.MISS)
            return CellStatus.MISS, None
        if status is CellStatus.OCCUPIED:
            ship = self.ship_at(coord)
            if ship is None:
                raise RuleViolation(f"Occupied cell {coord} has no owning ship.")
            self._transition(coord, CellStatus.HIT)
            if ship.record_hit(coord):
                for cell in ship.cells:
                    self._transition(cell, CellStatus.SUNK)
                return CellStatus.SUNK, ship
            return CellStatus.HIT, ship
        if status in (CellStatus.HIT, CellStatus.MISS, CellStatus.SUNK):
            raise RuleViolation(f"Cell {coord} on board {self.seat_id} is already resolved.")
        raise AssertionError(f"unhandled cell status {status!r}")

    def observed(self) -> np.ndarray:
        """Return the status grid as an opponent sees it (ships hidden)."""
        return np.where(self.cells == CellStatus.OCCUPIED, CellStatus.EMPTY, self.cells).astype(np.int8)

    def living_ships(self) -> list[ShipInstance]:
        return [ship for ship in self.ships if not ship.sunk]

    def has_living_fleet(self) -> bool:
        return any(not ship.sunk for ship in self.ships)

    def fleet_sunk(self) -> bool:
        """Return whether every placed ship has been sunk."""
        return all(ship.sunk for ship in self.ships)

    def sunk_ship_classes(self) -> list[ShipClass]:
        return [ship.ship_class for ship in self.ships if ship.sunk]

    def remaining_ship_classes(self) -> list[ShipClass]:
        return [ship.ship_class for ship in self.ships if not ship.sunk]

    def fleet_complete(self, fleet: tuple[ShipClass, ...] = DEFAULT_FLEET) -> bool:
        """Return whether exactly the given fleet is on the board."""
        placed = sorted(ship.id for ship in self.ships)
        return placed == sorted(ship_class.id for ship_class in fleet)

    def _transition(self, coord: Coord, new_status: CellStatus) -> None:
        current = CellStatus(int(self.cells[coord.row, coord.col]))
        if new_status not in _ALLOWED_TRANSITIONS[current]:
            raise RuleViolation(f"Cell {coord} cannot go from {current.name} to {new_status.name}.")
        self.cells[coord.row, coord.col] = new_status

    def _require_in_bounds(self, coord: Coord) -> None:
        if not self.in_bounds(coord):
            raise RuleViolation(f"{coord} is outside the {self.size}x{self.size} board.")
