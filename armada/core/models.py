"""Core domain models used by game logic."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum, StrEnum

BOARD_SIZE = 10


class Orientation(StrEnum):
    """Ship orientation."""

    HORIZONTAL = "HORIZONTAL"
    VERTICAL = "VERTICAL"


class CellStatus(IntEnum):
    """Per-cell status stored in board grids."""

    EMPTY = 0
    OCCUPIED = 1
    HIT = 2
    MISS = 3
    SUNK = 4

    @property
    def resolved(self) -> bool:
        return self in (CellStatus.HIT, CellStatus.MISS, CellStatus.SUNK)


class SeatRole(StrEnum):
    """Who controls a seat."""

    HUMAN = "HUMAN"
    COMPUTER = "COMPUTER"
    INACTIVE = "INACTIVE"


class Difficulty(StrEnum):
    """Computer skill tier."""

    LOW = "LOW"
    MID = "MID"
    HIGH = "HIGH"

    @classmethod
    def parse(cls, value: str) -> Difficulty:
        """Parse a tier name, accepting easy/normal/hard aliases."""
        normalized = value.strip().upper()
        alias = _DIFFICULTY_ALIASES.get(normalized, normalized)
        try:
            return cls(alias)
        except ValueError:
            raise ValueError(f"Unknown difficulty: {value!r}.") from None


_DIFFICULTY_ALIASES: dict[str, str] = {
    "EASY": "LOW",
    "NORMAL": "MID",
    "HARD": "HIGH",
}


class Phase(StrEnum):
    """Session lifecycle phase."""

    SEATING = "SEATING"
    PLACEMENT = "PLACEMENT"
    COMBAT = "COMBAT"
    CONCLUDED = "CONCLUDED"


class AttackMode(StrEnum):
    """How one fired coordinate is applied in multi-seat play."""

    SINGLE = "SINGLE"
    BROADCAST = "BROADCAST"


@dataclass(frozen=True, slots=True)
class Coord:
    """Board coordinate."""

    col: int
    row: int


@dataclass(frozen=True, slots=True)
class ShipClass:
    """Immutable catalog entry."""

    id: str
    name: str
    length: int


CARRIER = ShipClass("carrier", "Carrier", 5)
BATTLESHIP = ShipClass("battleship", "Battleship", 4)
CRUISER = ShipClass("cruiser", "Cruiser", 3)
SUBMARINE = ShipClass("submarine", "Submarine", 3)
DESTROYER = ShipClass("destroyer", "Destroyer", 2)

DEFAULT_FLEET: tuple[ShipClass, ...] = (
    CARRIER,
    BATTLESHIP,
    CRUISER,
    SUBMARINE,
    DESTROYER,
)


@dataclass(frozen=True, slots=True)
class Seat:
    """One participant slot."""

    id: int
    name: str
    role: SeatRole
    difficulty: Difficulty | None = None

    def __post_init__(self) -> None:
        if self.role is SeatRole.COMPUTER and self.difficulty is None:
            object.__setattr__(self, "difficulty", Difficulty.LOW)
        elif self.role is not SeatRole.COMPUTER and self.difficulty is not None:
            object.__setattr__(self, "difficulty", None)

    @property
    def active(self) -> bool:
        return self.role is not SeatRole.INACTIVE

    @property
    def is_computer(self) -> bool:
        return self.role is SeatRole.COMPUTER


@dataclass(frozen=True, slots=True)
class AttackOutcome:
    """Result of resolving one shot against one board."""

    attacker_id: int
    target_id: int
    coord: Coord
    hit: bool = False
    already_resolved: bool = False
    ship_name: str | None = None
    sunk_ship_id: str | None = None
    sunk_ship_name: str | None = None
    session_concluded: bool = False
    winner_id: int | None = None


def cells_for_placement(ship_class: ShipClass, anchor: Coord, orientation: Orientation) -> list[Coord]:
    """Compute occupied cells for a ship placement."""
    result: list[Coord] = []
    for i in range(ship_class.length):
        if orientation is Orientation.HORIZONTAL:
            result.append(Coord(anchor.col + i, anchor.row))
        else:
            result.append(Coord(anchor.col, anchor.row + i))
    return result


def in_bounds(coord: Coord, size: int = BOARD_SIZE) -> bool:
    """Return whether the coordinate lies on a size x size board."""
    return 0 <= coord.col < size and 0 <= coord.row < size


def ship_class_by_id(ship_id: str) -> ShipClass:
    """Find a catalog entry by id."""
    for ship_class in DEFAULT_FLEET:
        if ship_class.id == ship_id:
            return ship_class
    raise KeyError(ship_id)
