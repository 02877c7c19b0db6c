"""AI targeting interface and shared board-reading helpers."""

from __future__ import annotations

import random
from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence

import numpy as np

from armada.core.errors import RuleViolation
from armada.core.models import CellStatus, Coord, ShipClass

_ORTHOGONAL: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))


class TargetingStrategy(ABC):
    """Stateless shot selection from an observed opponent grid."""

    def choose(
        self,
        observed: np.ndarray,
        remaining: Sequence[ShipClass],
        rng: random.Random,
    ) -> Coord:
        """Return the next coordinate to fire at."""
        candidates = self.candidates(observed, remaining)
        if not candidates:
            candidates = unresolved_coords(observed)
        if not candidates:
            raise RuleViolation("No unresolved cell is left to fire at.")
        return rng.choice(candidates)

    @abstractmethod
    def candidates(self, observed: np.ndarray, remaining: Sequence[ShipClass]) -> list[Coord]:
        """Return the tied best coordinates; an empty list means fall back to any unresolved cell."""


def unresolved_mask(observed: np.ndarray) -> np.ndarray:
    return observed == CellStatus.EMPTY


def unresolved_coords(observed: np.ndarray) -> list[Coord]:
    rows, cols = np.nonzero(unresolved_mask(observed))
    return [Coord(col=int(col), row=int(row)) for row, col in zip(rows, cols)]


def open_hits(observed: np.ndarray) -> list[Coord]:
    """Hit cells of ships that are not sunk yet."""
    rows, cols = np.nonzero(observed == CellStatus.HIT)
    return [Coord(col=int(col), row=int(row)) for row, col in zip(rows, cols)]


def unresolved_neighbors(observed: np.ndarray, cells: Iterable[Coord]) -> list[Coord]:
    """Orthogonal, in-bounds, unresolved neighbours of the given cells, without duplicates."""
    size = observed.shape[0]
    seen: set[Coord] = set()
    result: list[Coord] = []
    for cell in cells:
        for d_col, d_row in _ORTHOGONAL:
            neighbor = Coord(cell.col + d_col, cell.row + d_row)
            if neighbor in seen:
                continue
            if not (0 <= neighbor.col < size and 0 <= neighbor.row < size):
                continue
            if observed[neighbor.row, neighbor.col] != CellStatus.EMPTY:
                continue
            seen.add(neighbor)
            result.append(neighbor)
    return result
