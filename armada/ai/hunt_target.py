"""Mid tier: hunt on parity cells, then target around open hits."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from armada.ai.strategy import TargetingStrategy, open_hits, unresolved_coords, unresolved_neighbors
from armada.core.models import Coord, ShipClass


class HuntTargetTargeting(TargetingStrategy):
    """Checkerboard hunting with 4-neighbour follow-up on hits."""

    def candidates(self, observed: np.ndarray, remaining: Sequence[ShipClass]) -> list[Coord]:
        hits = open_hits(observed)
        if hits:
            neighbors = unresolved_neighbors(observed, hits)
            if neighbors:
                return neighbors
        return parity_coords(observed)


def parity_coords(observed: np.ndarray) -> list[Coord]:
    """Unresolved cells with even col + row; every ship of length >= 2 covers one."""
    return [coord for coord in unresolved_coords(observed) if (coord.col + coord.row) % 2 == 0]
