"""Low tier: uniform random fire."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from armada.ai.strategy import TargetingStrategy, unresolved_coords
from armada.core.models import Coord, ShipClass


class RandomShotTargeting(TargetingStrategy):
    """Any unresolved cell, uniformly."""

    def candidates(self, observed: np.ndarray, remaining: Sequence[ShipClass]) -> list[Coord]:
        return unresolved_coords(observed)
