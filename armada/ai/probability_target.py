"""High tier: probability-density hunting with directional targeting."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view

from armada.ai.strategy import TargetingStrategy, open_hits, unresolved_mask, unresolved_neighbors
from armada.core.models import CellStatus, Coord, Orientation, ShipClass


class ProbabilityTargeting(TargetingStrategy):
    """Scores cells from all placements of the remaining fleet; finishes ships along their axis."""

    def candidates(self, observed: np.ndarray, remaining: Sequence[ShipClass]) -> list[Coord]:
        for cluster in hit_clusters(open_hits(observed)):
            targets = self._cluster_targets(observed, cluster)
            if targets:
                return targets
        return self._hunt_candidates(observed, remaining)

    def _cluster_targets(self, observed: np.ndarray, cluster: list[Coord]) -> list[Coord]:
        axis = cluster_axis(cluster)
        if axis is not None:
            extensions = line_extensions(observed, cluster, axis)
            if extensions:
                return extensions
        return unresolved_neighbors(observed, cluster)

    def _hunt_candidates(self, observed: np.ndarray, remaining: Sequence[ShipClass]) -> list[Coord]:
        density = density_map(observed, remaining)
        best = int(density.max()) if density.size else 0
        if best == 0:
            return []
        rows, cols = np.nonzero(density == best)
        return [Coord(col=int(col), row=int(row)) for row, col in zip(rows, cols)]


def density_map(observed: np.ndarray, remaining: Sequence[ShipClass]) -> np.ndarray:
    """Count, per cell, the placements of remaining ships that fit entirely on unresolved cells."""
    free = unresolved_mask(observed)
    size = free.shape[0]
    density = np.zeros(free.shape, dtype=np.int32)
    for ship_class in remaining:
        length = ship_class.length
        if length > size:
            continue
        span = size - length + 1
        horizontal = sliding_window_view(free, length, axis=1).all(axis=-1)
        vertical = sliding_window_view(free, length, axis=0).all(axis=-1)
        for offset in range(length):
            density[:, offset : offset + span] += horizontal
            density[offset : offset + span, :] += vertical
    return density


def hit_clusters(hits: list[Coord]) -> list[list[Coord]]:
    """Group hits into orthogonally connected clusters, largest first."""
    pending = set(hits)
    clusters: list[list[Coord]] = []
    for start in hits:
        if start not in pending:
            continue
        pending.discard(start)
        cluster = [start]
        frontier = [start]
        while frontier:
            cell = frontier.pop()
            for neighbor in (
                Coord(cell.col - 1, cell.row),
                Coord(cell.col + 1, cell.row),
                Coord(cell.col, cell.row - 1),
                Coord(cell.col, cell.row + 1),
            ):
                if neighbor in pending:
                    pending.discard(neighbor)
                    cluster.append(neighbor)
                    frontier.append(neighbor)
        clusters.append(cluster)
    clusters.sort(key=len, reverse=True)
    return clusters


def cluster_axis(cluster: list[Coord]) -> Orientation | None:
    """Return the orientation of a straight run of two or more hits."""
    if len(cluster) < 2:
        return None
    if len({cell.row for cell in cluster}) == 1:
        return Orientation.HORIZONTAL
    if len({cell.col for cell in cluster}) == 1:
        return Orientation.VERTICAL
    return None


def line_extensions(observed: np.ndarray, cluster: list[Coord], axis: Orientation) -> list[Coord]:
    """The unresolved cells just past either end of a straight hit run."""
    size = observed.shape[0]
    if axis is Orientation.HORIZONTAL:
        row = cluster[0].row
        cols = [cell.col for cell in cluster]
        ends = [Coord(min(cols) - 1, row), Coord(max(cols) + 1, row)]
    else:
        col = cluster[0].col
        rows = [cell.row for cell in cluster]
        ends = [Coord(col, min(rows) - 1), Coord(col, max(rows) + 1)]
    return [
        end
        for end in ends
        if 0 <= end.col < size and 0 <= end.row < size and observed[end.row, end.col] == CellStatus.EMPTY
    ]
