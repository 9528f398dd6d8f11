"""Contour simplification — Ramer-Douglas-Peucker."""

from __future__ import annotations

from typing import Sequence

import numpy as np
from numpy.typing import NDArray

from cadastre.errors import DegenerateRingError, EmptyRingError
from cadastre.utils.types import LocalPoint, LocalRing, local_ring, ring_array

# Below this endpoint separation the chord is treated as a single point.
_MIN_CHORD_LENGTH = 1e-12


def rdp_simplify(
    points: NDArray[np.float64],
    epsilon: float,
) -> NDArray[np.float64]:
    """Ramer-Douglas-Peucker line simplification on an open polyline.

    Keeps the first and last point. The interior vertex farthest from the
    chord (lowest index on ties) splits the polyline when its distance
    exceeds ``epsilon``; otherwise the span collapses to its endpoints.
    """
    if len(points) <= 2:
        return points

    start = points[0]
    end = points[-1]
    interior = points[1:-1]

    line_vec = end - start
    line_len = float(np.hypot(line_vec[0], line_vec[1]))

    if line_len < _MIN_CHORD_LENGTH:
        # Closed span (first == last): measure to the shared endpoint
        distances = np.hypot(interior[:, 0] - start[0], interior[:, 1] - start[1])
    else:
        cross = line_vec[0] * (interior[:, 1] - start[1]) - line_vec[1] * (interior[:, 0] - start[0])
        distances = np.abs(cross) / line_len

    max_idx = int(np.argmax(distances))
    max_dist = float(distances[max_idx])
    split = max_idx + 1

    if max_dist > epsilon:
        left = rdp_simplify(points[: split + 1], epsilon)
        right = rdp_simplify(points[split:], epsilon)
        return np.vstack([left[:-1], right])
    return points[[0, -1]]


def douglas_peucker(points: Sequence[tuple[float, float]], tolerance: float) -> LocalRing:
    """Polyline form of the simplifier; may legitimately return two points."""
    if not tolerance > 0:
        raise ValueError(f"tolerance must be > 0, got {tolerance!r}")
    pts = ring_array(points)
    if len(pts) == 0:
        return ()
    return local_ring(rdp_simplify(pts, tolerance))


def simplify(ring: Sequence[LocalPoint], tolerance: float) -> LocalRing:
    """Simplify a ring treated as an open polyline from first to last vertex.

    The closing edge (last → first) never takes part, so a ring that does not
    repeat its first vertex can lose the corner next to that edge.
    A result with fewer than 3 vertices is not a polygon: the input comes
    back unchanged instead.
    """
    if len(ring) == 0:
        raise EmptyRingError("Cannot simplify an empty ring")
    if len(ring) < 3:
        raise DegenerateRingError(len(ring))

    reduced = douglas_peucker(ring, tolerance)
    if len(reduced) < 3:
        return tuple(LocalPoint(*p) for p in ring)
    return reduced
