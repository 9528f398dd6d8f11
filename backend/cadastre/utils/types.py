"""Value types shared by the geometry helpers. No engine imports.

Points are NamedTuples so they compare equal to plain tuples; every composite
value is a frozen dataclass and is replaced wholesale, never edited in place.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple, Sequence, Union

import numpy as np
from numpy.typing import NDArray


class GeoPoint(NamedTuple):
    """Geographic coordinate in degrees. Out-of-range values are kept as-is."""

    lon: float
    lat: float


class LocalPoint(NamedTuple):
    """Planar coordinate in meters, relative to a reference GeoPoint."""

    x: float
    z: float


GeoRing = tuple[GeoPoint, ...]
LocalRing = tuple[LocalPoint, ...]
AnyPoint = Union[GeoPoint, LocalPoint]


def ring_array(ring: Sequence[tuple[float, float]]) -> NDArray[np.float64]:
    """Nx2 float64 array view of a ring (empty rings give shape (0, 2))."""
    if len(ring) == 0:
        return np.empty((0, 2), dtype=np.float64)
    return np.asarray(ring, dtype=np.float64).reshape(-1, 2)


def local_ring(points: NDArray[np.float64] | Sequence[tuple[float, float]]) -> LocalRing:
    return tuple(LocalPoint(float(x), float(z)) for x, z in np.asarray(points, dtype=np.float64))


@dataclass(frozen=True)
class Bounds:
    """Axis-aligned bounding box in the local frame."""

    min: LocalPoint
    max: LocalPoint

    @property
    def width(self) -> float:
        return self.max.x - self.min.x

    @property
    def height(self) -> float:
        return self.max.z - self.min.z

    @property
    def center(self) -> LocalPoint:
        return LocalPoint((self.min.x + self.max.x) / 2, (self.min.z + self.max.z) / 2)


@dataclass(frozen=True)
class ParcelShape:
    """Renderable summary of one parcel, built once per selection."""

    # Vertex-average centroid in lon/lat (fly-to target, info display)
    centroid: GeoPoint
    # The same centroid in the local frame
    local_centroid: LocalPoint
    bounds: Bounds
    # max(bounds.width, bounds.height), meters
    max_dimension: float
    simplified_ring: LocalRing
    # Shoelace area of the summarized ring, m²
    area: float = 0.0
    # False when the ring self-intersects
    is_valid: bool = True


@dataclass(frozen=True, eq=False)
class FillMask:
    """Alpha grid over UV space [0,1]×[0,1].

    ``alpha[row, col]`` holds the cell whose centre is
    ``u = (col + 0.5) / resolution``, ``v = (row + 0.5) / resolution``.
    One UV unit spans ``scale`` meters and UV (0.5, 0.5) sits on ``center``.
    """

    alpha: NDArray[np.float32]
    scale: float
    center: LocalPoint

    @property
    def resolution(self) -> int:
        return int(self.alpha.shape[0])

    @property
    def fill_fraction(self) -> float:
        if self.alpha.size == 0:
            return 0.0
        return float(np.count_nonzero(self.alpha) / self.alpha.size)

    def uv_to_local(self, u: float, v: float) -> LocalPoint:
        return LocalPoint(
            self.center.x + (u - 0.5) * self.scale,
            self.center.z + (v - 0.5) * self.scale,
        )

    def local_to_uv(self, point: LocalPoint) -> tuple[float, float]:
        if self.scale <= 0:
            return (0.5, 0.5)
        return (
            (point.x - self.center.x) / self.scale + 0.5,
            (point.z - self.center.z) / self.scale + 0.5,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FillMask):
            return NotImplemented
        return (
            self.scale == other.scale
            and self.center == other.center
            and np.array_equal(self.alpha, other.alpha)
        )

    __hash__ = None  # type: ignore[assignment]
