"""Leaf-node geometry helpers. No engine imports."""

from __future__ import annotations

from typing import Sequence

import numpy as np
from numpy.typing import NDArray
from shapely.geometry import Polygon

from cadastre.errors import EmptyRingError
from cadastre.utils.calibration import FRANCE_46N, RegionalCalibration
from cadastre.utils.projection import unproject
from cadastre.utils.types import (
    Bounds,
    GeoPoint,
    LocalPoint,
    LocalRing,
    ParcelShape,
    ring_array,
)


def bbox(points: NDArray[np.float64]) -> tuple[float, float, float, float]:
    """Compute (xmin, ymin, xmax, ymax) bounding box."""
    if len(points) == 0:
        return (0.0, 0.0, 0.0, 0.0)
    return (
        float(np.min(points[:, 0])),
        float(np.min(points[:, 1])),
        float(np.max(points[:, 0])),
        float(np.max(points[:, 1])),
    )


def centroid(points: NDArray[np.float64]) -> tuple[float, float]:
    """Arithmetic mean of the vertices.

    Not an area-weighted polygon centroid: densely sampled edges pull it
    towards themselves. Zoom and fly-to behaviour are tuned against this
    approximation.
    """
    if len(points) == 0:
        return (0.0, 0.0)
    return (float(np.mean(points[:, 0])), float(np.mean(points[:, 1])))


def geo_centroid(points: Sequence[GeoPoint]) -> GeoPoint:
    """Vertex-average centroid of raw geographic points."""
    if len(points) == 0:
        raise EmptyRingError("Cannot average an empty ring")
    lon, lat = centroid(ring_array(points))
    return GeoPoint(lon, lat)


def polygon_metrics(points: NDArray[np.float64]) -> tuple[float, bool]:
    """(area, is_valid) of the implicitly closed ring via shapely."""
    if len(points) < 3:
        return (0.0, False)
    poly = Polygon(points)
    return (float(poly.area), bool(poly.is_valid))


def summarize(
    ring: Sequence[LocalPoint],
    reference: GeoPoint,
    *,
    simplified_ring: Sequence[LocalPoint] | None = None,
    calibration: RegionalCalibration = FRANCE_46N,
) -> ParcelShape:
    """Centroid, bounds and max dimension of a projected ring.

    ``reference`` is the GeoPoint the ring was projected from; the local
    centroid is mapped back through it, which by linearity equals the vertex
    average of the raw geographic points.
    """
    pts = ring_array(ring)
    if len(pts) == 0:
        raise EmptyRingError("Cannot summarize an empty ring")

    cx, cz = centroid(pts)
    xmin, zmin, xmax, zmax = bbox(pts)
    bounds = Bounds(min=LocalPoint(xmin, zmin), max=LocalPoint(xmax, zmax))
    area, valid = polygon_metrics(pts)

    local_centroid = LocalPoint(cx, cz)
    kept: LocalRing = tuple(LocalPoint(*p) for p in (simplified_ring if simplified_ring is not None else ring))

    return ParcelShape(
        centroid=unproject(local_centroid, reference, calibration),
        local_centroid=local_centroid,
        bounds=bounds,
        max_dimension=max(bounds.width, bounds.height),
        simplified_ring=kept,
        area=area,
        is_valid=valid,
    )
