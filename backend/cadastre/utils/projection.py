"""Geographic ↔ local planar conversion. No engine imports."""

from __future__ import annotations

from typing import Sequence

import numpy as np
from numpy.typing import NDArray

from cadastre.utils.calibration import FRANCE_46N, RegionalCalibration
from cadastre.utils.types import GeoPoint, LocalPoint, ring_array


def project(
    point: GeoPoint,
    reference: GeoPoint,
    calibration: RegionalCalibration = FRANCE_46N,
) -> LocalPoint:
    """(lon, lat) → (x, z) meters east/north of ``reference``."""
    return LocalPoint(
        (point[0] - reference[0]) * calibration.lng_meters_per_degree,
        (point[1] - reference[1]) * calibration.lat_meters_per_degree,
    )


def unproject(
    point: LocalPoint,
    reference: GeoPoint,
    calibration: RegionalCalibration = FRANCE_46N,
) -> GeoPoint:
    """Inverse of :func:`project`."""
    return GeoPoint(
        reference[0] + point[0] / calibration.lng_meters_per_degree,
        reference[1] + point[1] / calibration.lat_meters_per_degree,
    )


def project_array(
    points: Sequence[GeoPoint] | NDArray[np.float64],
    reference: GeoPoint,
    calibration: RegionalCalibration = FRANCE_46N,
) -> NDArray[np.float64]:
    """Vectorized :func:`project` over an Nx2 (lon, lat) array."""
    pts = ring_array(points) if not isinstance(points, np.ndarray) else points
    out = np.empty_like(pts, dtype=np.float64)
    out[:, 0] = (pts[:, 0] - reference[0]) * calibration.lng_meters_per_degree
    out[:, 1] = (pts[:, 1] - reference[1]) * calibration.lat_meters_per_degree
    return out


def project_ring(
    ring: Sequence[GeoPoint],
    reference: GeoPoint,
    calibration: RegionalCalibration = FRANCE_46N,
) -> tuple[LocalPoint, ...]:
    return tuple(LocalPoint(float(x), float(z)) for x, z in project_array(ring, reference, calibration))
