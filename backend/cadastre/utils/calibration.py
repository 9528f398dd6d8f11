"""Regional calibration for the small-area planar projection.

The local frame uses fixed meters-per-degree factors instead of a map
projection. Both values hold only for a band around 46°N (metropolitan
France). A latitude-dependent factor (lat_m * cos(lat)) would generalize
the longitude term; that change belongs here, not in the projector.
"""

from __future__ import annotations

from dataclasses import dataclass

# One degree of latitude ≈ 111 km anywhere on the ellipsoid.
LAT_METERS_PER_DEGREE = 111_000.0

# One degree of longitude ≈ 111 km × cos(46°) ≈ 77 km; 75 km is the value
# the downstream zoom thresholds were tuned against.
LNG_METERS_PER_DEGREE = 75_000.0


@dataclass(frozen=True)
class RegionalCalibration:
    name: str
    lat_meters_per_degree: float = LAT_METERS_PER_DEGREE
    lng_meters_per_degree: float = LNG_METERS_PER_DEGREE


FRANCE_46N = RegionalCalibration(name="france-46n")
