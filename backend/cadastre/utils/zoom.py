"""Zoom heuristic — parcel size to map zoom level, fly-to targets."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from cadastre.utils.types import ParcelShape

if TYPE_CHECKING:
    from cadastre.models.address import AddressResult

# (strict lower bound in meters, zoom). A size exactly on a bound falls
# through to the next, closer zoom: 1000 m → 16, 1000.1 m → 15.
ZOOM_THRESHOLDS: tuple[tuple[float, int], ...] = (
    (1000.0, 15),
    (500.0, 16),
    (200.0, 17),
    (100.0, 18),
)
MAX_ZOOM = 19

# Zoom used when centring on a geocoded address rather than a parcel.
ADDRESS_ZOOM = 18


@dataclass(frozen=True)
class FlyToRequest:
    """Camera target for the map collaborator. Duration is its own concern."""

    latitude: float
    longitude: float
    zoom: int


def zoom_for(max_dimension_m: float) -> int:
    for lower_bound, zoom in ZOOM_THRESHOLDS:
        if max_dimension_m > lower_bound:
            return zoom
    return MAX_ZOOM


def fly_to_parcel(shape: ParcelShape) -> FlyToRequest:
    return FlyToRequest(
        latitude=shape.centroid.lat,
        longitude=shape.centroid.lon,
        zoom=zoom_for(shape.max_dimension),
    )


def fly_to_address(address: AddressResult, zoom: int = ADDRESS_ZOOM) -> FlyToRequest:
    return FlyToRequest(latitude=address.latitude, longitude=address.longitude, zoom=zoom)
