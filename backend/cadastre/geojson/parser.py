"""GeoJSON geometry decoding — type tag first, nested arrays second.

A ``Polygon`` nests coordinates three levels deep and a ``MultiPolygon``
four, so no single fixed schema describes ``coordinates``. The tag is
resolved once here into a :data:`GeometryPayload`; everything downstream
only ever sees the extracted exterior ring.
"""

from __future__ import annotations

import json
import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Union

from cadastre.errors import (
    DegenerateRingError,
    EmptyGeometryError,
    UnsupportedGeometryTypeError,
)
from cadastre.utils.types import GeoPoint, GeoRing

logger = logging.getLogger(__name__)

MIN_RING_POINTS = 3


@dataclass(frozen=True)
class PolygonPayload:
    # [ring][vertex][lon, lat]
    rings: tuple[Any, ...]

    type = "Polygon"


@dataclass(frozen=True)
class MultiPolygonPayload:
    # [polygon][ring][vertex][lon, lat]
    polygons: tuple[Any, ...]

    type = "MultiPolygon"


GeometryPayload = Union[PolygonPayload, MultiPolygonPayload]


@dataclass(frozen=True)
class ExtractedRing:
    """First exterior ring in geographic coordinates."""

    points: GeoRing
    # Coordinate pairs dropped because they were short or non-numeric
    skipped: int = 0


def parse_geometry(document: str | bytes | Mapping[str, Any]) -> GeometryPayload:
    """Decode a GeoJSON geometry (or a Feature wrapping one) into a payload.

    Raises UnsupportedGeometryTypeError for any tag other than Polygon /
    MultiPolygon and EmptyGeometryError when there is nothing to decode.
    """
    if isinstance(document, (str, bytes)):
        try:
            document = json.loads(document)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise EmptyGeometryError(f"Geometry is not valid JSON: {e}") from e

    if not isinstance(document, Mapping):
        raise EmptyGeometryError("Geometry must be a JSON object")

    if document.get("type") == "Feature":
        geometry = document.get("geometry")
        if not isinstance(geometry, Mapping):
            raise EmptyGeometryError("Feature has no geometry")
        document = geometry

    geom_type = document.get("type")
    coordinates = document.get("coordinates")

    if geom_type == "Polygon":
        return PolygonPayload(rings=_as_tuple(coordinates))
    if geom_type == "MultiPolygon":
        return MultiPolygonPayload(polygons=_as_tuple(coordinates))
    raise UnsupportedGeometryTypeError(geom_type)


def extract(payload: GeometryPayload) -> ExtractedRing:
    """First exterior ring of the first polygon; holes and extra members are ignored."""
    if isinstance(payload, PolygonPayload):
        if not payload.rings:
            raise EmptyGeometryError("Polygon has no rings")
        raw_ring = payload.rings[0]
    elif isinstance(payload, MultiPolygonPayload):
        if not payload.polygons:
            raise EmptyGeometryError("MultiPolygon has no polygons")
        first_polygon = _as_tuple(payload.polygons[0])
        if not first_polygon:
            raise EmptyGeometryError("First polygon of MultiPolygon has no rings")
        raw_ring = first_polygon[0]
    else:
        raise UnsupportedGeometryTypeError(getattr(payload, "type", type(payload).__name__))

    points: list[GeoPoint] = []
    skipped = 0
    for pair in _as_tuple(raw_ring):
        point = _decode_pair(pair)
        if point is None:
            skipped += 1
            continue
        points.append(point)

    if skipped:
        logger.debug("Skipped %d malformed coordinate pairs in %s ring", skipped, payload.type)

    if len(points) < MIN_RING_POINTS:
        raise DegenerateRingError(len(points), skipped)

    logger.info("Extracted %s ring: %d points (%d skipped)", payload.type, len(points), skipped)
    return ExtractedRing(points=tuple(points), skipped=skipped)


def extract_ring(document: str | bytes | Mapping[str, Any]) -> ExtractedRing:
    return extract(parse_geometry(document))


def _as_tuple(value: Any) -> tuple[Any, ...]:
    if isinstance(value, (list, tuple)):
        return tuple(value)
    return ()


def _coordinate(value: Any) -> float | None:
    # bool is an int subclass but never a coordinate
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except OverflowError:
        # Integer literal wider than a double
        return None
    return number if math.isfinite(number) else None


def _decode_pair(pair: Any) -> GeoPoint | None:
    """[lon, lat, (alt...)] → GeoPoint, or None when unusable."""
    if not isinstance(pair, (list, tuple)) or len(pair) < 2:
        return None
    lon, lat = _coordinate(pair[0]), _coordinate(pair[1])
    if lon is None or lat is None:
        return None
    return GeoPoint(lon, lat)
