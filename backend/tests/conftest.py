"""Shared test fixtures."""

from __future__ import annotations

import pytest

from cadastre.engine.pipeline import create_pipeline
from cadastre.utils.types import GeoPoint, LocalPoint


# 0.001° square near 46°N: 75 m east-west, 111 m north-south
SQUARE_RING = [[2.0, 46.0], [2.001, 46.0], [2.001, 46.001], [2.0, 46.001]]

SQUARE_POLYGON = {"type": "Polygon", "coordinates": [SQUARE_RING]}

SQUARE_MULTIPOLYGON = {"type": "MultiPolygon", "coordinates": [[SQUARE_RING]]}

SQUARE_POLYGON_TEXT = (
    '{"type": "Polygon", "coordinates": '
    "[[[2.0, 46.0], [2.001, 46.0], [2.001, 46.001], [2.0, 46.001]]]}"
)

# Same square with a hole and a second member; only the outer ring counts
SQUARE_WITH_EXTRAS = {
    "type": "MultiPolygon",
    "coordinates": [
        [SQUARE_RING, [[2.0004, 46.0004], [2.0006, 46.0004], [2.0006, 46.0006]]],
        [[[3.0, 47.0], [3.1, 47.0], [3.1, 47.1]]],
    ],
}

POINT_GEOMETRY = {"type": "Point", "coordinates": [2.35, 48.85]}

# API Carto parcelle response for one parcel, trimmed to the used fields
APICARTO_PARCEL = {
    "type": "FeatureCollection",
    "features": [
        {
            "type": "Feature",
            "id": "parcelle.1",
            "geometry": SQUARE_MULTIPOLYGON,
            "properties": {
                "id": "75056000AB0042",
                "commune": "75056",
                "prefixe": "000",
                "section": "AB",
                "numero": "0042",
                "contenance": 8325,
            },
        }
    ],
}

APICARTO_COMMUNE = {
    "type": "FeatureCollection",
    "features": [{"type": "Feature", "properties": {"nom_com": "Paris", "code_insee": "75056"}}],
}

EMPTY_COLLECTION = {"type": "FeatureCollection", "features": []}

# 10 m square in the local frame
LOCAL_SQUARE = (LocalPoint(0, 0), LocalPoint(10, 0), LocalPoint(10, 10), LocalPoint(0, 10))

REFERENCE = GeoPoint(2.0, 46.0)


@pytest.fixture
def pipeline():
    return create_pipeline()
