"""Tests for Layer 3 — shape summary and zoom heuristic."""

from __future__ import annotations

import numpy as np
import pytest

from cadastre.errors import EmptyRingError
from cadastre.models.address import AddressResult
from cadastre.utils.geometry import bbox, centroid, geo_centroid, polygon_metrics, summarize
from cadastre.utils.projection import project_ring
from cadastre.utils.types import Bounds, GeoPoint, LocalPoint, ParcelShape
from cadastre.utils.zoom import (
    ADDRESS_ZOOM,
    FlyToRequest,
    fly_to_address,
    fly_to_parcel,
    zoom_for,
)
from tests.conftest import LOCAL_SQUARE, REFERENCE


def test_summarize_square():
    shape = summarize(LOCAL_SQUARE, REFERENCE)
    assert shape.local_centroid == LocalPoint(5.0, 5.0)
    assert shape.bounds == Bounds(min=LocalPoint(0, 0), max=LocalPoint(10, 10))
    assert shape.max_dimension == 10.0
    assert shape.area == pytest.approx(100.0)
    assert shape.is_valid
    assert shape.simplified_ring == LOCAL_SQUARE


def test_summarize_geo_centroid_matches_vertex_average():
    geo = [GeoPoint(2.0, 46.0), GeoPoint(2.002, 46.0), GeoPoint(2.001, 46.003)]
    shape = summarize(project_ring(geo, REFERENCE), REFERENCE)
    expected = geo_centroid(geo)
    assert shape.centroid.lon == pytest.approx(expected.lon, abs=1e-12)
    assert shape.centroid.lat == pytest.approx(expected.lat, abs=1e-12)


def test_summarize_max_dimension_is_larger_side():
    ring = (LocalPoint(0, 0), LocalPoint(40, 0), LocalPoint(40, 120), LocalPoint(0, 120))
    shape = summarize(ring, REFERENCE)
    assert shape.bounds.width == 40
    assert shape.bounds.height == 120
    assert shape.max_dimension == 120


def test_summarize_keeps_given_simplified_ring():
    simplified = LOCAL_SQUARE[:3]
    shape = summarize(LOCAL_SQUARE, REFERENCE, simplified_ring=simplified)
    assert shape.simplified_ring == simplified


def test_summarize_empty():
    with pytest.raises(EmptyRingError):
        summarize((), REFERENCE)


def test_vertex_centroid_is_biased_by_density():
    # Extra vertices along the bottom edge pull the centroid down
    ring = np.array([[0, 0], [2, 0], [4, 0], [6, 0], [8, 0], [10, 0], [10, 10], [0, 10]], dtype=float)
    cx, cz = centroid(ring)
    assert cx == pytest.approx(5.0)
    assert cz < 5.0


def test_bbox():
    assert bbox(np.array([[1.0, -2.0], [3.0, 4.0], [-1.0, 0.0]])) == (-1.0, -2.0, 3.0, 4.0)


def test_self_intersecting_ring_invalid():
    bowtie = np.array([[0, 0], [10, 10], [10, 0], [0, 10]], dtype=float)
    _, valid = polygon_metrics(bowtie)
    assert not valid


def test_geo_centroid_empty():
    with pytest.raises(EmptyRingError):
        geo_centroid(())


@pytest.mark.parametrize(
    "size,zoom",
    [
        (5000.0, 15),
        (1000.1, 15),
        (1000.0, 16),
        (999.9, 16),
        (500.0, 17),
        (200.1, 17),
        (200.0, 18),
        (100.1, 18),
        (100.0, 19),
        (10.0, 19),
        (0.0, 19),
    ],
)
def test_zoom_for(size, zoom):
    assert zoom_for(size) == zoom


def test_zoom_monotone():
    sizes = [0, 50, 100, 150, 250, 600, 1500, 10_000]
    zooms = [zoom_for(s) for s in sizes]
    assert zooms == sorted(zooms, reverse=True)


def test_fly_to_parcel():
    shape = ParcelShape(
        centroid=GeoPoint(2.35, 48.85),
        local_centroid=LocalPoint(0, 0),
        bounds=Bounds(min=LocalPoint(-300, -100), max=LocalPoint(300, 100)),
        max_dimension=600.0,
        simplified_ring=(),
    )
    assert fly_to_parcel(shape) == FlyToRequest(latitude=48.85, longitude=2.35, zoom=16)


def test_fly_to_address():
    address = AddressResult(text="Place Bellecour", latitude=45.7578, longitude=4.832)
    target = fly_to_address(address)
    assert target == FlyToRequest(latitude=45.7578, longitude=4.832, zoom=ADDRESS_ZOOM)
    assert fly_to_address(address, zoom=12).zoom == 12
