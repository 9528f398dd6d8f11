"""Tests for Layer 1 — local projection."""

from __future__ import annotations

import numpy as np
import pytest

from cadastre.utils.calibration import (
    FRANCE_46N,
    LAT_METERS_PER_DEGREE,
    LNG_METERS_PER_DEGREE,
    RegionalCalibration,
)
from cadastre.utils.projection import project, project_array, project_ring, unproject
from cadastre.utils.types import GeoPoint, LocalPoint
from tests.conftest import REFERENCE


def test_reference_maps_to_origin():
    assert project(REFERENCE, REFERENCE) == LocalPoint(0.0, 0.0)


def test_calibration_constants():
    assert LAT_METERS_PER_DEGREE == 111_000
    assert LNG_METERS_PER_DEGREE == 75_000
    assert FRANCE_46N.lat_meters_per_degree == LAT_METERS_PER_DEGREE
    assert FRANCE_46N.lng_meters_per_degree == LNG_METERS_PER_DEGREE


def test_axes():
    east = project(GeoPoint(2.001, 46.0), REFERENCE)
    north = project(GeoPoint(2.0, 46.001), REFERENCE)
    assert east.x == pytest.approx(75.0)
    assert east.z == pytest.approx(0.0)
    assert north.x == pytest.approx(0.0)
    assert north.z == pytest.approx(111.0)


def test_west_and_south_are_negative():
    p = project(GeoPoint(1.999, 45.999), REFERENCE)
    assert p.x < 0
    assert p.z < 0


def test_unproject_inverts_project():
    point = GeoPoint(2.3522, 48.8566)
    back = unproject(project(point, REFERENCE), REFERENCE)
    assert back.lon == pytest.approx(point.lon, abs=1e-12)
    assert back.lat == pytest.approx(point.lat, abs=1e-12)


def test_project_ring_matches_scalar():
    ring = [GeoPoint(2.0, 46.0), GeoPoint(2.001, 46.0), GeoPoint(2.001, 46.001)]
    local = project_ring(ring, REFERENCE)
    assert all(isinstance(p, LocalPoint) for p in local)
    for geo, loc in zip(ring, local):
        expected = project(geo, REFERENCE)
        assert loc.x == pytest.approx(expected.x)
        assert loc.z == pytest.approx(expected.z)


def test_project_array_shape():
    out = project_array(np.array([[2.0, 46.0], [2.5, 46.5]]), REFERENCE)
    assert out.shape == (2, 2)
    assert out[1, 0] == pytest.approx(0.5 * 75_000)


def test_custom_calibration():
    cal = RegionalCalibration(name="unit", lat_meters_per_degree=1.0, lng_meters_per_degree=2.0)
    p = project(GeoPoint(3.0, 5.0), GeoPoint(1.0, 1.0), cal)
    assert p == LocalPoint(4.0, 4.0)
