"""Tests for Layer 4 — fill mask rasterization."""

from __future__ import annotations

import io

import numpy as np
import pytest
from PIL import Image

from cadastre.errors import DegenerateRingError, EmptyRingError
from cadastre.utils.rasterizer import (
    HIGHLIGHT_RGB,
    cell_centers,
    even_odd_fill,
    mask_to_image,
    mask_to_png,
    rasterize,
)
from cadastre.utils.types import LocalPoint
from tests.conftest import LOCAL_SQUARE

TRIANGLE = (LocalPoint(0, 0), LocalPoint(10, 0), LocalPoint(0, 10))


def test_cell_centers():
    assert np.allclose(cell_centers(4), [0.125, 0.375, 0.625, 0.875])


def test_even_odd_fill_inside_outside():
    ring = np.array(LOCAL_SQUARE, dtype=float)
    xs = np.array([5.0, 15.0, 5.0])
    ys = np.array([5.0, 5.0, -1.0])
    assert even_odd_fill(ring, xs, ys).tolist() == [True, False, False]


def test_even_odd_fill_half_open_edges():
    ring = np.array(LOCAL_SQUARE, dtype=float)
    # Bottom edge belongs to the polygon, top edge does not
    assert even_odd_fill(ring, np.array([5.0, 5.0]), np.array([0.0, 10.0])).tolist() == [True, False]

    # Scanline through the apex vertex crosses the ring once
    triangle = np.array([[0, 0], [10, 5], [0, 10]], dtype=float)
    assert even_odd_fill(triangle, np.array([2.0]), np.array([5.0])).tolist() == [True]


def test_mask_shape_and_dtype():
    mask = rasterize(LOCAL_SQUARE, 32, 0.1)
    assert mask.alpha.shape == (32, 32)
    assert mask.alpha.dtype == np.float32
    assert set(np.unique(mask.alpha)) <= {0.0, 1.0}
    assert mask.resolution == 32


def test_geometry_of_mask():
    mask = rasterize(LOCAL_SQUARE, 16, 0.25)
    assert mask.scale == pytest.approx(15.0)
    assert mask.center == LocalPoint(5.0, 5.0)
    assert mask.uv_to_local(0.5, 0.5) == LocalPoint(5.0, 5.0)
    assert mask.local_to_uv(LocalPoint(5.0, 5.0)) == (0.5, 0.5)


def test_unpadded_square_fills_everything():
    assert rasterize(LOCAL_SQUARE, 10, 0.0).fill_fraction == 1.0


@pytest.mark.parametrize("resolution", [12, 24, 48])
def test_fill_fraction_independent_of_resolution(resolution):
    # Square side is 15 m for a 10 m ring: 4/9 of the cells
    mask = rasterize(LOCAL_SQUARE, resolution, 0.25)
    assert mask.fill_fraction == pytest.approx(4 / 9)


def test_rows_are_v_columns_are_u():
    alpha = rasterize(TRIANGLE, 10, 0.0).alpha
    assert alpha[0, 0] == 1.0
    assert alpha[0, 8] == 1.0
    assert alpha[8, 0] == 1.0
    assert alpha[9, 9] == 0.0
    assert alpha[5, 7] == 0.0


def test_winding_does_not_matter():
    forward = rasterize(LOCAL_SQUARE, 20, 0.1)
    backward = rasterize(LOCAL_SQUARE[::-1], 20, 0.1)
    assert np.array_equal(forward.alpha, backward.alpha)


def test_deterministic():
    ring = (LocalPoint(-3.2, 1.1), LocalPoint(8.7, -2.4), LocalPoint(12.5, 9.9), LocalPoint(0.3, 14.2))
    assert rasterize(ring, 64, 0.1) == rasterize(ring, 64, 0.1)


def test_coincident_points_give_empty_mask():
    ring = (LocalPoint(1, 1), LocalPoint(1, 1), LocalPoint(1, 1))
    mask = rasterize(ring, 8, 0.1)
    assert mask.scale == 0.0
    assert mask.fill_fraction == 0.0


def test_invalid_resolution():
    with pytest.raises(ValueError):
        rasterize(LOCAL_SQUARE, 0, 0.1)


def test_invalid_padding():
    with pytest.raises(ValueError):
        rasterize(LOCAL_SQUARE, 16, -0.1)


def test_empty_ring():
    with pytest.raises(EmptyRingError):
        rasterize((), 16, 0.1)


def test_too_few_points():
    with pytest.raises(DegenerateRingError):
        rasterize(LOCAL_SQUARE[:2], 16, 0.1)


def test_mask_image_is_north_up():
    image = mask_to_image(rasterize(TRIANGLE, 10, 0.0))
    assert image.mode == "RGBA"
    assert image.size == (10, 10)
    # Alpha row 0 (southmost) is the bottom image row
    r, g, b, a = image.getpixel((0, 9))
    assert (r, g, b) == HIGHLIGHT_RGB
    assert abs(a - 0.3 * 255) <= 1
    assert image.getpixel((9, 0))[3] == 0


def test_mask_png():
    data = mask_to_png(rasterize(LOCAL_SQUARE, 8, 0.1), opacity=1.0)
    assert data[:8] == b"\x89PNG\r\n\x1a\n"
    image = Image.open(io.BytesIO(data))
    assert image.size == (8, 8)
    assert image.getpixel((4, 4))[3] == 255
