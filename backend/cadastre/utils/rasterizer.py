"""Rasterization utilities — parcel ring to fill mask, mask to texture."""

from __future__ import annotations

import io
from typing import Sequence

import numpy as np
from numpy.typing import NDArray
from PIL import Image

from cadastre.errors import DegenerateRingError, EmptyRingError
from cadastre.utils.geometry import bbox
from cadastre.utils.types import FillMask, LocalPoint, ring_array

# Highlight colour of the selected parcel (#00E5BE) and its fill opacity.
HIGHLIGHT_RGB = (0, 229, 190)
HIGHLIGHT_OPACITY = 0.3


def cell_centers(resolution: int) -> NDArray[np.float64]:
    """UV coordinate of each cell centre along one axis."""
    return (np.arange(resolution, dtype=np.float64) + 0.5) / resolution


def even_odd_fill(
    ring: NDArray[np.float64],
    xs: NDArray[np.float64],
    ys: NDArray[np.float64],
) -> NDArray[np.bool_]:
    """Even-odd ray cast along +x of every (x, y) sample against the implicitly closed ring.

    Edges are half-open in y (``(y_i > y) != (y_j > y)``), so a vertex lying
    exactly on a scanline is counted once. Works on whole sample arrays one
    edge at a time.
    """
    inside = np.zeros(np.broadcast(xs, ys).shape, dtype=bool)
    n = len(ring)
    j = n - 1
    for i in range(n):
        xi, yi = ring[i]
        xj, yj = ring[j]
        j = i
        if yi == yj:
            # Horizontal edge: never crosses a scanline under the half-open rule
            continue
        crosses = (yi > ys) != (yj > ys)
        x_cross = (xj - xi) * (ys - yi) / (yj - yi) + xi
        inside ^= crosses & (xs < x_cross)
    return inside


def rasterize(
    ring: Sequence[LocalPoint],
    resolution: int,
    padding: float,
) -> FillMask:
    """Rasterize a local-frame ring into a square alpha mask.

    The square side is the larger bbox side grown by ``padding`` on each
    edge; it is centred on the bbox centre. Alpha is 1.0 for cells whose
    centre lies inside the ring, 0.0 elsewhere.
    """
    if resolution < 1:
        raise ValueError(f"resolution must be >= 1, got {resolution!r}")
    if padding < 0:
        raise ValueError(f"padding must be >= 0, got {padding!r}")

    pts = ring_array(ring)
    if len(pts) == 0:
        raise EmptyRingError("Cannot rasterize an empty ring")
    if len(pts) < 3:
        raise DegenerateRingError(len(pts))

    xmin, zmin, xmax, zmax = bbox(pts)
    center = LocalPoint((xmin + xmax) / 2, (zmin + zmax) / 2)
    square_size = max(xmax - xmin, zmax - zmin) * (1 + 2 * padding)

    uv = cell_centers(resolution)
    xs = center.x + (uv[np.newaxis, :] - 0.5) * square_size
    zs = center.z + (uv[:, np.newaxis] - 0.5) * square_size

    inside = even_odd_fill(pts, xs, zs)
    return FillMask(alpha=inside.astype(np.float32), scale=float(square_size), center=center)


def mask_to_image(
    mask: FillMask,
    rgb: tuple[int, int, int] = HIGHLIGHT_RGB,
    opacity: float = HIGHLIGHT_OPACITY,
) -> Image.Image:
    """RGBA texture of the mask, north up (v grows towards the top row)."""
    h = w = mask.resolution
    rgba = np.zeros((h, w, 4), dtype=np.uint8)
    rgba[..., 0] = rgb[0]
    rgba[..., 1] = rgb[1]
    rgba[..., 2] = rgb[2]
    rgba[..., 3] = np.round(mask.alpha * opacity * 255).astype(np.uint8)
    return Image.fromarray(np.ascontiguousarray(np.flipud(rgba)))


def mask_to_png(mask: FillMask, **kwargs) -> bytes:
    buf = io.BytesIO()
    mask_to_image(mask, **kwargs).save(buf, "PNG")
    return buf.getvalue()
