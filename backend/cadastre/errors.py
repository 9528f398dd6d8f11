"""Geometry pipeline errors.

All of them mean "no usable parcel in this payload": callers surface them as
"no parcel at this location" and never retry, since the same document would
fail the same way.
"""

from __future__ import annotations


class GeometryError(ValueError):
    """Base class for payloads that cannot produce a parcel ring."""


class UnsupportedGeometryTypeError(GeometryError):
    def __init__(self, geometry_type: object) -> None:
        self.geometry_type = geometry_type
        super().__init__(f"Unsupported geometry type: {geometry_type!r}")


class EmptyGeometryError(GeometryError):
    """No ring or polygon present."""


class DegenerateRingError(GeometryError):
    def __init__(self, point_count: int, skipped: int = 0) -> None:
        self.point_count = point_count
        self.skipped = skipped
        super().__init__(
            f"Ring has {point_count} usable points (minimum 3, {skipped} skipped)"
        )


class EmptyRingError(GeometryError):
    """A summarizer or rasterizer was handed a zero-length ring."""
