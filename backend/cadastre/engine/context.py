"""PipelineContext — per-run scratch state flowing through all transforms.

One context per pipeline pass, never shared between runs. The frozen
ParcelResult built from it at the end is what leaves the engine.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from cadastre.engine.config import PipelineConfig
from cadastre.geojson.parser import GeometryPayload
from cadastre.utils.types import FillMask, GeoPoint, GeoRing, LocalRing, ParcelShape
from cadastre.utils.zoom import FlyToRequest


@dataclass(frozen=True)
class ParcelResult:
    """Everything one selection needs for rendering and camera placement."""

    geo_ring: GeoRing
    reference: GeoPoint
    shape: ParcelShape
    zoom: int
    fly_to: FlyToRequest
    mask: FillMask | None = None
    skipped_points: int = 0


@dataclass
class PipelineContext:
    """Shared state of a single pipeline pass."""

    # Raw geometry document: JSON text or decoded mapping
    document: str | bytes | Mapping[str, Any] | None = None
    config: PipelineConfig = field(default_factory=PipelineConfig)

    # --- Layer 0: decoding ---
    payload: GeometryPayload | None = None
    geo_ring: GeoRing = ()
    skipped_points: int = 0

    # --- Layer 1: projection ---
    reference: GeoPoint | None = None
    local_ring: LocalRing = ()

    # --- Layer 2: simplification ---
    simplified_ring: LocalRing = ()

    # --- Layer 3: summary ---
    shape: ParcelShape | None = None
    zoom: int | None = None
    fly_to: FlyToRequest | None = None

    # --- Layer 4: rasterization ---
    fill_mask: FillMask | None = None

    # --- Pipeline metadata ---
    completed_transforms: set[str] = field(default_factory=set)
    skipped_transforms: set[str] = field(default_factory=set)
    errors: dict[str, str] = field(default_factory=dict)
    failures: dict[str, Exception] = field(default_factory=dict)

    @property
    def failed(self) -> bool:
        return bool(self.failures)

    def raise_for_failure(self) -> None:
        """Re-raise the first recorded transform failure, if any."""
        for exc in self.failures.values():
            raise exc

    def to_result(self) -> ParcelResult:
        self.raise_for_failure()
        if self.shape is None or self.reference is None or self.fly_to is None or self.zoom is None:
            raise RuntimeError("Pipeline did not produce a parcel shape")
        return ParcelResult(
            geo_ring=self.geo_ring,
            reference=self.reference,
            shape=self.shape,
            zoom=self.zoom,
            fly_to=self.fly_to,
            mask=self.fill_mask,
            skipped_points=self.skipped_points,
        )
