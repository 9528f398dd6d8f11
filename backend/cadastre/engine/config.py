"""Pipeline configuration — caller-supplied parameters of one pipeline pass."""

from __future__ import annotations

from dataclasses import dataclass

from cadastre.utils.calibration import FRANCE_46N, RegionalCalibration
from cadastre.utils.types import GeoPoint


@dataclass(frozen=True)
class PipelineConfig:
    """Knobs for extract → project → simplify → summarize → rasterize."""

    # Douglas-Peucker tolerance in local meters
    tolerance_m: float = 0.5

    # Fill mask: pixels per side and padding fraction on each edge
    mask_resolution: int = 256
    mask_padding: float = 0.1
    # False skips the rasterization layer entirely
    rasterize: bool = True

    # Projection anchor; None means the ring's own vertex-average centroid
    reference: GeoPoint | None = None
    calibration: RegionalCalibration = FRANCE_46N

    def __post_init__(self) -> None:
        if not self.tolerance_m > 0:
            raise ValueError(f"tolerance_m must be > 0, got {self.tolerance_m!r}")
        if self.mask_resolution < 1:
            raise ValueError(f"mask_resolution must be >= 1, got {self.mask_resolution!r}")
        if self.mask_padding < 0:
            raise ValueError(f"mask_padding must be >= 0, got {self.mask_padding!r}")
