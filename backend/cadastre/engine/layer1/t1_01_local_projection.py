"""T1.01 — Local Projection.

Project the geographic ring onto the flat local frame in meters around a
reference point. Without a configured reference the ring's own vertex
average is used, so the local centroid lands on the origin.
"""

from __future__ import annotations

from cadastre.engine.context import PipelineContext
from cadastre.engine.registry import Layer, transform
from cadastre.utils.geometry import geo_centroid
from cadastre.utils.projection import project_ring


@transform(
    id="T1.01",
    layer=Layer.PROJECTION,
    dependencies=["T0.01"],
    description="Equirectangular projection to local meters",
)
def local_projection(ctx: PipelineContext) -> None:
    cfg = ctx.config
    ctx.reference = cfg.reference if cfg.reference is not None else geo_centroid(ctx.geo_ring)
    ctx.local_ring = project_ring(ctx.geo_ring, ctx.reference, cfg.calibration)
