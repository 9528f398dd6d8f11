"""T2.01 — Douglas-Peucker Simplification."""

from __future__ import annotations

from cadastre.engine.context import PipelineContext
from cadastre.engine.registry import Layer, transform
from cadastre.utils.contour import simplify


@transform(
    id="T2.01",
    layer=Layer.SIMPLIFICATION,
    dependencies=["T1.01"],
    description="Drop vertices closer than the tolerance to their chord",
)
def douglas_peucker(ctx: PipelineContext) -> None:
    ctx.simplified_ring = simplify(ctx.local_ring, ctx.config.tolerance_m)
