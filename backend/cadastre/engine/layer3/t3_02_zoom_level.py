"""T3.02 — Zoom Level."""

from __future__ import annotations

from cadastre.engine.context import PipelineContext
from cadastre.engine.registry import Layer, transform
from cadastre.utils.zoom import fly_to_parcel


@transform(
    id="T3.02",
    layer=Layer.SUMMARY,
    dependencies=["T3.01"],
    description="Map zoom from parcel size, fly-to target at the centroid",
)
def zoom_level(ctx: PipelineContext) -> None:
    ctx.fly_to = fly_to_parcel(ctx.shape)
    ctx.zoom = ctx.fly_to.zoom
