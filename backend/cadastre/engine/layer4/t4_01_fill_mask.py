"""T4.01 — Fill Mask.

Even-odd rasterization of the simplified ring into the square alpha mask
drawn over the parcel.
"""

from __future__ import annotations

from cadastre.engine.context import PipelineContext
from cadastre.engine.registry import Layer, transform
from cadastre.utils.rasterizer import rasterize


@transform(
    id="T4.01",
    layer=Layer.RASTERIZATION,
    dependencies=["T2.01"],
    description="Rasterize the simplified ring into a fill mask",
)
def fill_mask(ctx: PipelineContext) -> None:
    cfg = ctx.config
    ctx.fill_mask = rasterize(ctx.simplified_ring, cfg.mask_resolution, cfg.mask_padding)
