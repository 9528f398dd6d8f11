"""T3.01 — Shape Summary.

Centroid, bounds and max dimension are measured on the full projected ring;
the simplified ring rides along for rendering.
"""

from __future__ import annotations

import logging

from cadastre.engine.context import PipelineContext
from cadastre.engine.registry import Layer, transform
from cadastre.utils.geometry import summarize

logger = logging.getLogger(__name__)


@transform(
    id="T3.01",
    layer=Layer.SUMMARY,
    dependencies=["T1.01", "T2.01"],
    description="Vertex centroid, bounding box and max dimension",
)
def shape_summary(ctx: PipelineContext) -> None:
    ctx.shape = summarize(
        ctx.local_ring,
        ctx.reference,
        simplified_ring=ctx.simplified_ring,
        calibration=ctx.config.calibration,
    )
    if not ctx.shape.is_valid:
        logger.info("Parcel ring is self-intersecting; centroid may fall outside")
