"""T0.01 — Ring Extraction.

Decode the geometry document and keep the outer ring of the first polygon.
Holes and further polygons of a MultiPolygon are dropped; malformed
coordinate pairs are skipped and counted.
"""

from __future__ import annotations

from cadastre.engine.context import PipelineContext
from cadastre.engine.registry import Layer, transform
from cadastre.errors import EmptyGeometryError
from cadastre.geojson.parser import extract, parse_geometry


@transform(
    id="T0.01",
    layer=Layer.DECODING,
    description="Decode GeoJSON and extract the first outer ring",
)
def ring_extraction(ctx: PipelineContext) -> None:
    if ctx.document is None:
        raise EmptyGeometryError("No geometry document")

    ctx.payload = parse_geometry(ctx.document)
    extracted = extract(ctx.payload)
    ctx.geo_ring = extracted.points
    ctx.skipped_points = extracted.skipped
