"""API request models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class PipelineOptions(BaseModel):
    tolerance_m: float | None = Field(default=None, description="Simplification tolerance in meters")
    mask_resolution: int | None = Field(default=None, ge=1, le=4096, description="Fill mask pixels per side")
    mask_padding: float | None = Field(default=None, description="Mask padding fraction per edge")
    rasterize: bool = Field(default=True, description="Compute the fill mask")
    reference_lon: float | None = Field(default=None, description="Projection anchor longitude")
    reference_lat: float | None = Field(default=None, description="Projection anchor latitude")


class ShapeRequest(BaseModel):
    geometry: dict[str, Any] | str = Field(..., description="GeoJSON Polygon/MultiPolygon geometry")
    options: PipelineOptions = Field(default_factory=PipelineOptions)


class FeatureRequest(BaseModel):
    parcel: dict[str, Any] = Field(..., description="API Carto parcelle FeatureCollection")
    commune: dict[str, Any] | None = Field(
        default=None,
        description="API Carto commune FeatureCollection for the same point",
    )
    options: PipelineOptions = Field(default_factory=PipelineOptions)
