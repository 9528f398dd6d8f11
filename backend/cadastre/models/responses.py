"""API response models."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    transforms_registered: int = 0


class BoundsModel(BaseModel):
    min: list[float]
    max: list[float]
    width: float
    height: float


class FlyToModel(BaseModel):
    latitude: float
    longitude: float
    zoom: int


class MaskSummary(BaseModel):
    resolution: int
    scale: float = Field(..., description="Meters covered by the mask side")
    center: list[float]
    fill_fraction: float


class ShapeResponse(BaseModel):
    centroid: list[float] = Field(..., description="[lon, lat] vertex-average centroid")
    local_centroid: list[float]
    bounds: BoundsModel
    max_dimension: float
    area: float = 0.0
    is_valid: bool = True
    simplified_ring: list[list[float]] = Field(default_factory=list)
    zoom: int
    fly_to: FlyToModel
    skipped_points: int = 0
    mask: MaskSummary | None = None
    processing_time_ms: float = 0.0


class ParcelModel(BaseModel):
    idu: str
    code_insee: str
    nom_commune: str
    section: str
    numero: str
    prefixe: str
    surface: float
    formatted_id: str
    formatted_surface: str
    source: str
    updated_at: datetime


class FeatureResponse(BaseModel):
    parcel: ParcelModel
    shape: ShapeResponse
