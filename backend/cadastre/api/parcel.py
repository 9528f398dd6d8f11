"""POST /api/parcel/* — run the geometry pipeline on a parcel payload."""

from __future__ import annotations

import logging
import time
from collections.abc import Mapping
from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response

from cadastre.config import Settings
from cadastre.dependencies import get_settings
from cadastre.engine.config import PipelineConfig
from cadastre.engine.context import ParcelResult
from cadastre.engine.pipeline import create_pipeline
from cadastre.errors import GeometryError
from cadastre.geojson.apicarto import parse_commune_response, parse_parcel_response
from cadastre.models.requests import FeatureRequest, PipelineOptions, ShapeRequest
from cadastre.models.responses import (
    BoundsModel,
    FeatureResponse,
    FlyToModel,
    MaskSummary,
    ParcelModel,
    ShapeResponse,
)
from cadastre.utils.rasterizer import mask_to_png
from cadastre.utils.types import GeoPoint

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/parcel")


def build_config(options: PipelineOptions, settings: Settings, *, rasterize: bool | None = None) -> PipelineConfig:
    """Request options over settings defaults. Invalid values answer 422."""
    reference = None
    if options.reference_lon is not None and options.reference_lat is not None:
        reference = GeoPoint(options.reference_lon, options.reference_lat)

    try:
        return PipelineConfig(
            tolerance_m=options.tolerance_m if options.tolerance_m is not None else settings.default_tolerance_m,
            mask_resolution=(
                options.mask_resolution if options.mask_resolution is not None else settings.default_mask_resolution
            ),
            mask_padding=options.mask_padding if options.mask_padding is not None else settings.default_mask_padding,
            rasterize=options.rasterize if rasterize is None else rasterize,
            reference=reference,
        )
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e


def _process(geometry: str | Mapping[str, Any], config: PipelineConfig) -> ParcelResult:
    try:
        return create_pipeline(config).process(geometry)
    except GeometryError as e:
        logger.info("No parcel: %s", e)
        raise HTTPException(status_code=404, detail=f"No parcel at this location: {e}") from e


def shape_response(result: ParcelResult, elapsed_ms: float = 0.0) -> ShapeResponse:
    shape = result.shape
    mask = result.mask
    return ShapeResponse(
        centroid=[shape.centroid.lon, shape.centroid.lat],
        local_centroid=[shape.local_centroid.x, shape.local_centroid.z],
        bounds=BoundsModel(
            min=list(shape.bounds.min),
            max=list(shape.bounds.max),
            width=shape.bounds.width,
            height=shape.bounds.height,
        ),
        max_dimension=shape.max_dimension,
        area=shape.area,
        is_valid=shape.is_valid,
        simplified_ring=[[p.x, p.z] for p in shape.simplified_ring],
        zoom=result.zoom,
        fly_to=FlyToModel(
            latitude=result.fly_to.latitude,
            longitude=result.fly_to.longitude,
            zoom=result.fly_to.zoom,
        ),
        skipped_points=result.skipped_points,
        mask=(
            MaskSummary(
                resolution=mask.resolution,
                scale=mask.scale,
                center=list(mask.center),
                fill_fraction=mask.fill_fraction,
            )
            if mask is not None
            else None
        ),
        processing_time_ms=round(elapsed_ms, 1),
    )


@router.post("/shape", response_model=ShapeResponse)
def parcel_shape(request: ShapeRequest, settings: Settings = Depends(get_settings)) -> ShapeResponse:
    """Shape summary, zoom and fly-to target for one parcel geometry."""
    start = time.perf_counter()
    config = build_config(request.options, settings)
    result = _process(request.geometry, config)
    return shape_response(result, (time.perf_counter() - start) * 1000)


@router.post("/mask.png")
def parcel_mask(request: ShapeRequest, settings: Settings = Depends(get_settings)) -> Response:
    """Highlight texture of the parcel fill mask, north up."""
    config = build_config(request.options, settings, rasterize=True)
    result = _process(request.geometry, config)
    return Response(content=mask_to_png(result.mask), media_type="image/png")


@router.post("/feature", response_model=FeatureResponse)
def parcel_feature(request: FeatureRequest, settings: Settings = Depends(get_settings)) -> FeatureResponse:
    """Decode an API Carto lookup and run the pipeline on its parcel geometry."""
    start = time.perf_counter()
    config = build_config(request.options, settings)

    commune_name = parse_commune_response(request.commune) if request.commune is not None else ""
    record = parse_parcel_response(request.parcel, commune_name=commune_name)
    if record is None or record.geometry is None:
        raise HTTPException(status_code=404, detail="No parcel at this location: empty response")

    result = _process(record.geometry, config)
    return FeatureResponse(
        parcel=ParcelModel(
            idu=record.idu,
            code_insee=record.code_insee,
            nom_commune=record.nom_commune,
            section=record.section,
            numero=record.numero,
            prefixe=record.prefixe,
            surface=record.surface,
            formatted_id=record.formatted_id,
            formatted_surface=record.formatted_surface,
            source=record.source,
            updated_at=record.updated_at,
        ),
        shape=shape_response(result, (time.perf_counter() - start) * 1000),
    )
