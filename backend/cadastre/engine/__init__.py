"""Cadastre parcel geometry engine."""

from cadastre.engine.registry import transform, Layer, get_registry
from cadastre.engine.config import PipelineConfig
from cadastre.engine.context import ParcelResult, PipelineContext
from cadastre.engine.pipeline import Pipeline, create_pipeline

__all__ = [
    "transform",
    "Layer",
    "get_registry",
    "PipelineConfig",
    "ParcelResult",
    "PipelineContext",
    "Pipeline",
    "create_pipeline",
]
