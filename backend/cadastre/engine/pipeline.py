"""Pipeline orchestrator — runs transforms in dependency order, stops a branch on failure."""

from __future__ import annotations

import importlib
import logging
import pkgutil
import time
from collections.abc import Mapping
from typing import Any

from cadastre.engine.config import PipelineConfig
from cadastre.engine.context import ParcelResult, PipelineContext
from cadastre.engine.registry import Layer, TransformRegistry, TransformSpec, get_registry

logger = logging.getLogger(__name__)

_LAYER_PACKAGES = ["layer0", "layer1", "layer2", "layer3", "layer4"]


class Pipeline:
    """Orchestrates one extract → project → simplify → summarize → rasterize pass."""

    def __init__(
        self,
        registry: TransformRegistry | None = None,
        config: PipelineConfig | None = None,
    ) -> None:
        self.registry = registry or get_registry()
        self.config = config or PipelineConfig()

    def run(self, ctx: PipelineContext) -> PipelineContext:
        """Run every registered transform on ``ctx``.

        A failing transform is recorded in ``ctx.errors`` / ``ctx.failures``
        and every transform depending on it, directly or not, is skipped.
        """
        start = time.perf_counter()

        skip_ids = self._adaptive_gate(ctx)
        requested = {s.id for s in self.registry.all()} - skip_ids
        ordered = self.registry.resolve_order(requested)

        logger.info(
            "Pipeline: %d transforms queued (%d skipped)",
            len(ordered),
            len(skip_ids),
        )

        for spec in ordered:
            self._run_one(ctx, spec)

        total = (time.perf_counter() - start) * 1000
        logger.info(
            "Pipeline complete: %d/%d transforms in %.1fms",
            len(ctx.completed_transforms),
            len(ordered),
            total,
        )
        return ctx

    def run_layer(self, ctx: PipelineContext, layer: Layer) -> PipelineContext:
        """Run only transforms in a specific layer."""
        for spec in self.registry.get_layer(layer):
            self._run_one(ctx, spec)
        return ctx

    def process(self, document: str | bytes | Mapping[str, Any]) -> ParcelResult:
        """Full pass over one geometry document.

        Raises the first GeometryError recorded by a transform: the payload
        holds no usable parcel.
        """
        ctx = PipelineContext(document=document, config=self.config)
        self.run(ctx)
        return ctx.to_result()

    def _run_one(self, ctx: PipelineContext, spec: TransformSpec) -> None:
        blocked = [d for d in spec.dependencies if d in ctx.failures or d in ctx.skipped_transforms]
        if blocked:
            ctx.skipped_transforms.add(spec.id)
            logger.debug("  %s skipped: %s did not complete", spec.id, ", ".join(blocked))
            return

        t0 = time.perf_counter()
        try:
            spec.fn(ctx)
            ctx.completed_transforms.add(spec.id)
            elapsed = (time.perf_counter() - t0) * 1000
            logger.debug("  %s completed in %.1fms", spec.id, elapsed)
        except Exception as e:
            ctx.errors[spec.id] = str(e)
            ctx.failures[spec.id] = e
            logger.warning("  %s FAILED: %s", spec.id, e)

    def _adaptive_gate(self, ctx: PipelineContext) -> set[str]:
        """Transforms to leave out for this context's configuration."""
        skip: set[str] = set()
        if not ctx.config.rasterize:
            skip.update(s.id for s in self.registry.get_layer(Layer.RASTERIZATION))
        return skip


def register_transforms() -> None:
    """Import all transform modules so @transform decorators fire."""
    for layer_name in _LAYER_PACKAGES:
        package_name = f"cadastre.engine.{layer_name}"
        package = importlib.import_module(package_name)
        for _, module_name, _ in pkgutil.iter_modules(package.__path__):
            importlib.import_module(f"{package_name}.{module_name}")


def create_pipeline(config: PipelineConfig | None = None) -> Pipeline:
    """Factory for a pipeline over the shared registry, with all stages loaded."""
    register_transforms()
    return Pipeline(config=config)
