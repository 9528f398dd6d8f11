"""Transform registry — each pipeline stage is a standalone function registered via decorator.

Usage:
    @transform(id="T2.01", layer=Layer.SIMPLIFICATION, dependencies=["T1.01"])
    def douglas_peucker(ctx: PipelineContext) -> None:
        ctx.simplified_ring = simplify(ctx.local_ring, ctx.config.tolerance_m)

Adding a stage = creating one module with the decorator under engine/layerN.
"""

from __future__ import annotations

import enum
import heapq
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from cadastre.engine.context import PipelineContext

logger = logging.getLogger(__name__)


class Layer(enum.IntEnum):
    DECODING = 0
    PROJECTION = 1
    SIMPLIFICATION = 2
    SUMMARY = 3
    RASTERIZATION = 4


@dataclass
class TransformSpec:
    id: str
    layer: Layer
    fn: Callable[["PipelineContext"], None]
    dependencies: list[str] = field(default_factory=list)
    description: str = ""


class TransformRegistry:
    """Registry of pipeline stages keyed by transform ID."""

    def __init__(self) -> None:
        self._transforms: dict[str, TransformSpec] = {}

    def register(self, spec: TransformSpec) -> None:
        if spec.id in self._transforms:
            raise ValueError(f"Duplicate transform ID: {spec.id}")
        self._transforms[spec.id] = spec
        logger.debug("Registered transform %s (%s)", spec.id, spec.layer.name)

    def get(self, transform_id: str) -> TransformSpec:
        return self._transforms[transform_id]

    def get_layer(self, layer: Layer) -> list[TransformSpec]:
        return sorted((s for s in self._transforms.values() if s.layer == layer), key=lambda s: s.id)

    def all(self) -> list[TransformSpec]:
        return sorted(self._transforms.values(), key=lambda s: (s.layer, s.id))

    def resolve_order(self, requested_ids: set[str] | None = None) -> list[TransformSpec]:
        """Dependency order, lowest ID first among ready stages.

        ``requested_ids`` pulls in transitive dependencies; None means all.
        """
        pool = self._transforms
        if requested_ids is not None:
            wanted: set[str] = set()
            stack = list(requested_ids)
            while stack:
                tid = stack.pop()
                if tid in wanted or tid not in pool:
                    continue
                wanted.add(tid)
                stack.extend(pool[tid].dependencies)
            pool = {tid: spec for tid, spec in pool.items() if tid in wanted}

        waiting = {tid: {d for d in spec.dependencies if d in pool} for tid, spec in pool.items()}
        ready = [tid for tid, deps in waiting.items() if not deps]
        heapq.heapify(ready)
        ordered: list[TransformSpec] = []

        while ready:
            tid = heapq.heappop(ready)
            ordered.append(pool[tid])
            for other_id, deps in waiting.items():
                if tid in deps:
                    deps.discard(tid)
                    if not deps:
                        heapq.heappush(ready, other_id)

        if len(ordered) != len(pool):
            stuck = set(pool) - {s.id for s in ordered}
            raise ValueError(f"Circular dependency detected among: {stuck}")

        return ordered

    @property
    def count(self) -> int:
        return len(self._transforms)


# Module-level singleton
_registry = TransformRegistry()


def get_registry() -> TransformRegistry:
    return _registry


def transform(
    *,
    id: str,
    layer: Layer,
    dependencies: list[str] | None = None,
    description: str = "",
):
    """Decorator to register a stage function on the shared registry."""

    def decorator(fn: Callable[["PipelineContext"], None]):
        _registry.register(
            TransformSpec(
                id=id,
                layer=layer,
                fn=fn,
                dependencies=dependencies or [],
                description=description,
            )
        )
        return fn

    return decorator
