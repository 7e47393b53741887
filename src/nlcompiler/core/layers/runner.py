# src/nlcompiler/core/layers/runner.py
"""
Layer execution runner.

Runs the requested layers (dependencies auto-resolved) in order, reporting a
status transition for every phase. Execution stops at the first failing
layer; later layers stay "pending".
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable

from nlcompiler.core.layers import LayerResult, get_layer, resolve_dependencies


logger = logging.getLogger(__name__)

PENDING = "pending"
PROCESSING = "processing"
COMPLETE = "complete"
ERROR = "error"


@dataclass
class PhaseStatus:
    phase: int | str  # 1-based position, or "error" for the terminal error entry
    id: str
    name: str
    status: str = PENDING
    details: str = ""

    def to_dict(self) -> dict:
        return {
            "phase": self.phase,
            "id": self.id,
            "name": self.name,
            "status": self.status,
            "details": self.details,
        }


PhaseCallback = Callable[[PhaseStatus], None]


class LayerRunner:
    """Runs layers on a single compile request."""

    def __init__(self, context: dict = None, on_phase: PhaseCallback | None = None):
        """
        Args:
            context: shared context (resolver, config, session, ...)
            on_phase: called with a PhaseStatus on every status change
        """
        self.context = context or {}
        self.on_phase = on_phase

    def _notify(self, phase: PhaseStatus):
        if self.on_phase is not None:
            self.on_phase(phase)

    def plan(self, layer_ids: list[str]) -> list[PhaseStatus]:
        return [
            PhaseStatus(phase=i + 1, id=lid, name=get_layer(lid).name or lid)
            for i, lid in enumerate(resolve_dependencies(layer_ids))
        ]

    async def run(self, request, layer_ids: list[str]) -> tuple[dict[str, LayerResult], list[PhaseStatus]]:
        """
        Run specified layers on a request.

        Returns:
            ({layer_id: LayerResult} for each layer run, phase statuses)
        """
        phases = self.plan(layer_ids)
        results: dict[str, LayerResult] = {}
        data: dict[str, Any] = {}

        for phase in phases:
            layer = get_layer(phase.id)

            inputs = {"_request": request}
            for dep in layer.depends_on:
                inputs[dep] = data[dep]

            phase.status = PROCESSING
            self._notify(phase)

            try:
                result = await layer.aprocess(inputs, self.context)
            except Exception as e:
                logger.exception(f"layer '{layer.id}' failed")
                result = LayerResult(False, None, f"error: {e}")

            results[layer.id] = result
            phase.details = result.message

            if not result.success:
                phase.status = ERROR
                self._notify(phase)
                break

            data[layer.id] = result.data
            phase.status = COMPLETE
            logger.info(f"{layer.id}: {result.message}")
            self._notify(phase)

        return results, phases
