# src/nlcompiler/core/layers/__init__.py
"""
Phase-based compilation architecture.

Each layer is one compiler phase:
  - Has a unique string ID and a display name
  - Declares the layers whose output it consumes
  - Has a file extension for its plain-text view
  - Can process inputs → data, with a one-line summary message
  - Can format its data as text
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any


@dataclass
class LayerResult:
    success: bool
    data: Any
    message: str = ""


class UnknownLayerError(ValueError):
    pass


class LayerCycleError(ValueError):
    pass


class Layer(ABC):
    """Base class for all layers."""

    id: str  # unique identifier
    name: str = ""  # human-readable phase name
    depends_on: list[str] = []  # layer ids this depends on
    ext: str = ".txt"  # text view file extension

    @abstractmethod
    def process(self, inputs: dict[str, Any], context: dict) -> LayerResult:
        """
        Process inputs from dependency layers.

        Args:
            inputs: {layer_id: data} for each dependency, plus "_request"
            context: shared context (resolver, config, session, ...)

        Returns:
            LayerResult with processed data and a detail line
        """
        pass

    async def aprocess(self, inputs: dict[str, Any], context: dict) -> LayerResult:
        """Async entry point; layers with I/O override this."""
        return self.process(inputs, context)

    @abstractmethod
    def format_dsl(self, data: Any) -> str:
        """Format data as readable text."""
        pass


# Layer registry, in registration order
LAYERS: dict[str, Layer] = {}


def register_layer(layer: Layer) -> Layer:
    """Register a layer instance; re-registering an id replaces it."""
    LAYERS[layer.id] = layer
    return layer


def get_layer(layer_id: str) -> Layer:
    try:
        return LAYERS[layer_id]
    except KeyError:
        raise UnknownLayerError(
            f"Unknown layer: {layer_id}. Available: {', '.join(LAYERS)}"
        ) from None


def list_layers() -> list[str]:
    return list(LAYERS)


def resolve_dependencies(layer_ids: list[str]) -> list[str]:
    """
    Every layer needed to produce `layer_ids`, dependencies first.

    Raises UnknownLayerError for an unregistered id and LayerCycleError when
    depends_on loops back on itself.
    """
    order: list[str] = []
    done: set[str] = set()
    path: list[str] = []

    def visit(lid: str) -> None:
        if lid in done:
            return
        if lid in path:
            cycle = " -> ".join(path[path.index(lid):] + [lid])
            raise LayerCycleError(f"Dependency cycle: {cycle}")
        path.append(lid)
        for dep in get_layer(lid).depends_on:
            visit(dep)
        path.pop()
        done.add(lid)
        order.append(lid)

    for lid in layer_ids:
        visit(lid)
    return order
