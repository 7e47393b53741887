"""
Layer routes: /api/layers
"""

from fastapi import APIRouter

from nlcompiler.core.compiler import PIPELINE
from nlcompiler.core.layers import get_layer


router = APIRouter(prefix="/api/layers", tags=["layers"])


@router.get("")
async def get_all_layers():
    """List the compiler phases in execution order."""
    layers = []
    for i, lid in enumerate(PIPELINE):
        layer = get_layer(lid)
        layers.append({
            "phase": i + 1,
            "id": lid,
            "name": layer.name,
            "ext": layer.ext,
            "depends_on": layer.depends_on,
        })
    return {"layers": layers}
