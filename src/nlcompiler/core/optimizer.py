# src/nlcompiler/core/optimizer.py
"""
Graph optimization.

Pass 1: merge nodes sharing (label, kind)
Pass 2: drop edges sharing (from, to, relation)
Pass 3: drop edges with confidence below PRUNE_THRESHOLD

Dedup runs before pruning, so pruning sees merged data. The input graph is
not modified.
"""

import copy
import logging

from nlcompiler.core.models import (
    Edge,
    IRGraph,
    Node,
    OptimizationStats,
    OptimizedGraph,
)


logger = logging.getLogger(__name__)

PRUNE_THRESHOLD = 0.4


def _merge_nodes(nodes: list[Node], log: list[str]) -> tuple[list[Node], dict[int, int]]:
    kept: dict[tuple[str, str], Node] = {}
    remap: dict[int, int] = {}

    for node in nodes:
        key = (node.label, node.kind)
        if key not in kept:
            kept[key] = node
            remap[node.id] = node.id
            continue

        first = kept[key]
        if node.confidence > first.confidence:
            first.properties = node.properties
        remap[node.id] = first.id
        log.append(f"Merged duplicate node: {node.label}")

    return list(kept.values()), remap


def _dedup_edges(edges: list[Edge], remap: dict[int, int], log: list[str]) -> list[Edge]:
    seen = set()
    unique = []

    for edge in edges:
        edge.source = remap.get(edge.source, edge.source)
        edge.target = remap.get(edge.target, edge.target)
        key = (edge.source, edge.target, edge.relation)
        if key in seen:
            log.append(f"Removed redundant edge: {edge.relation}")
            continue
        seen.add(key)
        unique.append(edge)

    return unique


def _prune_edges(edges: list[Edge], log: list[str]) -> list[Edge]:
    kept = []
    for edge in edges:
        if edge.confidence < PRUNE_THRESHOLD:
            log.append(f"Removed low-confidence edge: {edge.relation} ({edge.confidence:.2f})")
            continue
        kept.append(edge)
    return kept


def optimize(ir: IRGraph) -> OptimizedGraph:
    nodes = copy.deepcopy(ir.nodes)
    edges = copy.deepcopy(ir.edges)
    log: list[str] = []

    nodes, remap = _merge_nodes(nodes, log)
    edges = _dedup_edges(edges, remap, log)
    edges = _prune_edges(edges, log)

    before = len(ir.nodes)
    reduction = round((1 - len(nodes) / before) * 100, 2) if before else 0.0

    stats = OptimizationStats(
        nodes_before=before,
        nodes_after=len(nodes),
        edges_before=len(ir.edges),
        edges_after=len(edges),
        reduction_percentage=reduction,
    )
    logger.debug(f"optimizer: {len(log)} changes, {stats.to_dict()}")

    return OptimizedGraph(
        intent=ir.intent,
        nodes=nodes,
        edges=edges,
        format=ir.format,
        version=ir.version,
        optimizations_applied=log,
        optimization_stats=stats,
    )
