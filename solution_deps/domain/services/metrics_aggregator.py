"""
Metrics Aggregator

Summary metrics for one analysis run:

    type_counts        components per ComponentType (zero-filled)
    most_connected     top N components by out-degree + in-degree,
                       ties broken by catalog order
    complexity_score   average_out_degree * 10 + chain_count * 10

The complexity score is a monotonic proxy for maintainability risk, not a
percentage. ``complexity_band`` buckets it into qualitative bands using
caller-supplied thresholds.
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import Optional, Sequence, Tuple

from solution_deps.domain.models import (
    CircularChain,
    ComponentType,
    ConnectedComponent,
    DependencyGraph,
    Metrics,
)

logger = logging.getLogger(__name__)

DEFAULT_TOP_N = 5
DEFAULT_PRECISION = 1

#: Upper bounds (exclusive) of the Low, Moderate and High bands.
DEFAULT_COMPLEXITY_BANDS: Tuple[float, float, float] = (20.0, 40.0, 70.0)

BAND_LABELS = ("Low", "Moderate", "High", "Critical")


def complexity_score(
    average_out_degree: float,
    chain_count: int,
    precision: Optional[int] = DEFAULT_PRECISION,
) -> float:
    score = average_out_degree * 10 + chain_count * 10
    return round(score, precision) if precision is not None else score


def complexity_band(
    score: float,
    bands: Sequence[float] = DEFAULT_COMPLEXITY_BANDS,
) -> str:
    if len(bands) != len(BAND_LABELS) - 1 or list(bands) != sorted(bands):
        raise ValueError(f"complexity bands must be {len(BAND_LABELS) - 1} ascending thresholds: {bands!r}")
    for label, upper in zip(BAND_LABELS, bands):
        if score < upper:
            return label
    return BAND_LABELS[-1]


def most_connected(graph: DependencyGraph, top_n: int = DEFAULT_TOP_N) -> Tuple[ConnectedComponent, ...]:
    if top_n < 0:
        raise ValueError(f"top_n must be non-negative, got {top_n}")
    ranked = sorted(
        graph,
        key=lambda cid: (-(graph.out_degree(cid) + graph.in_degree(cid)), graph.order_of(cid)),
    )
    result = []
    for cid in ranked[:top_n]:
        comp = graph.components[cid]
        result.append(ConnectedComponent(
            id=cid,
            name=comp.name,
            type=comp.type.value,
            out_degree=graph.out_degree(cid),
            in_degree=graph.in_degree(cid),
        ))
    return tuple(result)


def compute_metrics(
    graph: DependencyGraph,
    chains: Sequence[CircularChain],
    top_n: int = DEFAULT_TOP_N,
    precision: Optional[int] = DEFAULT_PRECISION,
    bands: Sequence[float] = DEFAULT_COMPLEXITY_BANDS,
) -> Metrics:
    """
    Aggregate metrics over *graph*.

    The average out-degree is taken over every component in the graph,
    virtual placeholders included, i.e. ``edges / components``.
    """
    counts = Counter(comp.type.value for comp in graph.components.values())
    type_counts = {t.value: counts.get(t.value, 0) for t in ComponentType}

    average = len(graph.edges) / len(graph) if len(graph) else 0.0
    score = complexity_score(average, len(chains), precision)

    metrics = Metrics(
        type_counts=type_counts,
        most_connected=most_connected(graph, top_n),
        average_out_degree=average,
        chain_count=len(chains),
        complexity_score=score,
        complexity_band=complexity_band(score, bands),
    )
    logger.info("Metrics: complexity %s (%s), avg out-degree %.2f", score, metrics.complexity_band, average)
    return metrics
