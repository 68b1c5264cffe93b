"""Monitoring module for container loads.

Provides volume, weight and utilisation figures for a set of cargo items.
"""

from .metrics import (
    LoadMetrics,
    cargo_item_volume,
    container_volume,
    filter_placed_items,
    format_summary,
    load_metrics,
    load_metrics_outcome,
    total_cargo_volume,
    total_weight,
    utilization,
)

__all__ = [
    "LoadMetrics",
    "cargo_item_volume",
    "container_volume",
    "filter_placed_items",
    "format_summary",
    "load_metrics",
    "load_metrics_outcome",
    "total_cargo_volume",
    "total_weight",
    "utilization",
]
