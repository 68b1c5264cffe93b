"""Load metrics: cargo volume, weight and container utilisation.

Pure arithmetic over a set of items, independent of layering. Callers
normally pass ``filter_placed_items(items)`` so the figures describe what is
actually in the container.
"""

from __future__ import annotations

import logging
import math
from dataclasses import asdict, dataclass
from numbers import Real
from typing import Any, Sequence

from ..core.models import CargoItem, ContainerType
from ..core.outcome import Outcome
from ..core.settings import get_settings
from ..core.units import normalize_outcome

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoadMetrics:
    """Aggregate figures for one container load.

    Attributes:
        cargo_volume: Sum of item volume × quantity (m³).
        container_volume: Container interior volume (m³).
        utilization_percent: cargo_volume / container_volume × 100.
        total_weight: Sum of item weight × quantity (kg).
        item_count: Number of item entries aggregated.
    """

    cargo_volume: float = 0.0
    container_volume: float = 0.0
    utilization_percent: float = 0.0
    total_weight: float = 0.0
    item_count: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain dictionary.

        Example:
            >>> LoadMetrics(1.0, 33.14, 3.02, 500.0, 1).to_dict()["total_weight"]
            500.0
        """
        return asdict(self)


def _number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool) and math.isfinite(value)


def _quantity(item: CargoItem) -> float:
    """Quantity, with a missing or zero value counting as one unit."""
    q = getattr(item, "quantity", None)
    return q if _number(q) and q else 1


def _items_outcome(items: Any, caller: str) -> Outcome[list]:
    if not isinstance(items, (list, tuple)):
        return Outcome.degrade([], f"{caller}: items is not a list: {type(items).__name__}")
    return Outcome.success(list(items))


# ─────────────────────────────────────────────────────────────────────────────
# Building blocks
# ─────────────────────────────────────────────────────────────────────────────

def cargo_item_volume_outcome(item: CargoItem) -> Outcome[float]:
    dims = normalize_outcome(item)
    if dims.degraded:
        return Outcome.degrade(0.0, *dims.issues)
    return Outcome.success(dims.value.volume * _quantity(item))


def cargo_item_volume(item: CargoItem) -> float:
    """Volume of one item entry in m³, quantity included."""
    return cargo_item_volume_outcome(item).report(logger, "cargo_item_volume", get_settings().strict)


def _sum_volume(items: list) -> Outcome[float]:
    total = 0.0
    issues: tuple = ()
    for item in items:
        part = cargo_item_volume_outcome(item)
        total += part.value
        issues += part.issues
    return Outcome(value=total, issues=issues)


def _sum_weight(items: list) -> float:
    total = 0.0
    for item in items:
        weight = getattr(item, "weight", None)
        total += (weight if _number(weight) else 0.0) * _quantity(item)
    return total


def total_cargo_volume(items: Sequence[CargoItem]) -> float:
    """Summed volume of ``items`` in m³."""
    checked = _items_outcome(items, "total_cargo_volume")
    total = _sum_volume(checked.value).merge(checked)
    return total.report(logger, "total_cargo_volume", get_settings().strict)


def total_weight(items: Sequence[CargoItem]) -> float:
    """Summed weight × quantity in kg; a missing weight counts as 0."""
    checked = _items_outcome(items, "total_weight")
    total = Outcome(value=_sum_weight(checked.value), issues=checked.issues)
    return total.report(logger, "total_weight", get_settings().strict)


def container_volume(container: ContainerType | None) -> float:
    """Interior volume in m³, 0 when there is no container."""
    if container is None:
        return Outcome.degrade(0.0, "container is None").report(
            logger, "container_volume", get_settings().strict,
        )
    return container.volume


def utilization(cargo_volume: float, container_volume: float) -> float:
    """Percentage of ``container_volume`` taken by ``cargo_volume``; 0 for an empty container.

    Example:
        >>> utilization(0.5, 2.0)
        25.0
        >>> utilization(1.0, 0.0)
        0.0
    """
    if not container_volume:
        return Outcome.degrade(0.0, "container volume is 0").report(
            logger, "utilization", get_settings().strict,
        )
    return cargo_volume / container_volume * 100


def filter_placed_items(items: Sequence[CargoItem]) -> list[CargoItem]:
    """Items flagged as placed in the container."""
    checked = _items_outcome(items, "filter_placed_items").report(
        logger, "filter_placed_items", get_settings().strict,
    )
    placed = [it for it in checked if getattr(it, "is_placed", False) is True]
    logger.debug("Filtered placed items: %d out of %d", len(placed), len(checked))
    return placed


# ─────────────────────────────────────────────────────────────────────────────
# Aggregate
# ─────────────────────────────────────────────────────────────────────────────

def load_metrics_outcome(
    items: Sequence[CargoItem], container: ContainerType | None,
) -> Outcome[LoadMetrics]:
    """Compute LoadMetrics and collect every degradation met on the way."""
    checked = _items_outcome(items, "load_metrics")
    volume = _sum_volume(checked.value)
    issues = checked.issues + volume.issues

    if container is None:
        issues += ("load_metrics: container is None",)
        c_volume = 0.0
    else:
        c_volume = container.volume

    util = volume.value / c_volume * 100 if c_volume else 0.0
    metrics = LoadMetrics(
        cargo_volume=volume.value,
        container_volume=c_volume,
        utilization_percent=util,
        total_weight=_sum_weight(checked.value),
        item_count=len(checked.value),
    )
    return Outcome(value=metrics, issues=issues)


def load_metrics(items: Sequence[CargoItem], container: ContainerType | None) -> LoadMetrics:
    """Volume, weight and utilisation of ``items`` in ``container``.

    Malformed input degrades to zeros with a warning (or raises under strict
    settings); a zero-volume container gives 0 % utilisation.

    Example:
        >>> from loadplan.core.containers import get_container_type
        >>> load_metrics([], get_container_type("20ft")).utilization_percent
        0.0
    """
    metrics = load_metrics_outcome(items, container).report(logger, "load_metrics", get_settings().strict)
    logger.debug(
        "load_metrics: %.2f / %.2f m³ (%.1f%%), %.1f kg",
        metrics.cargo_volume, metrics.container_volume,
        metrics.utilization_percent, metrics.total_weight,
    )
    return metrics


def format_summary(metrics: LoadMetrics, container: ContainerType | None = None) -> str:
    """Human-readable multi-line summary of a load.

    Example:
        >>> text = format_summary(LoadMetrics(2.0, 33.14, 6.04, 800.0, 2))
        >>> "Utilization: 6.0%" in text
        True
    """
    title = f"Load summary: {container.name}" if container is not None else "Load summary"
    lines = [
        "=" * 40,
        title,
        "=" * 40,
        f"Items:       {metrics.item_count}",
        f"Cargo:       {metrics.cargo_volume:.2f} m³",
        f"Container:   {metrics.container_volume:.2f} m³",
        f"Utilization: {metrics.utilization_percent:.1f}%",
        f"Weight:      {metrics.total_weight:.1f} kg",
        "=" * 40,
    ]
    return "\n".join(lines)
