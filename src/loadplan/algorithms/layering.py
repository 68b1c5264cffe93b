"""
Layer detection and box numbering for placed cargo.

After every placement or removal the caller re-runs
``calculate_layer_assignments`` to refresh the ``<layer>-<box>`` labels
shown on each item. Labels are recomputed from scratch every time and are
only stable for a fixed set of placed items.

Two steps:
  1. detect_layers      — cluster placed items by base elevation, number
                          the clusters bottom to top
  2. assign_box_numbers — order each layer by x (then z) and number it

Clustering modes (``PlannerSettings.layer_clustering``):
  anchor          Items are scanned in input order and join the first layer
                  whose *running minimum* elevation is within the threshold.
                  The minimum is fixed by the first member, so a layer can
                  hold items up to twice the threshold apart, and membership
                  can depend on input order.
  single_linkage  Elevations are sorted first and split wherever the gap
                  between neighbours reaches the threshold. Membership does
                  not depend on input order.
"""

import logging
from functools import cmp_to_key, reduce
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from ..core.models import CargoItem, Layer, LayerSummaryEntry
from ..core.outcome import Outcome
from ..core.settings import PlannerSettings, get_settings

logger = logging.getLogger(__name__)


def _check_items(items, caller: str, foreign: str) -> Outcome[List[CargoItem]]:
    """Accept a list or tuple of items; anything else degrades to []."""
    if not isinstance(items, (list, tuple)):
        return Outcome.degrade([], f"{caller}: items is not a list: {type(items).__name__}")
    bad = [i for i, it in enumerate(items) if not isinstance(it, CargoItem)]
    if bad:
        return Outcome.degrade(list(items), f"{caller}: entries at {bad} are not CargoItem and were {foreign}")
    return Outcome.success(list(items))


def _placed(items: Sequence) -> List[CargoItem]:
    return [it for it in items if isinstance(it, CargoItem) and it.has_placement]


# ─────────────────────────────────────────────────────────────────────────────
# Layer detection
# ─────────────────────────────────────────────────────────────────────────────

def _anchor_layers(placed: List[CargoItem], threshold: float) -> Tuple[Layer, ...]:
    """Fold items into layers anchored on each layer's running minimum."""

    def join(layers: Tuple[Layer, ...], item: CargoItem) -> Tuple[Layer, ...]:
        y = item.position.y
        for i, layer in enumerate(layers):
            if abs(y - layer.min_y) < threshold:
                grown = Layer(
                    layer_number=0,
                    min_y=layer.min_y,
                    max_y=max(layer.max_y, y),
                    item_ids=layer.item_ids + (item.id,),
                )
                return layers[:i] + (grown,) + layers[i + 1:]
        return layers + (Layer(layer_number=0, min_y=y, max_y=y, item_ids=(item.id,)),)

    return reduce(join, placed, ())


def _single_linkage_layers(placed: List[CargoItem], threshold: float) -> Tuple[Layer, ...]:
    """Split sorted elevations wherever neighbours are ``threshold`` or more apart."""
    ys = np.array([it.position.y for it in placed], dtype=np.float64)
    order = np.argsort(ys, kind="stable")
    breaks = np.diff(ys[order]) >= threshold
    cluster_of_sorted = np.concatenate(([0], np.cumsum(breaks)))

    cluster = np.empty(len(placed), dtype=np.int64)
    cluster[order] = cluster_of_sorted

    layers = []
    for c in range(int(cluster_of_sorted[-1]) + 1):
        members = np.flatnonzero(cluster == c)  # input order
        member_ys = ys[members]
        layers.append(Layer(
            layer_number=0,
            min_y=float(member_ys.min()),
            max_y=float(member_ys.max()),
            item_ids=tuple(placed[i].id for i in members),
        ))
    return tuple(layers)


def detect_layers(
    items: Sequence[CargoItem], settings: Optional[PlannerSettings] = None,
) -> List[Layer]:
    """
    Group placed items into horizontal layers, numbered from the floor up.

    Only items flagged placed and carrying a position take part.

    Args:
        items:    Full item list, in the caller's order.
        settings: Planner settings; the active settings when omitted.

    Returns:
        Layers sorted by ascending ``min_y`` and numbered 1..N.
    """
    if settings is None:
        settings = get_settings()
    items = _check_items(items, "detect_layers", "ignored").report(
        logger, "detect_layers", settings.strict,
    )
    placed = _placed(items)
    logger.debug("detect_layers: processing %d placed items", len(placed))
    if not placed:
        return []

    if settings.layer_clustering == "single_linkage":
        raw = _single_linkage_layers(placed, settings.layer_threshold)
    else:
        raw = _anchor_layers(placed, settings.layer_threshold)

    layers = [
        Layer(layer_number=n, min_y=layer.min_y, max_y=layer.max_y, item_ids=layer.item_ids)
        for n, layer in enumerate(sorted(raw, key=lambda layer: layer.min_y), start=1)
    ]
    logger.debug("detect_layers: found %d layers: %s", len(layers), layers)
    return layers


# ─────────────────────────────────────────────────────────────────────────────
# Box numbering
# ─────────────────────────────────────────────────────────────────────────────

def _position_order(tolerance: float):
    """Left to right by x; items within ``tolerance`` in x go front to back by z."""

    def compare(a: CargoItem, b: CargoItem) -> float:
        x_diff = a.position.x - b.position.x
        if abs(x_diff) > tolerance:
            return x_diff
        return a.position.z - b.position.z

    return cmp_to_key(compare)


def assign_box_numbers(
    items: Sequence[CargoItem],
    layers: Sequence[Layer],
    settings: Optional[PlannerSettings] = None,
) -> List[CargoItem]:
    """
    Stamp ``layer_number`` and ``box_number_in_layer`` on each layer member.

    Returns a new list; members are replaced by annotated copies, all other
    items are passed through untouched. The input list is not modified.
    """
    if settings is None:
        settings = get_settings()
    outcome = _check_items(items, "assign_box_numbers", "passed through unchanged")
    if not isinstance(layers, (list, tuple)):
        outcome = outcome.merge(Outcome.degrade(None, "assign_box_numbers: layers is not a list"))
        layers = []
    items = outcome.report(logger, "assign_box_numbers", settings.strict)

    key = _position_order(settings.box_order_tolerance)
    labels: Dict[int, Tuple[int, int]] = {}

    for layer in layers:
        member_ids = set(layer.item_ids)
        members = [
            (idx, it) for idx, it in enumerate(items)
            if isinstance(it, CargoItem) and it.has_placement and it.id in member_ids
        ]
        members.sort(key=lambda pair: key(pair[1]))
        logger.debug("assign_box_numbers: layer %d has %d items", layer.layer_number, len(members))

        for box_number, (idx, it) in enumerate(members, start=1):
            labels[idx] = (layer.layer_number, box_number)
            logger.debug("Assigned box number: %s -> %d-%d", it.id, layer.layer_number, box_number)

    return [
        it.with_layer_labels(*labels[idx]) if idx in labels else it
        for idx, it in enumerate(items)
    ]


# ─────────────────────────────────────────────────────────────────────────────
# Engine
# ─────────────────────────────────────────────────────────────────────────────

def layer_assignments_outcome(
    items: Sequence[CargoItem], settings: Optional[PlannerSettings] = None,
) -> Outcome[List[CargoItem]]:
    """
    Like ``calculate_layer_assignments`` but reports malformed input.

    Neither raises nor warns on malformed input; the caller decides what a
    degraded outcome means.
    """
    if settings is None:
        settings = get_settings()
    checked = _check_items(items, "calculate_layer_assignments", "passed through unchanged")
    if not isinstance(items, (list, tuple)):
        return checked
    valid = [it for it in items if isinstance(it, CargoItem)]
    layers = detect_layers(valid, settings)
    annotated = iter(assign_box_numbers(valid, layers, settings))
    result = [next(annotated) if isinstance(it, CargoItem) else it for it in items]
    return Outcome(value=result, issues=checked.issues)


def calculate_layer_assignments(items: Sequence[CargoItem]) -> List[CargoItem]:
    """
    Detect layers and number the boxes in each, in one pure pass.

    Returns an annotated copy of ``items``; the caller's items are never
    modified. Empty or all-unplaced input comes back unannotated. Input
    that is not a list or tuple yields ``[]``. The settings are read once,
    so a concurrent ``configure()`` cannot mix thresholds within a call.
    """
    settings = get_settings()
    n = len(items) if isinstance(items, (list, tuple)) else 0
    logger.debug("calculate_layer_assignments: starting with %d items", n)

    result = layer_assignments_outcome(items, settings).report(
        logger, "calculate_layer_assignments", settings.strict,
    )

    logger.debug(
        "calculate_layer_assignments: completed, enriched %d items",
        sum(1 for it in result if isinstance(it, CargoItem) and it.layer_number is not None),
    )
    return result


def get_layer_summary(items: Sequence[CargoItem]) -> List[LayerSummaryEntry]:
    """Box count per layer, ordered by ascending layer number."""
    summary = [
        LayerSummaryEntry(layer_number=layer.layer_number, box_count=layer.box_count)
        for layer in detect_layers(items)
    ]
    logger.debug("get_layer_summary: %s", summary)
    return summary
