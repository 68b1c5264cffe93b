"""Container load planner: placement validation, layer numbering and load metrics.

Entry points used by the application layer:

    normalize(item)                                  -> Dimensions in metres
    is_valid_placement(item, position, container, placed_items) -> bool
    snap_to_grid(value, pitch=0.1)                   -> float
    calculate_layer_assignments(items)               -> annotated copies
    get_layer_summary(items)                         -> [LayerSummaryEntry]
    load_metrics(items, container)                   -> LoadMetrics
"""

import logging

from .algorithms.layering import (
    assign_box_numbers,
    calculate_layer_assignments,
    detect_layers,
    get_layer_summary,
    layer_assignments_outcome,
)
from .algorithms.placement import (
    OutOfBoundsError,
    OverlapError,
    PlacementError,
    is_valid_placement,
    snap_position,
    snap_to_grid,
    validate_placement,
)
from .core.containers import CONTAINER_TYPES, get_container_type
from .core.models import (
    BoundingBox,
    CargoItem,
    ContainerType,
    Dimensions,
    Layer,
    LayerSummaryEntry,
    Position3D,
    Unit,
)
from .core.outcome import LoadPlanError, MalformedInputError, Outcome, UnknownUnitError
from .core.settings import PlannerSettings, configure, get_settings, load_settings
from .core.units import normalize, normalize_outcome
from .monitoring.metrics import (
    LoadMetrics,
    filter_placed_items,
    format_summary,
    load_metrics,
    load_metrics_outcome,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    "BoundingBox",
    "CONTAINER_TYPES",
    "CargoItem",
    "ContainerType",
    "Dimensions",
    "Layer",
    "LayerSummaryEntry",
    "LoadMetrics",
    "LoadPlanError",
    "MalformedInputError",
    "OutOfBoundsError",
    "Outcome",
    "OverlapError",
    "PlacementError",
    "PlannerSettings",
    "Position3D",
    "Unit",
    "UnknownUnitError",
    "assign_box_numbers",
    "calculate_layer_assignments",
    "configure",
    "detect_layers",
    "filter_placed_items",
    "format_summary",
    "get_container_type",
    "get_layer_summary",
    "get_settings",
    "is_valid_placement",
    "layer_assignments_outcome",
    "load_metrics",
    "load_metrics_outcome",
    "load_settings",
    "normalize",
    "normalize_outcome",
    "snap_position",
    "snap_to_grid",
    "validate_placement",
]
