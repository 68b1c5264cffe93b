"""Placement validation and layer numbering."""

from .layering import (
    assign_box_numbers,
    calculate_layer_assignments,
    detect_layers,
    get_layer_summary,
    layer_assignments_outcome,
)
from .placement import (
    OutOfBoundsError,
    OverlapError,
    PlacementError,
    bounding_box,
    boxes_collide,
    find_collisions,
    is_valid_placement,
    is_within_container_bounds,
    item_bounding_box,
    snap_position,
    snap_to_grid,
    validate_placement,
)

__all__ = [
    # Layering
    "assign_box_numbers",
    "calculate_layer_assignments",
    "detect_layers",
    "get_layer_summary",
    "layer_assignments_outcome",
    # Placement
    "OutOfBoundsError",
    "OverlapError",
    "PlacementError",
    "bounding_box",
    "boxes_collide",
    "find_collisions",
    "is_valid_placement",
    "is_within_container_bounds",
    "item_bounding_box",
    "snap_position",
    "snap_to_grid",
    "validate_placement",
]
