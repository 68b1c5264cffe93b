"""
Placement validator — pure-function geometric constraint checking.

All checks are stateless: they take the candidate item, a proposed
position, the container and the items already in it, and never mutate any
of them, so they are safe to call on every pointer move.

Checks:
  1. Bounds   — every face of the item inside or on the container boundary
  2. Overlap  — no shared interior volume with another placed item

Touching is legal, penetration is not: boxes that share a face or an edge
exactly are not colliding, so items can sit flush against each other and
against the walls and floor.

Also here:
  - bounding_box / item_bounding_box — AABB from normalised extents
  - snap_to_grid / snap_position     — quantise pointer-derived coordinates
"""

import logging
import math
from collections.abc import Iterable
from typing import List, Optional, Sequence

import numpy as np

from ..core.models import BoundingBox, CargoItem, ContainerType, Dimensions, Position3D
from ..core.outcome import LoadPlanError, Outcome
from ..core.settings import get_settings
from ..core.units import normalize

logger = logging.getLogger(__name__)


# ─────────────────────────────────────────────────────────────────────────────
# Errors
# ─────────────────────────────────────────────────────────────────────────────

class PlacementError(LoadPlanError):
    """Base class for placement validation errors."""


class OutOfBoundsError(PlacementError):
    """Item extends outside the container."""


class OverlapError(PlacementError):
    """Item would share volume with an already-placed item."""

    def __init__(self, message: str, colliding_ids: Sequence[str] = ()):
        super().__init__(message)
        self.colliding_ids = list(colliding_ids)


# ─────────────────────────────────────────────────────────────────────────────
# Bounding boxes
# ─────────────────────────────────────────────────────────────────────────────

def bounding_box(dims: Dimensions, position: Position3D) -> BoundingBox:
    """AABB centred on ``position.x``/``position.z`` with its base at ``position.y``."""
    half_l = dims.length / 2
    half_w = dims.width / 2
    return BoundingBox(
        min_x=position.x - half_l,
        max_x=position.x + half_l,
        min_y=position.y,
        max_y=position.y + dims.height,
        min_z=position.z - half_w,
        max_z=position.z + half_w,
    )


def item_bounding_box(
    item: CargoItem, position: Optional[Position3D] = None,
) -> Optional[BoundingBox]:
    """
    Bounding box of ``item`` at ``position`` (or at its own position).

    Returns None when there is no position: an unplaced item takes no
    part in spatial checks.
    """
    where = position if position is not None else item.position
    if where is None:
        return None
    return bounding_box(normalize(item), where)


def boxes_collide(a: BoundingBox, b: BoundingBox) -> bool:
    """
    Separating-axis test on all three axes.

    Strict: ``a.max_x == b.min_x`` separates the boxes, so flush faces and
    edges do not collide.
    """
    return not (
        a.max_x <= b.min_x or
        a.min_x >= b.max_x or
        a.max_y <= b.min_y or
        a.min_y >= b.max_y or
        a.max_z <= b.min_z or
        a.min_z >= b.max_z
    )


# ─────────────────────────────────────────────────────────────────────────────
# Individual checks
# ─────────────────────────────────────────────────────────────────────────────

def _contains(outer: BoundingBox, inner: BoundingBox) -> bool:
    return (
        inner.min_x >= outer.min_x and
        inner.max_x <= outer.max_x and
        inner.min_y >= outer.min_y and
        inner.max_y <= outer.max_y and
        inner.min_z >= outer.min_z and
        inner.max_z <= outer.max_z
    )


def is_within_container_bounds(
    item: CargoItem, position: Position3D, container: ContainerType,
) -> bool:
    """True if the item at ``position`` lies inside or exactly on the container walls."""
    box = bounding_box(normalize(item), position)
    return _contains(container.bounds, box)


def _other_placed(item: CargoItem, placed_items: Iterable[CargoItem]) -> List[CargoItem]:
    """Placed items the candidate must be compared against (never itself)."""
    return [
        p for p in placed_items
        if getattr(p, "has_placement", False) and p.id != item.id
    ]


def find_collisions(
    item: CargoItem, position: Position3D, placed_items: Iterable[CargoItem],
) -> List[str]:
    """
    Ids of the placed items ``item`` would overlap at ``position``.

    Items that are not flagged placed, have no position, or share the
    candidate's id are ignored. The scan is vectorised over all others.
    """
    others = _other_placed(item, placed_items)
    if not others:
        return []

    candidate = bounding_box(normalize(item), position)
    boxes = np.array([item_bounding_box(p).as_tuple() for p in others], dtype=np.float64)
    # columns: min_x, max_x, min_y, max_y, min_z, max_z
    mins = boxes[:, 0::2]
    maxs = boxes[:, 1::2]
    c_min = np.array([candidate.min_x, candidate.min_y, candidate.min_z])
    c_max = np.array([candidate.max_x, candidate.max_y, candidate.max_z])

    overlap = np.all((c_min < maxs) & (c_max > mins), axis=1)
    return [others[i].id for i in np.flatnonzero(overlap)]


# ─────────────────────────────────────────────────────────────────────────────
# Validator
# ─────────────────────────────────────────────────────────────────────────────

def validate_placement(
    item: CargoItem,
    position: Position3D,
    container: ContainerType,
    placed_items: Iterable[CargoItem] = (),
) -> bool:
    """
    Validate a proposed placement against all geometric constraints.

    Args:
        item:         The item being placed.
        position:     Candidate base-centre position (m).
        container:    Container the item goes into.
        placed_items: Items currently in the container.

    Returns:
        True if all checks pass.

    Raises:
        OutOfBoundsError: item extends outside the container.
        OverlapError:     item would overlap placed items; ``colliding_ids``
                          lists them.
    """
    # ── 1. Bounds ────────────────────────────────────────────────────────
    box = bounding_box(normalize(item), position)
    walls = container.bounds
    if not _contains(walls, box):
        raise OutOfBoundsError(
            f"{item.id} at ({position.x:.3f}, {position.y:.3f}, {position.z:.3f}) "
            f"spans x[{box.min_x:.3f}, {box.max_x:.3f}] "
            f"y[{box.min_y:.3f}, {box.max_y:.3f}] "
            f"z[{box.min_z:.3f}, {box.max_z:.3f}], "
            f"outside {container.id} x[{walls.min_x:.3f}, {walls.max_x:.3f}] "
            f"y[0, {walls.max_y:.3f}] z[{walls.min_z:.3f}, {walls.max_z:.3f}]"
        )

    # ── 2. Overlap ───────────────────────────────────────────────────────
    colliding = find_collisions(item, position, placed_items)
    if colliding:
        raise OverlapError(
            f"{item.id} would overlap placed item(s): {', '.join(colliding)}",
            colliding_ids=colliding,
        )

    return True


def is_valid_placement(
    item: CargoItem,
    position: Position3D,
    container: ContainerType,
    placed_items: Iterable[CargoItem] = (),
) -> bool:
    """
    The admissibility gate run before any position change is committed.

    Same checks as ``validate_placement`` but answers with a bool and never
    raises for a rejected placement. A missing item, position or container
    is answered with False and a placed-items value that is not iterable is
    treated as empty; under strict settings both raise
    ``MalformedInputError`` instead.
    """
    strict = get_settings().strict
    if item is None or position is None or container is None:
        return Outcome.degrade(
            False,
            f"missing input (item={item!r}, position={position!r}, container={container!r})",
        ).report(logger, "is_valid_placement", strict)
    if placed_items is None or not isinstance(placed_items, Iterable):
        placed_items = Outcome.degrade(
            (), f"placed_items is not iterable: {placed_items!r}",
        ).report(logger, "is_valid_placement", strict)

    try:
        return validate_placement(item, position, container, placed_items)
    except PlacementError as exc:
        logger.debug("Rejected placement: %s", exc)
        return False


# ─────────────────────────────────────────────────────────────────────────────
# Grid snapping
# ─────────────────────────────────────────────────────────────────────────────

def snap_to_grid(value: float, pitch: Optional[float] = None) -> float:
    """
    Round ``value`` to the nearest multiple of ``pitch`` (halves round up).

    ``pitch`` defaults to the configured grid pitch (0.1 m). A non-positive
    pitch or a non-finite value is returned unsnapped (raises under strict
    settings). Snapping an already-snapped value returns it unchanged.

    Example:
        >>> snap_to_grid(0.26, 0.1)
        0.30000000000000004
        >>> snap_to_grid(snap_to_grid(0.26, 0.1), 0.1)
        0.30000000000000004
    """
    settings = get_settings()
    if pitch is None:
        pitch = settings.grid_pitch
    if not pitch > 0:
        return Outcome.degrade(
            value, f"non-positive pitch {pitch!r}, value left unsnapped",
        ).report(logger, "snap_to_grid", settings.strict)
    if not math.isfinite(value):
        return Outcome.degrade(
            value, f"non-finite value {value!r} left unsnapped",
        ).report(logger, "snap_to_grid", settings.strict)
    return math.floor(value / pitch + 0.5) * pitch


def snap_position(position: Position3D, pitch: Optional[float] = None) -> Position3D:
    """Snap the horizontal coordinates of ``position``; the elevation is kept."""
    return Position3D(
        x=snap_to_grid(position.x, pitch),
        y=position.y,
        z=snap_to_grid(position.z, pitch),
    )
