"""
Core data models for container load planning.

All modules import their types from here so the placement, layering and
metrics layers agree on one vocabulary.

Classes:
    Unit          — declared unit of an item's dimensions (cm or m)
    Position3D    — base-centre position of a placed item, in metres
    Dimensions    — length/width/height already normalised to metres
    CargoItem     — a loadable unit as declared by the user
    ContainerType — fixed-size container, centred on the origin
    BoundingBox   — axis-aligned box derived from an item and a position
    Layer         — horizontal band of placed items
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional, Tuple


# ─────────────────────────────────────────────────────────────────────────────
# Units & geometry primitives
# ─────────────────────────────────────────────────────────────────────────────

class Unit(str, Enum):
    """Length unit an item's dimensions are declared in."""
    CM = "cm"
    M = "m"


@dataclass(frozen=True)
class Position3D:
    """
    A point in container space (metres).

    ``x`` and ``z`` locate the centre of the item's footprint, ``y`` is the
    elevation of its base (not its centre).
    """
    x: float
    y: float
    z: float

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y, "z": self.z}


@dataclass(frozen=True)
class Dimensions:
    """Item extents in metres."""
    length: float
    width: float
    height: float

    @property
    def volume(self) -> float:
        return self.length * self.width * self.height


ZERO_DIMENSIONS = Dimensions(0.0, 0.0, 0.0)


# ─────────────────────────────────────────────────────────────────────────────
# Cargo item
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class CargoItem:
    """
    A loadable cargo unit.

    Frozen so the layering engine can hand back annotated copies without
    any risk of touching the caller's list.

    Attributes:
        id:                  Opaque, stable identifier.
        name:                Display name.
        length/width/height: Declared extents in ``unit``.
        unit:                Unit of the three extents.
        weight:              Weight of one unit (kg).
        quantity:            Identical units folded into this entry. They
                             count towards volume and weight but are not
                             placed separately.
        position:            Base-centre position, only when placed.
        is_placed:           Whether the item sits in the container.
        layer_number:        1-based layer, set by the layering engine.
        box_number_in_layer: 1-based index within the layer.
    """
    id: str
    name: str
    length: float
    width: float
    height: float
    unit: Unit = Unit.CM
    weight: float = 0.0
    quantity: int = 1
    position: Optional[Position3D] = None
    is_placed: bool = False
    layer_number: Optional[int] = None
    box_number_in_layer: Optional[int] = None

    @property
    def has_placement(self) -> bool:
        """True only for a consistent placed state (flag set and position known)."""
        return self.is_placed and self.position is not None

    @property
    def label(self) -> Optional[str]:
        """``"<layer>-<box>"`` once the layering engine has numbered the item."""
        if self.layer_number is None or self.box_number_in_layer is None:
            return None
        return f"{self.layer_number}-{self.box_number_in_layer}"

    def placed_at(self, position: Position3D) -> "CargoItem":
        """Return a copy placed at ``position``."""
        return replace(self, position=position, is_placed=True)

    def unplaced(self) -> "CargoItem":
        """Return a copy taken out of the container, layer labels dropped."""
        return replace(
            self, position=None, is_placed=False,
            layer_number=None, box_number_in_layer=None,
        )

    def with_layer_labels(self, layer_number: int, box_number: int) -> "CargoItem":
        return replace(self, layer_number=layer_number, box_number_in_layer=box_number)

    def __repr__(self) -> str:
        unit = self.unit.value if isinstance(self.unit, Unit) else self.unit
        where = (
            f"@({self.position.x:.2f},{self.position.y:.2f},{self.position.z:.2f})"
            if self.has_placement else "unplaced"
        )
        return (
            f"CargoItem(id={self.id!r}, "
            f"{self.length}×{self.width}×{self.height}{unit}, "
            f"{where})"
        )


# ─────────────────────────────────────────────────────────────────────────────
# Container
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class ContainerType:
    """
    A shipping container, dimensions in metres.

    The container is centred on the origin in the horizontal plane with its
    floor at y = 0, so it spans ``x ∈ [-length/2, length/2]``,
    ``z ∈ [-width/2, width/2]`` and ``y ∈ [0, height]``.
    """
    id: str
    name: str
    length: float
    width: float
    height: float
    display_label: str = ""

    @property
    def volume(self) -> float:
        return self.length * self.width * self.height

    @property
    def bounds(self) -> "BoundingBox":
        """The container's interior as a BoundingBox."""
        return BoundingBox(
            min_x=-self.length / 2, max_x=self.length / 2,
            min_y=0.0, max_y=self.height,
            min_z=-self.width / 2, max_z=self.width / 2,
        )


# ─────────────────────────────────────────────────────────────────────────────
# Derived values
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned bounding box. Derived on demand, never stored on an item."""
    min_x: float
    max_x: float
    min_y: float
    max_y: float
    min_z: float
    max_z: float

    def as_tuple(self) -> Tuple[float, float, float, float, float, float]:
        return (self.min_x, self.max_x, self.min_y, self.max_y, self.min_z, self.max_z)


@dataclass(frozen=True)
class Layer:
    """
    A horizontal band of placed items.

    Attributes:
        layer_number: 1-based, increasing with elevation.
        min_y/max_y:  Elevation band observed among the members.
        item_ids:     Member ids in order of first encounter.
    """
    layer_number: int
    min_y: float
    max_y: float
    item_ids: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def box_count(self) -> int:
        return len(self.item_ids)


@dataclass(frozen=True)
class LayerSummaryEntry:
    layer_number: int
    box_count: int

    def to_dict(self) -> dict:
        return {"layer_number": self.layer_number, "box_count": self.box_count}
