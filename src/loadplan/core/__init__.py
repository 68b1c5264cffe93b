"""Data model, units, settings and error types shared by the planner."""

from .containers import CONTAINER_TYPES, get_container_type
from .models import (
    BoundingBox,
    CargoItem,
    ContainerType,
    Dimensions,
    Layer,
    LayerSummaryEntry,
    Position3D,
    Unit,
)
from .outcome import LoadPlanError, MalformedInputError, Outcome, UnknownUnitError
from .settings import PlannerSettings, configure, get_settings, load_settings
from .units import normalize, normalize_outcome, to_meters

__all__ = [
    # Models
    "BoundingBox",
    "CargoItem",
    "ContainerType",
    "Dimensions",
    "Layer",
    "LayerSummaryEntry",
    "Position3D",
    "Unit",
    # Containers
    "CONTAINER_TYPES",
    "get_container_type",
    # Outcome / errors
    "LoadPlanError",
    "MalformedInputError",
    "Outcome",
    "UnknownUnitError",
    # Settings
    "PlannerSettings",
    "configure",
    "get_settings",
    "load_settings",
    # Units
    "normalize",
    "normalize_outcome",
    "to_meters",
]
