"""
Tuneable parameters of the planner.

Defaults reproduce the behaviour the placement UI was built around: a 1 cm
layer threshold, a 1 cm tie tolerance for box ordering and a 10 cm grid.
Settings can be overridden from a YAML file, either passed explicitly to
``load_settings`` or named by the ``LOADPLAN_CONFIG`` environment variable.

Example YAML::

    loadplan:
      layer_threshold: 0.02
      grid_pitch: 0.05
      layer_clustering: single_linkage
      strict: true
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .outcome import MalformedInputError

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "LOADPLAN_CONFIG"


class PlannerSettings(BaseModel):
    """
    All tuneable parameters of the planner.

    Attributes:
        layer_threshold:     Max base-elevation distance (m) for an item to
                             join an existing layer.
        box_order_tolerance: x-difference (m) under which two items in a
                             layer are ordered by z instead.
        grid_pitch:          Default snapping pitch (m).
        layer_clustering:    ``anchor`` joins the first layer whose running
                             minimum elevation is within the threshold, in
                             input order. ``single_linkage`` sorts elevations
                             first, so membership is order-independent.
        strict:              Raise on malformed input instead of degrading.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    layer_threshold: float = Field(0.01, gt=0)
    box_order_tolerance: float = Field(0.01, ge=0)
    grid_pitch: float = Field(0.1, gt=0)
    layer_clustering: Literal["anchor", "single_linkage"] = "anchor"
    strict: bool = False


def load_settings(path: Path | str) -> PlannerSettings:
    """
    Read settings from a YAML file.

    The keys may sit at the top level or under a ``loadplan:`` section.
    An empty file yields the defaults.

    Raises:
        FileNotFoundError:   ``path`` does not exist.
        MalformedInputError: the file is not a mapping or fails validation.
    """
    path = Path(path)
    with path.open("r", encoding="utf-8") as f:
        raw: Any = yaml.safe_load(f)

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise MalformedInputError(f"{path}: expected a mapping, got {type(raw).__name__}")
    if isinstance(raw.get("loadplan"), dict):
        raw = raw["loadplan"]

    try:
        settings = PlannerSettings(**raw)
    except ValidationError as exc:
        raise MalformedInputError(f"{path}: invalid planner settings\n{exc}") from exc

    logger.debug("Loaded planner settings from %s: %s", path, settings)
    return settings


_active: PlannerSettings | None = None


def get_settings() -> PlannerSettings:
    """Return the active settings, loading ``$LOADPLAN_CONFIG`` on first use."""
    global _active
    if _active is None:
        env_path = os.environ.get(CONFIG_ENV_VAR, "")
        _active = load_settings(env_path) if env_path else PlannerSettings()
    return _active


def configure(settings: PlannerSettings | None = None, **overrides: Any) -> PlannerSettings:
    """
    Replace the active settings.

    ``configure()`` with no arguments restores the defaults;
    ``configure(strict=True)`` overrides single fields on top of the current
    settings; ``configure(settings)`` installs a full object.
    """
    global _active
    if settings is None and not overrides:
        _active = PlannerSettings()
    else:
        base = settings if settings is not None else get_settings()
        _active = PlannerSettings(**{**base.model_dump(), **overrides})
    return _active
