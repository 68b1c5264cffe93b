"""Dimension normalisation: declared (length, width, height, unit) to metres."""

import logging
import math
from numbers import Real

from .models import CargoItem, Dimensions, Unit, ZERO_DIMENSIONS
from .outcome import MalformedInputError, Outcome, UnknownUnitError
from .settings import get_settings

logger = logging.getLogger(__name__)

# Metres per declared unit
UNIT_SCALE = {
    Unit.CM: 0.01,
    Unit.M: 1.0,
}


def parse_unit(unit) -> Unit:
    """
    Coerce ``"cm"``/``"m"`` (or a Unit) to a Unit.

    Raises:
        UnknownUnitError: for anything else.
    """
    try:
        return Unit(unit)
    except ValueError:
        raise UnknownUnitError(f"Unknown unit {unit!r}; expected 'cm' or 'm'") from None


def to_meters(value: float, unit) -> float:
    """Convert a single magnitude to metres."""
    u = parse_unit(unit)
    if u is Unit.CM:
        return value / 100
    return value


def _is_number(value) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool) and math.isfinite(value)


def normalize_outcome(item: CargoItem) -> Outcome[Dimensions]:
    """
    Normalise an item's extents to metres, recording any degradation.

    A non-numeric extent or an unknown unit yields zero dimensions.
    """
    if item is None:
        return Outcome.degrade(ZERO_DIMENSIONS, "item is None")

    raw = {
        "length": getattr(item, "length", None),
        "width": getattr(item, "width", None),
        "height": getattr(item, "height", None),
    }
    bad = [name for name, v in raw.items() if not _is_number(v)]
    if bad:
        return Outcome.degrade(
            ZERO_DIMENSIONS,
            f"item {getattr(item, 'id', '?')!r}: non-numeric {', '.join(bad)}",
        )

    unit = getattr(item, "unit", None)
    try:
        dims = Dimensions(
            length=to_meters(raw["length"], unit),
            width=to_meters(raw["width"], unit),
            height=to_meters(raw["height"], unit),
        )
    except UnknownUnitError as exc:
        return Outcome.degrade(ZERO_DIMENSIONS, f"item {item.id!r}: {exc}")
    return Outcome.success(dims)


def normalize(item: CargoItem) -> Dimensions:
    """
    Return ``item``'s length, width and height in metres.

    Centimetre values are divided by 100, metre values pass through.
    Malformed items give zero dimensions and a warning, or raise under
    strict settings.

    Example:
        >>> normalize(CargoItem("a", "crate", 120, 80, 100, unit=Unit.CM))
        Dimensions(length=1.2, width=0.8, height=1.0)
    """
    outcome = normalize_outcome(item)
    if outcome.ok:
        return outcome.value
    return outcome.report(logger, "normalize", get_settings().strict, _error_for(item))


def _error_for(item) -> type:
    """Pick the exception a degraded normalisation raises in strict mode."""
    if item is None:
        return MalformedInputError
    extents = (getattr(item, name, None) for name in ("length", "width", "height"))
    if all(_is_number(v) for v in extents):
        return UnknownUnitError
    return MalformedInputError
