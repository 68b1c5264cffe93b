"""
Outcome values and the error hierarchy.

The planner degrades instead of failing: malformed input produces a safe
default (empty list, zero volume, zero utilisation) so an interactive caller
never sees an exception mid-drag. ``Outcome`` keeps that default but records
*why* it was produced, so callers that care can log or alert on it. With
``strict`` settings the degraded outcome is raised instead.
"""

import logging
from dataclasses import dataclass, field
from typing import Generic, Tuple, TypeVar

T = TypeVar("T")


# ─────────────────────────────────────────────────────────────────────────────
# Errors
# ─────────────────────────────────────────────────────────────────────────────

class LoadPlanError(Exception):
    """Base class for all load-planner errors."""


class MalformedInputError(LoadPlanError, ValueError):
    """Input is structurally wrong (not a list, non-numeric dimension, ...)."""


class UnknownUnitError(MalformedInputError):
    """An item declares a unit other than cm or m."""


# ─────────────────────────────────────────────────────────────────────────────
# Outcome
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Outcome(Generic[T]):
    """
    A computed value plus the issues met while computing it.

    Attributes:
        value:  The result, or the safe default when input was malformed.
        issues: Human-readable descriptions of each degradation.
    """
    value: T
    issues: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def ok(self) -> bool:
        return not self.issues

    @property
    def degraded(self) -> bool:
        return bool(self.issues)

    @classmethod
    def success(cls, value: T) -> "Outcome[T]":
        return cls(value=value)

    @classmethod
    def degrade(cls, value: T, *issues: str) -> "Outcome[T]":
        return cls(value=value, issues=tuple(issues))

    def merge(self, other: "Outcome") -> "Outcome[T]":
        """Keep this value, add the other outcome's issues."""
        if not other.issues:
            return self
        return Outcome(value=self.value, issues=self.issues + other.issues)

    def unwrap(self, error: type = MalformedInputError) -> T:
        """Return the value, raising ``error`` if the outcome is degraded."""
        if self.issues:
            raise error("; ".join(self.issues))
        return self.value

    def report(
        self,
        log: logging.Logger,
        caller: str,
        strict: bool = False,
        error: type = MalformedInputError,
    ) -> T:
        """
        Return the value, logging any issues as a warning from ``caller``.

        With ``strict`` a degraded outcome raises ``error`` instead.
        """
        if self.issues:
            if strict:
                self.unwrap(error)
            log.warning("%s: %s", caller, "; ".join(self.issues))
        return self.value
