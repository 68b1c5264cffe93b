"""Shared fixtures for the load-planner test suite."""

import os
import sys

import pytest

# Make the src/ layout importable without an install
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from loadplan import CargoItem, ContainerType, Position3D, Unit, configure, get_container_type


@pytest.fixture(autouse=True)
def default_settings():
    """Every test starts and ends on default planner settings."""
    configure()
    yield
    configure()


@pytest.fixture
def container_20ft():
    """Standard 20ft container, 5.9 × 2.35 × 2.39 m."""
    return get_container_type("20ft")


@pytest.fixture
def small_container():
    """A 2 × 1 × 1 m container: x ∈ [-1, 1], z ∈ [-0.5, 0.5], y ∈ [0, 1]."""
    return ContainerType(id="small", name="Small test box", length=2.0, width=1.0, height=1.0)


@pytest.fixture
def make_item():
    """Factory for cargo items; pass ``at=(x, y, z)`` to get a placed item."""
    counter = {"n": 0}

    def _make(length=1.0, width=1.0, height=1.0, unit=Unit.M, at=None, **kwargs):
        counter["n"] += 1
        kwargs.setdefault("id", f"item-{counter['n']}")
        kwargs.setdefault("name", f"Item {counter['n']}")
        item = CargoItem(length=length, width=width, height=height, unit=unit, **kwargs)
        if at is not None:
            item = item.placed_at(Position3D(*at))
        return item

    return _make
