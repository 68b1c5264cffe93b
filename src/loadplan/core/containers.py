"""Standard shipping container specifications (inside dimensions, metres)."""

import logging
from typing import Dict, List

from .models import ContainerType

logger = logging.getLogger(__name__)


CONTAINER_TYPES: List[ContainerType] = [
    ContainerType(
        id="20ft",
        name="20ft Standard",
        length=5.9,
        width=2.35,
        height=2.39,
        display_label="20ft Container (5.9m × 2.35m × 2.39m)",
    ),
    ContainerType(
        id="40ft",
        name="40ft Standard",
        length=12.03,
        width=2.35,
        height=2.39,
        display_label="40ft Container (12.03m × 2.35m × 2.39m)",
    ),
    ContainerType(
        id="40ftHC",
        name="40ft High Cube",
        length=12.03,
        width=2.35,
        height=2.69,
        display_label="40ft High Cube (12.03m × 2.35m × 2.69m)",
    ),
]

_BY_ID: Dict[str, ContainerType] = {c.id: c for c in CONTAINER_TYPES}


def get_container_type(container_id: str) -> ContainerType:
    """
    Look up a standard container by id.

    An unknown id falls back to the 20ft container so a stale selection
    never leaves the planner without a container.
    """
    container = _BY_ID.get(container_id)
    if container is None:
        logger.warning(
            "Unknown container id %r, falling back to %r. Available: %s",
            container_id, CONTAINER_TYPES[0].id, list(_BY_ID),
        )
        return CONTAINER_TYPES[0]
    return container
