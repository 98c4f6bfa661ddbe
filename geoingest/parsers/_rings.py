"""Ring closure and validation policy shared by the WKB and GML decoders.

Responsibilities:
- Minimum point count for a ring (3 before closure)
- Finite-coordinate check after reprojection
- Idempotent ring closure (append the first point if the last differs)

Callers decide what a failure means: the binary decoder fails the whole
record, the XML decoder drops just the offending polygon member.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from geoingest.core.exceptions import MalformedGeometryError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from geoingest.models.geometry import Coordinate, Ring

# Minimum distinct points before closure
MIN_RING_POINTS = 3


def is_finite_pair(x: float, y: float) -> bool:
    return math.isfinite(x) and math.isfinite(y)


def close_ring(coords: Sequence[Coordinate]) -> Ring:
    """Return ``coords`` as a closed ring; a closed input is returned unchanged."""
    ring = tuple(coords)
    if ring and ring[0] != ring[-1]:
        ring = (*ring, ring[0])
    return ring


def validate_ring(coords: Sequence[Coordinate], context: str) -> Ring:
    """Check point count and finiteness, then close the ring.

    Returns the closed ring.

    Raises:
        MalformedGeometryError: If the ring has fewer than 3 points or any
            coordinate is non-finite.
    """
    if len(coords) < MIN_RING_POINTS:
        msg = (
            f"Ring has only {len(coords)} point(s), need at least "
            f"{MIN_RING_POINTS} in {context}"
        )
        raise MalformedGeometryError(msg)

    for idx, (x, y) in enumerate(coords):
        if not is_finite_pair(x, y):
            msg = f"Non-finite coordinate ({x!r}, {y!r}) at point {idx} in {context}"
            raise MalformedGeometryError(msg)

    return close_ring(coords)
