"""Batch-level result model and the ordered column manifest."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from geoingest.core.constants import GEOMETRY_COLUMN, ID_COLUMN
from geoingest.models.diagnostics import Diagnostics

if TYPE_CHECKING:
    from geoingest.models.feature import Feature


class ColumnManifest:
    """Insertion-ordered, deduplicated set of column names.

    Always starts with ``id`` then ``geometry``; every other key keeps its
    first-seen position.
    """

    __slots__ = ("_order", "_seen")

    def __init__(self, keys: Iterable[str] = ()) -> None:
        self._order: list[str] = []
        self._seen: set[str] = set()
        self.extend((ID_COLUMN, GEOMETRY_COLUMN))
        self.extend(keys)

    def add(self, key: str) -> None:
        if key not in self._seen:
            self._seen.add(key)
            self._order.append(key)

    def extend(self, keys: Iterable[str]) -> None:
        for key in keys:
            self.add(key)

    def __contains__(self, key: object) -> bool:
        return key in self._seen

    def __iter__(self) -> Iterator[str]:
        return iter(self._order)

    def __len__(self) -> int:
        return len(self._order)

    def __repr__(self) -> str:
        return f"ColumnManifest({self._order!r})"

    def to_list(self) -> list[str]:
        return list(self._order)


@dataclass(frozen=True, slots=True)
class BatchResult:
    """Canonical output of one parse call.

    Attributes:
        features: Successfully decoded features, in source order.
        column_manifest: ``id``, ``geometry``, then attribute keys first-seen.
        rows: One flat attribute row per feature (see ``Feature.to_row``).
        diagnostics: Counts and messages for records that were dropped.
    """

    features: list[Feature]
    column_manifest: list[str]
    rows: list[dict[str, Any]] = field(default_factory=list)
    diagnostics: Diagnostics = field(default_factory=Diagnostics)

    def to_geojson(self) -> dict[str, Any]:
        """Serialise the features as a GeoJSON ``FeatureCollection``."""
        return {
            "type": "FeatureCollection",
            "features": [f.to_geojson() for f in self.features],
        }

    @property
    def bounds(self) -> tuple[float, float, float, float]:
        """Combined ``(min_lon, min_lat, max_lon, max_lat)`` of all features."""
        boxes = [f.geometry.bounds for f in self.features]
        return (
            min(b[0] for b in boxes),
            min(b[1] for b in boxes),
            max(b[2] for b in boxes),
            max(b[3] for b in boxes),
        )
