"""Data model for a canonical ingested feature.

A Feature is one decoded geometry in WGS 84 together with the attribute
record it came from. It is the unit collected into a ``BatchResult`` and
handed to table/map rendering glue.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from geoingest.core.constants import GEOMETRY_COLUMN, ID_COLUMN

if TYPE_CHECKING:
    from geoingest.models.geometry import Geometry

AttributeValue = str | int | float | None


@dataclass(frozen=True, slots=True)
class Feature:
    """A single canonical feature.

    Attributes:
        id: Resolved identifier (source ``id``/``fid`` or ``feature-<n>``).
        geometry: Decoded geometry, coordinates as ``(lon, lat)``.
        attributes: Source attributes; always includes the resolved ``id``.
    """

    id: str
    geometry: Geometry
    attributes: dict[str, AttributeValue] = field(default_factory=dict)

    def to_geojson(self) -> dict[str, Any]:
        """Serialise as a GeoJSON ``Feature`` object."""
        return {
            "type": "Feature",
            "id": self.id,
            "properties": dict(self.attributes),
            "geometry": self.geometry.to_geojson(),
        }

    def to_row(self) -> dict[str, Any]:
        """Flatten into a table row keyed by the column manifest."""
        return {
            **self.attributes,
            ID_COLUMN: self.id,
            GEOMETRY_COLUMN: self.geometry.to_geojson(),
        }
