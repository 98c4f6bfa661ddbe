"""WKB-style hex geometry ingestion.

Decodes hexadecimal binary geometry, one record per table row, into
canonical features in WGS 84. Source coordinates are in the national grid
(PUWG 1992) unless another reprojector is supplied.

The pipeline is split into focused stages:
- **_buffer**: hex text → bytes, byte-order-aware fixed-width reads
- **_decoder**: header, SRID heuristic, polygon rings, type dispatch
- **assemble** (shared): ids, column manifest, diagnostics

Graceful degradation: a row with an empty, malformed or unsupported
geometry is counted and skipped; only a batch with no features fails.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from geoingest.core.config import IngestConfig
from geoingest.core.constants import GEOMETRY_COLUMN
from geoingest.core.exceptions import NoGeometryError
from geoingest.core.reprojection import reprojector_for
from geoingest.parsers.assemble import FeatureAssembler, decode_records
from geoingest.parsers.wkb._buffer import ByteOrder, HexBuffer
from geoingest.parsers.wkb._decoder import decode_wkb, has_srid_prefix

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from geoingest.core.reprojection import Reprojector
    from geoingest.models.batch import BatchResult
    from geoingest.models.feature import AttributeValue
    from geoingest.models.geometry import Polygon, UnsupportedGeometry

logger = logging.getLogger("geoingest.parsers.wkb")

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

__all__ = [
    "ByteOrder",
    "HexBuffer",
    "decode_wkb",
    "decode_wkb_hex",
    "has_srid_prefix",
    "parse_wkb_rows",
]


def decode_wkb_hex(
    text: str, reproject: Reprojector | None = None, *, context: str = "record"
) -> Polygon | UnsupportedGeometry:
    """Decode one hex-encoded geometry.

    Raises:
        MalformedBufferError: If the hex text is invalid or truncated.
        MalformedGeometryError: If counts or coordinates are invalid.
    """
    if reproject is None:
        reproject = reprojector_for(IngestConfig().national_grid_crs)
    return decode_wkb(HexBuffer.from_hex(text), reproject, context=context)


def parse_wkb_rows(
    rows: Iterable[Mapping[str, AttributeValue]],
    geometry_column: str = GEOMETRY_COLUMN,
    *,
    config: IngestConfig | None = None,
    reproject: Reprojector | None = None,
    source_name: str = "",
) -> BatchResult:
    """Decode the hex geometry column of already-parsed table rows.

    Args:
        rows: Attribute rows in source order (e.g. from a CSV reader).
        geometry_column: Column holding the hex geometry.
        config: Ingestion configuration (defaults to ``IngestConfig()``).
        reproject: Overrides the national-grid reprojector.
        source_name: Input name used in logs and errors.

    Returns:
        A ``BatchResult``; the geometry column is replaced by the decoded
        geometry and does not appear among feature attributes.

    Raises:
        EmptyResultError: If no row produced a feature.
    """
    config = config or IngestConfig()
    if reproject is None:
        reproject = reprojector_for(config.national_grid_crs)
    records = list(rows)
    source = source_name or f"column '{geometry_column}'"

    logger.info("Decoding %d row(s) from %s", len(records), source)

    def _decode(index: int, row: Mapping[str, AttributeValue]) -> Polygon | UnsupportedGeometry:
        value = row.get(geometry_column)
        if value is None or not str(value).strip():
            msg = f"Row {index} has no value in column '{geometry_column}'"
            raise NoGeometryError(msg, stage="decode_wkb", code="WKB_NO_GEOMETRY")
        return decode_wkb(HexBuffer.from_hex(str(value)), reproject, context=f"row {index}")

    outcomes = decode_records(records, _decode, max_workers=config.max_workers)

    assembler = FeatureAssembler(
        id_keys=config.id_keys,
        source=source,
        empty_message="No valid geometries found",
        notice_duration_ms=config.notice_duration_ms,
    )
    for index, (row, outcome) in enumerate(zip(records, outcomes, strict=True), start=1):
        attributes = {k: v for k, v in row.items() if k != geometry_column}
        assembler.add(index, outcome, attributes)
    return assembler.result()
