"""GML feature-collection ingestion.

Parses a WFS- or OGR-flavoured GML document and extracts polygon features
with their attributes. Source coordinates are Web Mercator unless another
reprojector is supplied.

The parsing pipeline is split into focused stages:
- **_document**: XML check, FeatureCollection root, member navigation
- **_properties**: text-valued feature attributes
- **_geometry**: MultiPolygon members → reprojected, closed rings
- **assemble** (shared): ids, column manifest, diagnostics

Graceful degradation: a feature without a valid polygon member is counted
and skipped. Malformed XML, a missing FeatureCollection, no feature
members, or zero surviving features fail the whole document.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from geoingest.core.config import IngestConfig
from geoingest.core.exceptions import GmlParseError, NoGeometryError, RecordError
from geoingest.core.reprojection import reprojector_for
from geoingest.parsers.assemble import FeatureAssembler, decode_records
from geoingest.parsers.gml._document import (
    feature_element,
    find_feature_members,
    geometry_property,
    load_document,
)
from geoingest.parsers.gml._geometry import (
    decode_gml_geometry,
    decode_ring_texts,
    outer_ring_texts,
    parse_coordinates_text,
)
from geoingest.parsers.gml._properties import extract_properties

if TYPE_CHECKING:
    from geoingest.core.reprojection import Reprojector
    from geoingest.models.batch import BatchResult
    from geoingest.models.geometry import MultiPolygon

logger = logging.getLogger("geoingest.parsers.gml")

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

__all__ = [
    "decode_gml_geometry",
    "extract_properties",
    "parse_coordinates_text",
    "parse_gml",
    "parse_gml_file",
]

_RingTexts = list[str | None]


def parse_gml(
    content: bytes | str,
    *,
    config: IngestConfig | None = None,
    reproject: Reprojector | None = None,
    source_filename: str = "",
) -> BatchResult:
    """Parse GML content into a ``BatchResult``.

    Raises:
        GmlParseError: If the content is not XML, not a feature collection,
            or holds no feature members.
        EmptyResultError: If no feature has a valid polygon geometry.
    """
    config = config or IngestConfig()
    if reproject is None:
        reproject = reprojector_for(config.mercator_crs)
    source = source_filename or "GML document"

    root = load_document(content)
    members = find_feature_members(root)
    logger.info("Parsing %d feature member(s) from %s", len(members), source)

    # Tree access stays on this thread; only text decoding fans out.
    prepared: list[tuple[dict[str, str], _RingTexts | RecordError]] = []
    for index, member in enumerate(members, start=1):
        feature = feature_element(member)
        if feature is None:
            prepared.append(({}, NoGeometryError(f"Feature member {index} is empty")))
            continue
        try:
            payload: _RingTexts | RecordError = outer_ring_texts(
                geometry_property(feature), context=f"feature {index}"
            )
        except NoGeometryError as exc:
            payload = exc
        prepared.append((extract_properties(feature), payload))

    def _decode(index: int, item: tuple[dict[str, str], _RingTexts | RecordError]) -> MultiPolygon:
        _, payload = item
        if isinstance(payload, RecordError):
            raise payload
        return decode_ring_texts(payload, reproject, context=f"feature {index}")

    outcomes = decode_records(prepared, _decode, max_workers=config.max_workers)

    assembler = FeatureAssembler(
        id_keys=config.id_keys,
        source=source,
        empty_message="No valid features found",
        notice_duration_ms=config.notice_duration_ms,
    )
    for index, ((attributes, _), outcome) in enumerate(zip(prepared, outcomes, strict=True), 1):
        assembler.add(index, outcome, attributes)
    return assembler.result()


def parse_gml_file(
    path: Path | str,
    *,
    config: IngestConfig | None = None,
    reproject: Reprojector | None = None,
) -> BatchResult:
    """Read a GML file from disk and parse it (see ``parse_gml``).

    Raises:
        GmlParseError: If the file cannot be read, plus everything
            ``parse_gml`` raises.
    """
    path = Path(path)
    try:
        content = path.read_bytes()
    except OSError as exc:
        msg = f"Cannot read GML file: {exc}"
        raise GmlParseError(msg, source=path.name) from exc
    return parse_gml(content, config=config, reproject=reproject, source_filename=path.name)
