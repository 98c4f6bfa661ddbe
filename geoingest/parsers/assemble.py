"""Feature assembly and batch accumulation.

Turns per-record decode outcomes into canonical ``Feature`` objects:
- resolves a stable id (``id``/``fid`` or ``feature-<n>``)
- unions attribute keys into the column manifest, even for records whose
  geometry failed, since property extraction and geometry decoding fail
  independently
- counts and logs dropped records; one bad record never aborts the batch
- raises ``EmptyResultError`` when nothing survived

``decode_records`` runs the per-record decode step either sequentially or
on a thread pool. Outcomes are always returned in source order, and
accumulation runs afterwards on that ordered list, so manifest order and
positional ids do not depend on completion order.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING, TypeVar

from geoingest.core.constants import (
    DEFAULT_ID_KEYS,
    DEFAULT_NOTICE_DURATION_MS,
    ID_COLUMN,
    SYNTHETIC_ID_PREFIX,
)
from geoingest.core.exceptions import EmptyResultError, NoGeometryError, RecordError
from geoingest.models.batch import BatchResult, ColumnManifest
from geoingest.models.diagnostics import Diagnostics
from geoingest.models.feature import Feature
from geoingest.models.geometry import UnsupportedGeometry

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping, Sequence

    from geoingest.models.feature import AttributeValue
    from geoingest.models.geometry import Geometry

    RecordOutcome = Geometry | UnsupportedGeometry | RecordError

logger = logging.getLogger("geoingest.parsers.assemble")

T = TypeVar("T")


def resolve_feature_id(
    attributes: Mapping[str, AttributeValue],
    index: int,
    id_keys: Sequence[str] = DEFAULT_ID_KEYS,
) -> str:
    """Return the first non-blank id attribute, else ``feature-<index>``."""
    for key in id_keys:
        value = attributes.get(key)
        if value is not None and str(value).strip():
            return str(value).strip()
    return f"{SYNTHETIC_ID_PREFIX}{index}"


def decode_records(
    records: Sequence[T],
    decode: Callable[[int, T], Geometry | UnsupportedGeometry],
    *,
    max_workers: int = 1,
) -> list[RecordOutcome]:
    """Apply ``decode(index, record)`` to every record, 1-based.

    ``RecordError`` is caught at the record boundary and returned in place
    of a geometry; any other exception propagates.
    """

    def _safe(item: tuple[int, T]) -> RecordOutcome:
        index, record = item
        try:
            return decode(index, record)
        except RecordError as exc:
            if exc.record_index is None:
                exc.record_index = index
            return exc

    indexed = list(enumerate(records, start=1))
    if max_workers <= 1 or len(indexed) <= 1:
        return [_safe(item) for item in indexed]

    with ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="geoingest") as pool:
        return list(pool.map(_safe, indexed))


class FeatureAssembler:
    """Accumulates decode outcomes into a ``BatchResult``."""

    def __init__(
        self,
        *,
        id_keys: Sequence[str] = DEFAULT_ID_KEYS,
        source: str = "",
        empty_message: str = "No valid features found",
        notice_duration_ms: int = DEFAULT_NOTICE_DURATION_MS,
    ) -> None:
        self._id_keys = tuple(id_keys)
        self._source = source
        self._empty_message = empty_message
        self._manifest = ColumnManifest()
        self._features: list[Feature] = []
        self._diagnostics = Diagnostics(notice_duration_ms=notice_duration_ms)

    def add(
        self,
        index: int,
        outcome: RecordOutcome | None,
        attributes: Mapping[str, AttributeValue],
    ) -> Feature | None:
        """Record one source record; return its Feature, or None if dropped."""
        self._manifest.extend(attributes)

        if outcome is None or isinstance(outcome, NoGeometryError):
            self._diagnostics.skipped += 1
            self._reject(index, outcome or "no geometry")
            return None
        if isinstance(outcome, RecordError):
            self._diagnostics.failed += 1
            self._reject(index, outcome)
            return None
        if isinstance(outcome, UnsupportedGeometry):
            self._diagnostics.unsupported += 1
            self._reject(index, f"geometry type {outcome.type_code} not yet implemented")
            return None

        feature_id = resolve_feature_id(attributes, index, self._id_keys)
        feature = Feature(
            id=feature_id,
            geometry=outcome,
            attributes={**attributes, ID_COLUMN: feature_id},
        )
        self._features.append(feature)
        return feature

    def result(self) -> BatchResult:
        """Return the batch result.

        Raises:
            EmptyResultError: If no record produced a feature.
        """
        if not self._features:
            msg = self._empty_message
            if self._source:
                msg = f"{msg} in {self._source}"
            raise EmptyResultError(msg, source=self._source)

        logger.info(
            "Assembled %d feature(s) from %s (%d skipped, %d failed, %d unsupported)",
            len(self._features),
            self._source or "batch",
            self._diagnostics.skipped,
            self._diagnostics.failed,
            self._diagnostics.unsupported,
        )
        return BatchResult(
            features=list(self._features),
            column_manifest=self._manifest.to_list(),
            rows=[f.to_row() for f in self._features],
            diagnostics=self._diagnostics.model_copy(deep=True),
        )

    def _reject(self, index: int, reason: object) -> None:
        message = f"Could not parse geometry for feature {index}: {reason}"
        self._diagnostics.messages.append(message)
        logger.warning("%s (source=%s)", message, self._source or "batch")
