"""Unified ingestion exception taxonomy.

Every domain exception inherits from ``IngestError`` and carries structured
context fields so that callers can decide whether a failure is confined to
one record or terminates the whole batch.

Taxonomy categories
-------------------
- ``RecordError``: one record cannot be decoded. Caught at the record
  boundary, counted, logged; never propagates past the feature assembler.
- ``BatchError``: the batch as a whole cannot produce output. Surfaced
  to the caller.

Unsupported geometry types are *not* exceptions; the binary decoder
returns an ``UnsupportedGeometry`` value for them.

Every exception exposes ``to_error_dict()`` for a stable structured error
payload suitable for logging and user-facing notices.
"""

from __future__ import annotations


class IngestError(Exception):
    """Base exception for all ingestion-domain errors.

    Attributes:
        message: Human-readable error description.
        stage: Pipeline stage where the error occurred
            (e.g. ``"decode_wkb"``, ``"decode_gml"``).
        code: Machine-readable error code (e.g. ``"WKB_MALFORMED_BUFFER"``).
        record_index: 1-based position of the offending record, if any.
        source: Name of the input (file name, column name) for context.
    """

    #: Default stage for subclasses (override via class attribute or kwarg).
    default_stage: str = ""
    #: Default code for subclasses (override via class attribute or kwarg).
    default_code: str = ""

    def __init__(
        self,
        message: str = "",
        *,
        stage: str = "",
        code: str = "",
        record_index: int | None = None,
        source: str = "",
    ) -> None:
        self.message = message
        self.stage = stage or self.default_stage
        self.code = code or self.default_code
        self.record_index = record_index
        self.source = source
        super().__init__(message)

    @property
    def category(self) -> str:
        """Return the error category based on concrete class."""
        if isinstance(self, RecordError):
            return "record"
        if isinstance(self, BatchError):
            return "batch"
        return "config"

    def to_error_dict(self) -> dict[str, object]:
        """Return a structured error payload with stable keys."""
        return {
            "category": self.category,
            "code": self.code,
            "stage": self.stage,
            "message": self.message,
            "record_index": self.record_index,
            "source": self.source,
        }


# ---------------------------------------------------------------------------
# Category base classes
# ---------------------------------------------------------------------------


class RecordError(IngestError):
    """A single record failed to decode. Never aborts the batch."""


class BatchError(IngestError):
    """The batch cannot produce a canonical result. Terminal."""


# ---------------------------------------------------------------------------
# Record-level errors
# ---------------------------------------------------------------------------


class MalformedBufferError(RecordError):
    """Raised when hex text is invalid or a read runs past the buffer end."""

    default_stage = "decode_wkb"
    default_code = "WKB_MALFORMED_BUFFER"


class MalformedGeometryError(RecordError):
    """Raised when a declared count overruns the buffer or a ring is invalid."""

    default_stage = "decode_wkb"
    default_code = "GEOMETRY_MALFORMED"


class NoGeometryError(RecordError):
    """Raised when a record carries no decodable polygon member."""

    default_stage = "decode_gml"
    default_code = "GML_NO_GEOMETRY"


# ---------------------------------------------------------------------------
# Batch-level errors
# ---------------------------------------------------------------------------


class GmlParseError(BatchError):
    """Raised when a GML document is not XML or holds no feature members."""

    default_stage = "parse_gml"
    default_code = "GML_PARSE_FAILED"


class EmptyResultError(BatchError):
    """Raised when every record of a batch failed to produce a feature."""

    default_stage = "assemble"
    default_code = "EMPTY_RESULT"
