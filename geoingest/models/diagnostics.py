"""Pydantic models for batch diagnostics and user-facing notices.

The decoders never talk to a UI. Instead every parse call returns a
``Diagnostics`` summary and callers turn it, or a terminal exception, into
at most one ``Notice`` each for whatever notification sink they own.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from geoingest.core.constants import DEFAULT_NOTICE_DURATION_MS
from geoingest.core.exceptions import IngestError

Severity = Literal["info", "warning", "error"]


class Notice(BaseModel):
    """A single user-visible message.

    Attributes:
        severity: ``"info"``, ``"warning"`` or ``"error"``.
        message: Text shown to the user.
        display_duration_ms: How long the sink should display the notice.
    """

    severity: Severity = "info"
    message: str
    display_duration_ms: int = Field(default=DEFAULT_NOTICE_DURATION_MS, gt=0)

    @classmethod
    def from_error(
        cls, exc: Exception, *, display_duration_ms: int = DEFAULT_NOTICE_DURATION_MS
    ) -> Notice:
        """Build the error notice for a terminal parse failure."""
        message = exc.message if isinstance(exc, IngestError) else str(exc)
        return cls(
            severity="error",
            message=message or "Failed to parse file",
            display_duration_ms=display_duration_ms,
        )


class Diagnostics(BaseModel):
    """Per-batch summary of records that contributed no feature.

    Attributes:
        skipped: Records with no geometry value at all (empty cell,
            missing geometry property, no valid polygon member).
        failed: Records whose geometry was present but malformed.
        unsupported: Records with a recognised but undecoded geometry type.
        messages: One log line per rejected record, in source order.
        notice_duration_ms: Display duration for the summary notice.
    """

    skipped: int = 0
    failed: int = 0
    unsupported: int = 0
    messages: list[str] = Field(default_factory=list)
    notice_duration_ms: int = Field(default=DEFAULT_NOTICE_DURATION_MS, gt=0)

    @property
    def rejected(self) -> int:
        """Total records that contributed no feature."""
        return self.skipped + self.failed + self.unsupported

    def to_notice(self, *, display_duration_ms: int | None = None) -> Notice | None:
        """Return one summary warning, or ``None`` if nothing was rejected.

        The notice lasts ``notice_duration_ms`` unless overridden.
        """
        if self.rejected == 0:
            return None
        if display_duration_ms is None:
            display_duration_ms = self.notice_duration_ms
        return Notice(
            severity="warning",
            message=f"Skipped {self.rejected} rows with invalid geometry",
            display_duration_ms=display_duration_ms,
        )
