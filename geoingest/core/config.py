"""Ingestion configuration loaded from environment variables.

Every value has a default, so a
bare ``IngestConfig()`` is always usable.

Fail-fast validation:
    ``from_env()`` raises ``ConfigValidationError`` if any value is out of
    its valid range, so bad configuration is caught before a batch runs.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from geoingest.core.constants import (
    DEFAULT_ID_KEYS,
    DEFAULT_MERCATOR_CRS,
    DEFAULT_NATIONAL_GRID_CRS,
    DEFAULT_NOTICE_DURATION_MS,
)
from geoingest.core.exceptions import IngestError


class ConfigValidationError(IngestError):
    """Raised when configuration values are out of valid range.

    Attributes:
        key: The configuration key that failed validation.
        value: The invalid value.
        message: Human-readable description of the valid range.
    """

    default_stage = "config"
    default_code = "CONFIG_VALIDATION_FAILED"

    def __init__(self, key: str, value: object, message: str) -> None:
        self.key = key
        self.value = value
        super().__init__(f"Invalid configuration {key}={value!r}: {message}")


@dataclass(frozen=True, slots=True)
class IngestConfig:
    """Immutable ingestion configuration.

    Attributes:
        mercator_crs: Source CRS of GML coordinates.
        national_grid_crs: Source CRS of WKB coordinates.
        id_keys: Attribute keys consulted, in order, for a feature id.
        max_workers: Worker threads for per-record decoding (1 = sequential).
        notice_duration_ms: Display duration attached to summary notices.
    """

    mercator_crs: str = DEFAULT_MERCATOR_CRS
    national_grid_crs: str = DEFAULT_NATIONAL_GRID_CRS
    id_keys: tuple[str, ...] = DEFAULT_ID_KEYS
    max_workers: int = 1
    notice_duration_ms: int = DEFAULT_NOTICE_DURATION_MS

    @classmethod
    def from_env(cls) -> IngestConfig:
        """Load and validate configuration from environment variables.

        Raises:
            ConfigValidationError: If a value is out of range or a required
                string value is empty.
            ValueError: If a numeric environment variable cannot be parsed
                (e.g. ``GEOINGEST_MAX_WORKERS=abc``).
        """
        raw_keys = os.getenv("GEOINGEST_ID_KEYS", ",".join(DEFAULT_ID_KEYS))
        config = cls(
            mercator_crs=os.getenv("GEOINGEST_MERCATOR_CRS", DEFAULT_MERCATOR_CRS),
            national_grid_crs=os.getenv("GEOINGEST_NATIONAL_GRID_CRS", DEFAULT_NATIONAL_GRID_CRS),
            id_keys=tuple(k.strip() for k in raw_keys.split(",") if k.strip()),
            max_workers=int(os.getenv("GEOINGEST_MAX_WORKERS", "1")),
            notice_duration_ms=int(
                os.getenv("GEOINGEST_NOTICE_DURATION_MS", str(DEFAULT_NOTICE_DURATION_MS))
            ),
        )
        _validate(config)
        return config


def _validate(config: IngestConfig) -> None:
    """Validate configuration ranges.  Raises ``ConfigValidationError``."""
    if not config.mercator_crs:
        raise ConfigValidationError(
            "GEOINGEST_MERCATOR_CRS",
            config.mercator_crs,
            "must not be empty",
        )

    if not config.national_grid_crs:
        raise ConfigValidationError(
            "GEOINGEST_NATIONAL_GRID_CRS",
            config.national_grid_crs,
            "must not be empty",
        )

    if not config.id_keys:
        raise ConfigValidationError(
            "GEOINGEST_ID_KEYS",
            config.id_keys,
            "must name at least one attribute key",
        )

    if config.max_workers < 1:
        raise ConfigValidationError(
            "GEOINGEST_MAX_WORKERS",
            config.max_workers,
            "must be >= 1",
        )

    if config.notice_duration_ms <= 0:
        raise ConfigValidationError(
            "GEOINGEST_NOTICE_DURATION_MS",
            config.notice_duration_ms,
            "must be > 0 (milliseconds)",
        )
