# src/config/settings.py - v1
"""Typed configuration loaded from .env via pydantic-settings.

Single source of truth for import limits, batching and logging. Values are
read once when a Settings instance is built and are not mutated afterwards.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigurationError(Exception):
    """Raised when configuration is internally inconsistent."""


class Settings(BaseSettings):
    """Application settings loaded from .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    # === Chunking ===
    chunk_size: int = 500
    max_concurrent_chunks: int = 3

    # === File limits ===
    max_single_file_size: int = 10 * 1024 * 1024  # 10MB
    max_total_size: int = 1024 * 1024 * 1024  # 1GB

    # === Processing ===
    binary_check_sample_size: int = 8192
    progress_debounce_ms: int = 100

    # === Ordering ===
    priority_files: str = "package.json,composer.json,requirements.txt,go.mod,Cargo.toml"

    # === Inclusion filter extensions ===
    extra_excluded_dirs: str = ""
    extra_excluded_extensions: str = ""

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "text"
    log_file: Path | None = None
    log_rotation: str = "10MB"
    log_retention: int = 30

    # --- Validators ---

    @field_validator("chunk_size", "max_concurrent_chunks", "binary_check_sample_size")
    @classmethod
    def validate_positive(cls, v: int, info) -> int:  # noqa: N805
        if v < 1:
            raise ValueError(f"{info.field_name} must be >= 1")
        return v

    @field_validator("max_single_file_size", "max_total_size", "progress_debounce_ms")
    @classmethod
    def validate_non_negative(cls, v: int, info) -> int:  # noqa: N805
        if v < 0:
            raise ValueError(f"{info.field_name} must be >= 0")
        return v

    @model_validator(mode="after")
    def validate_config_consistency(self) -> Settings:
        """Validate cross-field consistency rules."""
        errors: list[str] = []

        if not self.priority_files_list:
            errors.append("PRIORITY_FILES must name at least one file")

        if errors:
            raise ConfigurationError("; ".join(errors))

        return self

    # --- Helpers ---

    @property
    def priority_files_list(self) -> list[str]:
        """Ordered, lowercased priority file names (earlier = more important)."""
        return [
            f.strip().lower() for f in self.priority_files.split(",") if f.strip()
        ]

    @property
    def extra_excluded_dirs_list(self) -> list[str]:
        return [d.strip() for d in self.extra_excluded_dirs.split(",") if d.strip()]

    @property
    def extra_excluded_extensions_list(self) -> list[str]:
        """Parse comma-separated extensions, normalized to '.ext' form."""
        exts = []
        for e in self.extra_excluded_extensions.split(","):
            e = e.strip().lower()
            if not e:
                continue
            exts.append(e if e.startswith(".") else f".{e}")
        return exts

    @property
    def max_total_size_mb(self) -> float:
        return self.max_total_size / (1024 * 1024)


def load_settings(**overrides: object) -> Settings:
    """Load settings from .env with optional overrides.

    Args:
        **overrides: Field-level overrides (for testing or CLI flags).

    Returns:
        Validated Settings instance.

    Raises:
        ConfigurationError: If configuration is internally inconsistent.
    """
    return Settings(**overrides)  # type: ignore[arg-type]
