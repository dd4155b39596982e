"""Runtime configuration helpers shared by CLI commands."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from config import settings
from packages.env import load_env


@dataclass(frozen=True)
class RuntimeConfig:
    """Resolved configuration for command handlers."""

    data_file: Path
    log_level: str
    mirror_path: Optional[Path] = None


def bootstrap() -> None:
    """Load environment variables once."""

    load_env()


def resolve_data_file(explicit: Optional[str] = None) -> Path:
    """Return the dataset path honoring CLI overrides and settings."""

    return Path(explicit) if explicit else Path(settings.APM_DATA_FILE)


def resolve_mirror_path(explicit: Optional[str] = None) -> Optional[Path]:
    if explicit:
        return Path(explicit)
    return Path(settings.APM_MIRROR_PATH) if settings.APM_MIRROR_PATH else None


def build_runtime_config(
    *, log_level: str, data_file: Optional[str] = None, mirror_path: Optional[str] = None
) -> RuntimeConfig:
    """Construct a :class:`RuntimeConfig` object for handlers."""

    return RuntimeConfig(
        data_file=resolve_data_file(data_file),
        log_level=log_level,
        mirror_path=resolve_mirror_path(mirror_path),
    )
