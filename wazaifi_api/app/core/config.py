"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
service starts with no configuration at all, storing its collections
as JSON files under ``data/`` in the project root.
"""

import os
from dataclasses import dataclass, field
from typing import List, Optional


def _split_csv(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Wazaifi API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: Optional[str] = os.getenv("LOG_FILE") or None

    # Directory holding one ``<collection>.json`` file per collection.  A
    # relative path is resolved against the project root by the storage
    # module.
    data_dir: str = os.getenv("DATA_DIR", "data")

    # ``json`` persists collections to ``data_dir``; ``memory`` keeps them
    # in process (useful for tests and throwaway demos).
    storage_backend: str = os.getenv("STORAGE_BACKEND", "json")

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "3000"))

    # Routes are served at the root by default.  Set e.g. ``/api/v1`` to
    # mount them under a prefix instead.
    api_prefix: str = os.getenv("API_PREFIX", "")

    cors_origins: List[str] = field(
        default_factory=lambda: _split_csv(os.getenv("CORS_ORIGINS", "*"))
    )


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# should be set before importing this module.
settings = Settings()
