"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
screen can be started against a local development API without any
configuration at all.
"""

import os
from dataclasses import dataclass
from typing import Optional


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Person Registry")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: Optional[str] = os.getenv("LOG_FILE") or None

    # Base URL of the remote person collection.  The client appends
    # ``/person`` and ``/person/{id}`` to it.
    api_base_url: str = os.getenv("PERSON_API_BASE_URL", "http://localhost:3333")
    request_timeout: float = float(os.getenv("PERSON_API_TIMEOUT", "15"))

    # IANA timezone used to interpret birth dates entered in the form.
    # A date is sent as local midnight in this zone, converted to UTC.
    timezone: str = os.getenv("PERSON_REGISTRY_TIMEZONE", "UTC")

    # Bind address of the in‑memory development API (``run.py --serve``).
    dev_api_host: str = os.getenv("DEV_API_HOST", "127.0.0.1")
    dev_api_port: int = int(os.getenv("DEV_API_PORT", "3333"))


# Environment variables must be set before this module is imported;
# the dataclass defaults are evaluated once.
settings = Settings()
