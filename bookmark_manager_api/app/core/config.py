"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
API can be started without any configuration; override them via
environment variables in a real deployment.
"""

import os
from dataclasses import dataclass
from typing import List


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Bookmark Manager API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")

    # Backing JSON file of the long-running server.  A relative path is
    # resolved against the package root by ``core.storage``.
    data_file: str = os.getenv("DATA_FILE", "bookmarks.json")

    # Function-per-request deployments only have a writable temp
    # directory, so the serverless handler keeps its file there.
    serverless_data_file: str = os.getenv("SERVERLESS_DATA_FILE", "/tmp/bookmarks.json")

    # Title enrichment: the outbound request is bounded by this timeout
    # (seconds) and identifies itself as a regular browser.
    title_fetch_timeout: float = float(os.getenv("TITLE_FETCH_TIMEOUT", "5"))
    title_fetch_user_agent: str = os.getenv(
        "TITLE_FETCH_USER_AGENT",
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36",
    )

    # Comma‑separated list of origins allowed by CORS.  ``*`` allows all.
    cors_origins: str = os.getenv("CORS_ORIGINS", "*")

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "3001"))

    def cors_origin_list(self) -> List[str]:
        """Return ``cors_origins`` split into a list of origins."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Because the dataclass
# computes values at class definition time, environment variables should
# be set before importing this module.
settings = Settings()
