"""Centralized configuration — all env vars in one place."""

import os
from pathlib import Path

DEMO_API_KEY = "DEMO_KEY"

_DEFAULT_STATIC_DIR = Path(__file__).resolve().parent / "public"


class Settings:
    """Application settings loaded from environment variables."""

    def __init__(self):
        self.cors_origins: list[str] = os.getenv("CORS_ORIGINS", "*").split(",")
        self.git_sha: str = os.getenv("GIT_SHA", "unknown")
        self.environment: str = os.getenv("ENVIRONMENT", "local")

        # Server
        self.host: str = os.getenv("HOST", "0.0.0.0")
        self.port: int = int(os.getenv("PORT", "8787"))
        self.static_dir: str = os.getenv("STATIC_DIR", str(_DEFAULT_STATIC_DIR))

        # NASA APOD upstream
        self.nasa_api_key: str | None = os.getenv("NASA_API_KEY")
        self.apod_base_url: str = os.getenv("APOD_BASE_URL", "https://api.nasa.gov/planetary/apod")
        self.apod_cache_ttl_seconds: float = float(os.getenv("APOD_CACHE_TTL_SECONDS", "3600"))
        self.upstream_timeout_seconds: float = float(os.getenv("UPSTREAM_TIMEOUT_SECONDS", "10"))

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def api_key(self) -> str:
        """Configured NASA key, or the shared rate-limited demo key."""
        return self.nasa_api_key or DEMO_API_KEY

    def validate(self) -> list[str]:
        """Return startup warnings about missing or fallback configuration."""
        warnings = []
        if not self.nasa_api_key:
            warnings.append(
                f"NASA_API_KEY not set; using shared {DEMO_API_KEY} (heavily rate-limited)"
            )
        if not Path(self.static_dir).is_dir():
            warnings.append(f"STATIC_DIR {self.static_dir} does not exist; static assets disabled")
        return warnings


settings = Settings()
