"""Centralized configuration — all env vars in one place."""

import os

DEFAULT_CARBON_DATA_URL = (
    "https://gist.githubusercontent.com/RealDranyX/1bcdfa351198416fc42cce9fe7caa0da/raw/"
    "a011c26334ecfe53b2cdd6e1b1d2adea3d905492/carbon_intensity.json"
)


class Settings:
    """Application settings loaded from environment variables."""

    def __init__(self):
        self.cors_origins: list[str] = os.getenv("CORS_ORIGINS", "*").split(",")
        self.git_sha: str = os.getenv("GIT_SHA", "unknown")
        self.environment: str = os.getenv("ENVIRONMENT", "local")

        # Server
        self.host: str = os.getenv("HOST", "0.0.0.0")
        self.port: int = _int_env("PORT", 3000)

        # Upstream dataset
        self.carbon_data_url: str = os.getenv("CARBON_DATA_URL", DEFAULT_CARBON_DATA_URL)
        self.fetch_timeout: float = _float_env("FETCH_TIMEOUT", 10.0)

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def validate(self) -> list[str]:
        """Return list of configuration problems (empty when all good)."""
        problems = []
        if not 0 < self.port < 65536:
            problems.append(f"PORT out of range: {self.port}")
        if not self.carbon_data_url.startswith(("http://", "https://")):
            problems.append(f"CARBON_DATA_URL is not an http(s) URL: {self.carbon_data_url}")
        if self.fetch_timeout <= 0:
            problems.append(f"FETCH_TIMEOUT must be positive: {self.fetch_timeout}")
        return problems


def _int_env(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, default))
    except ValueError:
        return default


def _float_env(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, default))
    except ValueError:
        return default


settings = Settings()
