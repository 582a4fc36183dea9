import os
from pathlib import Path
from typing import Optional, List

DEFAULT_VERSION = "1.0.0"


def _split_csv(value: Optional[str]) -> List[str]:
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


class Settings:
    """Central configuration for environment variables."""

    @property
    def host(self) -> str:
        return os.getenv("HOST", "0.0.0.0")

    @property
    def port(self) -> int:
        return int(os.getenv("PORT", "3000"))

    @property
    def https_port(self) -> int:
        return int(os.getenv("HTTPS_PORT", "3443"))

    @property
    def use_https(self) -> bool:
        return os.getenv("USE_HTTPS", "false").lower() == "true"

    @property
    def certs_dir(self) -> Path:
        return Path(os.getenv("CERTS_DIR", os.path.join(os.getcwd(), "certs")))

    @property
    def allowed_origins(self) -> List[str]:
        """Origins allowed by CORS. An empty list means any origin."""
        return _split_csv(os.getenv("ALLOWED_ORIGINS"))

    @property
    def csp_connect_src(self) -> List[str]:
        return _split_csv(os.getenv("CSP_CONNECT_SRC"))

    @property
    def environment(self) -> str:
        return os.getenv("REGISTRY_ENV", "development")

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def expose_error_details(self) -> bool:
        # only when the environment is set explicitly, not via the default
        return os.getenv("REGISTRY_ENV") == "development"

    @property
    def app_version(self) -> str:
        return os.getenv("APP_VERSION", DEFAULT_VERSION)

    @property
    def api_root_path(self) -> Optional[str]:
        return os.getenv("API_ROOT_PATH")

    @property
    def log_level(self) -> str:
        return os.getenv("LOG_LEVEL", "INFO").upper()

    @property
    def httpx_logging(self) -> bool:
        return os.getenv("HTTPX_LOGGING", "false").lower() == "true"

settings = Settings()
