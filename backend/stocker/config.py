from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import List
import os


class Settings(BaseSettings):
    """Global app settings loaded from environment.
    - Keep defaults light for dev.
    - Override via .env or real env vars.
    """

    APP_NAME: str = "stocker_api"
    APP_ENV: str = "dev"
    APP_DEBUG: bool = True
    LOG_DIR: str = "logs"

    MONGODB_URI: str = "mongodb://localhost:27017/stocker"

    # Raw CORS string from env (comma-separated); parsed via cors_origins property
    CORS_ORIGINS: str | None = None

    # OTP codes live this long after being issued
    OTP_EXPIRE_MINUTES: int = 10

    # Mail provider config (console | smtp)
    EMAIL_PROVIDER: str = "console"
    EMAIL_FROM: str = '"Dashboard App" <no-reply@stocker.local>'
    SMTP_HOST: str | None = None
    SMTP_PORT: int = 587
    SMTP_USER: str | None = None
    SMTP_PASSWORD: str | None = None
    SMTP_USE_TLS: bool = True
    SMTP_TIMEOUT: float = 15.0
    # Link used by the "Get Started" button of the welcome email
    DASHBOARD_URL: str = "http://localhost:3000/dashboard"

    # Product catalog source (remote | static)
    PRODUCT_SOURCE: str = "remote"
    PRODUCTS_API_URL: str = "https://dummyjson.com/products"
    PRODUCTS_API_TIMEOUT: float = 10.0
    PRODUCTS_DEFAULT_LIMIT: int = 30
    # Static fixture; empty means the bundled stocker/data/products.json
    PRODUCTS_FILE: str | None = None
    # How many products the dashboard views load (0 = everything)
    DASHBOARD_PRODUCTS_LIMIT: int = 0

    class Config:
        env_file = ".env"
        case_sensitive = False

    @property
    def cors_origins(self) -> List[str]:
        """Return CORS origins as a list, parsing comma-separated env string."""
        raw = self.CORS_ORIGINS or os.getenv("CORS_ORIGINS", "") or ""
        return [o.strip() for o in raw.split(",") if o.strip()]


@lru_cache()
def get_settings() -> Settings:
    """Cached settings instance."""
    return Settings()
