from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    # ─── Application ───────────────────────────────────────────────────────────
    APP_NAME: str = "Fleet Manager"
    APP_ENV:  str = "development"
    APP_DEBUG: bool = True
    APP_HOST:  str = "0.0.0.0"
    APP_PORT:  int = 8000

    # ─── Remote Database ───────────────────────────────────────────────────────
    # Empty URL = no remote backend, the session latches into sample-data mode
    DATABASE_URL:          str  = ""
    DATABASE_POOL_SIZE:    int  = 10
    DATABASE_MAX_OVERFLOW: int  = 20
    DATABASE_POOL_TIMEOUT: int  = 30
    DATABASE_ECHO:         bool = False

    # ─── Data Availability ─────────────────────────────────────────────────────
    FORCE_SAMPLE_DATA:     bool  = False
    RESILIENT_WRITES:      bool  = False   # report non-durable success on backend failure
    INIT_TIMEOUT_SECONDS:  float = 10.0
    FALLBACK_STORE_DIR:    str   = ".fleet_data"
    FALLBACK_DATA_VERSION: str   = "1.0"

    # ─── JWT ───────────────────────────────────────────────────────────────────
    SECRET_KEY:                    str
    ALGORITHM:                     str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES:   int = 480

    # ─── Administrator ─────────────────────────────────────────────────────────
    ADMIN_USERNAME:      str = "admin"
    ADMIN_EMAIL:         str = "admin@fleet.local"
    ADMIN_NAME:          str = "System Administrator"
    ADMIN_PASSWORD_HASH: str = ""   # bcrypt hash; empty disables admin login

    # ─── CORS ──────────────────────────────────────────────────────────────────
    CORS_ORIGINS: str = "http://localhost:3000,http://localhost:5173"

    def get_cors_origins(self) -> List[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",")]

    @property
    def is_production(self) -> bool:
        return self.APP_ENV == "production"

    @property
    def is_development(self) -> bool:
        return self.APP_ENV == "development"

    model_config = {"env_file": ".env", "case_sensitive": True, "extra": "ignore"}


settings = Settings()
