from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # ─── App ──────────────────────────────
    APP_NAME: str = "astro-positions"
    VERSION: str = "1.0.0"
    ENV: str = "local"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = ["*"]

    # ─── Swiss Ephemeris ──────────────────
    EPHE_PATH: str = "ephemeris"
    DEFAULT_HOUSE_SYSTEM: str = "P"

    # ─── Chat ─────────────────────────────
    CHAT_PERSONA: str = "Coaler"

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
