"""Application settings loaded from environment / .env file."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Server ────────────────────────────────────────────
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"

    # ── CORS ──────────────────────────────────────────────
    allowed_origins: str = (
        "https://majsamse.gensparkspace.com,"
        "https://usodojax.gensparkspace.com,"
        "http://localhost:3000,"
        "https://localhost:3000"
    )
    allowed_origin_regex: str = r"https://.*\.gensparkspace\.com"

    # ── Upstream open-data portal ─────────────────────────
    upstream_base_url: str = "http://dados.recife.pe.gov.br"


@lru_cache
def get_settings() -> Settings:
    return Settings()
