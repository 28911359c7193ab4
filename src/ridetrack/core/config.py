from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    environment: str = "dev"
    base_url: str = "http://localhost:8000"

    database_url: str = "sqlite:///./rides.db"

    # Generated per-user addresses look like "corridas-1a2b3c4d5e6f@ridetrack.app".
    ingestion_domain: str = "ridetrack.app"
    ingestion_prefix: str = "corridas"

    # Calendar dates written in receipts are local to this zone.
    receipt_timezone: str = "America/Sao_Paulo"

    max_email_bytes: int = 10 * 1024 * 1024


settings = Settings()
