from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # HTTP fetcher
    http_timeout: float = 30.0
    http_max_redirects: int = 5
    http_max_retries: int = 0  # transport-level retries on connect errors; off by default
    http_verify_ssl: bool = True  # set False behind corporate SSL-inspection proxies
    http_accept_language: str = "en-US,en;q=0.9"

    # Logging
    log_level: str = "INFO"


settings = Settings()
