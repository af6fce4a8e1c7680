from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Remote store (Django REST backend)
    api_base_url: str = "http://localhost:8000/api"
    api_token: str | None = None
    request_timeout: float = 15.0  # seconds per store call

    # Server
    host: str = "127.0.0.1"
    port: int = 8765
    log_level: str = "INFO"

    # Where the host shell should send the user after a failed load
    list_route: str = "/applications"

    model_config = {"env_prefix": "JOBTRACK_"}


settings = Settings()
