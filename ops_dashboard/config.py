from typing import Optional

from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # No default: an unset key is a server configuration error, not an open API
    api_key: Optional[str] = None
    database_path: str = "data/dashboard.db"
    app_name: str = "Acme Operations Dashboard API"
    log_level: str = "INFO"

    # Client-side keys handed to the dashboard front end
    mapbox_token: str = ""
    ag_charts_license: str = ""

    seed_on_startup: bool = True
    seed_random_seed: Optional[int] = None
    geocode_fallback: bool = False

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


@lru_cache
def get_settings() -> Settings:
    return Settings()
