import json
from pathlib import Path
from typing import Annotated

from pydantic_settings import BaseSettings, NoDecode
from pydantic import field_validator


def _parse_list(v):
    if isinstance(v, str):
        # Accept JSON array or comma-separated string
        v = v.strip()
        if v.startswith("["):
            return json.loads(v)
        return [s.strip() for s in v.split(",") if s.strip()]
    return v


class Settings(BaseSettings):
    countries_api_url: str = "https://restcountries.com/v3.1/all"
    countries_fields: Annotated[list[str], NoDecode] = ["name"]
    prefetch_on_startup: bool = True
    cors_origins: Annotated[list[str], NoDecode] = ["http://localhost:4200", "http://127.0.0.1:4200"]
    refresh_rate_limit: str = "10/minute"
    log_level: str = "INFO"

    @field_validator("countries_fields", "cors_origins", mode="before")
    @classmethod
    def parse_list_fields(cls, v):
        return _parse_list(v)

    model_config = {
        "env_file": str(Path(__file__).resolve().parent.parent / ".env"),
        "env_file_encoding": "utf-8",
    }


settings = Settings()
