"""
Central settings for the quiz service (FastAPI).

Values come from environment variables; a local `.env` is loaded first for
development. Anything unset falls back to the defaults below.
"""
from __future__ import annotations
from pydantic import BaseModel, Field
from typing import List, Mapping, Optional
import os

from dotenv import load_dotenv


class Settings(BaseModel):
    service_name: str = "quiz-management-api"
    version: str = "1.0.0"
    environment: str = "production"

    log_level: str = "INFO"

    # Every route lives under this prefix (health included)
    api_prefix: str = "/api/v1"

    cors_allow_origins: List[str] = Field(default_factory=lambda: ["*"])

    # Used only when running `python main.py`
    host: str = "0.0.0.0"
    port: int = 3000

    @property
    def is_development(self) -> bool:
        return self.environment.lower() == "development"


def _split_csv(value: str) -> List[str]:
    return [part.strip() for part in value.split(",") if part.strip()]


def load_settings(environ: Optional[Mapping[str, str]] = None, use_dotenv: bool = True) -> Settings:
    """Build Settings from the environment (or from `environ` when given)."""
    if environ is None:
        if use_dotenv:
            load_dotenv()
        environ = os.environ

    values = {}
    for key, field in (
        ("SERVICE_NAME", "service_name"),
        ("VERSION", "version"),
        ("ENVIRONMENT", "environment"),
        ("LOG_LEVEL", "log_level"),
        ("API_PREFIX", "api_prefix"),
        ("HOST", "host"),
        ("PORT", "port"),
    ):
        if environ.get(key):
            values[field] = environ[key]
    if environ.get("CORS_ALLOW_ORIGINS"):
        values["cors_allow_origins"] = _split_csv(environ["CORS_ALLOW_ORIGINS"])
    return Settings(**values)
