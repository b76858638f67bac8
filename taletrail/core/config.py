"""Settings read from the environment (a local .env file is loaded first)."""

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv

DEFAULT_DATABASE_URL = "sqlite:///./taletrail.db"


@dataclass(frozen=True)
class Settings:
    database_url: str
    sql_echo: bool
    supabase_url: Optional[str]
    supabase_service_role_key: Optional[str]
    openai_api_key: Optional[str]
    anthropic_api_key: Optional[str]
    google_ai_api_key: Optional[str]
    log_level: str


def _flag(value: Optional[str]) -> bool:
    return (value or "").strip().lower() in {"1", "true", "yes", "on"}


@lru_cache
def get_settings() -> Settings:
    load_dotenv()
    return Settings(
        database_url=os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL),
        sql_echo=_flag(os.getenv("SQL_ECHO")),
        supabase_url=os.getenv("SUPABASE_URL"),
        supabase_service_role_key=os.getenv("SUPABASE_SERVICE_ROLE_KEY"),
        openai_api_key=os.getenv("OPENAI_API_KEY"),
        anthropic_api_key=os.getenv("ANTHROPIC_API_KEY"),
        google_ai_api_key=os.getenv("GOOGLE_AI_API_KEY"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
