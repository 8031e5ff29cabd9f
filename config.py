"""
config.py — настройки из окружения (.env).

Все параметры собираются в один Settings и явно передаются в fetch,
Gemini-клиент и хранилище. Модули разбора про окружение не знают.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from bracket import DEFAULT_MODEL

DEFAULT_SOURCE_URL = "https://en.wikipedia.org/wiki/2025_Africa_Cup_of_Nations"
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)
DEFAULT_ACCEPT = "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8"


@dataclass(frozen=True)
class Settings:
    source_url: str = DEFAULT_SOURCE_URL
    user_agent: str = DEFAULT_USER_AGENT
    http_accept: str = DEFAULT_ACCEPT
    http_timeout: float = 25.0

    tournament_id: str = "afcon_2025"

    db_host: str = "localhost"
    db_port: int = 5432
    db_name: str = "postgres"
    db_user: str = "postgres"
    db_password: str = ""
    db_connect_timeout_sec: int = 10

    gemini_api_key: str = ""
    gemini_model: str = DEFAULT_MODEL
    gemini_timeout: float = 60.0
    bracket_max_bytes: int = 30_000

    scrape_interval_seconds: int = 600
    log_level: str = "INFO"
    log_dir: str = "logs"
    api_port: int = 8050

    @property
    def http_headers(self) -> dict:
        return {"User-Agent": self.user_agent, "Accept": self.http_accept}

    @property
    def conninfo(self) -> str:
        return (
            f"host={self.db_host} port={self.db_port} dbname={self.db_name} "
            f"user={self.db_user} password={self.db_password} "
            f"connect_timeout={self.db_connect_timeout_sec} application_name=afcon_snapshot"
        )


def load_settings() -> Settings:
    load_dotenv()

    return Settings(
        source_url=os.getenv("SOURCE_URL", DEFAULT_SOURCE_URL),
        user_agent=os.getenv("USER_AGENT", DEFAULT_USER_AGENT),
        http_accept=os.getenv("HTTP_ACCEPT", DEFAULT_ACCEPT),
        http_timeout=float(os.getenv("HTTP_TIMEOUT", "25")),
        tournament_id=os.getenv("TOURNAMENT_ID", "afcon_2025"),
        db_host=os.getenv("DB_HOST", "localhost"),
        db_port=int(os.getenv("DB_PORT", "5432")),
        db_name=os.getenv("DB_NAME", "postgres"),
        db_user=os.getenv("DB_USER", "postgres"),
        db_password=os.getenv("DB_PASSWORD", ""),
        db_connect_timeout_sec=int(os.getenv("DB_CONNECT_TIMEOUT_SEC", "10")),
        gemini_api_key=os.getenv("GEMINI_API_KEY", ""),
        gemini_model=os.getenv("GEMINI_MODEL", DEFAULT_MODEL),
        gemini_timeout=float(os.getenv("GEMINI_TIMEOUT", "60")),
        bracket_max_bytes=int(os.getenv("BRACKET_MAX_BYTES", "30000")),
        scrape_interval_seconds=int(os.getenv("SCRAPE_INTERVAL_SECONDS", "600")),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        log_dir=os.getenv("LOG_DIR", "logs"),
        api_port=int(os.getenv("API_PORT", "8050")),
    )
