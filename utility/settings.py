import os
from dataclasses import dataclass, field
from typing import List

from dotenv import load_dotenv

DEFAULT_ENDPOINT = "https://generativelanguage.googleapis.com/v1beta/models"


@dataclass
class Settings:
    """Runtime configuration, read from the environment (and .env if present)"""
    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.0-flash"
    gemini_endpoint: str = DEFAULT_ENDPOINT
    gemini_timeout_seconds: float = 30.0
    session_ttl_hours: int = 2
    session_cleanup_interval: int = 300  # seconds
    allowed_origins: List[str] = field(default_factory=lambda: ["*"])

    @classmethod
    def from_env(cls) -> "Settings":
        # Load variables from .env into the environment
        load_dotenv()

        return cls(
            gemini_api_key=os.getenv("GEMINI_API_KEY", ""),
            gemini_model=os.getenv("GEMINI_MODEL", "gemini-2.0-flash"),
            gemini_endpoint=os.getenv("GEMINI_ENDPOINT", DEFAULT_ENDPOINT).rstrip("/"),
            gemini_timeout_seconds=float(os.getenv("GEMINI_TIMEOUT_SECONDS", "30")),
            session_ttl_hours=int(os.getenv("SESSION_TTL_HOURS", "2")),
            session_cleanup_interval=int(os.getenv("SESSION_CLEANUP_INTERVAL", "300")),
            allowed_origins=[o.strip() for o in os.getenv("ALLOWED_ORIGINS", "*").split(",") if o.strip()],
        )
