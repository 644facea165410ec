import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from dotenv import load_dotenv

load_dotenv(Path(__file__).resolve().parent / ".env")


def _require_env(name: str) -> str:
    value = os.getenv(name)
    if not value:
        raise RuntimeError(f"Missing required environment variable: {name}")
    return value


def _get_list(name: str, fallback: str = "") -> List[str]:
    raw_value = os.getenv(name, fallback)
    if not raw_value:
        return []
    return [item.strip() for item in raw_value.split(",") if item.strip()]


def _get_positive_int(name: str, fallback: int) -> int:
    raw_value = os.getenv(name)
    if raw_value is None or not raw_value.strip():
        return fallback
    try:
        value = int(raw_value)
    except ValueError as exc:
        raise RuntimeError(f"{name} must be an integer, got {raw_value!r}") from exc
    if value <= 0:
        raise RuntimeError(f"{name} must be positive, got {value}")
    return value


@dataclass(frozen=True)
class Settings:
    supabase_url: str = _require_env("SUPABASE_URL")
    supabase_key: str = _require_env("SUPABASE_KEY")
    whatsapp_number: str = os.getenv("WHATSAPP_NUMBER", "+2250556520604")
    assets_bucket: str = os.getenv("ASSETS_BUCKET", "products")
    product_image_path: str = os.getenv("PRODUCT_IMAGE_PATH", "sniper_bottle.jpg")
    logo_path: str = os.getenv("LOGO_PATH", "logo_stopunaise.png")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    session_ttl_seconds: int = _get_positive_int("SESSION_TTL_SECONDS", 3600)
    max_sessions: int = _get_positive_int("MAX_SESSIONS", 10000)
    allowed_origins: List[str] = field(
        default_factory=lambda: _get_list("ALLOWED_ORIGINS", "*")
    )


settings = Settings()
