from dataclasses import dataclass
import os
from pathlib import Path
from dotenv import load_dotenv


load_dotenv()


def _split_csv(value: str) -> tuple[str, ...]:
    return tuple(item.strip() for item in value.split(",") if item.strip())


def _default_preferences_path() -> str:
    return str(Path.home() / ".annacalc" / "preferences.json")


@dataclass(frozen=True)
class Settings:
    preferences_path: str = os.getenv("ANNACALC_PREFERENCES_PATH") or _default_preferences_path()
    default_theme: str = os.getenv("ANNACALC_DEFAULT_THEME", "light")

    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()
    host: str = os.getenv("HOST", "127.0.0.1")
    port: int = int(os.getenv("PORT", "8550"))

    cors_allowed_origins: tuple[str, ...] = _split_csv(
        os.getenv("CORS_ALLOWED_ORIGINS", "http://localhost:5173,http://127.0.0.1:5173")
    )
    cors_allow_origin_regex: str = os.getenv(
        "CORS_ALLOW_ORIGIN_REGEX",
        r"^https?:\/\/(localhost|127\.0\.0\.1)(:\d+)?$",
    )


settings = Settings()
