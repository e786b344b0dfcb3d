import os
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_data_dir

APP_NAME = "symptom-map"
APP_AUTHOR = "symptom-map"

PACKAGE_DIR = Path(__file__).resolve().parent
BUNDLED_ASSETS_DIR = PACKAGE_DIR / "image" / "body"
RESOURCES_DIR = PACKAGE_DIR / "resources"


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int, *, minimum: int = 0) -> int:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return max(minimum, value)


def _resolve_data_dir() -> Path:
    env_dir = os.getenv("SYMPTOM_MAP_DATA_DIR")
    if env_dir:
        return Path(env_dir)
    return Path(user_data_dir(APP_NAME, APP_AUTHOR))


DATA_DIR = _resolve_data_dir()
LOG_DIR = DATA_DIR / "logs"
DB_FILE = Path(os.getenv("SYMPTOM_MAP_DB_FILE") or (DATA_DIR / "symptoms.db"))
SELECTION_STATE_FILE = DATA_DIR / "selection_state.json"

DATA_DIR.mkdir(parents=True, exist_ok=True)
LOG_DIR.mkdir(parents=True, exist_ok=True)
DB_FILE.parent.mkdir(parents=True, exist_ok=True)


def default_database_url() -> str:
    # SQLite URL uses forward slashes; as_posix() keeps it cross-platform.
    return f"sqlite:///{DB_FILE.as_posix()}"


@dataclass(frozen=True)
class Settings:
    database_url: str = os.getenv("DATABASE_URL", default_database_url())
    echo_sql: bool = os.getenv("SQL_ECHO", "0") == "1"
    assets_dir: Path = Path(os.getenv("SYMPTOM_MAP_ASSETS_DIR") or BUNDLED_ASSETS_DIR)
    canvas_width: int = _env_int("SYMPTOM_MAP_CANVAS_WIDTH", 420, minimum=1)
    canvas_height: int = _env_int("SYMPTOM_MAP_CANVAS_HEIGHT", 620, minimum=1)
    canvas_init_delay_ms: int = _env_int("SYMPTOM_MAP_CANVAS_INIT_DELAY_MS", 100)
    image_timeout_ms: int = _env_int("SYMPTOM_MAP_IMAGE_TIMEOUT_MS", 15_000)
    query_timeout_ms: int = _env_int("SYMPTOM_MAP_QUERY_TIMEOUT_MS", 10_000)
    persist_selection: bool = _env_bool("SYMPTOM_MAP_PERSIST_SELECTION", True)


settings = Settings()
