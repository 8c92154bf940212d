# backend/app/config.py
from pathlib import Path
import os

# backend/app/config.py → ../../.. = <repo root>
REPO_ROOT = Path(__file__).resolve().parents[2]

STRATEGIES = ("xlsx", "zip")


def get_data_dir() -> Path:
    # コンテナ内なら /app/data、ローカル開発なら repo 直下の data
    container_data = Path("/app/data")
    if container_data.exists():
        return container_data
    data_dir = REPO_ROOT / "data"
    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir


def get_database_url() -> str:
    url = os.getenv("DATABASE_URL")
    if url:
        return url
    return f"sqlite:///{get_data_dir() / 'app.db'}"


def get_export_dir() -> Path:
    env = os.getenv("EXPORT_DIR")
    out = Path(env) if env else get_data_dir() / "exports"
    out.mkdir(parents=True, exist_ok=True)
    return out


def get_default_strategy() -> str:
    name = os.getenv("EXPORT_STRATEGY", "xlsx").strip().lower()
    if name not in STRATEGIES:
        raise ValueError(f"EXPORT_STRATEGY must be one of {STRATEGIES}, got {name!r}")
    return name


def get_log_level() -> str:
    return os.getenv("LOG_LEVEL", "INFO").upper()
