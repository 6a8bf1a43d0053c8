import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


class Config:
    BASE_DIR = Path(__file__).resolve().parent.parent
    DATA_DIR = BASE_DIR / "data"
    DB_PATH = os.getenv("MOCKREST_DB_PATH") or str(DATA_DIR / "db.json")
    ATOMIC_WRITES = _env_bool("MOCKREST_ATOMIC_WRITES", "true")
    DEFAULT_PER_PAGE = int(os.getenv("MOCKREST_DEFAULT_PER_PAGE", "10"))


class DevConfig(Config):
    DEBUG = True


class ProdConfig(Config):
    DEBUG = False


class TestingConfig(Config):
    TESTING = True
    ATOMIC_WRITES = False
