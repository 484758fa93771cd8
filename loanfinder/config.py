from dataclasses import dataclass, fields
from pathlib import Path
import os

import yaml

CONFIG_PATH = Path("config/site.yaml")
STORAGE_BACKENDS = ("session", "duckdb")


class ConfigError(Exception):
    pass


@dataclass
class Settings:
    site_name: str = "LoanFinder NZ"
    lenders_path: Path = Path("data/lenders.json")
    storage_backend: str = "session"   # "session" | "duckdb"
    duckdb_path: Path = Path("db/loanfinder.duckdb")
    log_level: str = "INFO"
    disclaimer: str = (
        "This calculator provides an indicative eligibility score based on public NZ lending criteria. "
        "It is not a credit decision and does not constitute financial advice."
    )


def config_path() -> Path:
    return Path(os.getenv("LOANFINDER_CONFIG", CONFIG_PATH.as_posix()))

def load_settings(path: Path | None = None) -> Settings:
    path = Path(path) if path is not None else config_path()
    raw = {}
    if path.exists():
        try:
            raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"{path}: invalid YAML ({e})") from e
    if not isinstance(raw, dict):
        raise ConfigError(f"{path}: expected a mapping at top level")

    known = {f.name for f in fields(Settings)}
    settings = Settings(**{k: v for k, v in raw.items() if k in known})
    settings.lenders_path = Path(settings.lenders_path)
    settings.duckdb_path = Path(settings.duckdb_path)
    if settings.storage_backend not in STORAGE_BACKENDS:
        raise ConfigError(f"Unknown storage_backend '{settings.storage_backend}' (use one of {STORAGE_BACKENDS})")
    return settings
