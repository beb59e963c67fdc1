import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv
import yaml

BASE_DIR = Path(__file__).resolve().parents[1]
load_dotenv(dotenv_path=BASE_DIR / ".env.local")
load_dotenv(dotenv_path=BASE_DIR / ".env")

DEFAULT_GAZETTEER_DIR = Path(__file__).resolve().parent / "data"


@dataclass
class Settings:
    time_window_hours: float
    impact_multipliers: dict
    recency_decay: dict
    max_top_news: int
    situation_lookback_hours: float
    max_relevant_events: int
    alert_limit: int
    cache_ttl_seconds: int
    cache_maxsize: int
    gazetteer_dir: str
    log_level: str


def _load_yaml_config() -> dict:
    config_path = os.getenv("CONFIG_PATH", str(BASE_DIR / "config.yaml"))
    try:
        with open(config_path, "r", encoding="utf-8") as handle:
            return yaml.safe_load(handle) or {}
    except FileNotFoundError:
        return {}


def load_settings() -> Settings:
    cfg = _load_yaml_config()
    scoring = cfg.get("scoring") or {}
    situation = cfg.get("situation") or {}
    return Settings(
        time_window_hours=float(os.getenv("TIME_WINDOW_HOURS", scoring.get("time_window_hours") or 12)),
        impact_multipliers=scoring.get("impact_multipliers") or {"low": 1, "medium": 2, "high": 3},
        recency_decay=scoring.get("recency_decay") or {"recent": 1.0, "medium": 0.8, "old": 0.6},
        max_top_news=int(os.getenv("MAX_TOP_NEWS", scoring.get("max_top_news") or 10)),
        situation_lookback_hours=float(
            os.getenv("SITUATION_LOOKBACK_HOURS", situation.get("lookback_hours") or 24)
        ),
        max_relevant_events=int(os.getenv("MAX_RELEVANT_EVENTS", situation.get("max_relevant_events") or 5)),
        alert_limit=int(os.getenv("ALERT_LIMIT", cfg.get("alert_limit") or 20)),
        cache_ttl_seconds=int(os.getenv("CACHE_TTL_SECONDS", cfg.get("cache_ttl_seconds") or 300)),
        cache_maxsize=int(os.getenv("CACHE_MAXSIZE", cfg.get("cache_maxsize") or 512)),
        gazetteer_dir=os.getenv("GAZETTEER_DIR", cfg.get("gazetteer_dir") or str(DEFAULT_GAZETTEER_DIR)),
        log_level=os.getenv("LOG_LEVEL", cfg.get("log_level") or "INFO").upper(),
    )
