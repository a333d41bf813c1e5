"""Settings loader for ulid_workers."""

from pathlib import Path
from typing import Any

import tomllib
from pydantic_settings import BaseSettings, SettingsConfigDict


def _norm_level(value: Any, default: str) -> str:
    if isinstance(value, str):
        return value.upper()
    if isinstance(value, bool):
        return default if value else "NONE"
    return default


def _toml_settings_source() -> dict[str, Any]:
    """Load settings from config.toml with keys mapped to Settings fields.

    This source has LOWER priority than env/.env so those can override TOML.
    """
    cfg_path = Path("config.toml")
    if not cfg_path.exists():
        return {}
    with cfg_path.open("rb") as f:
        t = tomllib.load(f)

    ulid_cfg = t.get("ulid", {}) or {}
    log_cfg = t.get("logging", {}) or {}

    out: dict[str, Any] = {}
    if "monotonic" in ulid_cfg:
        out["monotonic"] = ulid_cfg["monotonic"]

    overall = str(log_cfg.get("level", "INFO")).upper()
    out["logging_enabled"] = log_cfg.get("enabled", True)
    out["logging_level"] = overall
    # Per-handler levels: INFO|DEBUG|WARNING|ERROR|CRITICAL|NONE, or a bool
    out["logging_console"] = _norm_level(log_cfg.get("console"), overall)
    if "to_file" in log_cfg:
        out["logging_file"] = _norm_level(log_cfg["to_file"], overall)
    for key in ("file_path", "max_bytes", "backup_count"):
        if key in log_cfg and log_cfg[key] is not None:
            out[f"logging_{key}"] = log_cfg[key]
    return out


class Settings(BaseSettings):
    # --- Generator ---
    monotonic: bool = True

    # --- Logging ---
    logging_enabled: bool = True
    logging_level: str = "INFO"
    logging_console: str = "INFO"
    logging_file: str = "NONE"
    logging_file_path: str = "logs/ulid_workers.jsonl"
    logging_max_bytes: int = 5_000_000
    logging_backup_count: int = 5

    model_config = SettingsConfigDict(
        env_prefix="ULID_",
        case_sensitive=False,
        env_file=".env",
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        # Precedence (highest to lowest):
        # 1) init_settings (explicit overrides in code/tests)
        # 2) dotenv (.env in cwd)
        # 3) env_settings (OS env, ULID_ prefix)
        # 4) TOML (config.toml in cwd)
        # 5) file_secret_settings
        return (
            init_settings,
            dotenv_settings,
            env_settings,
            _toml_settings_source,
            file_secret_settings,
        )


def load_settings() -> Settings:
    return Settings()
