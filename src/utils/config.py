from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv


@dataclass(frozen=True)
class APIConfig:
    base_url: str
    timeout_seconds: float


def _project_root() -> Path:
    # Resolve from this file: .../src/utils/config.py -> project root is 3 parents up.
    return Path(__file__).resolve().parents[2]


def load_api_config(path: str | None = None) -> APIConfig:
    """
    Load upstream API config from YAML.

    Precedence:
    - explicit `path`
    - env `COUNTRY_API_CONFIG`
    - project default `config/api.yaml`
    """
    load_dotenv()
    cfg_path = Path(path or os.getenv("COUNTRY_API_CONFIG") or (_project_root() / "config" / "api.yaml"))
    cfg = load_yaml(cfg_path)
    api = cfg.get("api") or {}

    base_url = api.get("base_url")
    timeout_seconds = api.get("timeout_seconds")

    missing: list[str] = []
    if not base_url:
        missing.append("api.base_url")
    if timeout_seconds is None:
        missing.append("api.timeout_seconds")
    if missing:
        raise ValueError(f"Missing {', '.join(missing)} in {cfg_path}")

    return APIConfig(
        base_url=str(base_url),
        timeout_seconds=float(timeout_seconds),
    )


def load_yaml(path: str | Path) -> dict[str, Any]:
    p = Path(path)
    return yaml.safe_load(p.read_text(encoding="utf-8")) or {}
