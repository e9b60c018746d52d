from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from machineid.config.models import MachineIdConfig

ENV_OVERRIDES = {
    "MACHINEID_TIMEOUT_SECONDS": "timeout_seconds",
    "MACHINEID_LOG_LEVEL": "log_level",
    "MACHINEID_LOGS_DIR": "logs_dir",
}


def _read_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    payload = yaml.safe_load(path.read_text(encoding="utf-8"))
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise ValueError(f"{path.name} must be a mapping at the root")
    section = payload.get("machineid", payload)
    if not isinstance(section, dict):
        raise ValueError("'machineid' section must be a mapping")
    return section


def _read_env_overrides() -> dict[str, str]:
    return {field: os.environ[key] for key, field in ENV_OVERRIDES.items() if os.getenv(key)}


def load_config(
    config_path: str | Path | None = None,
    env_path: str | Path | None = ".env",
) -> MachineIdConfig:
    if env_path is not None:
        dotenv_file = Path(env_path).resolve()
        if dotenv_file.exists():
            load_dotenv(dotenv_path=dotenv_file, override=False)

    raw_cfg: dict[str, Any] = {}
    if config_path is not None:
        raw_cfg = _read_yaml(Path(config_path).resolve())

    raw_cfg.update(_read_env_overrides())
    return MachineIdConfig.model_validate(raw_cfg)
