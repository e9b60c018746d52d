from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, field_validator

LogLevel = Literal["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"]


class MachineIdConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    timeout_seconds: float | None = None
    log_level: LogLevel = "INFO"
    logs_dir: str | None = None

    @field_validator("timeout_seconds")
    @classmethod
    def validate_timeout_seconds(cls, value: float | None) -> float | None:
        if value is not None and value <= 0:
            raise ValueError("timeout_seconds must be > 0")
        return value

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @property
    def logs_dir_path(self) -> Path | None:
        if self.logs_dir is None:
            return None
        return Path(self.logs_dir)
