from __future__ import annotations

import sys
from pathlib import Path

from loguru import logger

PACKAGE = "machineid"

# library records stay silent until an application opts in
logger.disable(PACKAGE)


def configure_logging(level: str = "INFO", logs_dir: Path | None = None) -> None:
    logger.remove()
    logger.add(sys.stderr, level=level.upper(), enqueue=True)
    if logs_dir is not None:
        logs_dir.mkdir(parents=True, exist_ok=True)
        logger.add(
            logs_dir / "machineid.log",
            level=level.upper(),
            enqueue=True,
            rotation="20 MB",
            retention="30 days",
            encoding="utf-8",
        )
    logger.enable(PACKAGE)


def get_logger():
    return logger
