from __future__ import annotations

import logging
import os
from pathlib import Path

PACKAGE_DIR = Path(__file__).resolve().parent

LOG_LEVEL = os.getenv("PERSONA_MIRROR_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = os.getenv(
    "PERSONA_MIRROR_LOG_FORMAT",
    "%(asctime)s [%(name)s] %(levelname)s: %(message)s",
)
DATA_DIR = Path(os.getenv("PERSONA_MIRROR_DATA_DIR", str(PACKAGE_DIR / "data")))
SAMPLE_RECORDS_PATH = DATA_DIR / "sample_records.json"


def configure_logging(level: str | None = None) -> None:
    """Root logging setup for entry points. Library code never calls this."""
    logging.basicConfig(
        level=getattr(logging, (level or LOG_LEVEL).upper(), logging.INFO),
        format=LOG_FORMAT,
    )
