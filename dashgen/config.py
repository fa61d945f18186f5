from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List

from dotenv import load_dotenv

DOTENV_PATH = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=DOTENV_PATH)

DEFAULT_CHART_PALETTE = [
    "hsl(173, 80%, 40%)",  # teal
    "hsl(38, 92%, 50%)",  # amber
    "hsl(350, 89%, 60%)",  # rose
    "hsl(262, 83%, 58%)",  # purple
    "hsl(142, 71%, 45%)",  # green
    "hsl(199, 89%, 48%)",  # sky
]


def _split_list(raw: str, default: List[str]) -> List[str]:
    # Palette entries contain commas, so lists are separated by ';'.
    items = [item.strip() for item in raw.split(";") if item.strip()]
    return items or list(default)


class Settings:
    APP_TITLE: str = "Dashgen Analytics API"

    MAX_FILE_SIZE: int = int(os.getenv("MAX_FILE_SIZE", str(10 * 1024 * 1024)))
    CORS_ORIGINS: List[str] = _split_list(os.getenv("CORS_ORIGINS", ""), ["*"])
    CHART_PALETTE: List[str] = _split_list(os.getenv("CHART_PALETTE", ""), DEFAULT_CHART_PALETTE)
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").strip().upper()

    def validate(self) -> None:
        if self.MAX_FILE_SIZE <= 0:
            raise RuntimeError("MAX_FILE_SIZE must be a positive number of bytes.")
        if not self.CHART_PALETTE:
            raise RuntimeError("CHART_PALETTE must contain at least one color.")


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


settings = Settings()
settings.validate()
