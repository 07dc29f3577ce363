"""Runtime settings read from the environment (and a ``.env`` file, if any).

Values here override the limits and threshold in ``catalog.json`` so an
operator can tune a deployment without editing data files.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from customizer.domain.exceptions import ConfigurationError

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


@dataclass(frozen=True)
class Settings:
    data_dir: Path = _DEFAULT_DATA_DIR
    order_intake_url: str | None = None
    intake_timeout: float = 15.0
    max_image_mb: float | None = None
    max_images: int | None = None
    free_delivery_threshold: str | None = None
    whatsapp_number: str = "8801940689487"
    log_level: str = "WARNING"

    @staticmethod
    def from_env() -> Settings:
        load_dotenv()
        return Settings(
            data_dir=Path(os.getenv("CUSTOMIZER_DATA_DIR", str(_DEFAULT_DATA_DIR))),
            order_intake_url=os.getenv("CUSTOMIZER_ORDER_INTAKE_URL") or None,
            intake_timeout=_number("CUSTOMIZER_INTAKE_TIMEOUT", float) or 15.0,
            max_image_mb=_number("CUSTOMIZER_MAX_IMAGE_MB", float),
            max_images=_number("CUSTOMIZER_MAX_IMAGES", int),
            free_delivery_threshold=os.getenv("CUSTOMIZER_FREE_DELIVERY_THRESHOLD") or None,
            whatsapp_number=os.getenv("CUSTOMIZER_WHATSAPP_NUMBER", "8801940689487"),
            log_level=os.getenv("CUSTOMIZER_LOG_LEVEL", "WARNING").upper(),
        )


def _number(name: str, kind):
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    try:
        return kind(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from exc
