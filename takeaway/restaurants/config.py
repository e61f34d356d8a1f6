from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")

_BUNDLED_DATA = Path(__file__).resolve().parent.parent / "data" / "restaurants.csv"


def _env_milliseconds(name: str, default: int) -> int:
    """Read a non-negative millisecond count; negatives clamp to zero."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be a whole number of milliseconds, got {raw!r}") from None
    return max(0, value)


@dataclass(frozen=True)
class RestaurantsConfig:
    data_path: Path = Path(os.getenv("TAKEAWAY_RESTAURANTS_PATH", str(_BUNDLED_DATA)))
    search_debounce_ms: int = _env_milliseconds("TAKEAWAY_SEARCH_DEBOUNCE_MS", 250)

    @property
    def search_debounce_seconds(self) -> float:
        return max(0, self.search_debounce_ms) / 1000.0


DEFAULT_RESTAURANTS_CONFIG = RestaurantsConfig()
