from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Protocol

import pandas as pd
from pydantic import ValidationError

from .models import Restaurant, SortingValues

logger = logging.getLogger(__name__)

# camelCase keys used by the JSON export -> model field names
_SORTING_KEYS: dict[str, str] = {
    "bestMatch": "best_match",
    "newest": "newest",
    "ratingAverage": "rating_average",
    "distance": "distance",
    "popularity": "popularity",
    "averageProductPrice": "average_product_price",
    "deliveryCosts": "delivery_costs",
    "minCost": "min_cost",
}
_SORTING_FIELDS = list(SortingValues.model_fields)


class RestaurantsLoadError(Exception):
    """The restaurant list could not be read or parsed."""


class RestaurantsDataSource(Protocol):
    async def load_restaurants(self) -> list[Restaurant]:
        """Return every restaurant in source order, or raise on failure."""
        ...


class LocalRestaurantsLoader:
    """Reads the restaurant list from a CSV or JSON file on disk."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    async def load_restaurants(self) -> list[Restaurant]:
        return await asyncio.to_thread(self.read)

    def read(self) -> list[Restaurant]:
        df = self._read_frame()
        restaurants = _frame_to_restaurants(df, self.path)
        logger.debug("Loaded %d restaurants from %s", len(restaurants), self.path)
        return restaurants

    def _read_frame(self) -> pd.DataFrame:
        suffix = self.path.suffix.lower()
        if suffix not in (".csv", ".json"):
            raise RestaurantsLoadError(f"Unsupported restaurant file type: {self.path.name}")
        try:
            if suffix == ".csv":
                return pd.read_csv(self.path)
            return _read_json_frame(self.path)
        except FileNotFoundError as exc:
            raise RestaurantsLoadError(f"Restaurant file not found: {self.path}") from exc
        except (OSError, ValueError, pd.errors.ParserError) as exc:
            raise RestaurantsLoadError(f"Could not read restaurants from {self.path}: {exc}") from exc


def _read_json_frame(path: Path) -> pd.DataFrame:
    with path.open(encoding="utf-8") as fh:
        payload = json.load(fh)
    if not isinstance(payload, dict) or not isinstance(payload.get("restaurants"), list):
        raise ValueError('expected an object with a "restaurants" list')

    if not payload["restaurants"]:
        return pd.DataFrame(columns=["name", "status"])

    df = pd.json_normalize(payload["restaurants"])
    return df.rename(
        columns={f"sortingValues.{key}": field for key, field in _SORTING_KEYS.items()}
        | {"isFavourite": "is_favourite"}
    )


def _frame_to_restaurants(df: pd.DataFrame, source: Path) -> list[Restaurant]:
    missing = [col for col in ("name", "status") if col not in df.columns]
    if missing:
        raise RestaurantsLoadError(f"{source.name} is missing column(s): {', '.join(missing)}")

    sorting_cols = [col for col in _SORTING_FIELDS if col in df.columns]
    restaurants: list[Restaurant] = []
    for position, row in enumerate(df.to_dict(orient="records")):
        try:
            restaurants.append(_row_to_restaurant(row, sorting_cols))
        except ValidationError as exc:
            raise RestaurantsLoadError(
                f"Invalid restaurant at row {position + 1} of {source.name}: {exc}"
            ) from exc
    return restaurants


def _row_to_restaurant(row: dict[str, Any], sorting_cols: list[str]) -> Restaurant:
    sorting = {col: row[col] for col in sorting_cols if pd.notna(row[col])}
    favourite = row.get("is_favourite")
    if favourite is None or pd.isna(favourite):
        favourite = False
    elif hasattr(favourite, "item"):
        # numpy scalar; pydantic parses "false"/"no"/0 and rejects the rest
        favourite = favourite.item()
    return Restaurant(
        name=str(row["name"]).strip() if pd.notna(row["name"]) else "",
        status=str(row["status"]).strip().lower() if pd.notna(row["status"]) else "",
        is_favourite=favourite,
        sorting_values=SortingValues(**sorting),
    )
