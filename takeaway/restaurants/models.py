from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Status(str, Enum):
    open = "open"
    order_ahead = "order ahead"
    closed = "closed"

    @property
    def priority(self) -> int:
        """Sort key: lower values are listed first."""
        return _STATUS_PRIORITY[self]


_STATUS_PRIORITY: dict[Status, int] = {
    Status.open: 1,
    Status.order_ahead: 2,
    Status.closed: 3,
}


class SortingValues(BaseModel):
    model_config = ConfigDict(frozen=True)

    best_match: float = 0.0
    newest: float = 0.0
    rating_average: float = Field(default=0.0, ge=0.0, le=5.0)
    distance: int = Field(default=0, ge=0)
    popularity: float = 0.0
    average_product_price: int = Field(default=0, ge=0)
    delivery_costs: int = Field(default=0, ge=0)
    min_cost: int = Field(default=0, ge=0)


class Restaurant(BaseModel):
    """A listed restaurant. Compared by value, so copies of one record are equal."""

    name: str = Field(..., min_length=1)
    status: Status
    is_favourite: bool = False
    sorting_values: SortingValues = Field(default_factory=SortingValues)


@dataclass(frozen=True)
class NameFilter:
    text: str


# ``None`` means "no filter": reload from the data source.
Filter = NameFilter | None


class ReloadScope(str, Enum):
    all = "all"
    row = "row"


@dataclass(frozen=True)
class TableReload:
    scope: ReloadScope
    row: int | None = None

    @classmethod
    def all_rows(cls) -> TableReload:
        return cls(ReloadScope.all)

    @classmethod
    def at(cls, row: int) -> TableReload:
        return cls(ReloadScope.row, row)
