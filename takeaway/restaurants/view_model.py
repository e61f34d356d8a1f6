from __future__ import annotations

import asyncio
import logging
from typing import Iterable

from .config import DEFAULT_RESTAURANTS_CONFIG, RestaurantsConfig
from .data_source import LocalRestaurantsLoader, RestaurantsDataSource
from .debounce import Debouncer
from .events import Subject
from .models import Filter, NameFilter, Restaurant, TableReload

logger = logging.getLogger(__name__)


def sorted_by_status(restaurants: Iterable[Restaurant]) -> list[Restaurant]:
    """Return copies ordered by status priority, keeping source order for ties."""
    return sorted(
        (r.model_copy() for r in restaurants),
        key=lambda r: r.status.priority,
    )


def filter_by_name(restaurants: Iterable[Restaurant], text: str) -> list[Restaurant]:
    needle = text.lower()
    return [r for r in restaurants if needle in r.name.lower()]


class RestaurantsViewModel:
    """
    Search, filter and favourite state behind the restaurant list screen.

    The data source is hit only by a first-time load; searches, cancels and
    favourite toggles are served from ``cached_data``. The UI subscribes to
    ``is_loading``, ``error`` and ``reload`` and writes search text into
    ``search_for``.

    Commands must be issued from inside a running asyncio event loop.
    """

    def __init__(
        self,
        data_source: RestaurantsDataSource | None = None,
        config: RestaurantsConfig = DEFAULT_RESTAURANTS_CONFIG,
    ) -> None:
        if data_source is None:
            data_source = LocalRestaurantsLoader(config.data_path)
        self._data_source = data_source
        self._config = config

        self.error: Subject[str] = Subject("error")
        self.search_for: Subject[str] = Subject("search_for")
        self.is_loading: Subject[bool] = Subject("is_loading")
        self.reload: Subject[TableReload] = Subject("reload")

        self._data_list: list[Restaurant] = []
        self._cached_data: list[Restaurant] = []
        self._load_task: asyncio.Task | None = None
        self._closed = False

        self._search = Debouncer(config.search_debounce_seconds, self._search_fired)
        self._unbind_search = self.search_for.subscribe(self._on_search_text)

    # ── State ───────────────────────────────────────────────────────────

    @property
    def data_list(self) -> list[Restaurant]:
        return list(self._data_list)

    @property
    def cached_data(self) -> list[Restaurant]:
        return list(self._cached_data)

    @property
    def is_load_in_flight(self) -> bool:
        return self._load_task is not None and not self._load_task.done()

    # ── Commands ────────────────────────────────────────────────────────

    def search_canceled(self) -> None:
        self._data_list = sorted_by_status(self._cached_data)
        self.reload.emit(TableReload.all_rows())

    def load_data(self, filter: Filter = None) -> None:
        if filter is None:
            self._load_data_for_first_time()
            return

        # Nothing to search yet: fetch instead
        if not self._data_list:
            self._load_data_for_first_time()
            return

        self._data_list = sorted_by_status(filter_by_name(self._cached_data, filter.text))
        self.reload.emit(TableReload.all_rows())

    def toggle_favourite(self, position: int) -> None:
        if not 0 <= position < len(self._data_list):
            raise IndexError(
                f"favourite position {position} out of range for {len(self._data_list)} rows"
            )

        item = self._data_list[position]
        before = item.model_copy()
        item.is_favourite = not item.is_favourite
        self.reload.emit(TableReload.at(position))

        # No remote API, so keep the cached copy in step
        cached = next((r for r in self._cached_data if r == before), None)
        if cached is None:
            logger.warning("No cached restaurant matches %r; cache left unsynced", before.name)
            return
        cached.is_favourite = not cached.is_favourite

    # ── Lifecycle ───────────────────────────────────────────────────────

    async def wait_until_idle(self) -> None:
        """Wait for a pending search trigger and then any in-flight load."""
        await self._search.join()
        while self._load_task is not None and not self._load_task.done():
            task = self._load_task
            await asyncio.wait({task})
            if not task.cancelled():
                task.result()

    def close(self) -> None:
        """Drop pending work; later search text and load results are ignored."""
        self._closed = True
        self._unbind_search()
        self._search.cancel()
        if self._load_task is not None and not self._load_task.done():
            self._load_task.cancel()

    # ── Private ─────────────────────────────────────────────────────────

    def _on_search_text(self, text: str) -> None:
        self._search.push(text)

    def _search_fired(self, text: str) -> None:
        if self._closed:
            return
        logger.debug("Searching restaurants for %r", text)
        self.load_data(NameFilter(text))

    def _load_data_for_first_time(self) -> None:
        if self._closed:
            return
        if self.is_load_in_flight:
            logger.debug("Restaurant load already in flight; ignoring request")
            return

        self.is_loading.emit(True)
        self._load_task = asyncio.get_running_loop().create_task(self._load())

    async def _load(self) -> None:
        try:
            data = await self._data_source.load_restaurants()
        except Exception as exc:
            logger.warning("Loading restaurants failed", exc_info=True)
            if self._closed:
                return
            try:
                self.error.emit(str(exc) or type(exc).__name__)
            finally:
                self.is_loading.emit(False)
            return

        if self._closed:
            return
        try:
            self._cached_data = [r.model_copy() for r in data]
            self._data_list = sorted_by_status(self._cached_data)
            self.reload.emit(TableReload.all_rows())
        finally:
            self.is_loading.emit(False)
