"""Debounced, filterable, paginated view over a remote list endpoint.

One RemoteCollectionViewModel drives every dashboard table. The table's
TableSpec supplies the filters and export columns, the collaborators supply
the I/O:

  list_service(filters, page, page_size) -> PageResult
  delete_service(item_id)                -> anything, raises BackendError on failure
  csv_encoder.encode(columns, items)     -> str

All methods must be called from within a running asyncio event loop.
"""

import asyncio
from datetime import date
from functools import partial
from typing import Any, Awaitable, Callable

from shared.clients.backend.BackendClientInterface import BackendClientInterface
from shared.clients.backend.models.Page import PageResult
from shared.export.CsvEncoder import CsvEncoder, ExportArtifact, today_in
from shared.helper.HelperConfig import HelperConfig
from shared.helper.pagination import clamp_page, page_window
from shared.models.errors import BackendError, ConflictFailure, ValidationFailure
from shared.tables.TableSpec import TableSpec
from shared.viewmodels.RequestTracker import RequestTracker
from shared.viewmodels.ViewState import ViewState

ListService = Callable[[dict[str, str], int, int], Awaitable[PageResult]]
DeleteService = Callable[[str], Awaitable[Any]]

DEFAULT_PAGE_SIZE = 10
DEFAULT_EXPORT_PAGE_SIZE = 1000
DEFAULT_DEBOUNCE_SECONDS = 0.5


class RemoteCollectionViewModel:
    """Owns the ViewState of one table and every transition applied to it."""

    def __init__(
        self,
        helper_config: HelperConfig,
        table: TableSpec,
        list_service: ListService,
        delete_service: DeleteService | None = None,
        csv_encoder: CsvEncoder | None = None,
        page_size: int | None = None,
        export_page_size: int | None = None,
        debounce_seconds: float | None = None,
        default_filters: dict[str, str] | None = None,
        today: Callable[[], date] | None = None,
    ) -> None:
        self.logging = helper_config.get_logger()
        self._table = table
        self._list_service = list_service
        self._delete_service = delete_service
        self._csv_encoder = csv_encoder or CsvEncoder()

        self._page_size = int(page_size or helper_config.get_number_val("DASHBOARD_PAGE_SIZE", default=DEFAULT_PAGE_SIZE))
        self._export_page_size = int(export_page_size or helper_config.get_number_val("DASHBOARD_EXPORT_PAGE_SIZE", default=DEFAULT_EXPORT_PAGE_SIZE))
        if debounce_seconds is None:
            debounce_seconds = helper_config.get_number_val("DASHBOARD_DEBOUNCE_SECONDS", default=DEFAULT_DEBOUNCE_SECONDS)
        self._debounce_seconds = float(debounce_seconds)
        tz_name = helper_config.get_string_val("TIMEZONE", default="Europe/Berlin")
        self._today = today or partial(today_in, tz_name)

        self.state = ViewState(filters={key: self._normalize(key, value) for key, value in (default_filters or {}).items()})
        self._tracker = RequestTracker()
        self._debounce_task: asyncio.Task | None = None
        self._tasks: set[asyncio.Task] = set()

    @classmethod
    def for_backend(cls, helper_config: HelperConfig, backend_client: BackendClientInterface, table: TableSpec, **kwargs) -> "RemoteCollectionViewModel":
        """Build a view model whose collaborators are the backend client's table endpoints."""
        delete_service = partial(backend_client.do_delete_item, table) if table.supports_delete() else None
        return cls(
            helper_config=helper_config,
            table=table,
            list_service=partial(backend_client.do_fetch_page, table),
            delete_service=delete_service,
            **kwargs,
        )

    ##########################################
    ################ GETTER ##################
    ##########################################

    def get_page_window(self) -> list[int | None]:
        """Page buttons to render for the current state, None marking an ellipsis."""
        return page_window(self.state.current_page, self.state.total_pages)

    ##########################################
    ############### FILTERS ##################
    ##########################################

    def set_filter(self, key: str, value: str | None) -> None:
        """Store one filter value, go back to page 1 and schedule a debounced refetch.

        Mobile filters are sanitised to digits and "+"; nothing is rejected.
        """
        self.state.filters[key] = self._normalize(key, value)
        self.state.current_page = 1
        self._schedule_debounced_fetch()

    def clear_filter(self, key: str) -> None:
        self.set_filter(key, "")

    def clear_all_filters(self) -> None:
        for key in list(self.state.filters):
            self.state.filters[key] = ""
        self.state.current_page = 1
        self._schedule_debounced_fetch()

    def _normalize(self, key: str, value: str | None) -> str:
        spec = self._table.get_filter(key)
        return spec.normalize(value) if spec else (value or "")

    ##########################################
    ############### FETCHING #################
    ##########################################

    async def load(self) -> None:
        """Initial fetch when the view mounts."""
        await self.refresh()

    async def set_page(self, page: int) -> None:
        """Jump to a page (clamped to the known page count) and fetch it immediately."""
        self.state.current_page = clamp_page(page, self.state.total_pages)
        self._cancel_pending_debounce()
        await self._fetch()

    async def refresh(self) -> None:
        """Re-issue the fetch for the current page and filters without waiting for the debounce."""
        self._cancel_pending_debounce()
        await self._fetch()

    async def wait_idle(self) -> None:
        """Wait until no debounced or background fetch is outstanding."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def close(self) -> None:
        """Drop every outstanding background fetch, e.g. when the view unmounts."""
        self._cancel_pending_debounce()
        for task in list(self._tasks):
            task.cancel()
        await self.wait_idle()

    def _spawn(self, coro) -> asyncio.Task:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def _schedule_debounced_fetch(self) -> None:
        # results of fetches issued under the previous filters must not commit
        self._tracker.invalidate()
        self._cancel_pending_debounce()
        self._debounce_task = self._spawn(self._debounced_fetch())

    def _cancel_pending_debounce(self) -> None:
        if self._debounce_task is not None:
            self._debounce_task.cancel()
            self._debounce_task = None

    async def _debounced_fetch(self) -> None:
        await asyncio.sleep(self._debounce_seconds)
        # past the quiet period the fetch is no longer "pending"; newer requests make it stale instead
        self._debounce_task = None
        await self._fetch()

    async def _fetch(self) -> None:
        seq = self._tracker.issue()
        filters = dict(self.state.filters)
        page = self.state.current_page
        self.state.last_error = None
        self.state.pending_fetches += 1
        try:
            result = await self._list_service(filters, page, self._page_size)
        except BackendError as e:
            if self._tracker.try_commit(seq):
                self.logging.error("Fetching %s page %d failed: %s", self._table.name, page, e.message)
                self.state.last_error = e
            else:
                self.logging.debug("Discarding stale error of %s request #%d (committed #%d): %s", self._table.name, seq, self._tracker.last_committed, e.message)
            return
        finally:
            self.state.pending_fetches -= 1

        if not self._tracker.try_commit(seq):
            self.logging.debug("Discarding stale result of %s request #%d (committed #%d)", self._table.name, seq, self._tracker.last_committed)
            return

        self.state.items = list(result.items)
        self.state.total_items = result.total_item_count
        self.state.total_pages = result.total_page_count
        self.state.current_page = clamp_page(self.state.current_page, self.state.total_pages)
        self.logging.debug(
            "Committed %s request #%d: page %d of %d, %d items total",
            self._table.name,
            seq,
            self.state.current_page,
            self.state.total_pages,
            self.state.total_items,
        )

    ##########################################
    ################ DELETE ##################
    ##########################################

    async def delete_item(self, item_id: str) -> bool:
        """Delete one row and reload the current page on success.

        A second delete for an id that is still in flight is rejected with a
        ConflictFailure; deletes of different ids may run concurrently. The
        current page is not stepped back if the deletion leaves it short.

        Returns:
            bool: True if the row was deleted.
        """
        item_id = str(item_id)
        if self._delete_service is None:
            self.state.last_error = ValidationFailure(f"Table '{self._table.name}' does not support deletion")
            return False
        if item_id in self.state.in_flight_delete_ids:
            self.logging.warning("Delete of %s item %s is already in progress", self._table.name, item_id)
            self.state.last_error = ConflictFailure(f"Delete already in progress for item {item_id}")
            return False

        self.state.in_flight_delete_ids.append(item_id)
        try:
            try:
                await self._delete_service(item_id)
            except BackendError as e:
                self.logging.error("Deleting %s item %s failed: %s", self._table.name, item_id, e.message)
                self.state.last_error = e
                return False
            self.logging.info("Deleted %s item %s, reloading page %d", self._table.name, item_id, self.state.current_page)
            await self.refresh()
            return True
        finally:
            self.state.in_flight_delete_ids.remove(item_id)

    ##########################################
    ################ EXPORT ##################
    ##########################################

    async def export_all(self) -> ExportArtifact | None:
        """Sweep every page of the current filters and encode the rows as CSV.

        Page 1 is fetched first to learn the page count, the remaining pages
        follow sequentially. Any failed page aborts the export: last_error is
        set and nothing is encoded.

        Returns:
            ExportArtifact | None: The CSV export, or None if it failed.
        """
        if self.state.is_exporting:
            self.state.last_error = ConflictFailure("Export already in progress")
            return None

        self.state.is_exporting = True
        self.state.last_error = None
        filters = dict(self.state.filters)
        try:
            items = await self._sweep(filters)
        except BackendError as e:
            self.logging.error("Export of %s failed, no file written: %s", self._table.name, e.message)
            self.state.last_error = e
            return None
        finally:
            self.state.is_exporting = False

        content = self._csv_encoder.encode(self._table.columns, items)
        artifact = ExportArtifact(
            filename=self._table.get_export_filename(self._today().isoformat()),
            content=content,
            row_count=len(items),
        )
        self.logging.info("Exported %d %s rows to %s", artifact.row_count, self._table.name, artifact.filename)
        return artifact

    async def _sweep(self, filters: dict[str, str]) -> list[Any]:
        first = await self._list_service(filters, 1, self._export_page_size)
        items = list(first.items)
        total_pages = first.total_page_count
        for page in range(2, total_pages + 1):
            result = await self._list_service(filters, page, self._export_page_size)
            items.extend(result.items)
            self.logging.debug("Export of %s: page %d of %d, %d rows so far", self._table.name, page, total_pages, len(items))
        return items
