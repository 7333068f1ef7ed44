from abc import abstractmethod
from typing import Callable, TypeVar

from shared.clients.ClientInterface import ClientInterface
from shared.clients.backend.models.Aggregations import GeneralAggregations, WorkAreaEarnings
from shared.clients.backend.models.Page import PageResult
from shared.helper.filters import active_filters, validate_date
from shared.helper.HelperConfig import HelperConfig
from shared.models.errors import BackendError, ValidationFailure
from shared.tables.TableSpec import TableSpec
T = TypeVar("T")


class BackendClientInterface(ClientInterface):
    def __init__(self, helper_config: HelperConfig):
        super().__init__(helper_config=helper_config)

    ##########################################
    ################ GETTER ##################
    ##########################################

    ################ GENERAL ##################
    def _get_client_type(self) -> str:
        """
        Returns the type of the client. E.g. "backend"
        """
        return "backend"

    @abstractmethod
    def get_analytics_timeout(self) -> float:
        """
        Returns the explicit timeout (seconds) applied to the aggregation endpoints.
        """
        pass

    ################ ENDPOINTS ##################
    @abstractmethod
    def _get_endpoint_list(self, table: TableSpec) -> str:
        """
        Returns the endpoint path for listing a table's rows (e.g. "/flows").

        Args:
            table (TableSpec): The table to list.
        """
        pass

    @abstractmethod
    def _get_endpoint_delete(self, table: TableSpec, item_id: str) -> str:
        """
        Returns the endpoint path for deleting a single row (e.g. "/flows/42").

        Args:
            table (TableSpec): The table the row belongs to.
            item_id (str): The ID of the row.

        Raises:
            ValidationFailure: If the table does not support deletion.
        """
        pass

    @abstractmethod
    def _get_endpoint_general_aggregations(self) -> str:
        pass

    @abstractmethod
    def _get_endpoint_work_area_wise(self) -> str:
        pass

    ################ QUERY ##################
    def build_list_params(self, table: TableSpec, filters: dict[str, str], page: int, page_size: int) -> dict[str, str]:
        """
        Builds the outgoing query parameters of a list request.

        Only filters the table declares and that carry a non-empty trimmed value
        are sent. Date filters are validated before anything leaves the process.

        Args:
            table (TableSpec): The table to list.
            filters (dict[str, str]): Raw filter state.
            page (int): The 1-based page number.
            page_size (int): Rows per page.

        Returns:
            dict[str, str]: The query parameters.

        Raises:
            ValidationFailure: If page/page_size are not positive or a date filter is malformed.
        """
        if page < 1 or page_size < 1:
            raise ValidationFailure(f"Invalid pagination: page={page} page_size={page_size}")
        query = active_filters(filters, allowed_keys=table.get_filter_keys())
        for key in table.get_date_filter_keys():
            validate_date(key, query.get(key))
        return {"page": str(page), "limit": str(page_size), **query}

    ##########################################
    ############### REQUESTS #################
    ##########################################

    async def do_fetch_page(self, table: TableSpec, filters: dict[str, str], page: int = 1, page_size: int = 10) -> PageResult:
        """
        Fetches one page of a table from the backend.

        Args:
            table (TableSpec): The table to list.
            filters (dict[str, str]): Raw filter state; inactive and undeclared keys are dropped.
            page (int): The 1-based page number.
            page_size (int): Rows per page.

        Returns:
            PageResult: The parsed page including overall counts.

        Raises:
            BackendError: On validation, transport, timeout or status failures.
        """
        params = self.build_list_params(table, filters, page, page_size)
        self.logging.debug("Fetching %s page %d (size %d) with filters %s", table.name, page, page_size, params)
        resp = await self.do_request(method="GET", endpoint=self._get_endpoint_list(table), params=params, raise_on_error=True)
        result = self._parse_or_fail(lambda: self._parse_list_response(table, resp.json(), page=page, page_size=page_size))
        self.logging.debug(
            "Fetched %s page %d of %d from %s: %d rows, %d total",
            table.name,
            result.page,
            result.total_page_count,
            self.get_engine_name(),
            len(result.items),
            result.total_item_count,
        )
        return result

    async def do_delete_item(self, table: TableSpec, item_id: str) -> dict:
        """
        Deletes a single row in the backend.

        Args:
            table (TableSpec): The table the row belongs to.
            item_id (str): The ID of the row to delete.

        Returns:
            dict: The backend's response body (empty if it sent none).

        Raises:
            BackendError: On validation, transport, timeout or status failures.
        """
        if not str(item_id or "").strip():
            raise ValidationFailure("Item ID is required")
        resp = await self.do_request(method="DELETE", endpoint=self._get_endpoint_delete(table, str(item_id)), raise_on_error=True)
        self.logging.info("Deleted %s item %s", table.name, item_id)
        try:
            body = resp.json()
        except ValueError:
            return {}
        return body if isinstance(body, dict) else {"result": body}

    async def do_fetch_general_aggregations(self) -> GeneralAggregations:
        """
        Fetches the platform-wide totals, aborting after the analytics timeout.

        Raises:
            TimeoutFailure: If the backend does not answer within the analytics timeout.
            BackendError: On transport or status failures.
        """
        resp = await self.do_request(
            method="GET",
            endpoint=self._get_endpoint_general_aggregations(),
            timeout=self.get_analytics_timeout(),
            raise_on_error=True,
        )
        return self._parse_or_fail(lambda: self._parse_general_aggregations(resp.json()))

    async def do_fetch_work_area_wise(self, start_date: str | None = None, end_date: str | None = None) -> list[WorkAreaEarnings]:
        """
        Fetches the per-work-area earnings breakdown, optionally limited to a date range.

        Args:
            start_date (str | None): Inclusive start date, YYYY-MM-DD.
            end_date (str | None): Inclusive end date, YYYY-MM-DD.

        Raises:
            ValidationFailure: If a date is not in YYYY-MM-DD form.
            TimeoutFailure: If the backend does not answer within the analytics timeout.
            BackendError: On transport or status failures.
        """
        validate_date("start_date", start_date)
        validate_date("end_date", end_date)
        params = {key: value for key, value in (("start_date", start_date), ("end_date", end_date)) if value}
        resp = await self.do_request(
            method="GET",
            endpoint=self._get_endpoint_work_area_wise(),
            params=params or None,
            timeout=self.get_analytics_timeout(),
            raise_on_error=True,
        )
        return self._parse_or_fail(lambda: self._parse_work_area_wise(resp.json()))

    ##########################################
    ########### RESPONSE PARSER ##############
    ##########################################

    def _parse_or_fail(self, parse: Callable[[], T]) -> T:
        """Run a parser and turn malformed payloads (bad JSON, schema mismatch) into a BackendError."""
        try:
            return parse()
        except (ValueError, TypeError, AttributeError) as e:
            self.logging.error("Unexpected response payload from %s: %s", self.get_engine_name(), e)
            raise BackendError("Unexpected response from backend") from e

    @abstractmethod
    def _parse_list_response(self, table: TableSpec, response: dict, page: int, page_size: int) -> PageResult:
        """
        Parses the response of a list endpoint into a PageResult of the table's row model.

        Args:
            table (TableSpec): The listed table.
            response (dict): The raw JSON response.
            page (int): The requested page.
            page_size (int): The requested page size, used to derive the page count.
        """
        pass

    @abstractmethod
    def _parse_general_aggregations(self, response: dict) -> GeneralAggregations:
        pass

    @abstractmethod
    def _parse_work_area_wise(self, response: list) -> list[WorkAreaEarnings]:
        pass
