from shared.clients.backend.BackendClientInterface import BackendClientInterface
from shared.clients.backend.models.Aggregations import GeneralAggregations, WorkAreaEarnings
from shared.clients.backend.models.Page import PageResult
from shared.helper.HelperConfig import HelperConfig
from shared.models.config import EnvConfig
from shared.models.errors import ValidationFailure
from shared.tables.TableSpec import TableSpec


class BackendClientRest(BackendClientInterface):
    def __init__(self, helper_config: HelperConfig):
        super().__init__(helper_config=helper_config)
        self._base_url = self.get_config_val("BASE_URL", default=None, val_type="url")
        self._api_key = self.get_config_val("API_KEY", default="", val_type="string")
        self._analytics_timeout = self.get_config_val("ANALYTICS_TIMEOUT", default=10, val_type="number")

    ##########################################
    ################ GETTER ##################
    ##########################################

    ################ GENERAL ##################
    def _get_engine_name(self) -> str:
        return "Rest"

    def get_analytics_timeout(self) -> float:
        return self._analytics_timeout

    ################ CONFIG ##################
    def _get_required_config(self) -> list[EnvConfig]:
        return [
            EnvConfig(env_key="BASE_URL", val_type="url", default=None),
            EnvConfig(env_key="API_KEY", val_type="string", default=""),
            EnvConfig(env_key="ANALYTICS_TIMEOUT", val_type="number", default=10),
        ]

    ################ AUTH ##################
    def _get_auth_header(self) -> dict:
        if self._api_key:
            return {"Authorization": f"Bearer {self._api_key}"}
        else:
            return {}

    ################ ENDPOINTS ##################
    def _get_base_url(self) -> str:
        return self._base_url

    def _get_endpoint_healthcheck(self) -> str:
        return "/flows?page=1&limit=1"

    def _get_endpoint_list(self, table: TableSpec) -> str:
        return table.list_endpoint

    def _get_endpoint_delete(self, table: TableSpec, item_id: str) -> str:
        if not table.supports_delete():
            raise ValidationFailure(f"Table '{table.name}' does not support deletion")
        return table.delete_endpoint.format(id=item_id)

    def _get_endpoint_general_aggregations(self) -> str:
        return "/weekly-earnings-analytics/general-aggregations"

    def _get_endpoint_work_area_wise(self) -> str:
        return "/weekly-earnings-analytics/work-area-wise"

    ##########################################
    ########### RESPONSE PARSER ##############
    ##########################################

    def _parse_list_response(self, table: TableSpec, response: dict, page: int, page_size: int) -> PageResult:
        # the backend sends {"data": [...], "total": n, "page": p, "totalPages": t}
        rows = [table.row_model.model_validate(item) for item in response.get("data") or []]
        total = response.get("total")
        if total is None:
            total = len(rows)
        return PageResult(
            items=rows,
            page=int(response.get("page") or page),
            page_size=page_size,
            total_item_count=int(total),
        )

    def _parse_general_aggregations(self, response: dict) -> GeneralAggregations:
        return GeneralAggregations.model_validate(response or {})

    def _parse_work_area_wise(self, response: list) -> list[WorkAreaEarnings]:
        return [WorkAreaEarnings.model_validate(item) for item in response or []]
