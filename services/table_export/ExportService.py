"""Export service.

Sweeps every page of a dashboard table through a RemoteCollectionViewModel
and writes the resulting CSV file to disk.
"""

from shared.clients.backend.BackendClientInterface import BackendClientInterface
from shared.helper.HelperConfig import HelperConfig
from shared.models.errors import BackendError
from shared.tables.registry import get_table
from shared.viewmodels.RemoteCollectionViewModel import RemoteCollectionViewModel


class ExportService:
    """Orchestrates full-table CSV exports outside of the web UI."""

    def __init__(self, helper_config: HelperConfig, backend_client: BackendClientInterface) -> None:
        self.logging = helper_config.get_logger()
        self._helper_config = helper_config
        self._backend = backend_client

    ##########################################
    ############### CORE EXPORT ##############
    ##########################################

    async def do_export(self, table_name: str, filters: dict[str, str], output_dir: str) -> str:
        """Export every row of a table matching the filters into a CSV file.

        Args:
            table_name (str): Name of the table (e.g. "users", "earnings").
            filters (dict[str, str]): Filter values applied to the sweep.
            output_dir (str): Directory the CSV file is written to.

        Returns:
            str: Path of the written file.

        Raises:
            ValueError: If the table is unknown.
            BackendError: If any page of the sweep failed. No file is written in that case.
        """
        table = get_table(table_name)
        view_model = RemoteCollectionViewModel.for_backend(
            self._helper_config,
            self._backend,
            table,
            default_filters=filters,
        )
        if view_model.state.has_active_filters:
            self.logging.info("Exporting table '%s' with filters %s...", table.name, filters)
        else:
            self.logging.info("Exporting all rows of table '%s'...", table.name)

        artifact = await view_model.export_all()
        if artifact is None:
            raise view_model.state.last_error or BackendError(f"Export of '{table.name}' failed")

        path = artifact.write_to(output_dir)
        self.logging.info("Wrote %d rows to %s", artifact.row_count, path, color="green")
        return path
