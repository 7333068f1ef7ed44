"""CSV encoding of exported table rows."""

import csv
import io
import os
import tempfile
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Iterable

from pytz import timezone

from shared.tables.TableSpec import ColumnSpec


@dataclass(frozen=True)
class ExportArtifact:
    """A finished export, ready to be offered as a download or written to disk."""

    filename: str
    content: str
    row_count: int

    def write_to(self, directory: str) -> str:
        """Write the CSV into a directory and return the full path.

        The file only appears under its final name once it is complete.
        """
        os.makedirs(directory, exist_ok=True)
        path = os.path.join(directory, self.filename)
        fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=f".{self.filename}.", suffix=".tmp")
        try:
            # newline="" keeps the encoder's \r\n row endings untouched
            with os.fdopen(fd, "w", encoding="utf-8", newline="") as handle:
                handle.write(self.content)
            os.replace(tmp_path, path)
        except Exception:
            os.unlink(tmp_path)
            raise
        return path


def today_in(tz_name: str) -> date:
    """Current calendar date in the given timezone."""
    return datetime.now(timezone(tz_name)).date()


class CsvEncoder:
    """Encodes rows into CSV text: one header row, then one line per row.

    Fields containing a comma, a double quote or a line break are wrapped in
    double quotes with inner quotes doubled. Missing values become empty fields.
    """

    def encode(self, columns: list[ColumnSpec], items: Iterable[Any]) -> str:
        buffer = io.StringIO()
        writer = csv.writer(buffer, quoting=csv.QUOTE_MINIMAL, lineterminator="\r\n")
        writer.writerow([column.header for column in columns])
        for item in items:
            writer.writerow([self._format_value(column.value_of(item)) for column in columns])
        return buffer.getvalue()

    def _format_value(self, value: Any) -> str:
        if value is None:
            return ""
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        return str(value)
