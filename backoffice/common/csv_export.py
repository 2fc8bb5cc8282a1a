import csv
import io
from typing import Any, Iterable, Mapping, Sequence

from fastapi.responses import Response

from backoffice.common.constants import CSV_MEDIA_TYPE


def _cell(value: Any) -> Any:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if hasattr(value, "isoformat"):
        return value.isoformat()
    if hasattr(value, "value"):   # enums
        return value.value
    return value


def rows_to_csv(fields: Sequence[str], rows: Iterable[Mapping[str, Any]]) -> str:
    buf = io.StringIO()
    writer = csv.DictWriter(buf, fieldnames=list(fields), extrasaction="ignore")
    writer.writeheader()
    for row in rows:
        writer.writerow({k: _cell(row.get(k)) for k in fields})
    return buf.getvalue()


def csv_response(filename: str, fields: Sequence[str], rows: Iterable[Mapping[str, Any]]) -> Response:
    return Response(
        content=rows_to_csv(fields, rows),
        media_type=CSV_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
