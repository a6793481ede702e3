# services/api/core/export.py
from __future__ import annotations

import csv
import io
from typing import Any, Dict, Iterable, List

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from models import Pothole

CSV_COLUMNS = [
    "id",
    "pothole_number",
    "road_id",
    "latitude",
    "longitude",
    "address",
    "severity",
    "status",
    "detection_accuracy",
    "report_date",
    "scheduled_repair_date",
    "completion_date",
    "reported_by",
    "description",
    "image_url",
]

HEADER_FILL = PatternFill(start_color="1F4E78", end_color="1F4E78", fill_type="solid")
HEADER_FONT = Font(bold=True, color="FFFFFF")
THIN = Side(style="thin", color="BFBFBF")
CELL_BORDER = Border(left=THIN, right=THIN, top=THIN, bottom=THIN)

# Row tint per severity on the Potholes sheet
SEVERITY_FILLS = {
    "low": PatternFill(start_color="E2EFDA", end_color="E2EFDA", fill_type="solid"),
    "medium": PatternFill(start_color="FFF2CC", end_color="FFF2CC", fill_type="solid"),
    "high": PatternFill(start_color="FCE4D6", end_color="FCE4D6", fill_type="solid"),
    "critical": PatternFill(start_color="F8CBAD", end_color="F8CBAD", fill_type="solid"),
}


def flat_row(p: Pothole) -> Dict[str, Any]:
    """One flat record per defect (accuracy as a 0..1 fraction)."""
    return {
        "id": p.id,
        "pothole_number": p.pothole_number,
        "road_id": p.road_id,
        "latitude": p.location.lat,
        "longitude": p.location.lng,
        "address": p.location.address,
        "severity": p.severity.value,
        "status": p.status.value,
        "detection_accuracy": p.detection_accuracy,
        "report_date": p.report_date,
        "scheduled_repair_date": p.scheduled_repair_date,
        "completion_date": p.completion_date,
        "reported_by": p.reported_by,
        "description": p.description,
        "image_url": p.images[0] if p.images else None,
    }


def to_csv(potholes: Iterable[Pothole]) -> str:
    si = io.StringIO()
    writer = csv.DictWriter(si, fieldnames=CSV_COLUMNS)
    writer.writeheader()
    writer.writerows(flat_row(p) for p in potholes)
    return si.getvalue()


def to_geojson(potholes: Iterable[Pothole]) -> Dict[str, Any]:
    """
    FeatureCollection of Point features. GeoJSON orders coordinates
    [longitude, latitude].
    """
    features: List[Dict[str, Any]] = []
    for p in potholes:
        props = {k: v for k, v in flat_row(p).items() if k not in ("latitude", "longitude")}
        features.append({
            "type": "Feature",
            "geometry": {
                "type": "Point",
                "coordinates": [p.location.lng, p.location.lat],
            },
            "properties": props,
        })
    return {"type": "FeatureCollection", "features": features}


def _style_header(ws, ncols: int) -> None:
    for col in range(1, ncols + 1):
        cell = ws.cell(row=1, column=col)
        cell.font = HEADER_FONT
        cell.fill = HEADER_FILL
        cell.alignment = Alignment(horizontal="center", vertical="center")
        cell.border = CELL_BORDER
    ws.freeze_panes = "A2"


def _write_potholes_sheet(ws, potholes: List[Pothole]) -> None:
    ws.append(CSV_COLUMNS)
    _style_header(ws, len(CSV_COLUMNS))

    sev_col = CSV_COLUMNS.index("severity") + 1
    for p in potholes:
        ws.append([flat_row(p)[c] for c in CSV_COLUMNS])
        row_idx = ws.max_row
        ws.cell(row=row_idx, column=sev_col).fill = SEVERITY_FILLS[p.severity.value]
        for col in range(1, len(CSV_COLUMNS) + 1):
            ws.cell(row=row_idx, column=col).border = CELL_BORDER

    acc_col = get_column_letter(CSV_COLUMNS.index("detection_accuracy") + 1)
    for cell in ws[acc_col][1:]:
        cell.number_format = "0.0%"

    widths = {"id": 38, "address": 42, "description": 50, "image_url": 30}
    for idx, name in enumerate(CSV_COLUMNS, start=1):
        ws.column_dimensions[get_column_letter(idx)].width = widths.get(name, 18)


def _write_summary_sheet(ws, summary: Dict[str, Any]) -> None:
    ws.append(["Group", "Value", "Count", "Percent"])
    _style_header(ws, 4)

    for group, key in (("Severity", "by_severity"), ("Status", "by_status")):
        for bucket in summary[key]:
            ws.append([group, bucket["name"], bucket["count"], bucket["percent"] / 100.0])
            ws.cell(row=ws.max_row, column=4).number_format = "0.0%"

    ws.append([])
    ws.append(["Total", "", summary["total"], None])
    ws.cell(row=ws.max_row, column=1).font = Font(bold=True)

    for col, width in zip("ABCD", (14, 18, 10, 10)):
        ws.column_dimensions[col].width = width


def to_xlsx(potholes: Iterable[Pothole], summary: Dict[str, Any]) -> bytes:
    """
    Workbook with a "Potholes" sheet (one row per defect) and a "Summary"
    sheet carrying the severity / status counts.
    """
    items = list(potholes)
    wb = Workbook()
    ws = wb.active
    ws.title = "Potholes"
    _write_potholes_sheet(ws, items)
    _write_summary_sheet(wb.create_sheet("Summary"), summary)

    buf = io.BytesIO()
    wb.save(buf)
    return buf.getvalue()


def export_filename(fmt: str) -> str:
    return f"potholes.{fmt}"


MEDIA_TYPES = {
    "csv": "text/csv",
    "geojson": "application/geo+json",
    "xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
}

