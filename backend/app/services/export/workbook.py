# backend/app/services/export/workbook.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, NamedTuple

from openpyxl import Workbook
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter

from app.schemas.survey import SurveyRecord
from .errors import PreconditionViolation

logger = logging.getLogger(__name__)

SHEET_TITLE = "Surveys"
PLACEHOLDER = "N/A"
YES, NO = "Yes", "No"


class Column(NamedTuple):
    label: str
    key: str
    width: int  # 目安の幅（実際の幅は sizing で再計算）


COLUMNS: tuple[Column, ...] = (
    Column("Site Name", "site_name", 20),
    Column("Date", "date", 12),
    Column("Time", "time", 10),
    Column("Latitude", "latitude", 12),
    Column("Longitude", "longitude", 12),
    Column("Number of Floors", "floor_count", 10),
    Column("Number of Rooms", "room_count", 10),
    Column("Number of Residents", "resident_count", 12),
    Column("Manager Name", "manager_name", 20),
    Column("Manager Phone", "manager_phone", 15),
    Column("Has WiFi", "has_wifi", 10),
    Column("Completion Status", "completion_status", 15),
    Column("Photo", "photo_path", 22),
    Column("Created At", "created_at", 20),
)

PHOTO_INDEX = next(i for i, c in enumerate(COLUMNS, 1) if c.key == "photo_path")
PHOTO_COLUMN = get_column_letter(PHOTO_INDEX)


@dataclass(frozen=True)
class ImageAnchor:
    row: int
    cell: str
    width: int
    height: int


class ExportDocument:
    """1回のエクスポート分のシート。行1がヘッダー、行 i+2 が入力 i 番目。"""

    def __init__(self, title: str = SHEET_TITLE):
        self.workbook = Workbook()
        self.sheet = self.workbook.active
        self.sheet.title = title
        self.anchors: dict[int, ImageAnchor] = {}

    @property
    def row_count(self) -> int:
        return self.sheet.max_row

    @property
    def data_rows(self) -> range:
        return range(2, self.row_count + 1)

    def values(self, row: int) -> list:
        return [self.sheet.cell(row=row, column=i).value for i in range(1, len(COLUMNS) + 1)]

    def photo_cell(self, row: int):
        return self.sheet.cell(row=row, column=PHOTO_INDEX)


def format_value(record: SurveyRecord, key: str):
    value = getattr(record, key)
    if key == "has_wifi":
        if not isinstance(value, bool):
            raise PreconditionViolation(f"has_wifi must be bool, got {type(value).__name__}")
        return YES if value else NO
    if key == "created_at":
        return value or ""
    if key == "photo_path":
        # 写真セルは embed / archive 側で埋める
        return None
    return value


def build_workbook(records: Iterable[SurveyRecord]) -> ExportDocument:
    doc = ExportDocument()
    ws = doc.sheet
    ws.append([c.label for c in COLUMNS])
    for cell in ws[1]:
        cell.font = Font(bold=True)
    ws.freeze_panes = "A2"

    for i, record in enumerate(records):
        if not isinstance(record, SurveyRecord):
            raise PreconditionViolation(f"record #{i} is {type(record).__name__}, expected SurveyRecord")
        ws.append([format_value(record, c.key) for c in COLUMNS])

    logger.debug("built sheet with %d data rows", doc.row_count - 1)
    return doc
