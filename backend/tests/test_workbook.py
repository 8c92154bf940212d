"""Sheet layout: header, one row per record, literal formatting."""

import pytest

from app.services.export.errors import PreconditionViolation
from app.services.export.workbook import (
    COLUMNS,
    PHOTO_COLUMN,
    PHOTO_INDEX,
    build_workbook,
)


class TestBuildWorkbook:

    def test_header_only_for_no_records(self):
        doc = build_workbook([])
        assert doc.row_count == 1
        assert doc.values(1) == [c.label for c in COLUMNS]

    def test_row_count_is_records_plus_header(self, make_record):
        records = [make_record(id=i, site_name=f"Site {i}") for i in range(7)]
        doc = build_workbook(records)
        assert doc.row_count == len(records) + 1

    def test_rows_follow_input_order(self, make_record):
        names = ["Zeta", "Alpha", "Mid", "Alpha"]
        doc = build_workbook([make_record(site_name=n) for n in names])
        assert [doc.sheet.cell(row=r, column=1).value for r in doc.data_rows] == names

    def test_wifi_renders_yes_or_no(self, make_record):
        doc = build_workbook([make_record(has_wifi=True), make_record(has_wifi=False)])
        col = [c.key for c in COLUMNS].index("has_wifi") + 1
        assert doc.sheet.cell(row=2, column=col).value == "Yes"
        assert doc.sheet.cell(row=3, column=col).value == "No"

    def test_numbers_and_status_are_written_as_is(self, make_record):
        doc = build_workbook([make_record(floor_count=4, latitude=1.5, completion_status="Uncompleted")])
        row = dict(zip([c.key for c in COLUMNS], doc.values(2)))
        assert row["floor_count"] == 4
        assert row["latitude"] == 1.5
        assert row["completion_status"] == "Uncompleted"

    def test_missing_created_at_is_empty_string(self, make_record):
        doc = build_workbook([make_record(created_at=None)])
        assert doc.values(2)[-1] == ""

    def test_photo_column_is_left_for_photo_step(self, make_record):
        doc = build_workbook([make_record(photo_path="/tmp/x.jpg")])
        assert PHOTO_COLUMN == "M"
        assert doc.sheet.cell(row=2, column=PHOTO_INDEX).value is None
        assert doc.anchors == {}

    def test_non_record_fails_fast(self, make_record):
        with pytest.raises(PreconditionViolation):
            build_workbook([make_record(), {"site_name": "dict row"}])
