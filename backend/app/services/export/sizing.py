# backend/app/services/export/sizing.py
from openpyxl.utils import get_column_letter

from .workbook import COLUMNS, PHOTO_INDEX, ExportDocument

PADDING = 2
MIN_WIDTH = 10
# 画像列は 150px 枠に合わせた固定幅
IMAGE_COLUMN_WIDTH = 22


def _text_len(value) -> int:
    return 0 if value is None else len(str(value))


def compute_widths(doc: ExportDocument) -> dict[str, float]:
    """全行を埋めた後のシートから列幅を決める。同じ入力なら同じ結果。"""
    widths: dict[str, float] = {}
    ws = doc.sheet
    for idx, col in enumerate(COLUMNS, 1):
        letter = get_column_letter(idx)
        if idx == PHOTO_INDEX:
            widths[letter] = IMAGE_COLUMN_WIDTH
            continue
        longest = len(col.label)
        for row in doc.data_rows:
            longest = max(longest, _text_len(ws.cell(row=row, column=idx).value))
        widths[letter] = max(longest + PADDING, MIN_WIDTH)
    return widths


def apply_widths(doc: ExportDocument) -> dict[str, float]:
    widths = compute_widths(doc)
    for letter, width in widths.items():
        doc.sheet.column_dimensions[letter].width = width
    return widths
