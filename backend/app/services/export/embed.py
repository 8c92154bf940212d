# backend/app/services/export/embed.py
from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from typing import Sequence

from openpyxl.drawing.image import Image as XLImage

from app.schemas.survey import SurveyRecord
from .images import ImageAsset, resolve_image
from .workbook import PHOTO_COLUMN, PLACEHOLDER, ExportDocument, ImageAnchor

logger = logging.getLogger(__name__)

# 表示枠（px）。元画像の縦横比に関係なく固定
IMAGE_BOX = 150
# 画像がある行の高さ（pt）。150px ≒ 112.5pt
IMAGE_ROW_HEIGHT = 115


@dataclass
class EmbedStats:
    embedded: int = 0
    missing: int = 0  # 写真パスはあるが解決できなかった行


def anchor_image(doc: ExportDocument, row: int, asset: ImageAsset) -> ImageAnchor:
    img = XLImage(io.BytesIO(asset.data))
    img.width = IMAGE_BOX
    img.height = IMAGE_BOX
    cell = f"{PHOTO_COLUMN}{row}"
    doc.sheet.add_image(img, cell)
    doc.sheet.row_dimensions[row].height = IMAGE_ROW_HEIGHT
    anchor = ImageAnchor(row=row, cell=cell, width=IMAGE_BOX, height=IMAGE_BOX)
    doc.anchors[row] = anchor
    return anchor


async def embed_images(doc: ExportDocument, records: Sequence[SurveyRecord]) -> EmbedStats:
    """各行の写真を Photo 列に貼り付ける。1行の失敗で全体は止めない。"""
    stats = EmbedStats()
    for i, record in enumerate(records):
        row = i + 2
        asset = await resolve_image(record.photo_path)
        if asset.present:
            try:
                anchor_image(doc, row, asset)
                stats.embedded += 1
                continue
            except Exception as exc:
                logger.warning("row %d (%s): could not embed %s: %s", row, record.site_name, record.photo_path, exc)
        elif record.photo_path:
            logger.warning("row %d (%s): photo %s (%s)", row, record.site_name, asset.reason, record.photo_path)
        if record.photo_path:
            stats.missing += 1
        doc.photo_cell(row).value = PLACEHOLDER
    return stats
