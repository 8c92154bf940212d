# backend/app/schemas/commons.py
from pydantic import BaseModel
from typing import Literal

StrategyName = Literal["xlsx", "zip"]


class ExportResult(BaseModel):
    path: str
    filename: str
    strategy: StrategyName
    mime_type: str
    row_count: int  # ヘッダーを除くデータ行数
    image_count: int
    missing_images: int = 0
