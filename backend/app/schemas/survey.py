# backend/app/schemas/survey.py
from pydantic import BaseModel, ConfigDict, Field
from typing import Literal, Optional

# 完了状態（アプリ側の型定義に合わせて2値）
CompletionStatus = Literal["Completed", "Uncompleted"]


class SurveyIn(BaseModel):
    site_name: str = Field(min_length=1)
    photo_path: Optional[str] = None
    date: str = Field(pattern=r"^\d{4}-\d{2}-\d{2}$")
    time: str = Field(pattern=r"^\d{2}:\d{2}:\d{2}$")
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    floor_count: int = Field(gt=0)
    room_count: int = Field(gt=0)
    resident_count: int = Field(ge=0)
    manager_name: str
    manager_phone: str
    has_wifi: bool = False
    completion_status: CompletionStatus = "Uncompleted"


class SurveyRecord(SurveyIn):
    """保存済みの調査1件。エクスポートはこのスナップショットだけを読む。"""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: Optional[int] = None
    created_at: Optional[str] = None
