# backend/app/models/survey.py
from sqlalchemy import Integer, String, Float, Boolean, Column, text
from .base import Base

class Survey(Base):
    __tablename__ = "surveys"
    id = Column(Integer, primary_key=True)
    site_name = Column(String, nullable=False)
    photo_path = Column(String, nullable=True)  # 端末上の写真パス（撮影・スタンプ済み）
    date = Column(String, nullable=False)  # YYYY-MM-DD
    time = Column(String, nullable=False)  # HH:mm:ss
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)
    floor_count = Column(Integer, nullable=False)
    room_count = Column(Integer, nullable=False)
    resident_count = Column(Integer, nullable=False)
    manager_name = Column(String, nullable=False)
    manager_phone = Column(String, nullable=False)
    has_wifi = Column(Boolean, nullable=False, default=False)
    completion_status = Column(String, nullable=False)
    # DB側で採番（YYYY-MM-DD HH:MM:SS）
    created_at = Column(String, server_default=text("CURRENT_TIMESTAMP"))
