import os
import tempfile

# app.db はインポート時にエンジンを作るので、先に環境変数を決めておく
_TMP = tempfile.mkdtemp(prefix="site-survey-tests-")
os.environ.setdefault("DATABASE_URL", f"sqlite:///{_TMP}/test.db")
os.environ.setdefault("EXPORT_DIR", os.path.join(_TMP, "exports"))

import pytest
from PIL import Image

from app.schemas.survey import SurveyRecord


def _record(**overrides) -> SurveyRecord:
    data = dict(
        id=1,
        site_name="Green Hostel",
        photo_path=None,
        date="2025-01-15",
        time="10:30:00",
        latitude=12.9716,
        longitude=77.5946,
        floor_count=3,
        room_count=20,
        resident_count=45,
        manager_name="R. Kumar",
        manager_phone="9876543210",
        has_wifi=True,
        completion_status="Completed",
        created_at="2025-01-15 10:31:02",
    )
    data.update(overrides)
    return SurveyRecord(**data)


@pytest.fixture
def make_record():
    return _record


@pytest.fixture
def make_photo(tmp_path):
    """Write a small real image file and return its path as str."""
    counter = {"n": 0}

    def _make(name=None, fmt="JPEG", size=(40, 30), color="red"):
        counter["n"] += 1
        ext = "png" if fmt == "PNG" else "jpg"
        path = tmp_path / (name or f"photo_{counter['n']}.{ext}")
        Image.new("RGB", size, color).save(path, fmt)
        return str(path)

    return _make


@pytest.fixture
def out_dir(tmp_path):
    d = tmp_path / "exports"
    d.mkdir()
    return d


@pytest.fixture
def truncated_bmp(tmp_path):
    """A BMP whose header opens and verifies but whose pixel data is cut short."""
    path = tmp_path / "truncated.bmp"
    Image.new("RGB", (200, 200), "blue").save(path, "BMP")
    path.write_bytes(path.read_bytes()[:500])
    return str(path)


@pytest.fixture
def overlong_path(tmp_path):
    return str(tmp_path / ("a" * 300 + ".jpg"))
