import io
import zipfile

import pytest
from fastapi.testclient import TestClient
from openpyxl import load_workbook
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from app.db import get_db, init_db
from app.main import app
from app.services.export.pipeline import XLSX_MIME


def _body(**overrides):
    data = {
        "site_name": "Green Hostel",
        "photo_path": None,
        "date": "2025-01-15",
        "time": "10:30:00",
        "latitude": 12.97,
        "longitude": 77.59,
        "floor_count": 3,
        "room_count": 20,
        "resident_count": 45,
        "manager_name": "R. Kumar",
        "manager_phone": "9876543210",
        "has_wifi": False,
        "completion_status": "Uncompleted",
    }
    data.update(overrides)
    return data


@pytest.fixture
def client(tmp_path, monkeypatch):
    monkeypatch.setenv("EXPORT_DIR", str(tmp_path / "exports"))
    engine = create_engine(f"sqlite:///{tmp_path / 'api.db'}", connect_args={"check_same_thread": False})
    init_db(bind=engine)
    TestingSession = sessionmaker(bind=engine, autoflush=False)

    def override():
        db = TestingSession()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
    engine.dispose()


def test_health(client):
    assert client.get("/health").json() == {"ok": True}


def test_survey_crud(client):
    created = client.post("/surveys", json=_body()).json()
    assert created["id"] is not None
    assert client.get(f"/surveys/{created['id']}").json()["site_name"] == "Green Hostel"
    assert len(client.get("/surveys").json()) == 1

    assert client.delete(f"/surveys/{created['id']}").json() == {"ok": True}
    assert client.get(f"/surveys/{created['id']}").status_code == 404
    assert client.delete(f"/surveys/{created['id']}").status_code == 404


def test_clear_all(client):
    for name in ("A", "B"):
        client.post("/surveys", json=_body(site_name=name))
    assert client.delete("/surveys").json() == {"ok": True, "deleted": 2}


def test_invalid_payload(client):
    assert client.post("/surveys", json=_body(floor_count=0)).status_code == 422


def test_export_xlsx(client, make_photo, tmp_path):
    client.post("/surveys", json=_body(site_name="With photo", photo_path=make_photo()))
    client.post("/surveys", json=_body(site_name="Lost photo", photo_path=str(tmp_path / "lost.jpg")))

    resp = client.post("/export/xlsx")
    assert resp.status_code == 200
    assert resp.headers["content-type"] == XLSX_MIME
    assert "attachment" in resp.headers["content-disposition"]
    assert resp.headers["x-export-rows"] == "2"
    assert resp.headers["x-export-images"] == "1"
    assert resp.headers["x-export-missing-images"] == "1"

    ws = load_workbook(io.BytesIO(resp.content)).active
    assert ws.max_row == 3
    assert len(ws._images) == 1

    exported = list((tmp_path / "exports").iterdir())
    assert len(exported) == 1
    again = client.get(f"/export/files/{exported[0].name}")
    assert again.status_code == 200
    assert again.content == resp.content


def test_export_zip(client):
    client.post("/surveys", json=_body())
    resp = client.post("/export/zip")
    assert resp.status_code == 200
    assert resp.headers["content-type"] == "application/zip"
    with zipfile.ZipFile(io.BytesIO(resp.content)) as zf:
        assert "site_surveys.xlsx" in zf.namelist()


def test_export_default_strategy(client, monkeypatch):
    monkeypatch.setenv("EXPORT_STRATEGY", "zip")
    assert client.post("/export").headers["content-type"] == "application/zip"
    assert client.post("/export", params={"strategy": "xlsx"}).headers["content-type"] == XLSX_MIME


def test_export_failure_is_500(client, tmp_path, monkeypatch):
    blocker = tmp_path / "blocked"
    blocker.write_text("")
    monkeypatch.setattr("app.api.routers.export.get_export_dir", lambda: blocker)
    resp = client.post("/export/xlsx")
    assert resp.status_code == 500
    assert resp.json() == {"detail": "export failed"}


def test_download_unknown_file(client):
    assert client.get("/export/files/nothing.xlsx").status_code == 404
