from pathlib import Path

import pytest

from app.schemas.commons import ExportResult
from app.services.export.errors import ShareUnavailableError
from app.services.export.pipeline import XLSX_MIME
from app.services.export.share import SHARE_TITLE, share_export


class RecordingTarget:

    def __init__(self, available=True):
        self.available = available
        self.shared = []

    def is_available(self):
        return self.available

    def share(self, path, mime_type, title):
        self.shared.append((path, mime_type, title))


@pytest.fixture
def result(tmp_path):
    path = tmp_path / "site_surveys_1700000000000.xlsx"
    path.write_bytes(b"PK")
    return ExportResult(
        path=str(path),
        filename=path.name,
        strategy="xlsx",
        mime_type=XLSX_MIME,
        row_count=1,
        image_count=0,
    )


def test_share_hands_off_path_mime_and_title(result):
    target = RecordingTarget()
    share_export(result, target)
    assert target.shared == [(Path(result.path), XLSX_MIME, SHARE_TITLE)]


def test_unavailable_share_keeps_file(result):
    target = RecordingTarget(available=False)
    with pytest.raises(ShareUnavailableError):
        share_export(result, target)
    assert target.shared == []
    assert Path(result.path).exists()
