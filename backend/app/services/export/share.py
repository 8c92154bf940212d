# backend/app/services/export/share.py
import logging
from pathlib import Path
from typing import Protocol

from app.schemas.commons import ExportResult
from .errors import ShareUnavailableError

logger = logging.getLogger(__name__)

SHARE_TITLE = "Share Site Survey Data"


class ShareTarget(Protocol):
    def is_available(self) -> bool: ...

    def share(self, path: Path, mime_type: str, title: str) -> None: ...


def share_export(result: ExportResult, target: ShareTarget, title: str = SHARE_TITLE) -> None:
    # 共有できなくてもファイルは残す
    if not target.is_available():
        logger.warning("share facility unavailable; export kept at %s", result.path)
        raise ShareUnavailableError("Sharing is not available on this device")
    target.share(Path(result.path), result.mime_type, title)
