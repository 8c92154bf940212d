# backend/app/services/export/serializer.py
from __future__ import annotations

import contextlib
import io
import logging
import threading
import time
from pathlib import Path

from .errors import SerializationError
from .workbook import ExportDocument

logger = logging.getLogger(__name__)

DEFAULT_PREFIX = "site_surveys"

_lock = threading.Lock()
_last_ms = 0


def next_timestamp_ms() -> int:
    """ミリ秒のタイムスタンプ。プロセス内では必ず前回より大きい。"""
    global _last_ms
    with _lock:
        now = time.time_ns() // 1_000_000
        if now <= _last_ms:
            now = _last_ms + 1
        _last_ms = now
        return now


def unique_filename(prefix: str = DEFAULT_PREFIX, ext: str = "xlsx") -> str:
    return f"{prefix}_{next_timestamp_ms()}.{ext}"


def render_workbook(doc: ExportDocument) -> bytes:
    buf = io.BytesIO()
    try:
        doc.workbook.save(buf)
    except Exception as exc:
        raise SerializationError(f"failed to render workbook: {exc}") from exc
    return buf.getvalue()


def write_artifact(data: bytes, out_dir: Path, prefix: str = DEFAULT_PREFIX, ext: str = "xlsx") -> Path:
    """<prefix>_<ms>.<ext> として書き出す。既存ファイルは上書きしない。"""
    out_dir = Path(out_dir)
    try:
        out_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise SerializationError(f"cannot create export dir {out_dir}: {exc}") from exc

    while True:
        out = out_dir / unique_filename(prefix, ext)
        try:
            with open(out, "xb") as f:
                f.write(data)
        except FileExistsError:
            # 別プロセスと同じミリ秒だった
            continue
        except OSError as exc:
            with contextlib.suppress(OSError):
                out.unlink(missing_ok=True)
            raise SerializationError(f"failed to write {out}: {exc}") from exc
        logger.debug("wrote %d bytes to %s", len(data), out)
        return out
