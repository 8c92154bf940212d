# backend/app/services/export/archive.py
from __future__ import annotations

import io
import logging
import re
import zipfile
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from starlette.concurrency import run_in_threadpool

from app.schemas.survey import SurveyRecord
from .errors import SerializationError
from .images import resolve_image
from .serializer import DEFAULT_PREFIX, render_workbook, write_artifact
from .sizing import apply_widths
from .workbook import PLACEHOLDER, ExportDocument, build_workbook

logger = logging.getLogger(__name__)

SHEET_NAME = f"{DEFAULT_PREFIX}.xlsx"
IMAGES_DIR = "images"
COMPRESS_LEVEL = 6

_UNSAFE = re.compile(r"[^A-Za-z0-9_]")


def image_filename(site_name: str, ordinal: int, ext: str = "jpg") -> str:
    """例: "Hostel A-1", 3 -> HostelA1_3.jpg"""
    base = _UNSAFE.sub("", site_name or "") or "site"
    return f"{base}_{ordinal}.{ext}"


@dataclass
class PackageStats:
    row_count: int = 0
    packaged: int = 0
    missing: int = 0


async def collect_images(doc: ExportDocument, records: Sequence[SurveyRecord], zf: zipfile.ZipFile) -> PackageStats:
    stats = PackageStats(row_count=len(records))
    for i, record in enumerate(records):
        row = i + 2
        asset = await resolve_image(record.photo_path)
        if not asset.present:
            if record.photo_path:
                stats.missing += 1
                logger.warning("row %d (%s): photo %s (%s)", row, record.site_name, asset.reason, record.photo_path)
            doc.photo_cell(row).value = PLACEHOLDER
            continue
        name = image_filename(record.site_name, i + 1, asset.extension)
        zf.writestr(f"{IMAGES_DIR}/{name}", asset.data)
        doc.photo_cell(row).value = f"{IMAGES_DIR}/{name}"
        stats.packaged += 1
    return stats


async def package_archive(records: Sequence[SurveyRecord], out_dir: Path, prefix: str = DEFAULT_PREFIX) -> tuple[Path, PackageStats]:
    """シート + images/ を1つの zip にまとめて書き出す。"""
    doc = build_workbook(records)
    buf = io.BytesIO()
    try:
        with zipfile.ZipFile(buf, "w", compression=zipfile.ZIP_DEFLATED, compresslevel=COMPRESS_LEVEL) as zf:
            stats = await collect_images(doc, records, zf)
            apply_widths(doc)
            zf.writestr(SHEET_NAME, await run_in_threadpool(render_workbook, doc))
    except SerializationError:
        raise
    except (OSError, zipfile.BadZipFile, ValueError) as exc:
        raise SerializationError(f"failed to build archive: {exc}") from exc

    out = await run_in_threadpool(write_artifact, buf.getvalue(), out_dir, prefix, "zip")
    return out, stats
