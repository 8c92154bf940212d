# backend/app/services/export/pipeline.py
"""
調査レコードのエクスポート。

- xlsx: 1ファイルに写真を埋め込む（既定）
- zip : シート + images/ フォルダ（写真列は相対パス）

どちらも入力順に1件ずつ処理し、写真が読めない行は "N/A" にして続行する。
書き出しに失敗した場合だけ SerializationError で全体を中断する。
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Sequence

from starlette.concurrency import run_in_threadpool

from app.schemas.commons import ExportResult
from app.schemas.survey import SurveyRecord
from app.services.store import SurveyStore
from .archive import package_archive
from .embed import embed_images
from .errors import SerializationError
from .serializer import DEFAULT_PREFIX, render_workbook, write_artifact
from .sizing import apply_widths
from .workbook import build_workbook

logger = logging.getLogger(__name__)

XLSX_MIME = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
ZIP_MIME = "application/zip"


class ExportStrategy(ABC):
    name: str
    extension: str
    mime_type: str

    def __init__(self, prefix: str = DEFAULT_PREFIX):
        self.prefix = prefix

    @abstractmethod
    async def export(self, records: Sequence[SurveyRecord], out_dir: Path) -> ExportResult:
        ...


class EmbeddedWorkbookStrategy(ExportStrategy):
    name = "xlsx"
    extension = "xlsx"
    mime_type = XLSX_MIME

    async def export(self, records, out_dir):
        doc = build_workbook(records)
        stats = await embed_images(doc, records)
        apply_widths(doc)
        # 描画・書き込みはブロッキングなのでスレッドで
        data = await run_in_threadpool(render_workbook, doc)
        out = await run_in_threadpool(write_artifact, data, out_dir, self.prefix, self.extension)
        return ExportResult(
            path=str(out),
            filename=out.name,
            strategy=self.name,
            mime_type=self.mime_type,
            row_count=doc.row_count - 1,
            image_count=stats.embedded,
            missing_images=stats.missing,
        )


class ArchiveStrategy(ExportStrategy):
    name = "zip"
    extension = "zip"
    mime_type = ZIP_MIME

    async def export(self, records, out_dir):
        out, stats = await package_archive(records, out_dir, self.prefix)
        return ExportResult(
            path=str(out),
            filename=out.name,
            strategy=self.name,
            mime_type=self.mime_type,
            row_count=stats.row_count,
            image_count=stats.packaged,
            missing_images=stats.missing,
        )


_STRATEGIES: dict[str, type[ExportStrategy]] = {
    EmbeddedWorkbookStrategy.name: EmbeddedWorkbookStrategy,
    ArchiveStrategy.name: ArchiveStrategy,
}


def get_strategy(name: str, prefix: str = DEFAULT_PREFIX) -> ExportStrategy:
    try:
        cls = _STRATEGIES[name]
    except KeyError:
        raise ValueError(f"unknown export strategy: {name!r} (expected one of {sorted(_STRATEGIES)})") from None
    return cls(prefix=prefix)


async def export_records(records: Sequence[SurveyRecord], strategy: ExportStrategy, out_dir: Path) -> ExportResult:
    snapshot = tuple(records)
    logger.info("export start: %d records, strategy=%s", len(snapshot), strategy.name)
    try:
        result = await strategy.export(snapshot, Path(out_dir))
    except SerializationError:
        logger.exception("export failed (strategy=%s)", strategy.name)
        raise
    logger.info(
        "export done: %s (%d rows, %d images, %d missing)",
        result.path, result.row_count, result.image_count, result.missing_images,
    )
    return result


async def export_surveys(store: SurveyStore, strategy: ExportStrategy, out_dir: Path) -> ExportResult:
    """ストアから全件を読み出してエクスポートする。"""
    records = await run_in_threadpool(store.list_all)
    return await export_records(records, strategy, out_dir)
