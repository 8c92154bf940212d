# backend/app/api/routers/export.py
from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import FileResponse
from pathlib import Path
import logging

from app.api.routers.surveys import get_store
from app.config import get_default_strategy, get_export_dir
from app.schemas.commons import StrategyName
from app.services.export.errors import SerializationError
from app.services.export.pipeline import XLSX_MIME, ZIP_MIME, export_surveys, get_strategy
from app.services.store import SurveyStore

logger = logging.getLogger(__name__)

router = APIRouter()


async def _run(strategy_name: str, store: SurveyStore) -> FileResponse:
    strategy = get_strategy(strategy_name)
    try:
        result = await export_surveys(store, strategy, get_export_dir())
    except SerializationError:
        # 詳細はログのみ。利用者には再試行を促す
        raise HTTPException(status_code=500, detail="export failed")
    return FileResponse(
        result.path,
        media_type=result.mime_type,
        filename=result.filename,
        headers={
            "X-Export-Rows": str(result.row_count),
            "X-Export-Images": str(result.image_count),
            "X-Export-Missing-Images": str(result.missing_images),
        },
    )


@router.post("")
@router.post("/")
async def export_default(strategy: StrategyName | None = None, store: SurveyStore = Depends(get_store)):
    return await _run(strategy or get_default_strategy(), store)


@router.post("/xlsx")
async def export_xlsx(store: SurveyStore = Depends(get_store)):
    return await _run("xlsx", store)


@router.post("/zip")
async def export_zip(store: SurveyStore = Depends(get_store)):
    return await _run("zip", store)


@router.get("/files/{name}")
def download_export(name: str):
    export_dir = get_export_dir().resolve()
    path = (export_dir / name).resolve()
    # exports 配下以外は返さない
    if path.parent != export_dir or not path.is_file():
        raise HTTPException(status_code=404, detail="export not found")
    media_type = ZIP_MIME if path.suffix == ".zip" else XLSX_MIME
    return FileResponse(path, media_type=media_type, filename=path.name)
