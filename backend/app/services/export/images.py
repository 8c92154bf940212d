# backend/app/services/export/images.py
from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from PIL import Image
from starlette.concurrency import run_in_threadpool

from .errors import ResourceMissingError

logger = logging.getLogger(__name__)

# Pillow のフォーマット名 -> 拡張子
_EXTENSIONS = {"JPEG": "jpg", "MPO": "jpg", "PNG": "png", "GIF": "gif", "BMP": "bmp", "WEBP": "webp", "TIFF": "tif"}


@dataclass(frozen=True)
class ImageAsset:
    path: Optional[str]
    data: Optional[bytes] = None
    format: Optional[str] = None
    reason: Optional[str] = None

    @property
    def present(self) -> bool:
        return self.data is not None

    @property
    def extension(self) -> str:
        return _EXTENSIONS.get(self.format or "", "jpg")


def _read_image(path: str) -> tuple[bytes, str]:
    p = Path(path)
    # 長すぎるパスや権限エラーも「見つからない」扱い
    try:
        exists = p.is_file()
    except OSError as exc:
        raise ResourceMissingError(path, ResourceMissingError.NOT_FOUND) from exc
    if not exists:
        raise ResourceMissingError(path, ResourceMissingError.NOT_FOUND)
    try:
        data = p.read_bytes()
    except OSError as exc:
        raise ResourceMissingError(path, ResourceMissingError.UNREADABLE) from exc
    # 壊れた画像は Pillow 側で様々な例外になる。
    # verify() は BMP/TIFF/WEBP 等ではほぼ何も見ないので、最後までデコードする
    try:
        with Image.open(io.BytesIO(data)) as img:
            fmt = img.format
            img.verify()
        with Image.open(io.BytesIO(data)) as img:
            img.load()
    except Exception as exc:
        raise ResourceMissingError(path, ResourceMissingError.UNREADABLE) from exc
    return data, fmt


async def resolve_image(path: Optional[str]) -> ImageAsset:
    """写真パスを中身のバイト列に解決する。失敗しても例外は投げず absent を返す。"""
    if not path:
        return ImageAsset(path=path, reason=ResourceMissingError.NOT_FOUND)
    try:
        data, fmt = await run_in_threadpool(_read_image, path)
    except ResourceMissingError as exc:
        logger.debug("image unavailable (%s): %s", exc.reason, path)
        return ImageAsset(path=path, reason=exc.reason)
    return ImageAsset(path=path, data=data, format=fmt)
