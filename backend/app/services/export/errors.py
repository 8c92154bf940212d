# backend/app/services/export/errors.py


class ExportError(Exception):
    pass


class ResourceMissingError(ExportError):
    """写真が見つからない / 読めない。行単位で "N/A" に置き換える（致命的ではない）。"""

    NOT_FOUND = "not-found"
    UNREADABLE = "unreadable"

    def __init__(self, path, reason: str):
        super().__init__(f"{reason}: {path}")
        self.path = path
        self.reason = reason


class SerializationError(ExportError):
    """ブック/アーカイブの生成・書き込み失敗。エクスポート全体を中断する。"""


class ShareUnavailableError(ExportError):
    """共有機能が使えない。ファイル自体は出力済み。"""


class PreconditionViolation(ExportError):
    """上流で検証済みのはずのレコードが想定外の形をしている。"""
