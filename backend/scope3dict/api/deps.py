"""Request-scoped helpers shared by the routers."""

from fastapi import HTTPException, Request, UploadFile

from scope3dict.errors import DictionaryError, InputValidationError
from scope3dict.infra.config import MAX_UPLOAD_BYTES
from scope3dict.services.classification_service import ClassificationService
from scope3dict.utils.table_reader import SUPPORTED_EXTENSIONS, file_extension

_STATUS_BY_CODE = {
    InputValidationError.code: 400,
}


def get_service(request: Request) -> ClassificationService:
    return request.app.state.classification_service


def to_http_error(exc: DictionaryError) -> HTTPException:
    status = _STATUS_BY_CODE.get(exc.code, 422)
    return HTTPException(status_code=status, detail={"code": exc.code, "message": exc.message})


async def read_upload(file: UploadFile | None) -> tuple[str, bytes]:
    """Validate an uploaded table file before any processing."""
    if file is None or not file.filename:
        raise HTTPException(status_code=400, detail="ファイルを選択してください")

    suffix = file_extension(file.filename)
    if suffix not in SUPPORTED_EXTENSIONS:
        raise HTTPException(
            status_code=400,
            detail=f"未対応のファイル形式 '{suffix}'（対応形式: .xlsx, .xlsm, .csv）",
        )

    content = await file.read()
    if not content:
        raise HTTPException(status_code=400, detail="アップロードされたファイルが空です")
    if len(content) > MAX_UPLOAD_BYTES:
        raise HTTPException(
            status_code=413,
            detail=f"ファイルサイズが上限（{MAX_UPLOAD_BYTES // (1024 * 1024)}MB）を超えています",
        )
    return file.filename, content
