"""
File endpoints.

Mounted at both /Files and /api/Files.
"""

from typing import Any

from fastapi import APIRouter, File, Form, Query, Request, UploadFile
from fastapi.responses import Response

from fileservice.auth.dependencies import CanDeleteAssets, CanReadAssets, CanWriteAssets
from fileservice.dependencies import AccessLog, AppSettings, DbSession
from fileservice.schemas.error import ErrorResponse
from fileservice.services.asset_service import AssetService

router = APIRouter()

NOT_FOUND_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorResponse, "description": "File Not Found"},
}


@router.get("")
async def list_files(
    request: Request,
    db: DbSession,
    access: AccessLog,
    user: CanReadAssets,
    page: int = Query(default=0, ge=0, description="Zero-based page number"),
    count: int = Query(default=10, ge=1, description="Items per page"),
):
    """
    List files ordered by file name.

    Returns one page of file metadata and the total number of files. When no
    files are stored, returns a successful result with "No Data Available".
    """
    await access.log_request(request, user)

    result = await AssetService(db).list_assets(page=page, count=count)
    return result.model_dump(by_alias=True, mode="json")


@router.get("/{value}", responses=NOT_FOUND_RESPONSES)
async def get_file(
    value: str,
    request: Request,
    db: DbSession,
    access: AccessLog,
    user: CanReadAssets,
):
    """
    Download a file by id or file name.

    The body is the stored content with the stored media type.
    """
    await access.log_request(request, user)

    asset = await AssetService(db).get_content(value)
    return Response(content=asset.content or b"", media_type=asset.media_type)


@router.get("/{value}/detail", responses=NOT_FOUND_RESPONSES)
async def get_file_detail(
    value: str,
    request: Request,
    db: DbSession,
    access: AccessLog,
    user: CanReadAssets,
):
    """Get file metadata by id or file name."""
    await access.log_request(request, user)

    detail = await AssetService(db).get_detail(value)
    return detail.model_dump(by_alias=True, mode="json")


@router.post("", responses=NOT_FOUND_RESPONSES)
async def add_file(
    request: Request,
    db: DbSession,
    access: AccessLog,
    settings: AppSettings,
    user: CanWriteAssets,
    typeId: int = Form(..., description="Asset type classifier"),
    description: str = Form(...),
    content: UploadFile = File(..., description="File content"),
    mediaType: str | None = Form(default=None, description="Defaults to the upload's content type"),
    fileName: str | None = Form(default=None, description="Defaults to the upload's file name"),
):
    """
    Upload a new file.

    A file name that is already in use is reported as a failed result, not
    as an HTTP error.
    """
    await access.refresh_user_access(request, user)

    service = AssetService(db, max_upload_size=settings.MAX_UPLOAD_SIZE)
    result = await service.add(
        type_id=typeId,
        description=description,
        content=content,
        media_type=mediaType,
        file_name=fileName,
    )
    return result.model_dump(by_alias=True, mode="json")


@router.put("/{value}", responses=NOT_FOUND_RESPONSES)
async def update_file(
    value: str,
    request: Request,
    db: DbSession,
    access: AccessLog,
    settings: AppSettings,
    user: CanWriteAssets,
    typeId: int = Form(..., description="Asset type classifier"),
    description: str = Form(...),
    content: UploadFile = File(..., description="File content"),
    mediaType: str | None = Form(default=None, description="Defaults to the upload's content type"),
    fileName: str | None = Form(default=None, description="Defaults to the upload's file name"),
):
    """
    Replace a file's metadata and content.

    All fields are replaced; nothing is merged with the stored record.
    """
    await access.refresh_user_access(request, user)

    service = AssetService(db, max_upload_size=settings.MAX_UPLOAD_SIZE)
    result = await service.update(
        value,
        type_id=typeId,
        description=description,
        content=content,
        media_type=mediaType,
        file_name=fileName,
    )
    return result.model_dump(by_alias=True, mode="json")


@router.delete("/{value}", responses=NOT_FOUND_RESPONSES)
async def remove_file(
    value: str,
    request: Request,
    db: DbSession,
    access: AccessLog,
    user: CanDeleteAssets,
):
    """Delete a file by id or file name."""
    await access.refresh_user_access(request, user)

    result = await AssetService(db).remove(value)
    return result.model_dump(by_alias=True, mode="json")
