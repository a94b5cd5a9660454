"""
Asset service - Business logic for file asset operations.

Handles listing, retrieval, upload, replacement and removal of assets.
Content is never returned from metadata or write operations; only
get_content loads the blob.
"""

import logging

from fastapi import UploadFile
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from fileservice.core.exceptions import (
    AssetNotFoundException,
    PayloadTooLargeException,
    ValidationException,
)
from fileservice.models.asset import Asset
from fileservice.repositories.asset_repository import AssetRepository
from fileservice.schemas.asset import AssetResponse, asset_response, asset_summary
from fileservice.schemas.result import (
    DELETE_SUCCESSFUL,
    DUPLICATE_FILE_NAME,
    NO_DATA_AVAILABLE,
    ListResult,
    Result,
)

logger = logging.getLogger(__name__)

DEFAULT_MEDIA_TYPE = "application/octet-stream"


def resolve_file_name(file_name: str | None, content: UploadFile) -> str:
    """
    The explicit file name when given, else the uploaded file's name.

    Raises:
        ValidationException: If neither is available
    """
    resolved = file_name or content.filename
    if not resolved:
        raise ValidationException("FileName is required when the upload has no file name")
    return resolved


def resolve_media_type(media_type: str | None, content: UploadFile) -> str:
    """The explicit media type when given, else the upload's content type."""
    return media_type or content.content_type or DEFAULT_MEDIA_TYPE


async def read_upload(content: UploadFile, max_upload_size: int | None = None) -> bytes:
    """
    Read the whole upload into memory.

    Raises:
        ValidationException: If the declared length is negative
        PayloadTooLargeException: If a size limit is configured and exceeded
    """
    if content.size is not None and content.size < 0:
        raise ValidationException(
            "Content length cannot be negative",
            details={"length": content.size},
        )

    data = await content.read()

    if max_upload_size is not None and len(data) > max_upload_size:
        raise PayloadTooLargeException(max_upload_size)

    return data


class AssetService:
    """Service class for asset operations."""

    def __init__(self, db: AsyncSession, max_upload_size: int | None = None):
        self.db = db
        self.repository = AssetRepository(db)
        self.max_upload_size = max_upload_size

    async def _resolve(self, value: str, with_content: bool = False, message: str = "File Not Found") -> Asset:
        asset = await self.repository.get_by_id_or_file_name(value, with_content=with_content)
        if asset is None:
            raise AssetNotFoundException(value, message=message)
        return asset

    async def _duplicate(self, file_name: str) -> Result:
        # Another request took the name between the check and the flush
        await self.db.rollback()
        logger.warning(f"Unique index rejected duplicate file name '{file_name}'")
        return Result.error(DUPLICATE_FILE_NAME)

    async def list_assets(self, page: int = 0, count: int = 10) -> Result:
        """
        List assets ordered by file name.

        Args:
            page: Zero-based page number
            count: Page size

        Returns:
            ListResult with the page and the total number of assets, or a
            successful Result saying no data is available when the store
            is empty
        """
        total = await self.repository.count()
        if total == 0:
            return Result.ok(NO_DATA_AVAILABLE)

        rows = await self.repository.list_page(page, count)
        return ListResult.page_of(
            items=[asset_summary(row) for row in rows],
            total=total,
            page=page,
            count=count,
        )

    async def get_content(self, value: str) -> Asset:
        """
        Get an asset with its content loaded.

        Raises:
            AssetNotFoundException: If no asset matches
        """
        return await self._resolve(value, with_content=True)

    async def get_detail(self, value: str) -> AssetResponse:
        """
        Get asset metadata.

        Raises:
            AssetNotFoundException: If no asset matches
        """
        asset = await self._resolve(value)
        return asset_response(asset)

    async def add(
        self,
        type_id: int,
        description: str,
        content: UploadFile,
        media_type: str | None = None,
        file_name: str | None = None,
    ) -> AssetResponse | Result:
        """
        Store a new asset.

        Returns:
            The stored record with content stripped, or a soft error Result
            when the file name is already taken
        """
        asset = Asset(
            type_id=type_id,
            description=description,
            file_name=resolve_file_name(file_name, content),
            media_type=resolve_media_type(media_type, content),
        )
        asset.content = await read_upload(content, self.max_upload_size)

        if not await self.repository.is_file_name_available(asset.file_name):
            logger.warning(f"Rejected upload of duplicate file name '{asset.file_name}'")
            return Result.error(DUPLICATE_FILE_NAME)

        try:
            await self.repository.add(asset)
        except IntegrityError:
            return await self._duplicate(asset.file_name)
        logger.info(f"Stored asset {asset.id} '{asset.file_name}' ({len(asset.content)} bytes)")

        return asset_response(asset)

    async def update(
        self,
        value: str,
        type_id: int,
        description: str,
        content: UploadFile,
        media_type: str | None = None,
        file_name: str | None = None,
    ) -> AssetResponse | Result:
        """
        Replace an asset's fields and content.

        The file name is only re-checked for uniqueness when it differs from
        the identifier used to address the asset.

        Returns:
            The updated record with content stripped, or a soft error Result
            when the new file name belongs to another asset

        Raises:
            AssetNotFoundException: If no asset matches
        """
        asset = await self._resolve(value)

        new_file_name = resolve_file_name(file_name, content)
        new_media_type = resolve_media_type(media_type, content)
        data = await read_upload(content, self.max_upload_size)

        if new_file_name != value:
            if not await self.repository.is_file_name_available(new_file_name, exclude_id=asset.id):
                logger.warning(
                    f"Rejected rename of asset {asset.id} to duplicate file name '{new_file_name}'"
                )
                return Result.error(DUPLICATE_FILE_NAME)

        asset.type_id = type_id
        asset.description = description
        asset.file_name = new_file_name
        asset.media_type = new_media_type
        asset.content = data

        try:
            await self.repository.update(asset)
        except IntegrityError:
            return await self._duplicate(new_file_name)
        logger.info(f"Updated asset {asset.id} '{asset.file_name}' ({len(data)} bytes)")

        return asset_response(asset)

    async def remove(self, value: str) -> Result:
        """
        Delete an asset.

        Raises:
            AssetNotFoundException: If no asset matches
        """
        asset = await self._resolve(value, message="Not Found")
        asset_id = asset.id

        await self.repository.remove(asset)
        logger.info(f"Deleted asset {asset_id}")

        return Result.ok(DELETE_SUCCESSFUL)
