"""Persistence for assets."""

from typing import Sequence

from sqlalchemy import func, select
from sqlalchemy.engine import Row
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import undefer

from fileservice.models.asset import Asset

# Largest value of a 32-bit INTEGER primary key
MAX_ASSET_ID = 2**31 - 1


class AssetRepository:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    def _select(self, with_content: bool):
        stmt = select(Asset)
        if with_content:
            stmt = stmt.options(undefer(Asset.content)).execution_options(populate_existing=True)
        return stmt

    async def get_by_id(self, asset_id: int, with_content: bool = False) -> Asset | None:
        stmt = self._select(with_content).where(Asset.id == asset_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_file_name(self, file_name: str, with_content: bool = False) -> Asset | None:
        stmt = self._select(with_content).where(Asset.file_name == file_name)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_id_or_file_name(self, value: str, with_content: bool = False) -> Asset | None:
        """
        Resolve an identifier that is either a numeric id or a file name.

        Numeric values are tried as an id first; when no asset has that id
        the value is matched against file names, so a file literally named
        "42" can still be found.
        """
        try:
            asset_id = int(value)
        except ValueError:
            asset_id = None

        if asset_id is not None and 0 < asset_id <= MAX_ASSET_ID:
            asset = await self.get_by_id(asset_id, with_content=with_content)
            if asset is not None:
                return asset

        return await self.get_by_file_name(value, with_content=with_content)

    async def is_file_name_available(self, file_name: str, exclude_id: int | None = None) -> bool:
        stmt = select(func.count(Asset.id)).where(Asset.file_name == file_name)
        if exclude_id is not None:
            stmt = stmt.where(Asset.id != exclude_id)
        result = await self._session.execute(stmt)
        return (result.scalar() or 0) == 0

    async def count(self) -> int:
        result = await self._session.execute(select(func.count(Asset.id)))
        return result.scalar() or 0

    async def list_page(self, page: int, count: int) -> Sequence[Row]:
        """One page of summary rows ordered by file name, content excluded."""
        stmt = (
            select(
                Asset.id,
                Asset.type_id,
                Asset.description,
                Asset.media_type,
                Asset.file_name,
            )
            .order_by(Asset.file_name.asc())
            .offset(page * count)
            .limit(count)
        )
        result = await self._session.execute(stmt)
        return result.all()

    async def add(self, asset: Asset) -> Asset:
        self._session.add(asset)
        await self._session.flush()
        return asset

    async def update(self, asset: Asset) -> Asset:
        await self._session.flush()
        return asset

    async def remove(self, asset: Asset) -> None:
        await self._session.delete(asset)
        await self._session.flush()
