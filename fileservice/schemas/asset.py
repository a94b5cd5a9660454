"""
Pydantic schemas for Asset responses.
"""

from pydantic import BaseModel, ConfigDict, Field


class AssetSummary(BaseModel):
    """Asset metadata as shown in listings (no content)."""

    id: int
    type_id: int = Field(alias="typeId")
    description: str
    media_type: str = Field(alias="mediaType")
    file_name: str = Field(alias="fileName")

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
    )


class AssetResponse(AssetSummary):
    """
    Full asset record.

    `content` is part of the record shape but is always null in responses;
    the bytes are only served by the download endpoint.
    """

    content: bytes | None = Field(
        default=None,
        description="Always null, use GET /Files/{value} for the bytes",
    )


def asset_summary(asset) -> AssetSummary:
    """Build a summary from an Asset model or a projected row."""
    return AssetSummary(
        id=asset.id,
        type_id=asset.type_id,
        description=asset.description,
        media_type=asset.media_type,
        file_name=asset.file_name,
    )


def asset_response(asset) -> AssetResponse:
    """Build a response record from an Asset model with the content stripped."""
    return AssetResponse(
        id=asset.id,
        type_id=asset.type_id,
        description=asset.description,
        media_type=asset.media_type,
        file_name=asset.file_name,
        content=None,
    )
