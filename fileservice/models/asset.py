"""
Asset SQLAlchemy model.
An asset is a binary file stored as a blob alongside its metadata.
"""

from sqlalchemy import Integer, LargeBinary, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from fileservice.db.base import ContentBase


class Asset(ContentBase):
    """
    Stored file entity.

    `content` is deferred: list and metadata queries never load the blob,
    only the download path asks for it explicitly.
    """
    __tablename__ = "assets"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
        comment="Asset identifier",
    )
    type_id: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        comment="Asset type classifier",
    )
    description: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="",
        comment="Free text description",
    )
    file_name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        index=True,
        comment="File name, unique across all assets",
    )
    media_type: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="MIME type of the content",
    )
    content: Mapped[bytes | None] = mapped_column(
        LargeBinary,
        nullable=True,
        deferred=True,
        comment="File content",
    )

    def __repr__(self) -> str:
        return f"<Asset(id={self.id}, file_name={self.file_name})>"
