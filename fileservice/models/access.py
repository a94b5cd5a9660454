"""
Access log SQLAlchemy model.
One row per logged read request or write-path user access refresh.
"""

import enum
from datetime import datetime

from sqlalchemy import DateTime, Enum, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from fileservice.db.base import ServerBase


class AccessAction(str, enum.Enum):
    """Why an access log entry was written."""
    REQUEST = "request"   # read path request logging
    REFRESH = "refresh"   # write path user access refresh


class AccessLogEntry(ServerBase):
    __tablename__ = "access_log"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
        index=True,
        comment="Subject of the authenticated user",
    )
    method: Mapped[str] = mapped_column(String(10), nullable=False)
    path: Mapped[str] = mapped_column(String(2048), nullable=False)
    action: Mapped[AccessAction] = mapped_column(
        Enum(
            AccessAction,
            native_enum=False,
            length=20,
            values_callable=lambda e: [m.value for m in e],
        ),
        nullable=False,
        default=AccessAction.REQUEST,
    )
    remote_address: Mapped[str | None] = mapped_column(String(64), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    def __repr__(self) -> str:
        return f"<AccessLogEntry(method={self.method}, path={self.path}, action={self.action})>"
