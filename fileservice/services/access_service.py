"""
Access service - request logging and user access refresh.

Read endpoints log the request before doing anything else. Write endpoints
refresh the user's access instead, which rejects an expired session before
any business logic runs.

Entries are committed in their own short session, so they are kept whether
or not the request that triggered them succeeds.
"""

import logging
import time
from typing import Any

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from fileservice.core.exceptions import UnauthorizedException
from fileservice.models.access import AccessAction, AccessLogEntry

logger = logging.getLogger(__name__)


class AccessService:
    """Service class for access bookkeeping."""

    def __init__(self, sessionmaker: async_sessionmaker[AsyncSession]):
        self.sessionmaker = sessionmaker

    async def _record(
        self,
        request: Request,
        user: dict[str, Any],
        action: AccessAction,
    ) -> AccessLogEntry:
        entry = AccessLogEntry(
            user_id=user.get("user_id"),
            method=request.method,
            path=request.url.path,
            action=action,
            remote_address=request.client.host if request.client else None,
        )
        async with self.sessionmaker() as session:
            session.add(entry)
            await session.commit()
        return entry

    async def log_request(self, request: Request, user: dict[str, Any]) -> AccessLogEntry:
        """Log a read request."""
        logger.info(f"{request.method} {request.url.path} by {user.get('user_id')}")
        return await self._record(request, user, AccessAction.REQUEST)

    async def refresh_user_access(self, request: Request, user: dict[str, Any]) -> AccessLogEntry:
        """
        Refresh the user's access before a write.

        Raises:
            UnauthorizedException: If the session has expired
        """
        exp = user.get("exp")
        if exp is not None and exp <= time.time():
            logger.info(f"Expired session for {user.get('user_id')} on {request.method} {request.url.path}")
            raise UnauthorizedException("Session has expired")

        logger.info(f"{request.method} {request.url.path} by {user.get('user_id')} (access refreshed)")
        return await self._record(request, user, AccessAction.REFRESH)
