"""SQLAlchemy declarative bases, one per migrated schema."""

from sqlalchemy.orm import DeclarativeBase


class ServerBase(DeclarativeBase):
    """
    Base class for "server" schema models (request/access bookkeeping).
    Migrated by the server migration context.
    """
    pass


class ContentBase(DeclarativeBase):
    """
    Base class for "content" schema models (assets).
    Migrated by the content migration context.
    """
    pass
