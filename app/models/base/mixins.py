from sqlalchemy import Column, Integer, Boolean, DateTime
from sqlalchemy.sql import func


class TimestampMixin:
    created_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False
    )
    updated_at = Column(
        DateTime(timezone=True),
        onupdate=func.now()
    )


class SoftDeleteMixin:
    is_deleted = Column(Boolean, default=False, nullable=False)


class VersionMixin:
    """Optimistic concurrency counter, bumped on every accepted write."""
    version = Column(Integer, nullable=False, default=1)
