from sqlalchemy import Column, Integer, String, Index
from app.core.db import Base
from app.models.base.mixins import TimestampMixin


class WorkflowActivity(Base, TimestampMixin):
    """Immutable audit log. APPEND-ONLY. Never updated, never deleted."""

    __tablename__ = "workflow_activity"

    id = Column(Integer, primary_key=True)
    actor_snapshot = Column(String(150), nullable=False, index=True)
    message = Column(String, nullable=False)

    __table_args__ = (Index("ix_workflow_activity_actor_created", "actor_snapshot", "created_at"),)

    def __repr__(self):
        return f"<WorkflowActivity id={self.id} actor={self.actor_snapshot}>"
