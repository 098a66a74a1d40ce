from sqlalchemy import Column, Integer, String, DateTime, Index
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.core.db import Base
from app.models.base.mixins import TimestampMixin, SoftDeleteMixin, VersionMixin


class Quote(Base, TimestampMixin, SoftDeleteMixin, VersionMixin):
    """
    A quote, later promoted into an order by moving to an order-category
    status. Only the workflow-relevant columns are kept here.
    """

    __tablename__ = "quotes"

    id = Column(Integer, primary_key=True)
    display_id = Column(String(50), nullable=False, unique=True, index=True)
    customer_email = Column(String(255), nullable=True)
    status = Column(String(100), nullable=False, index=True)
    status_changed_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    transitions = relationship(
        "StatusTransition",
        back_populates="quote",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="StatusTransition.id",
        lazy="raise",
    )

    __table_args__ = (
        Index("ix_quote_status_changed", "status", "status_changed_at"),
    )

    def __repr__(self):
        return f"<Quote {self.display_id} status={self.status}>"
