from sqlalchemy import Column, Integer, String, ForeignKey, JSON, Index
from sqlalchemy.orm import relationship
from app.core.db import Base
from app.models.base.mixins import TimestampMixin


class StatusTransition(Base, TimestampMixin):
    """Status history. APPEND-ONLY."""

    __tablename__ = "status_transitions"

    id = Column(Integer, primary_key=True)
    quote_id = Column(Integer, ForeignKey("quotes.id", ondelete="CASCADE"), nullable=False, index=True)
    from_status = Column(String(100), nullable=True)
    to_status = Column(String(100), nullable=False)
    trigger = Column(String(50), nullable=False, default="manual")
    changed_by = Column(String(150), nullable=True)
    transition_metadata = Column(JSON, nullable=True)

    quote = relationship("Quote", back_populates="transitions", lazy="raise")

    __table_args__ = (Index("ix_status_transition_quote_created", "quote_id", "created_at"),)

    def __repr__(self):
        return f"<StatusTransition quote={self.quote_id} {self.from_status}->{self.to_status}>"
