from sqlalchemy import Column, Integer, String, Boolean
from app.core.db import Base
from app.models.base.mixins import TimestampMixin


class NotificationOutbox(Base, TimestampMixin):
    """
    Email notifications requested by status changes. A separate mailer
    picks up undispatched rows; nothing here sends mail.
    """

    __tablename__ = "notification_outbox"

    id = Column(Integer, primary_key=True)
    entity_id = Column(Integer, nullable=False, index=True)
    status_name = Column(String(100), nullable=False)
    email_template = Column(String(100), nullable=False)
    dispatched = Column(Boolean, nullable=False, default=False, index=True)

    def __repr__(self):
        return f"<NotificationOutbox entity={self.entity_id} template={self.email_template}>"
