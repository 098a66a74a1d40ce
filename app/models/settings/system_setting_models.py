from sqlalchemy import Column, Integer, String, JSON
from app.core.db import Base
from app.models.base.mixins import TimestampMixin, VersionMixin


class SystemSetting(Base, TimestampMixin, VersionMixin):
    """
    Key/value settings row. Status configurations live under
    `quote_statuses` and `order_statuses` as JSON lists.
    """

    __tablename__ = "system_settings"

    id = Column(Integer, primary_key=True)
    setting_key = Column(String(100), nullable=False, unique=True, index=True)
    setting_value = Column(JSON, nullable=False)
    description = Column(String, nullable=True)
    updated_by = Column(String(150), nullable=True)

    def __repr__(self):
        return f"<SystemSetting {self.setting_key} v{self.version}>"
