"""Admin settings model"""

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..database import Base


class AdminSetting(Base):
    """Key-value override for a built-in default setting"""

    __tablename__ = "admin_settings"

    id = Column(Integer, primary_key=True, index=True)
    key = Column(String(150), unique=True, nullable=False, index=True)
    value = Column(JSON)
    updated_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    user = relationship("User", lazy="selectin")

    def __repr__(self):
        return f"<AdminSetting {self.key}>"
