"""Avatar model"""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.sql import func

from ..database import Base


class Avatar(Base):
    """Uploaded or generated model avatar"""

    __tablename__ = "avatars"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    gender = Column(String(50), index=True)
    style = Column(String(50), index=True)
    color = Column(String(50))
    source_type = Column(String(20), nullable=False)  # 'upload', 'preset', 'ai'
    status = Column(String(20), default="active", nullable=False)
    image_url = Column(Text)
    prompt = Column(Text)
    created_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<Avatar {self.name}>"
