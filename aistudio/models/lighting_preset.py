"""Lighting preset model"""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.sql import func

from ..database import Base


class LightingPreset(Base):
    """Saved studio lighting setup"""

    __tablename__ = "lighting_presets"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False, index=True)
    intensity = Column(Integer, default=60, nullable=False)
    temperature = Column(Integer, default=5200, nullable=False)  # Kelvin
    softness = Column(Integer, default=60, nullable=False)
    shadow = Column(Integer, default=40, nullable=False)
    direction = Column(String(20), default="front", nullable=False)
    image_url = Column(Text)
    created_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<LightingPreset {self.name}>"
