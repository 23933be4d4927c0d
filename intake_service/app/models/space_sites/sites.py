from datetime import datetime, timezone
import uuid
from sqlalchemy import Column, String, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from shared.core.database import Base


class Site(Base):
    __tablename__ = "sites"

    id = Column(String(64), primary_key=True, default=lambda: str(uuid.uuid4()))
    org_id = Column(String(64), ForeignKey(
        "organizations.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(200), nullable=False)
    # short routing code quoted by occupants, e.g. SITE-598
    code = Column(String(32), index=True)
    location = Column(String(200))
    status = Column(String(16), default="ACTIVE")
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc),
                        server_default=func.now())

    org = relationship("Org", back_populates="sites")
    blocks = relationship("Block", back_populates="site", cascade="all, delete-orphan")
    assets = relationship("Asset", back_populates="site")
