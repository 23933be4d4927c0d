from datetime import datetime, timezone
import uuid
from sqlalchemy import Column, String, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from shared.core.database import Base


class Block(Base):
    __tablename__ = "blocks"

    id = Column(String(64), primary_key=True, default=lambda: str(uuid.uuid4()))
    org_id = Column(String(64), ForeignKey(
        "organizations.id", ondelete="CASCADE"), nullable=False)
    site_id = Column(String(64), ForeignKey(
        "sites.id", ondelete="CASCADE"), nullable=False)
    name = Column(String(128), nullable=False)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc),
                        server_default=func.now())

    site = relationship("Site", back_populates="blocks")
