from datetime import datetime, timezone
import uuid
from sqlalchemy import Column, String, DateTime, func
from sqlalchemy.orm import relationship
from shared.core.database import Base


class Org(Base):
    __tablename__ = "organizations"

    id = Column(String(64), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(200), nullable=False)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc),
                        server_default=func.now())

    sites = relationship("Site", back_populates="org", cascade="all, delete-orphan")
    service_requests = relationship("ServiceRequest", back_populates="org")
