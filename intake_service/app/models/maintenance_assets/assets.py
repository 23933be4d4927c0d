from datetime import datetime, timezone
import uuid
from sqlalchemy import Column, String, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from shared.core.database import Base


class Asset(Base):
    __tablename__ = "assets"

    id = Column(String(64), primary_key=True, default=lambda: str(uuid.uuid4()))
    org_id = Column(String(64), ForeignKey(
        "organizations.id", ondelete="CASCADE"), nullable=False, index=True)
    site_id = Column(String(64), ForeignKey(
        "sites.id", ondelete="SET NULL"), nullable=True)
    name = Column(String(200), nullable=False)
    code = Column(String(32))  # AST-4785
    type = Column(String(64))
    status = Column(String(16), default="ACTIVE")
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc),
                        server_default=func.now())

    site = relationship("Site", back_populates="assets")
