from datetime import datetime, timezone
import uuid
from sqlalchemy import Column, String, DateTime, ForeignKey, func
from shared.core.database import Base


class Tenant(Base):
    __tablename__ = "tenants"

    id = Column(String(64), primary_key=True, default=lambda: str(uuid.uuid4()))
    org_id = Column(String(64), ForeignKey(
        "organizations.id", ondelete="CASCADE"), nullable=True)
    site_id = Column(String(64), ForeignKey(
        "sites.id", ondelete="CASCADE"), nullable=True)
    block_id = Column(String(64), ForeignKey(
        "blocks.id", ondelete="SET NULL"), nullable=True)
    name = Column(String(200))
    phone = Column(String(32), index=True)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc),
                        server_default=func.now())
