from datetime import datetime, timezone
import uuid
from sqlalchemy import Column, String, DateTime, ForeignKey, func
from shared.core.database import Base
from ...enum.identity_enum import ProfileRole


class Profile(Base):
    __tablename__ = "profiles"

    id = Column(String(64), primary_key=True, default=lambda: str(uuid.uuid4()))
    org_id = Column(String(64), ForeignKey(
        "organizations.id", ondelete="CASCADE"), nullable=True)
    full_name = Column(String(200))
    role = Column(String(16), nullable=False, default=ProfileRole.tenant.value)
    phone = Column(String(32), index=True)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc),
                        server_default=func.now())
