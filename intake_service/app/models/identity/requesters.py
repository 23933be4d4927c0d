from datetime import datetime, timezone
import uuid
from sqlalchemy import Column, String, DateTime, ForeignKey, func
from shared.core.database import Base
from ...enum.identity_enum import RequesterStatus


class Requester(Base):
    """Provisional identity recorded on first unmatched contact."""

    __tablename__ = "requesters"

    id = Column(String(64), primary_key=True, default=lambda: str(uuid.uuid4()))
    org_id = Column(String(64), ForeignKey(
        "organizations.id", ondelete="CASCADE"), nullable=True)
    # canonical digits; the unique key makes first-contact upserts atomic
    phone = Column(String(32), nullable=False, unique=True)
    status = Column(String(16), nullable=False, default=RequesterStatus.pending.value)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc),
                        server_default=func.now())
    updated_at = Column(DateTime(timezone=True),
                        server_default=func.now(), onupdate=func.now())
