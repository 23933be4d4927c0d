from datetime import datetime, timezone
from sqlalchemy import Column, String, Text, ForeignKey, TIMESTAMP
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from shared.core.database import Base
from ...enum.service_request_enum import ServiceRequestSource, ServiceRequestStatus


class ServiceRequest(Base):
    __tablename__ = "service_requests"

    # human readable code (SR-123456), generated by the intake pipeline
    id = Column(String(16), primary_key=True)
    org_id = Column(String(64), ForeignKey(
        "organizations.id", ondelete="CASCADE"), nullable=False, index=True)
    site_id = Column(String(64), ForeignKey(
        "sites.id", ondelete="SET NULL"), nullable=True)
    block_id = Column(String(64), ForeignKey(
        "blocks.id", ondelete="SET NULL"), nullable=True)
    asset_id = Column(String(64), ForeignKey(
        "assets.id", ondelete="SET NULL"), nullable=True)

    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    requester_phone = Column(String(32), nullable=True)
    status = Column(String(24), nullable=False,
                    default=ServiceRequestStatus.new.value)
    source = Column(String(16), nullable=False,
                    default=ServiceRequestSource.web.value)
    resolution_notes = Column(Text, nullable=True)
    created_at = Column(TIMESTAMP(timezone=True), default=lambda: datetime.now(timezone.utc),
                        server_default=func.now())

    org = relationship("Org", back_populates="service_requests")
    site = relationship("Site")
