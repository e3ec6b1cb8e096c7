"""
Organization and member models
"""
import uuid

from sqlalchemy import Column, String, Integer, DateTime, ForeignKey, Index
from sqlalchemy.sql import func
from strengthsync.app.database import Base

MEMBER_STATUS_ACTIVE = "ACTIVE"
MEMBER_STATUS_INACTIVE = "INACTIVE"


def _uuid() -> str:
    return str(uuid.uuid4())


class Organization(Base):
    """
    Tenant boundary: members, imports and audit records all belong to one
    """
    __tablename__ = "organizations"

    id = Column(String(36), primary_key=True, default=_uuid)
    name = Column(String(255), nullable=False)
    slug = Column(String(100), unique=True, nullable=False, index=True)

    created_at = Column(DateTime, default=func.now())

    def __repr__(self):
        return f"<Organization(id={self.id}, slug={self.slug})>"


class OrganizationMember(Base):
    """
    A person inside an organization, the target of a strengths import
    Only ACTIVE members are candidates for matching
    """
    __tablename__ = "organization_members"

    id = Column(String(36), primary_key=True, default=_uuid)
    organization_id = Column(String(36), ForeignKey('organizations.id', ondelete='CASCADE'), nullable=False, index=True)

    email = Column(String(255), nullable=False)
    full_name = Column(String(255), nullable=False)
    status = Column(String(20), nullable=False, default=MEMBER_STATUS_ACTIVE)

    # Gamification
    points = Column(Integer, nullable=False, default=0)

    # Import bookkeeping
    strengths_imported_at = Column(DateTime, nullable=True)
    strengths_document_id = Column(String(36), nullable=True)  # Latest uploaded report, if any

    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())

    __table_args__ = (
        Index('ix_org_member_email', 'organization_id', 'email', unique=True),
    )

    def __repr__(self):
        return f"<OrganizationMember(id={self.id}, email={self.email}, status={self.status})>"
