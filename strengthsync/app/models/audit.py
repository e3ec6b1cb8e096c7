"""
Audit trail model
"""
from sqlalchemy import Column, String, Integer, DateTime, JSON
from sqlalchemy.sql import func
from strengthsync.app.database import Base


class AuditLog(Base):
    """
    Append-only record of administrative actions
    """
    __tablename__ = "audit_logs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    organization_id = Column(String(36), nullable=False, index=True)
    user_id = Column(String(36), nullable=True)

    action = Column(String(100), nullable=False)
    entity_type = Column(String(100), nullable=False)
    entity_id = Column(String(36), nullable=True)
    new_value = Column(JSON, nullable=True)

    created_at = Column(DateTime, default=func.now(), nullable=False)

    def __repr__(self):
        return f"<AuditLog(action={self.action}, entity={self.entity_type}, org={self.organization_id})>"
