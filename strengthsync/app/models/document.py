"""
Record of an uploaded strengths report
"""
import uuid

from sqlalchemy import Column, String, Integer, Float, DateTime, JSON, ForeignKey
from sqlalchemy.sql import func
from strengthsync.app.database import Base


class StrengthsDocument(Base):
    """
    One uploaded report and what was extracted from it
    Written only when a document import is committed
    """
    __tablename__ = "strengths_documents"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    organization_id = Column(String(36), ForeignKey('organizations.id', ondelete='CASCADE'), nullable=False, index=True)
    member_id = Column(String(36), ForeignKey('organization_members.id', ondelete='SET NULL'), nullable=True)
    uploaded_by = Column(String(36), nullable=True)

    file_name = Column(String(255), nullable=False)
    file_size = Column(Integer, nullable=False, default=0)
    mime_type = Column(String(100), nullable=True)
    status = Column(String(20), nullable=False, default="PENDING")  # PENDING, COMPLETED, FAILED

    participant_name = Column(String(255), nullable=True)
    report_type = Column(String(20), nullable=True)
    confidence = Column(Float, nullable=True)
    extracted_data = Column(JSON, nullable=True)  # [{themeSlug, rank}, ...]

    processed_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=func.now())

    def __repr__(self):
        return f"<StrengthsDocument(id={self.id}, file={self.file_name}, member={self.member_id})>"
