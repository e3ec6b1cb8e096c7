"""
Badges awarded to members
"""
from sqlalchemy import Column, String, Integer, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.sql import func
from strengthsync.app.database import Base


class MemberBadge(Base):
    """A badge earned by a member, at most once per badge"""
    __tablename__ = "member_badges"

    id = Column(Integer, primary_key=True, autoincrement=True)
    member_id = Column(String(36), ForeignKey('organization_members.id', ondelete='CASCADE'), nullable=False, index=True)
    badge_slug = Column(String(100), nullable=False)
    badge_name = Column(String(255), nullable=False)
    category = Column(String(50), nullable=False)
    tier = Column(String(20), nullable=False)
    points = Column(Integer, nullable=False, default=0)

    awarded_at = Column(DateTime, default=func.now())

    __table_args__ = (
        UniqueConstraint('member_id', 'badge_slug', name='uq_member_badge'),
    )

    def __repr__(self):
        return f"<MemberBadge(member_id={self.member_id}, badge={self.badge_slug})>"
