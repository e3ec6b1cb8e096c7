"""
Stored theme catalog and per-member theme ranks
"""
from sqlalchemy import Column, String, Integer, Boolean, DateTime, Text, JSON, ForeignKey, UniqueConstraint
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from strengthsync.app.database import Base


class StrengthDomain(Base):
    """One of the 4 theme domains"""
    __tablename__ = "strength_domains"

    id = Column(Integer, primary_key=True, autoincrement=True)
    slug = Column(String(50), unique=True, nullable=False)
    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    color_hex = Column(String(7), nullable=False, default="#6B7280")

    themes = relationship("StrengthTheme", back_populates="domain")

    def __repr__(self):
        return f"<StrengthDomain(slug={self.slug})>"


class StrengthTheme(Base):
    """
    Stored copy of a catalog theme
    Seeded from the in-memory catalog; imports resolve slugs against this table
    """
    __tablename__ = "strength_themes"

    id = Column(Integer, primary_key=True, autoincrement=True)
    slug = Column(String(50), unique=True, nullable=False, index=True)
    name = Column(String(100), unique=True, nullable=False)
    domain_id = Column(Integer, ForeignKey('strength_domains.id'), nullable=False)
    short_description = Column(Text, nullable=True)
    works_with = Column(JSON, nullable=True)
    keywords = Column(JSON, nullable=True)

    domain = relationship("StrengthDomain", back_populates="themes")

    def __repr__(self):
        return f"<StrengthTheme(slug={self.slug})>"


class MemberStrength(Base):
    """
    A member's rank for one theme
    A member never has two rows for one theme, or two themes at one rank
    """
    __tablename__ = "member_strengths"

    id = Column(Integer, primary_key=True, autoincrement=True)
    member_id = Column(String(36), ForeignKey('organization_members.id', ondelete='CASCADE'), nullable=False, index=True)
    theme_id = Column(Integer, ForeignKey('strength_themes.id'), nullable=False)
    rank = Column(Integer, nullable=False)

    is_top5 = Column(Boolean, nullable=False, default=False)
    is_top10 = Column(Boolean, nullable=False, default=False)
    personalized_description = Column(Text, nullable=True)

    created_at = Column(DateTime, default=func.now())

    theme = relationship("StrengthTheme")

    __table_args__ = (
        UniqueConstraint('member_id', 'theme_id', name='uq_member_theme'),
        UniqueConstraint('member_id', 'rank', name='uq_member_rank'),
    )

    def __repr__(self):
        return f"<MemberStrength(member_id={self.member_id}, theme_id={self.theme_id}, rank={self.rank})>"
