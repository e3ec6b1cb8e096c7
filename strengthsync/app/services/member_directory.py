"""
Member directory backed by the organization_members table
"""
import logging
from typing import Dict, Optional

from sqlalchemy.orm import Session

from strengthsync.app.core.member_matching import DirectoryMember
from strengthsync.app.models.member import MEMBER_STATUS_ACTIVE, OrganizationMember

logger = logging.getLogger(__name__)


class SqlMemberDirectory:
    """
    Snapshot of one organization's ACTIVE members, indexed for matching

    Loaded once per request so row processing never queries the directory
    again and the snapshot can be shared by worker threads.
    """

    def __init__(self, organization_id: str, members: Dict[str, DirectoryMember]):
        self.organization_id = organization_id
        self._count = len(members)
        self._by_email: Dict[str, DirectoryMember] = {}
        self._by_name: Dict[str, DirectoryMember] = {}
        for member in members.values():
            if member.email:
                self._by_email.setdefault(member.email.strip().lower(), member)
            if member.full_name:
                self._by_name.setdefault(member.full_name.strip().lower(), member)

    @classmethod
    def load(cls, db: Session, organization_id: str) -> "SqlMemberDirectory":
        """Load the ACTIVE members of an organization"""
        rows = (
            db.query(OrganizationMember)
            .filter(
                OrganizationMember.organization_id == organization_id,
                OrganizationMember.status == MEMBER_STATUS_ACTIVE,
            )
            .all()
        )
        members = {
            row.id: DirectoryMember(id=row.id, full_name=row.full_name or "", email=row.email or "")
            for row in rows
        }
        logger.info(f"Loaded {len(members)} active members for organization {organization_id}")
        return cls(organization_id, members)

    def __len__(self) -> int:
        return self._count

    def find_by_email(self, email: str) -> Optional[DirectoryMember]:
        if not email:
            return None
        return self._by_email.get(email.strip().lower())

    def find_by_name(self, name: str) -> Optional[DirectoryMember]:
        if not name:
            return None
        return self._by_name.get(name.strip().lower())
