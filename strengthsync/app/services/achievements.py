"""
Achievement evaluation: badges awarded in response to member actions
"""
import logging
from dataclasses import dataclass
from typing import Callable, Dict, List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from strengthsync.app.models.badge import MemberBadge
from strengthsync.app.models.member import OrganizationMember

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BadgeDefinition:
    slug: str
    name: str
    description: str
    category: str
    tier: str
    points: int
    requirement: str


BADGES: List[BadgeDefinition] = [
    BadgeDefinition(
        slug="strengths-revealed",
        name="Strengths Revealed",
        description="Uploaded your CliftonStrengths results",
        category="MILESTONE",
        tier="BRONZE",
        points=25,
        requirement="strengths_imported",
    ),
]

# Which badge categories an action can unlock
ACTION_CATEGORY_MAP: Dict[str, List[str]] = {
    "strengths_imported": ["MILESTONE"],
}

REQUIREMENTS: Dict[str, Callable[[OrganizationMember], bool]] = {
    "strengths_imported": lambda member: member.strengths_imported_at is not None,
}


class AchievementService:
    """Checks and awards badges for a member after an action"""

    def __init__(self, session_factory: Callable[[], Session], badges: List[BadgeDefinition] = None):
        self.session_factory = session_factory
        self.badges = badges if badges is not None else BADGES

    def evaluate(self, member_id: str, event_type: str) -> List[str]:
        """
        Award every not-yet-earned badge the action makes the member eligible for

        Args:
            member_id: Member who performed the action
            event_type: Action name, e.g. "strengths_imported"

        Returns:
            Slugs of newly awarded badges
        """
        categories = ACTION_CATEGORY_MAP.get(event_type, [])
        candidates = [b for b in self.badges if b.category in categories]
        if not candidates:
            return []

        db = self.session_factory()
        try:
            member = db.query(OrganizationMember).filter(OrganizationMember.id == member_id).first()
            if member is None:
                logger.warning(f"Achievement check skipped, member {member_id} not found")
                return []

            earned = {
                slug for (slug,) in db.query(MemberBadge.badge_slug).filter(MemberBadge.member_id == member_id).all()
            }

            awarded = []
            for badge in candidates:
                if badge.slug in earned:
                    continue
                requirement = REQUIREMENTS.get(badge.requirement)
                if requirement is None or not requirement(member):
                    continue

                db.add(MemberBadge(
                    member_id=member_id,
                    badge_slug=badge.slug,
                    badge_name=badge.name,
                    category=badge.category,
                    tier=badge.tier,
                    points=badge.points,
                ))
                member.points = (member.points or 0) + badge.points
                awarded.append(badge.slug)

            db.commit()
        except IntegrityError:
            # Concurrent evaluation already awarded it
            db.rollback()
            return []
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

        for slug in awarded:
            logger.info(f"Awarded badge {slug} to member {member_id}")
        return awarded
