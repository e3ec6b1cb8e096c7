"""
Theme rank persistence (member_strengths) with one transaction per scope
"""
import logging
from contextlib import contextmanager
from datetime import datetime
from typing import Callable, Dict, Iterator, Sequence

from sqlalchemy.orm import Session

from strengthsync.app.core.candidates import CandidateTheme
from strengthsync.app.core.exceptions import StaleThemeReferenceError
from strengthsync.app.models.member import OrganizationMember
from strengthsync.app.models.strength import MemberStrength, StrengthTheme

logger = logging.getLogger(__name__)


class SqlThemeRankStore:
    """Theme rank operations bound to one open session"""

    def __init__(self, db: Session):
        self.db = db

    def count_for_member(self, member_id: str) -> int:
        return self.db.query(MemberStrength).filter(MemberStrength.member_id == member_id).count()

    def delete_all_for_member(self, member_id: str) -> int:
        deleted = (
            self.db.query(MemberStrength)
            .filter(MemberStrength.member_id == member_id)
            .delete(synchronize_session=False)
        )
        self.db.flush()
        return deleted

    def _theme_ids(self, slugs: Sequence[str]) -> Dict[str, int]:
        rows = self.db.query(StrengthTheme.slug, StrengthTheme.id).filter(StrengthTheme.slug.in_(slugs)).all()
        return {slug: theme_id for slug, theme_id in rows}

    def insert_many(self, member_id: str, themes: Sequence[CandidateTheme]) -> int:
        """
        Insert the member's theme ranks

        Raises:
            StaleThemeReferenceError: If a slug is missing from strength_themes
        """
        theme_ids = self._theme_ids([t.theme_slug for t in themes])
        for theme in themes:
            theme_id = theme_ids.get(theme.theme_slug)
            if theme_id is None:
                raise StaleThemeReferenceError(theme.theme_slug)
            self.db.add(MemberStrength(
                member_id=member_id,
                theme_id=theme_id,
                rank=theme.rank,
                is_top5=theme.rank <= 5,
                is_top10=theme.rank <= 10,
                personalized_description=theme.source_description,
            ))
        self.db.flush()
        return len(themes)

    def mark_imported(self, member_id: str) -> None:
        self.db.query(OrganizationMember).filter(OrganizationMember.id == member_id).update(
            {OrganizationMember.strengths_imported_at: datetime.now()},
            synchronize_session=False,
        )


def sql_store_scope(session_factory: Callable[[], Session]):
    """
    Build a scope factory opening a fresh session and transaction per use

    The transaction commits when the block exits cleanly and rolls back
    otherwise, so a failing row leaves no partial writes behind.
    """

    @contextmanager
    def scope() -> Iterator[SqlThemeRankStore]:
        db = session_factory()
        try:
            yield SqlThemeRankStore(db)
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    return scope
