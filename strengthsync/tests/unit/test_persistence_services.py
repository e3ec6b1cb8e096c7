"""
Unit tests for the SQLAlchemy-backed services (in-memory SQLite)
"""
from unittest.mock import Mock

import pytest

from strengthsync.app.core.candidates import CandidateTheme
from strengthsync.app.core.exceptions import StaleThemeReferenceError
from strengthsync.app.models.audit import AuditLog
from strengthsync.app.models.badge import MemberBadge
from strengthsync.app.models.member import OrganizationMember
from strengthsync.app.models.strength import MemberStrength, StrengthDomain, StrengthTheme
from strengthsync.app.services.achievements import AchievementService
from strengthsync.app.services.audit_log import SqlAuditLog
from strengthsync.app.services.catalog_seed import seed_catalog
from strengthsync.app.services.member_directory import SqlMemberDirectory
from strengthsync.app.services.theme_rank_store import SqlThemeRankStore, sql_store_scope


def themes_for(slugs):
    return [CandidateTheme(theme_slug=slug, rank=i, source_description=f"about {slug}")
            for i, slug in enumerate(slugs, start=1)]


@pytest.mark.unit
class TestCatalogSeed:
    """Test suite for seed_catalog"""

    def test_seeded_tables(self, db_session):
        assert db_session.query(StrengthDomain).count() == 4
        assert db_session.query(StrengthTheme).count() == 34
        woo = db_session.query(StrengthTheme).filter(StrengthTheme.slug == "woo").one()
        assert woo.domain.slug == "influencing"

    def test_reseeding_is_idempotent(self, db_session):
        counts = seed_catalog(db_session)

        assert counts["domains_created"] == 0
        assert counts["themes_created"] == 0
        assert counts["updated"] == 38
        assert db_session.query(StrengthTheme).count() == 34


@pytest.mark.unit
class TestThemeRankStore:
    """Test suite for SqlThemeRankStore and its transaction scope"""

    def test_replace_inside_scope(self, session_factory, organization, db_session):
        scope = sql_store_scope(session_factory)
        member_id = organization["jane"]

        with scope() as store:
            assert store.insert_many(member_id, themes_for(["achiever", "woo", "focus", "input", "belief", "learner"])) == 6
            store.mark_imported(member_id)

        with scope() as store:
            assert store.count_for_member(member_id) == 6
            assert store.delete_all_for_member(member_id) == 6
            store.insert_many(member_id, themes_for(["strategic"]))

        rows = db_session.query(MemberStrength).filter(MemberStrength.member_id == member_id).all()
        assert [(r.theme.slug, r.rank) for r in rows] == [("strategic", 1)]
        assert rows[0].is_top5 and rows[0].is_top10
        assert rows[0].personalized_description == "about strategic"
        member = db_session.query(OrganizationMember).filter(OrganizationMember.id == member_id).one()
        assert member.strengths_imported_at is not None

    def test_top_flags(self, session_factory, organization, db_session):
        slugs = [t.slug for t in db_session.query(StrengthTheme).order_by(StrengthTheme.id).all()]
        with sql_store_scope(session_factory)() as store:
            store.insert_many(organization["jane"], themes_for(slugs))

        by_rank = {r.rank: r for r in db_session.query(MemberStrength).all()}
        assert by_rank[5].is_top5 and not by_rank[6].is_top5
        assert by_rank[10].is_top10 and not by_rank[11].is_top10

    def test_stale_theme_rolls_back_row(self, session_factory, organization, db_session):
        member_id = organization["jane"]
        scope = sql_store_scope(session_factory)
        with scope() as store:
            store.insert_many(member_id, themes_for(["achiever", "woo"]))

        with pytest.raises(StaleThemeReferenceError) as exc_info:
            with scope() as store:
                store.delete_all_for_member(member_id)
                store.insert_many(member_id, themes_for(["achiever", "retired-theme"]))

        assert exc_info.value.message == 'Theme "retired-theme" not found in database'
        assert SqlThemeRankStore(db_session).count_for_member(member_id) == 2

    def test_duplicate_rank_violates_constraint(self, session_factory, organization, db_session):
        member_id = organization["john"]
        duplicate = [CandidateTheme("achiever", 1), CandidateTheme("woo", 1)]

        with pytest.raises(Exception):
            with sql_store_scope(session_factory)() as store:
                store.insert_many(member_id, duplicate)

        assert SqlThemeRankStore(db_session).count_for_member(member_id) == 0


@pytest.mark.unit
class TestSqlMemberDirectory:
    """Test suite for the member directory snapshot"""

    def test_only_active_members(self, db_session, organization):
        directory = SqlMemberDirectory.load(db_session, organization["id"])

        assert len(directory) == 2
        assert directory.find_by_email("JANE@example.com").id == organization["jane"]
        assert directory.find_by_name("  john smith ").id == organization["john"]
        assert directory.find_by_name("Ina Active") is None
        assert directory.find_by_email("") is None

    def test_other_organization_is_empty(self, db_session, organization):
        assert len(SqlMemberDirectory.load(db_session, "org-other")) == 0

    def test_members_without_email(self, mock_db_session):
        row = Mock(id="member-x", full_name="Pat Lee", email=None)
        mock_db_session.all.return_value = [row]

        directory = SqlMemberDirectory.load(mock_db_session, "org-1")

        assert directory.find_by_name("pat lee").id == "member-x"
        assert directory.find_by_email("pat@example.com") is None


@pytest.mark.unit
class TestAchievementService:
    """Test suite for badge evaluation"""

    def test_awards_strengths_revealed_once(self, session_factory, organization, db_session):
        member_id = organization["jane"]
        with sql_store_scope(session_factory)() as store:
            store.insert_many(member_id, themes_for(["achiever"]))
            store.mark_imported(member_id)
        service = AchievementService(session_factory)

        assert service.evaluate(member_id, "strengths_imported") == ["strengths-revealed"]
        assert service.evaluate(member_id, "strengths_imported") == []

        badges = db_session.query(MemberBadge).filter(MemberBadge.member_id == member_id).all()
        assert [b.badge_slug for b in badges] == ["strengths-revealed"]
        member = db_session.query(OrganizationMember).filter(OrganizationMember.id == member_id).one()
        assert member.points == 25

    def test_requirement_not_met(self, session_factory, organization):
        assert AchievementService(session_factory).evaluate(organization["john"], "strengths_imported") == []

    def test_unknown_event_and_member(self, session_factory, organization):
        service = AchievementService(session_factory)
        assert service.evaluate(organization["jane"], "shoutout_given") == []
        assert service.evaluate("missing-member", "strengths_imported") == []


@pytest.mark.unit
class TestSqlAuditLog:

    def test_record_import(self, session_factory, db_session):
        SqlAuditLog(session_factory, "org-1", "admin-1").record_import("export.xlsx", 12, 10, 2)

        entry = db_session.query(AuditLog).one()
        assert entry.action == "EXCEL_IMPORT"
        assert entry.entity_type == "MemberStrength"
        assert entry.user_id == "admin-1"
        assert entry.new_value == {"fileName": "export.xlsx", "totalRows": 12, "successful": 10, "failed": 2}
