"""
Unit tests for StrengthsImportService against in-memory SQLite
"""
from unittest.mock import patch

import pytest

from strengthsync.app.core.candidates import MatchStrategy, ReportType, RowStatus
from strengthsync.app.core.exceptions import InvalidReportError, LayoutNotDetectedError
from strengthsync.app.core.import_orchestrator import AUDIT_FAILED_WARNING
from strengthsync.app.models.audit import AuditLog
from strengthsync.app.models.badge import MemberBadge
from strengthsync.app.models.document import StrengthsDocument
from strengthsync.app.models.member import OrganizationMember
from strengthsync.app.models.strength import MemberStrength
from strengthsync.app.services.audit_log import SqlAuditLog
from strengthsync.app.services.import_service import DOCUMENT_FAILED_WARNING, StrengthsImportService


def strengths_snapshot(db, member_id):
    rows = (
        db.query(MemberStrength)
        .filter(MemberStrength.member_id == member_id)
        .order_by(MemberStrength.rank)
        .all()
    )
    return [(r.theme.slug, r.rank, r.is_top5, r.is_top10) for r in rows]


@pytest.fixture
def service(session_factory, catalog):
    return StrengthsImportService(session_factory, catalog)


@pytest.mark.unit
class TestSpreadsheetImport:
    """Test suite for batch spreadsheet imports"""

    def test_preview_leaves_store_untouched(self, service, organization, make_workbook, gallup_rows, session_factory):
        result = service.import_spreadsheet(make_workbook(gallup_rows), "export.xlsx", organization["id"])

        assert result.preview is True
        assert result.total_processed == 2
        assert result.successful == 2
        assert [o.message for o in result.results] == ["Will import strengths", "Will import strengths"]

        db = session_factory()
        try:
            assert db.query(MemberStrength).count() == 0
            assert db.query(AuditLog).count() == 0
            assert all(m.strengths_imported_at is None for m in db.query(OrganizationMember).all())
        finally:
            db.close()

    def test_commit_and_reimport(self, service, organization, make_workbook, gallup_rows, session_factory):
        data = make_workbook(gallup_rows)

        first = service.import_spreadsheet(data, "export.xlsx", organization["id"], preview=False,
                                           uploaded_by="admin-1")
        db = session_factory()
        try:
            jane_after_first = strengths_snapshot(db, organization["jane"])
            john_after_first = strengths_snapshot(db, organization["john"])
        finally:
            db.close()

        second = service.import_spreadsheet(data, "export.xlsx", organization["id"], preview=False)

        assert [(o.status, o.message) for o in first.results] == [
            (RowStatus.SUCCESS, "Imported 34 themes"),
            (RowStatus.SUCCESS, "Imported 34 themes"),
        ]
        assert [o.status for o in second.results] == [o.status for o in first.results]
        assert [o.had_existing_themes for o in second.results] == [True, True]
        assert first.results[0].match_strategy == MatchStrategy.EMAIL
        assert first.results[1].match_strategy == MatchStrategy.FLIPPED_NAME

        db = session_factory()
        try:
            assert strengths_snapshot(db, organization["jane"]) == jane_after_first
            assert strengths_snapshot(db, organization["john"]) == john_after_first
            assert len(jane_after_first) == 34
            assert john_after_first[0][0] == "strategic"

            audits = db.query(AuditLog).order_by(AuditLog.id).all()
            assert len(audits) == 2
            assert audits[0].user_id == "admin-1"
            assert audits[0].new_value == {"fileName": "export.xlsx", "totalRows": 2, "successful": 2, "failed": 0}

            badges = db.query(MemberBadge).all()
            assert sorted(b.member_id for b in badges) == sorted([organization["jane"], organization["john"]])
        finally:
            db.close()

    def test_inactive_member_not_matched(self, service, organization, make_workbook, theme_names):
        grid = [["Name"] + theme_names, ["Ina Active"] + list(range(1, 35))]

        result = service.import_spreadsheet(make_workbook(grid), "export.xlsx", organization["id"], preview=False)

        assert result.results[0].status == RowStatus.SKIPPED
        assert result.results[0].message == "No matching member found in organization"
        assert result.failed == 1

    def test_audit_failure_still_returns_outcomes(self, service, organization, make_workbook, gallup_rows,
                                                  session_factory):
        with patch.object(SqlAuditLog, "record_import", side_effect=RuntimeError("audit table locked")):
            result = service.import_spreadsheet(make_workbook(gallup_rows), "export.xlsx", organization["id"],
                                                preview=False)

        assert [o.message for o in result.results] == ["Imported 34 themes", "Imported 34 themes"]
        assert result.successful == 2
        assert AUDIT_FAILED_WARNING in result.warnings

        db = session_factory()
        try:
            assert db.query(MemberStrength).count() == 68
            assert db.query(AuditLog).count() == 0
        finally:
            db.close()

    def test_layout_error_is_fatal(self, service, organization, make_workbook):
        with pytest.raises(LayoutNotDetectedError):
            service.import_spreadsheet(make_workbook([["Name", "Email"], ["a", "b"]]), "x.xlsx", organization["id"])


@pytest.mark.unit
class TestDocumentImport:
    """Test suite for single report imports"""

    def test_preview_document(self, service, organization, full_report_text, session_factory):
        result = service.import_document(full_report_text.encode("utf-8"), "report.txt", organization["id"])

        assert result.participant_name == "Jane Doe"
        assert result.themes_found == 34
        assert result.report_type == ReportType.ALL_34
        assert result.confidence == pytest.approx(0.98)
        assert result.document_id is None
        assert result.results[0].message == "Will import strengths"
        assert result.themes[0].theme_name == "Achiever"

        db = session_factory()
        try:
            assert db.query(StrengthsDocument).count() == 0
        finally:
            db.close()

    def test_commit_document_with_explicit_member(self, service, organization, top_five_report_text, session_factory):
        result = service.import_document(
            top_five_report_text.encode("utf-8"),
            "report.txt",
            organization["id"],
            preview=False,
            member_email="JANE@example.com",
            mime_type="text/plain",
        )

        assert result.participant_name == "John Smith"
        assert result.results[0].member_id == organization["jane"]
        assert result.results[0].message == "Imported 5 themes"
        assert result.document_id is not None

        db = session_factory()
        try:
            document = db.query(StrengthsDocument).one()
            assert document.id == result.document_id
            assert document.member_id == organization["jane"]
            assert document.report_type == "TOP_5"
            assert document.status == "COMPLETED"
            member = db.query(OrganizationMember).filter(OrganizationMember.id == organization["jane"]).one()
            assert member.strengths_document_id == document.id
            assert db.query(AuditLog).one().action == "PDF_IMPORT"
        finally:
            db.close()

    def test_document_without_themes_rejected(self, service, organization):
        with pytest.raises(InvalidReportError) as exc_info:
            service.import_document(b"Prepared for Jane Doe\nno themes here", "report.txt", organization["id"])

        assert "No strength themes found in the document" in exc_info.value.errors

    def test_document_store_failure_keeps_committed_outcome(self, service, organization, top_five_report_text,
                                                            session_factory):
        with patch.object(StrengthsImportService, "_save_document", side_effect=RuntimeError("disk full")):
            result = service.import_document(
                top_five_report_text.encode("utf-8"),
                "report.txt",
                organization["id"],
                preview=False,
                member_email="john.smith@example.com",
            )

        assert result.results[0].message == "Imported 5 themes"
        assert result.document_id is None
        assert DOCUMENT_FAILED_WARNING in result.warnings

        db = session_factory()
        try:
            assert db.query(MemberStrength).filter(MemberStrength.member_id == organization["john"]).count() == 5
            assert db.query(StrengthsDocument).count() == 0
        finally:
            db.close()
