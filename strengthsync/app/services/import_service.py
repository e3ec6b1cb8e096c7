"""
Strengths import service - wires extractors, reconciliation and persistence

Used by the HTTP routes and the command-line import script.
"""
import logging
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional

from sqlalchemy.orm import Session

from strengthsync.app.config import settings
from strengthsync.app.core.candidates import RowStatus
from strengthsync.app.core.exceptions import InvalidReportError
from strengthsync.app.core.import_orchestrator import CommitWriter, ImportOrchestrator, PreviewWriter
from strengthsync.app.core.pdf_extractor import (
    ParsedStrengthsReport,
    StrengthsReportExtractor,
    extract_text_from_pdf,
    validate_report,
)
from strengthsync.app.core.spreadsheet_extractor import SpreadsheetExtractor
from strengthsync.app.core.theme_catalog import ThemeCatalog, get_theme_catalog
from strengthsync.app.models.document import StrengthsDocument
from strengthsync.app.models.member import Organization, OrganizationMember
from strengthsync.app.models.schemas import (
    BatchImportResponse,
    DocumentImportResponse,
    ParsedThemeInfo,
)
from strengthsync.app.services.achievements import AchievementService
from strengthsync.app.services.audit_log import EXCEL_IMPORT_ACTION, PDF_IMPORT_ACTION, SqlAuditLog
from strengthsync.app.services.member_directory import SqlMemberDirectory
from strengthsync.app.services.theme_rank_store import sql_store_scope

logger = logging.getLogger(__name__)

DOCUMENT_FAILED_WARNING = "Strengths document record could not be stored"


class StrengthsImportService:
    """
    Runs uploaded files through extraction and reconciliation

    Args:
        session_factory: Callable returning a new SQLAlchemy session
        catalog: Theme catalog (defaults to the shared instance)
    """

    def __init__(self, session_factory: Callable[[], Session], catalog: Optional[ThemeCatalog] = None):
        self.session_factory = session_factory
        self.catalog = catalog or get_theme_catalog()

    def organization_exists(self, organization_id: str) -> bool:
        db = self.session_factory()
        try:
            return db.query(Organization).filter(Organization.id == organization_id).first() is not None
        finally:
            db.close()

    def _orchestrator(self, organization_id: str, preview: bool, uploaded_by: Optional[str],
                      action: str) -> ImportOrchestrator:
        db = self.session_factory()
        try:
            directory = SqlMemberDirectory.load(db, organization_id)
        finally:
            db.close()

        scope = sql_store_scope(self.session_factory)
        writer = PreviewWriter(scope) if preview else CommitWriter(scope)
        return ImportOrchestrator(
            directory=directory,
            writer=writer,
            catalog=self.catalog,
            achievements=AchievementService(self.session_factory),
            audit_log=SqlAuditLog(self.session_factory, organization_id, uploaded_by, action=action),
            min_themes=settings.MIN_THEMES_PER_IMPORT,
            max_workers=settings.IMPORT_MAX_WORKERS,
        )

    def import_spreadsheet(
        self,
        data: bytes,
        file_name: str,
        organization_id: str,
        preview: bool = True,
        uploaded_by: Optional[str] = None,
    ) -> BatchImportResponse:
        """
        Import a Gallup Access style export

        Raises:
            UnreadableDocumentError, LayoutNotDetectedError, NoDataRowsError:
                before any row is attempted
        """
        extractor = SpreadsheetExtractor(
            self.catalog,
            header_scan_rows=settings.HEADER_SCAN_ROWS,
            min_header_theme_columns=settings.MIN_HEADER_THEME_COLUMNS,
            min_themes=settings.MIN_THEMES_PER_IMPORT,
        )
        parsed = extractor.parse(data, file_name)

        orchestrator = self._orchestrator(organization_id, preview, uploaded_by, EXCEL_IMPORT_ACTION)
        return orchestrator.run_batch(
            parsed.rows,
            file_name,
            total_rows=parsed.total_rows,
            valid_rows=parsed.valid_rows,
            warnings=parsed.warnings,
        )

    def parse_document(self, data: bytes, file_name: str,
                       participant_name: Optional[str] = None) -> ParsedStrengthsReport:
        """Decode and extract a report (.pdf, or .txt holding already-decoded text)"""
        if Path(file_name or "").suffix.lower() == ".txt":
            text = data.decode("utf-8", errors="replace")
        else:
            text = extract_text_from_pdf(data)

        keep_raw_text = settings.INCLUDE_RAW_TEXT and not settings.is_production
        extractor = StrengthsReportExtractor(self.catalog)
        return extractor.extract(text, participant_name=participant_name, keep_raw_text=keep_raw_text)

    def import_document(
        self,
        data: bytes,
        file_name: str,
        organization_id: str,
        preview: bool = True,
        member_email: Optional[str] = None,
        member_name: Optional[str] = None,
        uploaded_by: Optional[str] = None,
        mime_type: Optional[str] = None,
    ) -> DocumentImportResponse:
        """
        Import a single strengths report for one member

        The target member is taken from member_email / member_name when given,
        otherwise from the participant name found in the document.

        Raises:
            UnreadableDocumentError: If the PDF cannot be decoded
            InvalidReportError: If no themes were found or ranks collide
        """
        report = self.parse_document(data, file_name)
        extracted_name = report.participant_name

        validation = validate_report(report, min_themes=settings.MIN_THEMES_PER_IMPORT)
        if not validation.valid:
            raise InvalidReportError(
                "Invalid strengths report",
                errors=validation.errors,
                warnings=validation.warnings,
            )

        profile = report.profile
        if member_email:
            profile.participant_email_guess = member_email.strip().lower()
        if member_name:
            profile.participant_name_guess = member_name.strip()

        orchestrator = self._orchestrator(organization_id, preview, uploaded_by, PDF_IMPORT_ACTION)
        batch = orchestrator.run_batch([profile], file_name, warnings=validation.warnings)

        document_id = None
        outcome = batch.results[0]
        if not preview and outcome.status == RowStatus.SUCCESS:
            try:
                document_id = self._save_document(
                    organization_id=organization_id,
                    member_id=outcome.member_id,
                    uploaded_by=uploaded_by,
                    file_name=file_name,
                    file_size=len(data),
                    mime_type=mime_type,
                    report=report,
                    participant_name=extracted_name,
                )
            except Exception as e:
                logger.error(f"[PDF Import] Storing document {file_name} failed: {str(e)}")
                batch.warnings.append(DOCUMENT_FAILED_WARNING)

        return DocumentImportResponse(
            **batch.model_dump(),
            participant_name=extracted_name,
            themes_found=len(report.themes),
            report_type=report.report_type,
            confidence=report.confidence,
            document_id=document_id,
            themes=self._theme_infos(report),
            raw_text=report.raw_text,
        )

    def _theme_infos(self, report: ParsedStrengthsReport):
        infos = []
        for theme in report.themes:
            definition = self.catalog.get(theme.theme_slug)
            infos.append(ParsedThemeInfo(
                theme_slug=theme.theme_slug,
                theme_name=definition.name if definition else theme.theme_slug,
                domain=definition.domain_slug if definition else "",
                rank=theme.rank,
                description=theme.source_description,
            ))
        return infos

    def _save_document(self, organization_id: str, member_id: str, uploaded_by: Optional[str],
                       file_name: str, file_size: int, mime_type: Optional[str],
                       report: ParsedStrengthsReport, participant_name: Optional[str]) -> str:
        """Store the report record and link it to the member"""
        db = self.session_factory()
        try:
            document = StrengthsDocument(
                organization_id=organization_id,
                member_id=member_id,
                uploaded_by=uploaded_by,
                file_name=file_name,
                file_size=file_size,
                mime_type=mime_type,
                status="COMPLETED",
                participant_name=participant_name,
                report_type=report.report_type.value,
                confidence=report.confidence,
                extracted_data=[{"themeSlug": t.theme_slug, "rank": t.rank} for t in report.themes],
                processed_at=datetime.now(),
            )
            db.add(document)
            db.flush()
            document_id = document.id
            db.query(OrganizationMember).filter(OrganizationMember.id == member_id).update(
                {OrganizationMember.strengths_document_id: document_id},
                synchronize_session=False,
            )
            db.commit()
            logger.info(f"Stored strengths document {document_id} for member {member_id}")
            return document_id
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()
