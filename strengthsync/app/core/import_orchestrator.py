"""
Reconciliation & commit orchestrator

One reconciliation routine serves both modes. What differs is the writer
handed to it: PreviewWriter only reads, CommitWriter replaces a member's
theme set inside its own transaction. Every row yields an ImportRowOutcome;
a failing row never stops the batch.
"""
import logging
from concurrent.futures import ThreadPoolExecutor
from contextlib import AbstractContextManager
from typing import Callable, List, Optional, Protocol, Sequence

from strengthsync.app.core.candidates import CandidateProfile, CandidateTheme, MatchResult, RowStatus
from strengthsync.app.core.member_locks import MemberLockRegistry, get_member_lock_registry
from strengthsync.app.core.member_matching import MemberDirectory, match_candidate
from strengthsync.app.core.theme_catalog import ThemeCatalog
from strengthsync.app.models.schemas import BatchImportResponse, ImportRowOutcome

logger = logging.getLogger(__name__)

STRENGTHS_IMPORTED_EVENT = "strengths_imported"
NO_MATCH_MESSAGE = "No matching member found in organization"
AUDIT_FAILED_WARNING = "Audit record could not be written"


class ThemeRankStore(Protocol):
    """Theme rank persistence for a single transaction"""

    def delete_all_for_member(self, member_id: str) -> int:
        ...

    def insert_many(self, member_id: str, themes: Sequence[CandidateTheme]) -> int:
        ...

    def count_for_member(self, member_id: str) -> int:
        ...

    def mark_imported(self, member_id: str) -> None:
        ...


# Opens one transaction; commits on clean exit, rolls back on exception
StoreScope = Callable[[], AbstractContextManager]


class AchievementEvaluator(Protocol):
    def evaluate(self, member_id: str, event_type: str) -> object:
        ...


class ImportAuditLog(Protocol):
    def record_import(self, file_name: str, total_rows: int, successful: int, failed: int) -> None:
        ...


class PreviewWriter:
    """Writer for dry runs: existence checks only, writes are no-ops"""

    dry_run = True

    def __init__(self, scope: StoreScope):
        self.scope = scope

    def count_existing(self, member_id: str) -> int:
        with self.scope() as store:
            return store.count_for_member(member_id)

    def replace_themes(self, member_id: str, themes: Sequence[CandidateTheme]) -> int:
        return len(themes)


class CommitWriter(PreviewWriter):
    """Writer for commits: one transaction per member replacement"""

    dry_run = False

    def __init__(self, scope: StoreScope, locks: Optional[MemberLockRegistry] = None):
        super().__init__(scope)
        self.locks = locks or get_member_lock_registry()

    def replace_themes(self, member_id: str, themes: Sequence[CandidateTheme]) -> int:
        """Delete all of the member's ranks, insert the new set, stamp the import time"""
        with self.locks.hold(member_id):
            with self.scope() as store:
                store.delete_all_for_member(member_id)
                inserted = store.insert_many(member_id, themes)
                store.mark_imported(member_id)
        return inserted


class ImportOrchestrator:
    """
    Runs a batch of candidate profiles through matching and the writer

    Args:
        directory: Organization-scoped member lookups
        writer: PreviewWriter or CommitWriter
        catalog: Theme catalog, used for display names
        achievements: Evaluator invoked after each committed row
        audit_log: Receives one summary record per committed batch
        min_themes: Rows with fewer valid themes are skipped
        max_workers: Rows are committed in parallel when greater than 1
    """

    def __init__(
        self,
        directory: MemberDirectory,
        writer: PreviewWriter,
        catalog: ThemeCatalog,
        achievements: Optional[AchievementEvaluator] = None,
        audit_log: Optional[ImportAuditLog] = None,
        min_themes: int = 5,
        max_workers: int = 1,
    ):
        self.directory = directory
        self.writer = writer
        self.catalog = catalog
        self.achievements = achievements
        self.audit_log = audit_log
        self.min_themes = min_themes
        self.max_workers = max(1, max_workers)

    @property
    def preview(self) -> bool:
        return self.writer.dry_run

    def run_batch(
        self,
        profiles: Sequence[CandidateProfile],
        file_name: str,
        total_rows: Optional[int] = None,
        valid_rows: Optional[int] = None,
        warnings: Optional[List[str]] = None,
    ) -> BatchImportResponse:
        """
        Process every profile and summarize the batch

        Args:
            profiles: Extracted candidates, in input order
            file_name: Uploaded file name, recorded in the audit trail
            total_rows: Rows seen by the extractor (defaults to len(profiles))
            valid_rows: Rows with enough valid themes (computed when omitted)
            warnings: Sheet-level warnings passed through to the response

        Returns:
            BatchImportResponse with one outcome per profile, in input order
        """
        mode = "preview" if self.preview else "commit"
        logger.info(f"[Import] Starting {mode} of {len(profiles)} rows from {file_name}")

        if self.max_workers > 1 and len(profiles) > 1:
            with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
                outcomes = list(pool.map(self.process_row, profiles))
        else:
            outcomes = [self.process_row(profile) for profile in profiles]

        successful = sum(1 for o in outcomes if o.status == RowStatus.SUCCESS)
        skipped = sum(1 for o in outcomes if o.status == RowStatus.SKIPPED)
        errors = sum(1 for o in outcomes if o.status == RowStatus.ERROR)
        failed = skipped + errors

        if total_rows is None:
            total_rows = len(profiles)
        if valid_rows is None:
            valid_rows = sum(1 for p in profiles if p.theme_count >= self.min_themes)

        warnings = list(warnings or [])
        if not self.preview and self.audit_log is not None:
            # Rows are already committed; the breakdown is returned either way
            try:
                self.audit_log.record_import(file_name, total_rows, successful, failed)
            except Exception as e:
                logger.error(f"[Import] Audit record for {file_name} failed: {str(e)}")
                warnings.append(AUDIT_FAILED_WARNING)

        logger.info(
            f"[Import] Finished {mode} of {file_name}: {successful} successful, "
            f"{skipped} skipped, {errors} errors"
        )
        return BatchImportResponse(
            preview=self.preview,
            total_processed=total_rows,
            successful=successful,
            failed=failed,
            skipped=skipped,
            valid_rows=valid_rows,
            warnings=warnings,
            results=outcomes,
        )

    def process_row(self, profile: CandidateProfile) -> ImportRowOutcome:
        """Reconcile and (in commit mode) write one row; never raises"""
        outcome = self._new_outcome(profile)
        try:
            match = match_candidate(profile, self.directory)
            return self._reconcile(match, outcome)
        except Exception as e:
            logger.error(f"[Row {profile.row_number}] Import failed: {str(e)}")
            outcome.status = RowStatus.ERROR
            outcome.message = f"Import failed: {str(e)}"
            return outcome

    def _reconcile(self, match: MatchResult, outcome: ImportRowOutcome) -> ImportRowOutcome:
        profile = match.candidate

        if not match.is_matched:
            logger.info(f"[Row {profile.row_number}] Skipped: no matching member")
            outcome.status = RowStatus.SKIPPED
            outcome.message = NO_MATCH_MESSAGE
            return outcome

        member_id = match.matched_member_id
        outcome.member_id = member_id
        outcome.member_name = match.matched_member_name
        outcome.match_strategy = match.match_strategy
        outcome.had_existing_themes = self.writer.count_existing(member_id) > 0

        if profile.theme_count < self.min_themes:
            logger.info(f"[Row {profile.row_number}] Skipped: only {profile.theme_count} valid themes")
            outcome.status = RowStatus.SKIPPED
            outcome.message = (
                f"Only {profile.theme_count} valid themes found (minimum {self.min_themes} required)"
            )
            return outcome

        if self.preview:
            outcome.status = RowStatus.SUCCESS
            outcome.message = (
                "Will overwrite existing strengths" if outcome.had_existing_themes else "Will import strengths"
            )
            return outcome

        inserted = self.writer.replace_themes(member_id, profile.themes)
        outcome.status = RowStatus.SUCCESS
        outcome.message = f"Imported {inserted} themes"
        outcome.theme_count = inserted
        self._evaluate_achievements(member_id, profile.row_number)
        return outcome

    def _evaluate_achievements(self, member_id: str, row_number: int):
        """Fire-and-forget: the result is ignored and failures are only logged"""
        if self.achievements is None:
            return
        try:
            self.achievements.evaluate(member_id, STRENGTHS_IMPORTED_EVENT)
        except Exception as e:
            logger.warning(f"[Row {row_number}] Achievement evaluation failed for member {member_id}: {str(e)}")

    def _new_outcome(self, profile: CandidateProfile) -> ImportRowOutcome:
        top_five = []
        for theme in profile.themes:
            if theme.rank > 5:
                continue
            definition = self.catalog.get(theme.theme_slug)
            top_five.append(definition.name if definition else theme.theme_slug)

        return ImportRowOutcome(
            row_number=profile.row_number,
            status=RowStatus.SKIPPED,
            message="",
            theme_count=profile.theme_count,
            participant_name=profile.participant_name_guess,
            participant_email=profile.participant_email_guess,
            top_five_themes=top_five,
            warnings=list(profile.warnings),
        )
