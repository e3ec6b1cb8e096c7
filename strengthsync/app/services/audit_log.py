"""
Audit trail writer
"""
import logging
from typing import Any, Callable, Dict, Optional

from sqlalchemy.orm import Session

from strengthsync.app.models.audit import AuditLog

logger = logging.getLogger(__name__)

EXCEL_IMPORT_ACTION = "EXCEL_IMPORT"
PDF_IMPORT_ACTION = "PDF_IMPORT"


class SqlAuditLog:
    """Writes audit records for one organization and acting user"""

    def __init__(
        self,
        session_factory: Callable[[], Session],
        organization_id: str,
        user_id: Optional[str] = None,
        action: str = EXCEL_IMPORT_ACTION,
        entity_type: str = "MemberStrength",
    ):
        self.session_factory = session_factory
        self.organization_id = organization_id
        self.user_id = user_id
        self.action = action
        self.entity_type = entity_type

    def record(self, new_value: Dict[str, Any], entity_id: Optional[str] = None) -> AuditLog:
        db = self.session_factory()
        try:
            entry = AuditLog(
                organization_id=self.organization_id,
                user_id=self.user_id,
                action=self.action,
                entity_type=self.entity_type,
                entity_id=entity_id,
                new_value=new_value,
            )
            db.add(entry)
            db.commit()
            db.refresh(entry)
            return entry
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def record_import(self, file_name: str, total_rows: int, successful: int, failed: int) -> None:
        """Summary of one committed import batch"""
        self.record({
            "fileName": file_name,
            "totalRows": total_rows,
            "successful": successful,
            "failed": failed,
        })
        logger.info(f"[Audit] {self.action} {file_name}: {successful} successful, {failed} failed")
