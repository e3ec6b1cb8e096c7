"""
Strengths import API endpoints

Both endpoints run in preview mode unless ?preview=false is passed.
"""
import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from functools import partial
from pathlib import Path
from typing import Optional, Set

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, Request, UploadFile
from slowapi import Limiter
from slowapi.util import get_remote_address

from strengthsync.app.config import settings
from strengthsync.app.core.exceptions import StrengthsImportError
from strengthsync.app.database import get_session_factory
from strengthsync.app.models.schemas import BatchImportResponse, DocumentImportResponse
from strengthsync.app.services.import_service import StrengthsImportService

logger = logging.getLogger(__name__)

router = APIRouter()

# Initialize limiter for this module
limiter = Limiter(key_func=get_remote_address)

# Imports are synchronous (parsing plus one transaction per row)
_thread_pool = ThreadPoolExecutor(max_workers=4)


def get_import_service(session_factory=Depends(get_session_factory)) -> StrengthsImportService:
    """Dependency providing the import service"""
    return StrengthsImportService(session_factory)


async def _read_upload(file: UploadFile, allowed: Set[str]) -> bytes:
    """Validate extension and size, then return the file content"""
    file_ext = Path(file.filename or "").suffix.lower()
    if file_ext not in allowed:
        raise HTTPException(
            status_code=400,
            detail=f"Unsupported file type: {file_ext or 'none'}. Supported types: {', '.join(sorted(allowed))}"
        )

    content = await file.read()
    if len(content) > settings.max_file_size_bytes:
        raise HTTPException(
            status_code=400,
            detail=f"File too large. Maximum size: {settings.MAX_FILE_SIZE_MB}MB"
        )
    if not content:
        raise HTTPException(status_code=400, detail="Uploaded file is empty")
    return content


def _ensure_organization(service: StrengthsImportService, organization_id: str):
    if not service.organization_exists(organization_id):
        raise HTTPException(status_code=404, detail=f"Organization {organization_id} not found")


async def _run(func, *args, **kwargs):
    loop = asyncio.get_event_loop()
    return await loop.run_in_executor(_thread_pool, partial(func, *args, **kwargs))


@router.post("/admin/members/excel-import", response_model=BatchImportResponse)
@limiter.limit(settings.RATE_LIMIT_UPLOAD)
async def import_members_excel(
    request: Request,
    file: UploadFile = File(...),
    organization_id: str = Form(...),
    uploaded_by: Optional[str] = Form(None),
    preview: bool = Query(True, description="Dry run: report what would change without writing"),
    service: StrengthsImportService = Depends(get_import_service),
):
    """
    Import CliftonStrengths ranks for many members from a Gallup Access export

    Args:
        file: .xlsx, .xlsm or .csv export with one column per theme
        organization_id: Organization whose members are matched
        uploaded_by: Optional id of the acting user, recorded in the audit trail
        preview: When true nothing is written

    Returns:
        Per-row outcomes and batch counters
    """
    try:
        content = await _read_upload(file, settings.SPREADSHEET_EXTENSIONS)
        _ensure_organization(service, organization_id)

        logger.info(f"[Excel Import] {file.filename} ({len(content)} bytes), preview={preview}")
        return await _run(
            service.import_spreadsheet,
            content,
            file.filename,
            organization_id,
            preview=preview,
            uploaded_by=uploaded_by,
        )

    except HTTPException:
        raise

    except StrengthsImportError as e:
        logger.warning(f"[Excel Import] Rejected {file.filename}: {e.message}")
        raise HTTPException(status_code=422, detail=e.to_dict())

    except Exception as e:
        logger.error(f"[Excel Import] Error: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Failed to process Excel import: {str(e)}")


@router.post("/strengths/upload", response_model=DocumentImportResponse)
@limiter.limit(settings.RATE_LIMIT_UPLOAD)
async def upload_strengths_report(
    request: Request,
    file: UploadFile = File(...),
    organization_id: str = Form(...),
    member_email: Optional[str] = Form(None),
    member_name: Optional[str] = Form(None),
    uploaded_by: Optional[str] = Form(None),
    preview: bool = Query(True, description="Dry run: report what would change without writing"),
    service: StrengthsImportService = Depends(get_import_service),
):
    """
    Import a single CliftonStrengths report (PDF, or its text as .txt)

    Args:
        file: Report document
        organization_id: Organization of the target member
        member_email: Target member; overrides the name found in the report
        member_name: Target member by full name
        uploaded_by: Optional id of the acting user
        preview: When true nothing is written

    Returns:
        Extraction summary and the single row outcome
    """
    try:
        content = await _read_upload(file, settings.DOCUMENT_EXTENSIONS)
        _ensure_organization(service, organization_id)

        logger.info(f"[PDF Import] {file.filename} ({len(content)} bytes), preview={preview}")
        return await _run(
            service.import_document,
            content,
            file.filename,
            organization_id,
            preview=preview,
            member_email=member_email,
            member_name=member_name,
            uploaded_by=uploaded_by,
            mime_type=file.content_type,
        )

    except HTTPException:
        raise

    except StrengthsImportError as e:
        logger.warning(f"[PDF Import] Rejected {file.filename}: {e.message}")
        raise HTTPException(status_code=422, detail=e.to_dict())

    except Exception as e:
        logger.error(f"[PDF Import] Error: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Failed to process strengths report: {str(e)}")
