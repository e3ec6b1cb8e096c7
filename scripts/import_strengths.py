#!/usr/bin/env python3
"""
Run a strengths file through the import pipeline from the command line

Spreadsheets (.xlsx, .xlsm, .csv) go through the batch importer; reports
(.pdf, .txt) through the single-document importer. Preview is the default;
pass --commit to write.

    python scripts/import_strengths.py export.xlsx --org <organization-id>
    python scripts/import_strengths.py report.pdf --org <id> --member-email jane@example.com --commit
"""
import argparse
import json
import logging
import sys
import os
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from strengthsync.app.config import settings
from strengthsync.app.core.exceptions import StrengthsImportError
from strengthsync.app.database import get_session_local, init_db
from strengthsync.app.services.import_service import StrengthsImportService


def parse_args():
    parser = argparse.ArgumentParser(description="Import CliftonStrengths results")
    parser.add_argument("file", type=Path, help="Spreadsheet export or strengths report")
    parser.add_argument("--org", required=True, help="Organization id")
    parser.add_argument("--commit", action="store_true", help="Write changes (default is preview)")
    parser.add_argument("--member-email", help="Target member for a single report")
    parser.add_argument("--member-name", help="Target member for a single report, by full name")
    parser.add_argument("--uploaded-by", help="Acting user id recorded in the audit trail")
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    suffix = args.file.suffix.lower()
    if suffix not in settings.SPREADSHEET_EXTENSIONS | settings.DOCUMENT_EXTENSIONS:
        print(f"✗ Unsupported file type: {suffix}")
        return 2

    init_db()
    service = StrengthsImportService(get_session_local())
    if not service.organization_exists(args.org):
        print(f"✗ Organization {args.org} not found")
        return 2

    data = args.file.read_bytes()
    try:
        if suffix in settings.SPREADSHEET_EXTENSIONS:
            result = service.import_spreadsheet(
                data, args.file.name, args.org, preview=not args.commit, uploaded_by=args.uploaded_by
            )
        else:
            result = service.import_document(
                data, args.file.name, args.org, preview=not args.commit,
                member_email=args.member_email, member_name=args.member_name,
                uploaded_by=args.uploaded_by,
            )
    except StrengthsImportError as e:
        print(f"✗ {e.message}")
        for error in e.errors:
            print(f"  - {error}")
        return 1

    print(json.dumps(result.model_dump(by_alias=True, mode="json"), indent=2))
    mode = "Preview" if result.preview else "Commit"
    print(f"✓ {mode}: {result.successful} successful, {result.skipped} skipped, "
          f"{result.failed - result.skipped} errors")
    return 0


if __name__ == "__main__":
    sys.exit(main())
