"""
Exceptions raised by the strengths import pipeline

Fatal errors reject the whole request before any row is attempted.
StaleThemeReferenceError is row-level and only fails the row it occurs in.
"""
from typing import List, Optional


class StrengthsImportError(Exception):
    """Base exception for import pipeline errors"""

    def __init__(self, message: str, errors: Optional[List[str]] = None, warnings: Optional[List[str]] = None):
        self.message = message
        self.errors = errors or [message]
        self.warnings = warnings or []
        super().__init__(message)

    def to_dict(self):
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "errors": self.errors,
            "warnings": self.warnings,
        }


class UnreadableDocumentError(StrengthsImportError):
    """The uploaded container (PDF, workbook, CSV) could not be decoded"""


class LayoutNotDetectedError(StrengthsImportError):
    """No header row with enough theme columns was found in the sheet"""


class NoDataRowsError(StrengthsImportError):
    """A header row was found but nothing follows it"""


class InvalidReportError(StrengthsImportError):
    """An extracted report failed validation (no themes, colliding ranks)"""


class StaleThemeReferenceError(StrengthsImportError):
    """A theme slug resolved during extraction is missing from the stored catalog"""

    def __init__(self, theme_slug: str):
        self.theme_slug = theme_slug
        super().__init__(f'Theme "{theme_slug}" not found in database')
