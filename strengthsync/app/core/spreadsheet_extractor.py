"""
Structured spreadsheet extractor for Gallup Access style exports

One row per person, one column per theme, each cell holding that person's
rank for the theme. The header row is auto-detected by counting cells that
resolve to theme names.

Features:
- .xlsx / .xlsm via openpyxl (first sheet, formula results), .csv via csv
- Header row detection within the first rows of the sheet
- Name / email column detection by label, with ordered fallbacks
- Per-row validation of ranks with row-level warnings
"""
import csv
import io
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Sequence

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from strengthsync.app.core.candidates import CandidateProfile, CandidateTheme
from strengthsync.app.core.exceptions import LayoutNotDetectedError, NoDataRowsError, UnreadableDocumentError
from strengthsync.app.core.theme_catalog import ThemeCatalog, ThemeDefinition

logger = logging.getLogger(__name__)

Grid = Sequence[Sequence[Any]]

TOTAL_THEMES = 34
DEFAULT_HEADER_SCAN_ROWS = 20
DEFAULT_MIN_HEADER_THEME_COLUMNS = 20
DEFAULT_MIN_THEMES = 5

NAME_LABELS = {
    "name",
    "full name",
    "participant",
    "participant name",
    "last name, first name",
    "last name",
    "first name",
}
EMAIL_LABELS = {"email", "email address", "e-mail"}

LAYOUT_NOT_DETECTED_MESSAGE = (
    "Could not detect CliftonStrengths theme headers. "
    "Expected a row with theme names (Achiever, Strategic, etc.) as column headers."
)


@dataclass
class SheetLayout:
    """Detected position of the header row and its columns (0-based)"""
    header_row_index: int
    theme_columns: Dict[int, ThemeDefinition]
    name_column: Optional[int] = None
    email_column: Optional[int] = None


@dataclass
class SpreadsheetParseResult:
    """All candidate rows of a sheet plus sheet-level warnings"""
    rows: List[CandidateProfile] = field(default_factory=list)
    total_rows: int = 0
    valid_rows: int = 0
    warnings: List[str] = field(default_factory=list)
    layout: Optional[SheetLayout] = None


def _leading_column(header: Sequence[Any], theme_columns: Dict[int, ThemeDefinition]) -> Optional[int]:
    """Unlabeled first column, when the theme columns start after it"""
    first_theme_column = min(theme_columns)
    return 0 if first_theme_column > 0 else None


# Tried in order when no header cell carries a known name label
NAME_COLUMN_FALLBACKS: Sequence[Callable[[Sequence[Any], Dict[int, ThemeDefinition]], Optional[int]]] = (
    _leading_column,
)


def _cell_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def _cell(row: Sequence[Any], index: Optional[int]) -> Any:
    if index is None or index >= len(row):
        return None
    return row[index]


def parse_rank(value: Any) -> Optional[int]:
    """
    Parse a rank cell strictly

    Accepts integers, integral floats (3.0) and strings holding either.
    Everything else, including "3abc" and 2.5, returns None.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None

    text = str(value).strip()
    if not text:
        return None
    try:
        return int(text)
    except ValueError:
        pass
    try:
        number = float(text)
    except ValueError:
        return None
    return int(number) if number.is_integer() else None


def load_grid(data: bytes, filename: str) -> List[List[Any]]:
    """
    Decode an uploaded spreadsheet into a list of rows (first sheet only)

    Args:
        data: Raw file bytes
        filename: Original file name, used to pick the decoder

    Returns:
        Row-major list of cell values

    Raises:
        UnreadableDocumentError: If the file cannot be decoded
    """
    suffix = Path(filename or "").suffix.lower()

    if suffix == ".csv":
        try:
            text = data.decode("utf-8-sig")
        except UnicodeDecodeError:
            text = data.decode("latin-1")
        return [list(row) for row in csv.reader(io.StringIO(text))]

    if suffix == ".xls":
        raise UnreadableDocumentError("Legacy .xls workbooks are not supported. Save the file as .xlsx and retry.")

    try:
        # data_only=True returns formula results instead of formulas
        workbook = load_workbook(io.BytesIO(data), read_only=True, data_only=True)
    except InvalidFileException as e:
        raise UnreadableDocumentError(f"Invalid or corrupted Excel file: {str(e)}")
    except Exception as e:
        raise UnreadableDocumentError(f"Failed to read Excel file: {str(e)}")

    try:
        if not workbook.worksheets:
            raise UnreadableDocumentError("No sheets found in the Excel file")
        sheet = workbook.worksheets[0]
        grid = [list(row) for row in sheet.iter_rows(min_row=1, values_only=True)]
    finally:
        workbook.close()

    logger.info(f"Loaded sheet from {filename}: {len(grid)} rows")
    return grid


class SpreadsheetExtractor:
    """
    Extracts candidate profiles from a rank grid

    Row-level problems never abort the sheet; they are attached to the row
    as warnings and the row is reported with whatever valid themes remain.
    """

    def __init__(
        self,
        catalog: ThemeCatalog,
        header_scan_rows: int = DEFAULT_HEADER_SCAN_ROWS,
        min_header_theme_columns: int = DEFAULT_MIN_HEADER_THEME_COLUMNS,
        min_themes: int = DEFAULT_MIN_THEMES,
    ):
        self.catalog = catalog
        self.header_scan_rows = header_scan_rows
        self.min_header_theme_columns = min_header_theme_columns
        self.min_themes = min_themes

    def detect_layout(self, grid: Grid) -> Optional[SheetLayout]:
        """Find the first row with enough distinct theme names in it"""
        for r, row in enumerate(grid[:self.header_scan_rows]):
            theme_columns: Dict[int, ThemeDefinition] = {}
            seen_slugs = set()
            name_column = None
            email_column = None

            for c, value in enumerate(row):
                text = _cell_text(value)
                if not text:
                    continue
                label = text.lower()

                theme = self.catalog.lookup(text)
                if theme is not None and theme.slug not in seen_slugs:
                    seen_slugs.add(theme.slug)
                    theme_columns[c] = theme
                    continue

                if name_column is None and label in NAME_LABELS:
                    name_column = c
                elif email_column is None and label in EMAIL_LABELS:
                    email_column = c

            if len(theme_columns) < self.min_header_theme_columns:
                continue

            if name_column is None:
                for fallback in NAME_COLUMN_FALLBACKS:
                    name_column = fallback(row, theme_columns)
                    if name_column is not None:
                        break

            return SheetLayout(
                header_row_index=r,
                theme_columns=theme_columns,
                name_column=name_column,
                email_column=email_column,
            )

        return None

    def parse_grid(self, grid: Grid) -> SpreadsheetParseResult:
        """
        Parse every data row below the detected header

        Args:
            grid: Row-major cell values of the sheet

        Returns:
            SpreadsheetParseResult with one CandidateProfile per non-empty row

        Raises:
            LayoutNotDetectedError: If no header row is found
            NoDataRowsError: If the header row is not followed by any data
        """
        layout = self.detect_layout(grid)
        if layout is None:
            raise LayoutNotDetectedError(LAYOUT_NOT_DETECTED_MESSAGE)

        result = SpreadsheetParseResult(layout=layout)
        found = len(layout.theme_columns)
        if found < TOTAL_THEMES:
            result.warnings.append(
                f"Found {found} of {TOTAL_THEMES} expected theme columns. Some themes may be missing."
            )

        for r in range(layout.header_row_index + 1, len(grid)):
            profile = self._parse_row(grid[r], r + 1, layout)
            if profile is None:
                continue
            result.total_rows += 1
            if profile.theme_count >= self.min_themes:
                result.valid_rows += 1
            result.rows.append(profile)

        if result.total_rows == 0:
            raise NoDataRowsError("No data rows found after the header row", warnings=result.warnings)

        logger.info(
            f"Parsed spreadsheet: header at row {layout.header_row_index + 1}, "
            f"{found} theme columns, {result.total_rows} rows, {result.valid_rows} valid"
        )
        return result

    def parse(self, data: bytes, filename: str) -> SpreadsheetParseResult:
        """Decode and parse an uploaded file"""
        return self.parse_grid(load_grid(data, filename))

    def _parse_row(self, row: Sequence[Any], row_number: int, layout: SheetLayout) -> Optional[CandidateProfile]:
        name = _cell_text(_cell(row, layout.name_column))
        email_text = _cell_text(_cell(row, layout.email_column))
        email = email_text.lower() if "@" in email_text else None

        if not name and not email:
            if not any(_cell_text(_cell(row, c)) for c in layout.theme_columns):
                return None

        warnings: List[str] = []
        if not name:
            name = f"Row {row_number} Participant"
            warnings.append("No name found for this row")

        themes: List[CandidateTheme] = []
        used_ranks = set()
        for c in sorted(layout.theme_columns):
            theme = layout.theme_columns[c]
            raw = _cell(row, c)
            text = _cell_text(raw)
            if not text:
                warnings.append(f"Missing rank for {theme.name}")
                continue

            rank = parse_rank(raw)
            if rank is None or not 1 <= rank <= TOTAL_THEMES:
                warnings.append(f'Invalid rank "{text}" for {theme.name} (expected 1-{TOTAL_THEMES})')
                continue

            if rank in used_ranks:
                warnings.append(f"Duplicate rank {rank} for {theme.name}")
                continue

            used_ranks.add(rank)
            themes.append(CandidateTheme(theme_slug=theme.slug, rank=rank))

        themes.sort(key=lambda t: t.rank)
        if len(themes) < self.min_themes:
            warnings.append(f"Only {len(themes)} valid themes found (minimum {self.min_themes} required)")

        return CandidateProfile(
            row_number=row_number,
            participant_name_guess=name,
            participant_email_guess=email,
            themes=themes,
            warnings=warnings,
        )
