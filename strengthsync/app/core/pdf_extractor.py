"""
Unstructured document extractor for CliftonStrengths report exports

Turns the decoded text of one report into an ordered list of (theme, rank)
pairs, a best-effort participant name and a confidence score. The text is
heuristic input: extraction never raises on malformed or sparse text.
"""
import re
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence
import logging

import fitz  # PyMuPDF

from strengthsync.app.core.candidates import CandidateProfile, CandidateTheme, ReportType
from strengthsync.app.core.exceptions import UnreadableDocumentError
from strengthsync.app.core.theme_catalog import ThemeCatalog

logger = logging.getLogger(__name__)

DESCRIPTION_WINDOW = 800
DESCRIPTION_MIN_LENGTH = 50
DESCRIPTION_MAX_LENGTH = 500
NAME_HEAD_CHARS = 500
LOW_CONFIDENCE_THRESHOLD = 0.7

_PARAGRAPH = re.compile(r"[\n\r]+([A-Z][^.!?]*[.!?](?:[^.!?]*[.!?]){0,3})")
_PERSON_NAME = r"([A-Z][a-z]+ [A-Z][a-z]+)"

NameStrategy = Callable[[str], Optional[str]]


def extract_text_from_pdf(data: bytes) -> str:
    """
    Decode a PDF into plain text, page by page

    Args:
        data: Raw PDF bytes

    Returns:
        Text of all pages joined by newlines (empty for image-only PDFs)

    Raises:
        UnreadableDocumentError: If the bytes are not a readable PDF
    """
    try:
        doc = fitz.open(stream=data, filetype="pdf")
    except Exception as e:
        raise UnreadableDocumentError(f"Failed to read PDF file: {str(e)}")

    try:
        if doc.needs_pass:
            raise UnreadableDocumentError("PDF is password-protected or encrypted")
        if doc.page_count == 0:
            raise UnreadableDocumentError("PDF contains no pages")
        pages = [page.get_text() for page in doc]
    finally:
        doc.close()

    logger.info(f"Decoded PDF: {len(pages)} pages")
    return "\n".join(pages)


def _pattern_strategy(pattern: str, head_only: bool = False) -> NameStrategy:
    compiled = re.compile(pattern, re.MULTILINE)

    def strategy(text: str) -> Optional[str]:
        match = compiled.search(text[:NAME_HEAD_CHARS] if head_only else text)
        return match.group(1).strip() if match else None

    return strategy


# Ordered: the first plausible hit wins. Append new heuristics at the end.
NAME_STRATEGIES: Sequence[NameStrategy] = (
    # "Your Signature Themes\nJohn Doe"
    _pattern_strategy(r"(?i:your (?:signature|top) (?:themes?|strengths?))\s*[\n\r]+" + _PERSON_NAME),
    # "Signature Themes Report\nJohn Doe"
    _pattern_strategy(r"(?i:(?:signature|top) (?:themes?|strengths?) report)\s*[\n\r]+" + _PERSON_NAME),
    # "CliftonStrengths 34\nJohn Doe"
    _pattern_strategy(r"(?i:cliftonstrengths)\s*(?:34|for)?\s*[\n\r]+" + _PERSON_NAME),
    # Name alone on a line near the top of the document
    _pattern_strategy(r"^" + _PERSON_NAME + r"[ \t]*[\n\r]", head_only=True),
    # "Prepared for: John Doe"
    _pattern_strategy(r"(?i:prepared for)[:\s]+" + _PERSON_NAME),
    # "Report for John Doe"
    _pattern_strategy(r"(?i:report (?:for|to))[:\s]+" + _PERSON_NAME),
)


@dataclass
class ParsedStrengthsReport:
    """Extraction result for a single report document"""
    profile: CandidateProfile
    report_type: ReportType
    raw_text: Optional[str] = None

    @property
    def participant_name(self) -> Optional[str]:
        return self.profile.participant_name_guess

    @property
    def themes(self) -> List[CandidateTheme]:
        return self.profile.themes

    @property
    def confidence(self) -> float:
        return self.profile.confidence or 0.0


@dataclass
class ReportValidation:
    """Validation verdict for a parsed report"""
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.errors


def determine_report_type(theme_count: int) -> ReportType:
    """Classify the report by how many themes were found"""
    if theme_count >= 30:
        return ReportType.ALL_34
    if theme_count >= 8:
        return ReportType.TOP_10
    return ReportType.TOP_5


def calculate_confidence(theme_count: int) -> float:
    """
    Deterministic confidence score from the number of recognized themes

    Exact canonical counts (34, 10, 5) score highest; near misses score a
    little lower; anything below 3 themes scales linearly up to 0.6.
    """
    if theme_count == 34:
        return 0.98
    if theme_count in (10, 5):
        return 0.95

    if 32 <= theme_count <= 34:
        return 0.9
    if 8 <= theme_count <= 12:
        return 0.85
    if 4 <= theme_count <= 6:
        return 0.85

    if theme_count >= 3:
        return 0.7

    return min(theme_count * 0.15, 0.6)


class StrengthsReportExtractor:
    """
    Extracts ranked themes from the text of a strengths report

    Themes are ranked by first appearance: reports list each theme once, in
    signature order, so a later mention (appendix, glossary) never creates a
    second entry or changes a rank.
    """

    def __init__(self, catalog: ThemeCatalog, name_strategies: Sequence[NameStrategy] = NAME_STRATEGIES):
        self.catalog = catalog
        self.name_strategies = tuple(name_strategies)

        names = sorted(catalog.names(), key=len, reverse=True)
        alternation = "|".join(re.escape(name) for name in names)
        self._theme_pattern = re.compile(rf"\b({alternation})\b", re.IGNORECASE)
        self._domain_names = {d.name.lower() for d in catalog.domains()}

    def extract(self, text: Optional[str], participant_name: Optional[str] = None,
                keep_raw_text: bool = False) -> ParsedStrengthsReport:
        """
        Extract a candidate profile from report text

        Args:
            text: Decoded document text
            participant_name: Known participant name; skips name detection
            keep_raw_text: Attach the source text to the result

        Returns:
            ParsedStrengthsReport wrapping a CandidateProfile with row_number 1
        """
        text = text or ""
        themes = self.extract_themes(text)
        name = participant_name or self.extract_participant_name(text)

        profile = CandidateProfile(
            row_number=1,
            participant_name_guess=name,
            themes=themes,
            confidence=calculate_confidence(len(themes)),
        )
        report = ParsedStrengthsReport(
            profile=profile,
            report_type=determine_report_type(len(themes)),
            raw_text=text if keep_raw_text else None,
        )
        logger.info(
            f"Extracted {len(themes)} themes ({report.report_type.value}), "
            f"confidence={report.confidence:.2f}, participant={'found' if name else 'missing'}"
        )
        return report

    def extract_themes(self, text: str) -> List[CandidateTheme]:
        """Scan the text once and rank themes by first occurrence"""
        themes: List[CandidateTheme] = []
        seen = set()

        for match in self._theme_pattern.finditer(text):
            theme = self.catalog.lookup(match.group(1))
            if theme is None or theme.slug in seen:
                continue
            seen.add(theme.slug)
            themes.append(CandidateTheme(
                theme_slug=theme.slug,
                rank=len(themes) + 1,
                source_description=self._extract_description(text, match.end()),
            ))

        return themes

    def _extract_description(self, text: str, start: int) -> Optional[str]:
        window = text[start:start + DESCRIPTION_WINDOW]
        match = _PARAGRAPH.search(window)
        if not match:
            return None

        description = match.group(1).strip()
        if not DESCRIPTION_MIN_LENGTH < len(description) < DESCRIPTION_MAX_LENGTH:
            return None
        if self.catalog.lookup(description.split(" ")[0]):
            return None
        return description

    def extract_participant_name(self, text: str) -> Optional[str]:
        """Run the name strategies in order and return the first plausible name"""
        for strategy in self.name_strategies:
            candidate = strategy(text)
            if candidate and self._is_plausible_name(candidate):
                return candidate
        return None

    def _is_plausible_name(self, name: str) -> bool:
        if not 3 < len(name) < 50:
            return False
        if self.catalog.lookup(name) is not None:
            return False
        return name.lower() not in self._domain_names


def validate_report(report: ParsedStrengthsReport, min_themes: int = 5) -> ReportValidation:
    """
    Check a parsed report before it is handed to reconciliation

    Empty theme lists and colliding ranks are errors; a short list, a missing
    participant name and a low confidence score are warnings only.
    """
    result = ReportValidation()
    themes = report.themes

    if not themes:
        result.errors.append("No strength themes found in the document")
    elif len(themes) < min_themes:
        result.warnings.append(f"Only {len(themes)} themes found. Expected at least {min_themes}.")

    ranks = set()
    for theme in themes:
        if theme.rank in ranks:
            result.errors.append(f"Duplicate rank {theme.rank} found")
        ranks.add(theme.rank)

    if not report.participant_name:
        result.warnings.append("Could not extract participant name from document")

    if report.confidence < LOW_CONFIDENCE_THRESHOLD:
        result.warnings.append(
            f"Low confidence score ({round(report.confidence * 100)}%). Manual verification recommended."
        )

    return result
