"""
Transient extraction results handed from the extractors to reconciliation
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class MatchStrategy(str, Enum):
    """How a candidate was matched to a member"""
    EMAIL = "email"
    EXACT_NAME = "exact_name"
    FLIPPED_NAME = "flipped_name"
    NONE = "none"


class RowStatus(str, Enum):
    """Outcome status of a single import row"""
    SUCCESS = "success"
    SKIPPED = "skipped"
    ERROR = "error"


class ReportType(str, Enum):
    """Descriptive report size, derived from the number of themes found"""
    TOP_5 = "TOP_5"
    TOP_10 = "TOP_10"
    ALL_34 = "ALL_34"


@dataclass
class CandidateTheme:
    """A detected theme with its rank (1 = strongest)"""
    theme_slug: str
    rank: int
    source_description: Optional[str] = None


@dataclass
class CandidateProfile:
    """
    One extracted person: a document, or one spreadsheet row

    Ranks within `themes` are unique. Never persisted as-is.
    """
    row_number: int
    participant_name_guess: Optional[str] = None
    participant_email_guess: Optional[str] = None
    themes: List[CandidateTheme] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    confidence: Optional[float] = None

    @property
    def theme_count(self) -> int:
        return len(self.themes)

    def top_theme_slugs(self, limit: int = 5) -> List[str]:
        return [t.theme_slug for t in self.themes if t.rank <= limit]


@dataclass
class MatchResult:
    """Result of reconciling a candidate against the member directory"""
    candidate: CandidateProfile
    matched_member_id: Optional[str] = None
    match_strategy: MatchStrategy = MatchStrategy.NONE
    matched_member_name: Optional[str] = None

    @property
    def is_matched(self) -> bool:
        return self.matched_member_id is not None
