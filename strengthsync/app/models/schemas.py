"""
Pydantic models for request/response validation

Responses are serialized with camelCase keys.
"""
from typing import Optional, List
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from strengthsync.app.core.candidates import MatchStrategy, ReportType, RowStatus


class CamelModel(BaseModel):
    """Base model emitting camelCase keys while accepting snake_case input"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ImportRowOutcome(CamelModel):
    """Per-row result, produced for every input row whatever happened to it"""
    row_number: int
    status: RowStatus
    message: str
    theme_count: int = 0
    had_existing_themes: bool = False
    participant_name: Optional[str] = None
    participant_email: Optional[str] = None
    member_id: Optional[str] = None
    member_name: Optional[str] = None
    match_strategy: MatchStrategy = MatchStrategy.NONE
    top_five_themes: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)


class BatchImportResponse(CamelModel):
    """Result of a preview or commit batch"""
    preview: bool
    total_processed: int
    successful: int
    failed: int = Field(..., description="Skipped rows plus errored rows")
    skipped: int = 0
    valid_rows: int
    warnings: List[str] = Field(default_factory=list)
    results: List[ImportRowOutcome] = Field(default_factory=list)


class ParsedThemeInfo(CamelModel):
    """A theme found in an uploaded report"""
    theme_slug: str
    theme_name: str
    domain: str
    rank: int
    description: Optional[str] = None


class DocumentImportResponse(BatchImportResponse):
    """Result of a single report upload"""
    participant_name: Optional[str] = None
    themes_found: int = 0
    report_type: ReportType = ReportType.TOP_5
    confidence: float = 0.0
    document_id: Optional[str] = None
    themes: List[ParsedThemeInfo] = Field(default_factory=list)
    raw_text: Optional[str] = None


class DomainSummary(CamelModel):
    """Theme domain"""
    slug: str
    name: str
    description: str
    color_hex: str


class ThemePairingResponse(CamelModel):
    """Complementary pairing from the point of view of one theme"""
    partner_slug: str
    partner_name: str
    synergy_type: str
    description: str


class ThemeResponse(CamelModel):
    """Catalog theme"""
    slug: str
    name: str
    domain: str
    short_description: str
    works_with: List[str] = Field(default_factory=list)
    keywords: List[str] = Field(default_factory=list)


class ThemeDetailResponse(ThemeResponse):
    """Catalog theme with its domain and pairings"""
    domain_info: Optional[DomainSummary] = None
    pairings: List[ThemePairingResponse] = Field(default_factory=list)


class DomainWithThemes(DomainSummary):
    """Domain with the themes it groups"""
    themes: List[ThemeResponse] = Field(default_factory=list)


class HealthResponse(CamelModel):
    """Health check response"""
    status: str
    database: str
    themes_loaded: int
    environment: str
