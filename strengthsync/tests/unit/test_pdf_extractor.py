"""
Unit tests for the strengths report text extractor
"""
import fitz
import pytest

from strengthsync.app.core.candidates import ReportType
from strengthsync.app.core.exceptions import UnreadableDocumentError
from strengthsync.app.core.pdf_extractor import (
    StrengthsReportExtractor,
    calculate_confidence,
    determine_report_type,
    extract_text_from_pdf,
    validate_report,
)


@pytest.fixture
def extractor(catalog):
    return StrengthsReportExtractor(catalog)


@pytest.mark.unit
class TestThemeExtraction:
    """Test suite for ranked theme extraction"""

    def test_full_report_with_repeated_theme(self, extractor, full_report_text, theme_names):
        """34 themes, one repeated near the end, yields exactly 34 ranked themes"""
        text = full_report_text + f"\nAppendix: more about {theme_names[3]} and how to use it.\n"

        report = extractor.extract(text)

        assert len(report.themes) == 34
        assert [t.rank for t in report.themes] == list(range(1, 35))
        assert report.themes[3].theme_slug == extractor.catalog.lookup(theme_names[3]).slug
        assert report.report_type == ReportType.ALL_34
        assert report.confidence == pytest.approx(0.98)
        assert report.participant_name == "Jane Doe"

    def test_duplicate_theme_keeps_first_occurrence(self, extractor):
        text = "Strategic\nthen Achiever\nand Strategic again\nthen Woo"

        report = extractor.extract(text)

        assert [(t.theme_slug, t.rank) for t in report.themes] == [
            ("strategic", 1),
            ("achiever", 2),
            ("woo", 3),
        ]

    def test_case_insensitive_and_word_bounded(self, extractor):
        report = extractor.extract("ACHIEVER, self-assurance. Inputs are not Input.")

        assert [t.theme_slug for t in report.themes] == ["achiever", "self-assurance", "input"]

    def test_description_captured(self, extractor):
        text = (
            "1. Achiever\n"
            "You work hard and take immense satisfaction from being busy and productive."
        )

        report = extractor.extract(text)

        assert report.themes[0].source_description == (
            "You work hard and take immense satisfaction from being busy and productive."
        )

    def test_short_description_ignored(self, extractor):
        report = extractor.extract("1. Achiever\nShort line.")
        assert report.themes[0].source_description is None

    def test_empty_and_garbage_text_never_raise(self, extractor):
        for text in (None, "", "%%%\x00\x01 garbage ...", "\n\n\n"):
            report = extractor.extract(text)
            assert report.themes == []
            assert report.report_type == ReportType.TOP_5
            assert report.confidence == 0.0

    def test_raw_text_only_on_request(self, extractor, top_five_report_text):
        assert extractor.extract(top_five_report_text).raw_text is None
        assert extractor.extract(top_five_report_text, keep_raw_text=True).raw_text == top_five_report_text

    def test_profile_shape(self, extractor, top_five_report_text):
        report = extractor.extract(top_five_report_text)

        assert report.profile.row_number == 1
        assert report.profile.theme_count == 5
        assert report.profile.top_theme_slugs() == [t.theme_slug for t in report.themes]


@pytest.mark.unit
class TestParticipantName:
    """Test suite for participant name strategies"""

    def test_signature_themes_report_title(self, extractor, top_five_report_text):
        assert extractor.extract_participant_name(top_five_report_text) == "John Smith"

    def test_prepared_for(self, extractor):
        assert extractor.extract_participant_name("Some intro text\nPrepared for: Maria Lopez\n") == "Maria Lopez"

    def test_first_line_name(self, extractor):
        assert extractor.extract_participant_name("Maria Lopez\nStrengths overview\n") == "Maria Lopez"

    def test_theme_names_rejected(self, extractor):
        """A title line followed by a theme-like phrase is not a person"""
        text = "Your Top Strengths\nStrategic Thinking\nReport for Alex Kim\n"
        assert extractor.extract_participant_name(text) == "Alex Kim"

    def test_explicit_participant_name_wins(self, extractor, top_five_report_text):
        report = extractor.extract(top_five_report_text, participant_name="Given Name")
        assert report.participant_name == "Given Name"

    def test_no_name(self, extractor):
        assert extractor.extract_participant_name("achiever woo strategic") is None

    def test_custom_strategy_list(self, catalog):
        extractor = StrengthsReportExtractor(catalog, name_strategies=[lambda text: "Fixed Person"])
        assert extractor.extract_participant_name("anything") == "Fixed Person"


@pytest.mark.unit
class TestScoring:
    """Test suite for report type and confidence"""

    @pytest.mark.parametrize("count,expected", [
        (34, ReportType.ALL_34),
        (30, ReportType.ALL_34),
        (29, ReportType.TOP_10),
        (8, ReportType.TOP_10),
        (7, ReportType.TOP_5),
        (0, ReportType.TOP_5),
    ])
    def test_report_type(self, count, expected):
        assert determine_report_type(count) == expected

    @pytest.mark.parametrize("count,expected", [
        (34, 0.98),
        (10, 0.95),
        (5, 0.95),
        (33, 0.9),
        (32, 0.9),
        (12, 0.85),
        (8, 0.85),
        (4, 0.85),
        (6, 0.85),
        (20, 0.7),
        (3, 0.7),
        (2, 0.3),
        (0, 0.0),
    ])
    def test_confidence(self, count, expected):
        assert calculate_confidence(count) == pytest.approx(expected)


@pytest.mark.unit
class TestValidateReport:
    """Test suite for report validation"""

    def test_valid_full_report(self, extractor, full_report_text):
        result = validate_report(extractor.extract(full_report_text))
        assert result.valid
        assert result.warnings == []

    def test_no_themes_is_error(self, extractor):
        result = validate_report(extractor.extract("nothing to see"))
        assert not result.valid
        assert "No strength themes found in the document" in result.errors
        assert "Could not extract participant name from document" in result.warnings

    def test_duplicate_rank_is_error(self, extractor, top_five_report_text):
        report = extractor.extract(top_five_report_text)
        report.themes[1].rank = 1

        result = validate_report(report)

        assert not result.valid
        assert "Duplicate rank 1 found" in result.errors

    def test_short_list_and_low_confidence_warn(self, extractor):
        result = validate_report(extractor.extract("Prepared for Alex Kim\nAchiever and Woo"))

        assert result.valid
        assert "Only 2 themes found. Expected at least 5." in result.warnings
        assert any(w.startswith("Low confidence score (30%)") for w in result.warnings)


@pytest.mark.unit
class TestPdfDecoding:
    """Test suite for PyMuPDF decoding"""

    def test_extract_text_from_pdf(self):
        doc = fitz.open()
        page = doc.new_page()
        page.insert_text((72, 72), "Your Signature Themes")
        page.insert_text((72, 90), "Jane Doe")
        page.insert_text((72, 108), "1. Achiever")
        data = doc.tobytes()
        doc.close()

        text = extract_text_from_pdf(data)

        assert "Jane Doe" in text
        assert "Achiever" in text

    def test_invalid_pdf_raises(self):
        with pytest.raises(UnreadableDocumentError):
            extract_text_from_pdf(b"this is not a pdf")
