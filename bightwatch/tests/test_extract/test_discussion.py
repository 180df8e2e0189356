"""Tests for Area Forecast Discussion parsing."""

from bightwatch.extract.discussion import NO_DISCUSSION, format_discussion, parse_discussion
from bightwatch.extract.zone_text import product_text
from bightwatch.models.forecast import DiscussionSection


class TestParseDiscussion:
    def test_sections_issued_and_author(self, afd_page: str):
        d = parse_discussion(product_text(afd_page))
        assert d.issued_time == "318 AM AKDT Sat Oct 18 2026"
        assert d.author == "EAL"
        assert [s.title for s in d.sections] == [
            "SHORT TERM",
            "LONG TERM",
            "AJK WATCHES/WARNINGS/ADVISORIES",
        ]

    def test_section_content_joined(self, afd_page: str):
        d = parse_discussion(product_text(afd_page))
        short = d.sections[0].content
        assert short.startswith("A front moves into the northern gulf today, bringing rain")
        assert "Icy Strait." in short
        assert d.sections[1].content.endswith("winds ease across the inner channels.")
        assert "&" in d.sections[1].content

    def test_formatted_text(self, afd_page: str):
        d = parse_discussion(product_text(afd_page))
        assert d.text.startswith("318 AM AKDT Sat Oct 18 2026\n\nSHORT TERM\n")
        assert d.text.endswith("Forecaster: EAL")

    def test_loose_text_single_section(self):
        d = parse_discussion("Quiet weather continues.\nNo changes expected.")
        assert len(d.sections) == 1
        assert d.sections[0].title == "Forecast Discussion"
        assert d.sections[0].content == "Quiet weather continues. No changes expected."

    def test_empty(self):
        d = parse_discussion("   ")
        assert d.text == NO_DISCUSSION
        assert d.sections == []


class TestFormatDiscussion:
    def test_nothing(self):
        assert format_discussion(None, [], None) == ""

    def test_title_upper(self):
        text = format_discussion(None, [DiscussionSection("Aviation", "VFR.")], None)
        assert text == "AVIATION\nVFR."
