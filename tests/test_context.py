"""Tests for the read-only text views built from a document."""

from eir_export import parse_text
from eir_export.context import ASSISTANT_PREAMBLE, build_context_prompt, format_records


class TestContextPrompt:
    """Assistant context built from the first entries of a document."""

    def test_without_document(self):
        assert build_context_prompt(None) == ASSISTANT_PREAMBLE

    def test_patient_and_export_summary(self, canonical_export):
        prompt = build_context_prompt(parse_text(canonical_export))

        assert "Patient: Test Person, born 1990-01-01" in prompt
        assert "Total entries: 2" in prompt
        assert "Date range: 2025-02-10 to 2025-03-17" in prompt

    def test_entry_fields(self, canonical_export):
        prompt = build_context_prompt(parse_text(canonical_export))

        assert "Date: 2025-03-17 10:30" in prompt
        assert "Category: Vårdkontakter" in prompt
        assert "Provider: Test Clinic" in prompt
        assert "Responsible: Anna Läkare (Läkare)" in prompt
        assert "Notes: First note; Second note" in prompt
        assert "Details: Hb 140\nCRP <5" in prompt

    def test_limit(self, canonical_export):
        prompt = build_context_prompt(parse_text(canonical_export), limit=1)

        assert "Test visit 1" in prompt
        assert "Test lab result" not in prompt

    def test_document_is_not_changed(self, canonical_export):
        document = parse_text(canonical_export)
        before = document.model_dump()
        build_context_prompt(document)
        format_records([("Test Person", document)])
        assert document.model_dump() == before


class TestFormatRecords:
    """Full-record dump for every loaded person."""

    def test_nothing_loaded(self):
        assert format_records([]) == "No medical records loaded."

    def test_single_person_uses_plain_ids(self, canonical_export):
        output = format_records([("Test Person", parse_text(canonical_export))])

        assert output.startswith("# Test Person\n")
        assert "Born: 1990-01-01" in output
        assert "Total entries: 2" in output
        assert "## [entry_001] 2025-03-17 10:30 - Vårdkontakter / Besök" in output
        assert "- First note" in output
        assert "Tags: visit" in output

    def test_multiple_people_use_composite_ids(self, canonical_export, pattern_a_canonical):
        documents = [
            ("Anna", parse_text(canonical_export)),
            ("Erik", parse_text(pattern_a_canonical)),
        ]
        output = format_records(documents)

        assert "[Anna::entry_001]" in output
        assert "[Erik::e1]" in output

    def test_person_filter(self, canonical_export, pattern_a_canonical):
        documents = [
            ("Anna", parse_text(canonical_export)),
            ("Erik", parse_text(pattern_a_canonical)),
        ]
        output = format_records(documents, person="erik")

        assert "# Erik" in output
        assert "# Anna" not in output
        assert "[Erik::e1]" in output, "Composite ids depend on everything loaded, not the filter"

    def test_person_filter_without_match(self, canonical_export):
        output = format_records([("Anna", parse_text(canonical_export))], person="zzz")
        assert output == "No records found for 'zzz'."
