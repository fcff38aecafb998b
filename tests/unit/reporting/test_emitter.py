import json

import pytest
import yaml

from docset_kit.comparison.alignment import SegmentComparator
from docset_kit.merging.merger import CanonicalMerger
from docset_kit.reporting.emitter import ReportEmitter
from docset_kit.reporting.models import DivergenceReport, Severity
from docset_kit.reporting.serializers import serialize, to_json, to_text, to_yaml
from docset_kit.segmenting.markdown_segmenter import MarkdownSegmenter
from docset_kit.segmenting.models import Document, SegmentKind


def _report(*texts: str) -> DivergenceReport:
    docs = [
        Document(
            label=label, segments=tuple(MarkdownSegmenter().segment(text, label))
        )
        for label, text in zip("ABCDEF", texts)
    ]
    comparator = SegmentComparator()
    alignments = [comparator.align(docs[0], d) for d in docs[1:]]
    canonical = CanonicalMerger().merge(docs, alignments)
    return ReportEmitter().emit(canonical)


@pytest.fixture
def wording_report() -> DivergenceReport:
    return _report("# Title\n\nHello world.", "# Title\n\nHello, world!")


class TestReportEmitter:
    def test_wording_change_is_one_minor_record(
        self, wording_report: DivergenceReport
    ) -> None:
        assert len(wording_report.records) == 1
        record = wording_report.records[0]
        assert record.position == 1
        assert record.severity is Severity.MINOR
        assert record.kind is SegmentKind.PARAGRAPH
        assert record.canonical_source == "A"
        assert record.source_documents == ["A", "B"]
        assert record.excerpts == {"A": "Hello world.", "B": "Hello, world!"}

    def test_identical_documents_report_nothing(self) -> None:
        report = _report("# T\n\nbody", "# T\n\nbody")

        assert report.is_empty
        assert report.documents == ["A", "B"]
        assert report.reference == "A"

    def test_code_block_change_is_major(self) -> None:
        report = _report("```\nx = 1\n```", "```\nx = 2\n```")

        assert [r.severity for r in report.records] == [Severity.MAJOR]

    def test_kind_change_is_major(self) -> None:
        report = _report(
            "# T\n\nSome prose.\n\n## End", "# T\n\n- a list now\n\n## End"
        )

        assert len(report.records) == 1
        assert report.records[0].severity is Severity.MAJOR
        assert report.records[0].excerpts["B"] == "- a list now"

    def test_missing_segment_is_major(self) -> None:
        report = _report("# T\n\nalpha\n\nbeta", "# T\n\nbeta")

        record = report.records[0]
        assert record.position == 1
        assert record.severity is Severity.MAJOR
        assert record.source_documents == ["A", "B"]
        assert record.excerpts == {"A": "alpha"}

    def test_heading_excerpts_show_level(self) -> None:
        report = _report("# Title", "## Title")

        assert report.records[0].excerpts == {"A": "# Title", "B": "## Title"}
        assert report.records[0].severity is Severity.MINOR

    def test_records_name_at_least_two_documents(self) -> None:
        report = _report(
            "# T\n\none\n\n```\ncode\n```",
            "# T\n\none!\n\n```\ncode 2\n```",
            "# T\n\nsomething else entirely",
        )

        assert report.records
        for record in report.records:
            assert len(set(record.source_documents)) >= 2

    def test_count_by_severity(self) -> None:
        report = _report("# T\n\nHello world.\n\nalpha", "# T\n\nHello, world!")

        assert report.count(Severity.MINOR) == 1
        assert report.count(Severity.MAJOR) == 1


class TestSerializers:
    def test_json_round_trips_through_model(
        self, wording_report: DivergenceReport
    ) -> None:
        data = json.loads(to_json(wording_report))

        assert data["records"][0]["severity"] == "minor"
        assert DivergenceReport(**data) == wording_report

    def test_yaml_is_plain_data(self, wording_report: DivergenceReport) -> None:
        data = yaml.safe_load(to_yaml(wording_report))

        assert data["reference"] == "A"
        assert data["records"][0]["kind"] == "paragraph"

    def test_text_lists_every_excerpt(self, wording_report: DivergenceReport) -> None:
        text = to_text(wording_report)

        assert "[1] MINOR paragraph (canonical: A)" in text
        assert "  A: Hello world." in text
        assert "  B: Hello, world!" in text

    def test_text_marks_absent_documents(self) -> None:
        text = to_text(_report("# T\n\nalpha\n\nbeta", "# T\n\nbeta"))

        assert "  B: <absent>" in text

    def test_serialize_rejects_unknown_format(
        self, wording_report: DivergenceReport
    ) -> None:
        with pytest.raises(ValueError, match="Unknown report format: xml"):
            serialize(wording_report, "xml")
