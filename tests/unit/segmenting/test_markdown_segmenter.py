import pytest

from docset_kit.errors import MalformedInputError
from docset_kit.segmenting.markdown_segmenter import MarkdownSegmenter
from docset_kit.segmenting.models import Segment, SegmentKind


@pytest.fixture
def segmenter() -> MarkdownSegmenter:
    return MarkdownSegmenter()


def _kinds(segments: list[Segment]) -> list[SegmentKind]:
    return [s.kind for s in segments]


class TestHeadings:
    def test_heading_level_is_number_of_markers(
        self, segmenter: MarkdownSegmenter
    ) -> None:
        segments = list(segmenter.segment("# Title\n\n### Deep"))

        assert [(s.kind, s.level, s.text) for s in segments] == [
            (SegmentKind.HEADING, 1, "Title"),
            (SegmentKind.HEADING, 3, "Deep"),
        ]

    def test_closing_hashes_are_stripped(self, segmenter: MarkdownSegmenter) -> None:
        segments = list(segmenter.segment("## Scope ##"))

        assert segments[0].text == "Scope"
        assert segments[0].level == 2

    def test_hash_inside_word_is_kept(self, segmenter: MarkdownSegmenter) -> None:
        segments = list(segmenter.segment("## Learning C#"))

        assert segments[0].text == "Learning C#"

    def test_hash_without_space_is_a_paragraph(
        self, segmenter: MarkdownSegmenter
    ) -> None:
        segments = list(segmenter.segment("#hashtag"))

        assert _kinds(segments) == [SegmentKind.PARAGRAPH]
        assert segments[0].level is None

    def test_heading_interrupts_paragraph(self, segmenter: MarkdownSegmenter) -> None:
        segments = list(segmenter.segment("some text\n## Next"))

        assert _kinds(segments) == [SegmentKind.PARAGRAPH, SegmentKind.HEADING]


class TestParagraphs:
    def test_blank_lines_delimit_paragraphs(self, segmenter: MarkdownSegmenter) -> None:
        segments = list(segmenter.segment("line one\nline two\n\n\n\nnext one"))

        assert [s.text for s in segments] == ["line one\nline two", "next one"]
        assert _kinds(segments) == [SegmentKind.PARAGRAPH, SegmentKind.PARAGRAPH]

    def test_trailing_whitespace_is_dropped(self, segmenter: MarkdownSegmenter) -> None:
        segments = list(segmenter.segment("hello   \nworld\t"))

        assert segments[0].text == "hello\nworld"

    def test_crlf_is_normalized(self, segmenter: MarkdownSegmenter) -> None:
        crlf = list(segmenter.segment("# T\r\n\r\nbody\r\n"))
        lf = list(segmenter.segment("# T\n\nbody\n"))

        assert crlf == lf

    def test_empty_text_has_no_segments(self, segmenter: MarkdownSegmenter) -> None:
        assert list(segmenter.segment("")) == []
        assert list(segmenter.segment("\n\n  \n")) == []


class TestCodeBlocks:
    def test_code_block_is_kept_verbatim(self, segmenter: MarkdownSegmenter) -> None:
        text = "```javascript\nvar a = 1;  \n\n# not a heading\n```"
        segments = list(segmenter.segment(text))

        assert len(segments) == 1
        assert segments[0].kind is SegmentKind.CODE_BLOCK
        assert segments[0].text == text

    def test_tilde_fence_and_longer_closer(self, segmenter: MarkdownSegmenter) -> None:
        segments = list(segmenter.segment("~~~\ncode\n~~~~~\n\nafter"))

        assert _kinds(segments) == [SegmentKind.CODE_BLOCK, SegmentKind.PARAGRAPH]
        assert segments[0].text == "~~~\ncode\n~~~~~"

    def test_other_fence_char_does_not_close(
        self, segmenter: MarkdownSegmenter
    ) -> None:
        segments = list(segmenter.segment("```\n~~~\n```"))

        assert len(segments) == 1
        assert segments[0].text == "```\n~~~\n```"

    def test_fence_interrupts_paragraph(self, segmenter: MarkdownSegmenter) -> None:
        segments = list(segmenter.segment("intro\n```\nx\n```"))

        assert _kinds(segments) == [SegmentKind.PARAGRAPH, SegmentKind.CODE_BLOCK]

    def test_inline_backticks_are_not_a_fence(
        self, segmenter: MarkdownSegmenter
    ) -> None:
        segments = list(segmenter.segment("```not a fence```"))

        assert _kinds(segments) == [SegmentKind.PARAGRAPH]


class TestListItems:
    def test_each_item_is_a_segment(self, segmenter: MarkdownSegmenter) -> None:
        segments = list(segmenter.segment("- a\n- b\n  continued\n1. c"))

        assert [s.text for s in segments] == ["- a", "- b\n  continued", "1. c"]
        assert all(s.kind is SegmentKind.LIST_ITEM for s in segments)

    def test_nested_item_keeps_indentation(self, segmenter: MarkdownSegmenter) -> None:
        segments = list(segmenter.segment("* outer\n  * inner"))

        assert [s.text for s in segments] == ["* outer", "  * inner"]

    def test_list_marker_interrupts_paragraph(
        self, segmenter: MarkdownSegmenter
    ) -> None:
        segments = list(segmenter.segment("intro:\n- a"))

        assert _kinds(segments) == [SegmentKind.PARAGRAPH, SegmentKind.LIST_ITEM]

    def test_emphasis_is_not_a_list(self, segmenter: MarkdownSegmenter) -> None:
        segments = list(segmenter.segment("*emphasis* here"))

        assert _kinds(segments) == [SegmentKind.PARAGRAPH]


class TestSourceSpans:
    def test_raw_keeps_trailing_spaces_and_line_endings(
        self, segmenter: MarkdownSegmenter
    ) -> None:
        segments = list(segmenter.segment("Line one  \r\nLine two\r\n"))

        assert segments[0].text == "Line one\nLine two"
        assert segments[0].raw == "Line one  \r\nLine two"
        assert segments[0].trailer == "\r\n"

    def test_trailer_holds_blank_lines_up_to_next_segment(
        self, segmenter: MarkdownSegmenter
    ) -> None:
        heading, body = segmenter.segment("# T\n\n\n\nbody")

        assert heading.raw == "# T"
        assert heading.trailer == "\n\n\n\n"
        assert body.raw == "body"
        assert body.trailer == ""

    def test_leading_blank_lines_belong_to_first_segment(
        self, segmenter: MarkdownSegmenter
    ) -> None:
        (segment,) = segmenter.segment("\n  \n# T\n")

        assert segment.raw == "\n  \n# T"
        assert segment.text == "T"

    def test_source_spans_do_not_affect_equality(
        self, segmenter: MarkdownSegmenter
    ) -> None:
        spaced = list(segmenter.segment("# T  \n\n\n\nbody"))
        tight = list(segmenter.segment("# T\n\nbody\n"))

        assert spaced == tight

    def test_code_block_raw_matches_source(self, segmenter: MarkdownSegmenter) -> None:
        source = "```py\r\n  x = 1  \r\n```\r\n"

        (segment,) = segmenter.segment(source)

        assert segment.raw + segment.trailer == source


class TestStream:
    def test_positions_are_contiguous(self, segmenter: MarkdownSegmenter) -> None:
        text = "# A\n\npara\n\n- item\n\n```\ncode\n```"
        segments = list(segmenter.segment(text))

        assert [s.position for s in segments] == [0, 1, 2, 3]

    def test_stream_is_restartable(self, segmenter: MarkdownSegmenter) -> None:
        stream = segmenter.segment("# A\n\nbody")

        assert list(stream) == list(stream)

    def test_segment_is_frozen(self) -> None:
        segment = Segment(kind=SegmentKind.PARAGRAPH, text="x", position=0)

        with pytest.raises(AttributeError):
            segment.text = "y"  # type: ignore


class TestMalformedInput:
    def test_unterminated_fence_raises(self, segmenter: MarkdownSegmenter) -> None:
        with pytest.raises(MalformedInputError, match="never closed") as exc_info:
            list(segmenter.segment("# T\n\n```js\nvar a;\n", label="lesson.md"))

        assert exc_info.value.label == "lesson.md"
        assert exc_info.value.line == 3

    def test_error_surfaces_while_iterating(
        self, segmenter: MarkdownSegmenter
    ) -> None:
        stream = segmenter.segment("```\nopen", label="lazy.md")

        with pytest.raises(MalformedInputError, match="lazy.md"):
            list(stream)
