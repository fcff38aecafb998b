# segmenting/markdown_segmenter.py

import logging
import re
from collections.abc import Iterator

from docset_kit.errors import MalformedInputError

from .base import Segmenter
from .models import Segment, SegmentKind

logger = logging.getLogger(__name__)

_HEADING_RE = re.compile(r"^ {0,3}(#{1,6})(?:[ \t]+(.*?))?[ \t]*$")
_CLOSING_HASHES_RE = re.compile(r"(?:^|[ \t]+)#+$")
_FENCE_RE = re.compile(r"^ {0,3}(`{3,}|~{3,})(.*)$")
_LIST_ITEM_RE = re.compile(r"^[ \t]*(?:[-*+]|\d{1,9}[.)])(?:[ \t]+|$)")
# str.splitlines() also breaks on form feeds and unicode separators
_RAW_LINE_RE = re.compile(r"[^\r\n]*(?:\r\n|\r|\n)|[^\r\n]+\Z")

# kind, normalized text, heading level, first line index, last line index
_Block = tuple[SegmentKind, str, int | None, int, int]


class MarkdownSegmenter(Segmenter):
    """
    Deterministic Markdown segmenter.
    - ATX headings, fenced code blocks, list items, paragraphs
    - Code blocks are opaque: fences and info string kept verbatim
    - Segment text drops line endings and trailing whitespace outside code
      blocks; the untouched source is kept in `raw` and `trailer`
    """

    def iter_segments(self, text: str, label: str) -> Iterator[Segment]:
        raw_lines = _split_raw_lines(text)
        lines = [line.rstrip("\r\n") for line in raw_lines]

        position = 0
        pending: _Block | None = None
        for block in _iter_blocks(lines, label):
            if pending is not None:
                yield _make_segment(pending, position, raw_lines, block[3])
                position += 1
            pending = block
        if pending is not None:
            yield _make_segment(pending, position, raw_lines, len(raw_lines))
            position += 1
        logger.debug("Segmented %s into %d segments", label, position)


def _split_raw_lines(text: str) -> list[str]:
    return _RAW_LINE_RE.findall(text)


def _make_segment(
    block: _Block, position: int, raw_lines: list[str], next_first: int
) -> Segment:
    kind, body, level, first, last = block
    # Leading blank lines belong to the first segment
    start = 0 if position == 0 else first
    span = "".join(raw_lines[start : last + 1])
    raw = span.rstrip("\r\n")
    trailer = span[len(raw) :] + "".join(raw_lines[last + 1 : next_first])
    return Segment(
        kind=kind,
        text=body,
        position=position,
        level=level,
        raw=raw,
        trailer=trailer,
    )


def _iter_blocks(lines: list[str], label: str) -> Iterator[_Block]:
    buffer: list[str] = []
    buffer_kind = SegmentKind.PARAGRAPH
    buffer_first = buffer_last = 0
    i = 0

    while i < len(lines):
        line = lines[i]

        fence = _opening_fence(line)
        if fence is not None:
            if buffer:
                yield buffer_kind, "\n".join(buffer), None, buffer_first, buffer_last
                buffer = []
            end = _find_closing_fence(lines, i + 1, fence)
            if end is None:
                raise MalformedInputError(
                    label, i + 1, f"code fence {fence!r} is never closed"
                )
            yield SegmentKind.CODE_BLOCK, "\n".join(lines[i : end + 1]), None, i, end
            i = end + 1
            continue

        stripped = line.rstrip()
        heading = _HEADING_RE.match(stripped)
        list_item = _LIST_ITEM_RE.match(stripped) if stripped else None

        if buffer and (not stripped or heading or list_item):
            yield buffer_kind, "\n".join(buffer), None, buffer_first, buffer_last
            buffer = []

        if heading:
            level = len(heading.group(1))
            yield SegmentKind.HEADING, _heading_text(heading.group(2)), level, i, i
        elif list_item:
            buffer = [stripped]
            buffer_kind = SegmentKind.LIST_ITEM
            buffer_first = buffer_last = i
        elif stripped:
            # Continuation lines join whatever block is open
            if not buffer:
                buffer_kind = SegmentKind.PARAGRAPH
                buffer_first = i
            buffer.append(stripped)
            buffer_last = i

        i += 1

    if buffer:
        yield buffer_kind, "\n".join(buffer), None, buffer_first, buffer_last


def _opening_fence(line: str) -> str | None:
    match = _FENCE_RE.match(line)
    if match is None:
        return None
    fence, info = match.group(1), match.group(2)
    # A backtick run followed by more backticks is inline code, not a fence
    if fence[0] == "`" and "`" in info:
        return None
    return fence


def _find_closing_fence(lines: list[str], start: int, fence: str) -> int | None:
    closing = re.compile(rf"^ {{0,3}}{re.escape(fence[0])}{{{len(fence)},}}[ \t]*$")
    for index in range(start, len(lines)):
        if closing.match(lines[index]):
            return index
    return None


def _heading_text(raw: str | None) -> str:
    if not raw:
        return ""
    return _CLOSING_HASHES_RE.sub("", raw).rstrip()
