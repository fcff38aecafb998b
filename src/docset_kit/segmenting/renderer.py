# segmenting/renderer.py

from collections.abc import Iterable

from .models import Segment, SegmentKind


def render_segment(segment: Segment) -> str:
    if segment.kind is SegmentKind.HEADING:
        marker = "#" * (segment.level or 1)
        if not segment.text:
            return marker
        text = segment.text
        if text.endswith("#"):
            # Otherwise the trailing hashes would read as a closing sequence
            text = f"{text} #"
        return f"{marker} {text}"
    return segment.text


def render(segments: Iterable[Segment]) -> str:
    """Serialize segments back to Markdown in the given order.

    Segments that carry their source span are emitted verbatim together
    with the whitespace that followed them, so a segmented document
    renders back byte for byte. A trailer that would fuse two segments
    once they are mixed from different documents is replaced, as is the
    separator of hand-built segments: adjacent list items are then joined
    by a single newline, every other boundary by a blank line, and the
    output ends with one newline.
    """
    items = list(segments)
    parts: list[str] = []
    for index, segment in enumerate(items):
        following = items[index + 1] if index + 1 < len(items) else None
        parts.append(segment.raw or render_segment(segment))
        parts.append(_separator(segment, following))
    return "".join(parts)


def _separator(segment: Segment, following: Segment | None) -> str:
    if segment.raw and (
        following is None or _keeps_apart(segment, following, segment.trailer)
    ):
        return segment.trailer
    if following is None:
        return "\n"
    tight = (
        segment.kind is SegmentKind.LIST_ITEM
        and following.kind is SegmentKind.LIST_ITEM
    )
    return "\n" if tight else "\n\n"


def _keeps_apart(segment: Segment, following: Segment, trailer: str) -> bool:
    breaks = trailer.count("\n") + trailer.count("\r") - trailer.count("\r\n")
    if breaks == 0:
        return False
    # Without a blank line a paragraph continues the block above it
    lazy = following.kind is SegmentKind.PARAGRAPH and segment.kind in (
        SegmentKind.PARAGRAPH,
        SegmentKind.LIST_ITEM,
    )
    return breaks > 1 or not lazy
