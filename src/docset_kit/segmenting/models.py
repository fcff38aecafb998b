# segmenting/models.py

from dataclasses import dataclass, field
from enum import Enum


class SegmentKind(str, Enum):
    """Structural kind of a segment."""

    HEADING = "heading"
    PARAGRAPH = "paragraph"
    CODE_BLOCK = "code_block"
    LIST_ITEM = "list_item"


@dataclass(frozen=True)
class Segment:
    """One structurally distinct unit of a document.

    `level` is the heading depth and is None for every other kind.
    Code block text is the whole fenced block, fences included.

    `text` is the normalized form used for comparison. `raw` is the exact
    source span and `trailer` the exact text between this segment and the
    next one; both are empty for segments built by hand and take no part
    in equality.
    """

    kind: SegmentKind
    text: str
    position: int
    level: int | None = None
    raw: str = field(default="", compare=False, repr=False)
    trailer: str = field(default="", compare=False, repr=False)

    @property
    def key(self) -> tuple[SegmentKind, int | None]:
        return (self.kind, self.level)


@dataclass(frozen=True)
class Document:
    label: str
    segments: tuple[Segment, ...]

    def __len__(self) -> int:
        return len(self.segments)
