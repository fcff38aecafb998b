# merging/models.py

from dataclasses import dataclass, replace

from docset_kit.comparison.similarity import Classification
from docset_kit.segmenting.models import Segment
from docset_kit.segmenting.renderer import render


@dataclass(frozen=True)
class Variant:
    """What one source document holds at a canonical position.

    Score and classification are relative to the canonical choice.
    """

    label: str
    segment: Segment | None
    score: float
    classification: Classification


@dataclass(frozen=True)
class CanonicalSegment:
    position: int
    segment: Segment
    source: str
    divergent: bool
    variants: tuple[Variant, ...]


@dataclass(frozen=True)
class CanonicalDocument:
    reference_label: str
    documents: tuple[str, ...]
    segments: tuple[CanonicalSegment, ...]
    identical_counts: dict[str, int]

    def render(self) -> str:
        return render(self._layout(entry) for entry in self.segments)

    def _layout(self, entry: CanonicalSegment) -> Segment:
        # Segments taken from another document follow the reference spacing
        if entry.source == self.reference_label:
            return entry.segment
        reference = next(
            v.segment for v in entry.variants if v.label == self.reference_label
        )
        if reference is None:
            return entry.segment
        return replace(entry.segment, trailer=reference.trailer)
