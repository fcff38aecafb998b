from .alignment import Alignment, AlignmentPair, Ambiguity, SegmentComparator
from .similarity import (
    Classification,
    Classifier,
    segment_similarity,
    text_similarity,
)

__all__ = [
    "Alignment",
    "AlignmentPair",
    "Ambiguity",
    "Classification",
    "Classifier",
    "SegmentComparator",
    "segment_similarity",
    "text_similarity",
]
