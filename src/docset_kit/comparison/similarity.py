# comparison/similarity.py

from enum import Enum

from Levenshtein import distance as levenshtein_distance

from docset_kit.segmenting.models import Segment


class Classification(str, Enum):
    IDENTICAL = "identical"
    MINOR_EDIT = "minor_edit"
    DIVERGENT = "divergent"


def text_similarity(a: str, b: str) -> float:
    """1 - normalized edit distance. Symmetric, in [0, 1]."""
    longest = max(len(a), len(b))
    if longest == 0:
        return 1.0
    return 1.0 - levenshtein_distance(a, b) / longest


def segment_similarity(a: Segment, b: Segment) -> float:
    """Text similarity for segments of the same kind and level, 0.0 otherwise."""
    if a.key != b.key:
        return 0.0
    return text_similarity(a.text, b.text)


class Classifier:
    def __init__(
        self,
        identical_threshold: float = 0.95,
        minor_edit_threshold: float = 0.5,
    ) -> None:
        if not 0.0 <= minor_edit_threshold <= 1.0:
            raise ValueError("minor_edit_threshold must be within [0, 1]")
        if not 0.0 <= identical_threshold <= 1.0:
            raise ValueError("identical_threshold must be within [0, 1]")
        if minor_edit_threshold > identical_threshold:
            raise ValueError("minor_edit_threshold must be <= identical_threshold")
        self.identical_threshold = identical_threshold
        self.minor_edit_threshold = minor_edit_threshold

    def classify(self, score: float | None) -> Classification:
        """Classify a similarity score; None means the segment is absent."""
        if score is None or score < self.minor_edit_threshold:
            return Classification.DIVERGENT
        if score >= self.identical_threshold:
            return Classification.IDENTICAL
        return Classification.MINOR_EDIT
