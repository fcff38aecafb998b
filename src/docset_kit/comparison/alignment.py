# comparison/alignment.py

import logging
from dataclasses import dataclass

from docset_kit.segmenting.models import Document, Segment

from .similarity import Classification, Classifier, segment_similarity

logger = logging.getLogger(__name__)

DEFAULT_WINDOW = 5


@dataclass(frozen=True)
class AlignmentPair:
    """A reference segment and its counterpart; candidate None means absent."""

    reference: Segment
    candidate: Segment | None
    score: float
    classification: Classification


@dataclass(frozen=True)
class Ambiguity:
    """Several candidates tied exactly on score; the earliest was chosen."""

    reference_label: str
    candidate_label: str
    reference_position: int
    tied_positions: tuple[int, ...]
    score: float

    def describe(self) -> str:
        return (
            f"{self.reference_label}#{self.reference_position}: "
            f"{len(self.tied_positions)} candidates in {self.candidate_label} "
            f"tie at score {self.score:.3f} (positions "
            f"{', '.join(str(p) for p in self.tied_positions)}); "
            f"using position {self.tied_positions[0]}"
        )


@dataclass(frozen=True)
class Alignment:
    reference_label: str
    candidate_label: str
    pairs: tuple[AlignmentPair, ...]
    ambiguities: tuple[Ambiguity, ...] = ()

    def count(self, classification: Classification) -> int:
        return sum(1 for pair in self.pairs if pair.classification is classification)


class SegmentComparator:
    """
    Greedy look-ahead aligner.
    - Walks the reference in order with a cursor into the candidate
    - Matches on (kind, level) first, text similarity second
    - Never reorders: the cursor only moves forward
    """

    def __init__(
        self,
        window: int = DEFAULT_WINDOW,
        classifier: Classifier | None = None,
    ) -> None:
        if window < 1:
            raise ValueError("window must be >= 1")
        self.window = window
        self.classifier = classifier or Classifier()

    def align(self, reference: Document, candidate: Document) -> Alignment:
        ref = reference.segments
        cand = candidate.segments
        pairs: list[AlignmentPair] = []
        ambiguities: list[Ambiguity] = []
        cursor = 0

        for index, segment in enumerate(ref):
            best: int | None = None
            best_score = -1.0
            tied: list[int] = []

            for offset, other in enumerate(cand[cursor : cursor + self.window]):
                if other.key != segment.key:
                    continue
                score = segment_similarity(segment, other)
                if score > best_score:
                    best, best_score, tied = cursor + offset, score, [cursor + offset]
                elif score == best_score:
                    tied.append(cursor + offset)

            if best is not None and self._yields_to_next(
                ref, index, cand[best], best_score
            ):
                # Deleted from the candidate; the match belongs to the next segment
                best = None
                tied = []

            if best is not None:
                if len(tied) > 1:
                    ambiguities.append(
                        Ambiguity(
                            reference_label=reference.label,
                            candidate_label=candidate.label,
                            reference_position=segment.position,
                            tied_positions=tuple(cand[t].position for t in tied),
                            score=best_score,
                        )
                    )
                pairs.append(self._pair(segment, cand[best], best_score))
                cursor = best + 1
            elif cursor < len(cand) and not _claimed_by_next(
                ref, index, cand[cursor]
            ):
                # Same logical position, different structure
                substitute = cand[cursor]
                pairs.append(
                    self._pair(
                        segment, substitute, segment_similarity(segment, substitute)
                    )
                )
                cursor += 1
            else:
                pairs.append(
                    AlignmentPair(
                        reference=segment,
                        candidate=None,
                        score=0.0,
                        classification=self.classifier.classify(None),
                    )
                )

        logger.debug(
            "Aligned %s against %s: %d pairs, %d ambiguities",
            reference.label,
            candidate.label,
            len(pairs),
            len(ambiguities),
        )
        return Alignment(
            reference_label=reference.label,
            candidate_label=candidate.label,
            pairs=tuple(pairs),
            ambiguities=tuple(ambiguities),
        )

    def _yields_to_next(
        self,
        ref: tuple[Segment, ...],
        index: int,
        other: Segment,
        score: float,
    ) -> bool:
        if self.classifier.classify(score) is not Classification.DIVERGENT:
            return False
        if index + 1 >= len(ref):
            return False
        return segment_similarity(ref[index + 1], other) > score

    def _pair(
        self, reference: Segment, candidate: Segment, score: float
    ) -> AlignmentPair:
        return AlignmentPair(
            reference=reference,
            candidate=candidate,
            score=score,
            classification=self.classifier.classify(score),
        )


def _claimed_by_next(ref: tuple[Segment, ...], index: int, other: Segment) -> bool:
    return index + 1 < len(ref) and ref[index + 1].key == other.key
