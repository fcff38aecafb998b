# merging/merger.py

import logging
from collections.abc import Sequence
from itertools import combinations

from docset_kit.comparison.alignment import Alignment
from docset_kit.comparison.similarity import (
    Classification,
    Classifier,
    segment_similarity,
)
from docset_kit.segmenting.models import Document, Segment

from .models import CanonicalDocument, CanonicalSegment, Variant

logger = logging.getLogger(__name__)


class CanonicalMerger:
    """
    Builds one canonical segment per reference position.

    Divergent positions take the segment of the most representative
    document: the one with the most IDENTICAL classifications over the
    whole run, earliest input order on ties. Documents are compared with
    each other at every aligned position and each IDENTICAL pair counts
    for both of its documents.
    """

    def __init__(self, classifier: Classifier | None = None) -> None:
        self.classifier = classifier or Classifier()

    def merge(
        self,
        documents: Sequence[Document],
        alignments: Sequence[Alignment],
        reference_index: int = 0,
    ) -> CanonicalDocument:
        if not documents:
            raise ValueError("at least one document is required")
        if not 0 <= reference_index < len(documents):
            raise ValueError(
                f"reference_index {reference_index} out of range for "
                f"{len(documents)} documents"
            )

        reference = documents[reference_index]
        by_label = _alignments_by_label(reference, documents, alignments)

        columns: list[list[Segment | None]] = [
            [
                ref_segment
                if document is reference
                else by_label[document.label].pairs[position].candidate
                for document in documents
            ]
            for position, ref_segment in enumerate(reference.segments)
        ]
        counts = self._identical_counts(documents, columns)

        ranking = sorted(
            range(len(documents)),
            key=lambda i: (-counts[documents[i].label], i),
        )
        logger.debug(
            "Document ranking: %s",
            ", ".join(
                f"{documents[i].label}={counts[documents[i].label]}" for i in ranking
            ),
        )

        entries: list[CanonicalSegment] = []
        for position, column in enumerate(columns):
            chosen_index = next(i for i in ranking if column[i] is not None)
            chosen = column[chosen_index]
            assert chosen is not None

            variants = tuple(
                self._variant(document.label, chosen, segment)
                for document, segment in zip(documents, column)
            )
            entries.append(
                CanonicalSegment(
                    position=position,
                    segment=chosen,
                    source=documents[chosen_index].label,
                    divergent=any(
                        v.classification is not Classification.IDENTICAL
                        for v in variants
                    ),
                    variants=variants,
                )
            )

        logger.info(
            "Merged %d documents into %d canonical segments (%d divergent)",
            len(documents),
            len(entries),
            sum(1 for e in entries if e.divergent),
        )
        return CanonicalDocument(
            reference_label=reference.label,
            documents=tuple(document.label for document in documents),
            segments=tuple(entries),
            identical_counts=counts,
        )

    def _identical_counts(
        self,
        documents: Sequence[Document],
        columns: Sequence[Sequence[Segment | None]],
    ) -> dict[str, int]:
        """Credit both documents of every IDENTICAL pair within a position.

        Pairs are taken among all documents, so copies that agree with
        each other outrank a reference that disagrees with them.
        """
        counts = {document.label: 0 for document in documents}
        for column in columns:
            for i, j in combinations(range(len(documents)), 2):
                first, second = column[i], column[j]
                if first is None or second is None:
                    continue
                score = segment_similarity(first, second)
                if self.classifier.classify(score) is Classification.IDENTICAL:
                    counts[documents[i].label] += 1
                    counts[documents[j].label] += 1
        return counts

    def _variant(self, label: str, chosen: Segment, segment: Segment | None) -> Variant:
        if segment is None:
            return Variant(
                label=label,
                segment=None,
                score=0.0,
                classification=self.classifier.classify(None),
            )
        score = segment_similarity(chosen, segment)
        return Variant(
            label=label,
            segment=segment,
            score=score,
            classification=self.classifier.classify(score),
        )


def _alignments_by_label(
    reference: Document,
    documents: Sequence[Document],
    alignments: Sequence[Alignment],
) -> dict[str, Alignment]:
    by_label: dict[str, Alignment] = {}
    for alignment in alignments:
        if alignment.reference_label != reference.label:
            raise ValueError(
                f"alignment for {alignment.candidate_label} is against "
                f"{alignment.reference_label}, expected {reference.label}"
            )
        by_label[alignment.candidate_label] = alignment

    for document in documents:
        if document is reference:
            continue
        alignment = by_label.get(document.label)
        if alignment is None:
            logger.error("No alignment for document: %s", document.label)
            raise KeyError(f"Alignment for '{document.label}' not found")
        if len(alignment.pairs) != len(reference.segments):
            raise ValueError(
                f"alignment for {document.label} covers {len(alignment.pairs)} "
                f"of {len(reference.segments)} reference segments"
            )
    return by_label
