# src/docset_kit/pipeline.py

import logging
import os
import tempfile
import warnings
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from time import monotonic

from docset_kit.comparison.alignment import Alignment, Ambiguity, SegmentComparator
from docset_kit.comparison.similarity import Classifier
from docset_kit.config import NormalizerConfig
from docset_kit.errors import AlignmentAmbiguityWarning, DocsetError
from docset_kit.loader import Source, load_documents, read_sources
from docset_kit.merging.merger import CanonicalMerger
from docset_kit.merging.models import CanonicalDocument
from docset_kit.observability import names
from docset_kit.observability.base import MetricsHook, NoOpMetricsHook
from docset_kit.reporting.emitter import ReportEmitter
from docset_kit.reporting.models import DivergenceReport
from docset_kit.reporting.serializers import serialize
from docset_kit.segmenting.base import Segmenter
from docset_kit.segmenting.models import Document

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NormalizationResult:
    """Everything one run produces. Nothing here is persisted by the pipeline."""

    canonical: CanonicalDocument
    report: DivergenceReport
    alignments: tuple[Alignment, ...]
    advisories: tuple[Ambiguity, ...]

    @property
    def canonical_text(self) -> str:
        return self.canonical.render()


class DocumentSetNormalizer:
    """
    Straight-line pipeline: segment, align, merge, report.

    - Every stage either returns its full output or raises
    - No retries, no partial output
    - Ambiguous alignments are advisories, never failures
    """

    def __init__(
        self,
        config: NormalizerConfig | None = None,
        *,
        segmenter: Segmenter | None = None,
        metrics_hook: MetricsHook = NoOpMetricsHook(),
    ) -> None:
        self.config = config or NormalizerConfig()
        classifier = Classifier(
            identical_threshold=self.config.identical_threshold,
            minor_edit_threshold=self.config.minor_edit_threshold,
        )
        self.segmenter = segmenter
        self.comparator = SegmentComparator(self.config.window, classifier)
        self.merger = CanonicalMerger(classifier)
        self.emitter = ReportEmitter(metrics_hook)
        self.metrics_hook = metrics_hook

    def normalize_paths(self, paths: Sequence[str | Path]) -> NormalizationResult:
        try:
            sources = read_sources(paths)
        except DocsetError:
            self.metrics_hook.increment(names.PIPELINE_ERRORS_TOTAL)
            raise
        return self.normalize_texts(sources)

    def normalize_texts(self, sources: Sequence[Source]) -> NormalizationResult:
        try:
            documents = load_documents(
                sources,
                segmenter=self.segmenter,
                workers=self.config.workers,
                metrics_hook=self.metrics_hook,
            )
        except DocsetError:
            self.metrics_hook.increment(names.PIPELINE_ERRORS_TOTAL)
            raise
        return self.run(documents)

    def run(self, documents: Sequence[Document]) -> NormalizationResult:
        if not documents:
            raise ValueError("at least one document is required")
        reference_index = self.config.reference_index
        if reference_index >= len(documents):
            raise ValueError(
                f"reference_index {reference_index} out of range for "
                f"{len(documents)} documents"
            )

        start = monotonic()
        reference = documents[reference_index]
        logger.info(
            "Normalizing %d documents against reference %s",
            len(documents),
            reference.label,
        )

        align_start = monotonic()
        alignments = tuple(
            self.comparator.align(reference, document)
            for document in documents
            if document is not reference
        )
        self.metrics_hook.record_latency(
            names.ALIGNMENT_DURATION, 1000 * (monotonic() - align_start)
        )
        self.metrics_hook.increment(
            names.ALIGNMENT_PAIRS_TOTAL, sum(len(a.pairs) for a in alignments)
        )

        advisories = tuple(a for alignment in alignments for a in alignment.ambiguities)
        for advisory in advisories:
            logger.warning("Ambiguous alignment: %s", advisory.describe())
            warnings.warn(advisory.describe(), AlignmentAmbiguityWarning, stacklevel=2)
        if advisories:
            self.metrics_hook.increment(
                names.ALIGNMENT_AMBIGUITIES_TOTAL, len(advisories)
            )

        merge_start = monotonic()
        canonical = self.merger.merge(documents, alignments, reference_index)
        self.metrics_hook.record_latency(
            names.MERGE_DURATION, 1000 * (monotonic() - merge_start)
        )

        report = self.emitter.emit(canonical)

        elapsed_ms = 1000 * (monotonic() - start)
        self.metrics_hook.record_latency(names.PIPELINE_DURATION, elapsed_ms)
        self.metrics_hook.increment(names.PIPELINE_RUNS_TOTAL)
        return NormalizationResult(
            canonical=canonical,
            report=report,
            alignments=alignments,
            advisories=advisories,
        )


def normalize(
    sources: Sequence[Source],
    config: NormalizerConfig | None = None,
    metrics_hook: MetricsHook = NoOpMetricsHook(),
) -> NormalizationResult:
    """Run the pipeline over (label, text) pairs; the first is the default reference."""
    return DocumentSetNormalizer(config, metrics_hook=metrics_hook).normalize_texts(
        sources
    )


def write_outputs(
    result: NormalizationResult,
    output_dir: str | Path,
    config: NormalizerConfig | None = None,
) -> tuple[Path, Path]:
    """Write the canonical document and the report.

    Both are rendered in memory first and moved into place with os.replace.
    """
    config = config or NormalizerConfig()
    directory = Path(output_dir)
    directory.mkdir(parents=True, exist_ok=True)

    contents = {
        directory / config.canonical_filename: result.canonical_text,
        directory / config.report_filename: serialize(
            result.report, config.report_format
        ),
    }

    staged: list[tuple[str, Path]] = []
    try:
        for target, text in contents.items():
            fd, tmp_name = tempfile.mkstemp(
                dir=directory, prefix=f".{target.name}.", suffix=".tmp"
            )
            staged.append((tmp_name, target))
            with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
                f.write(text)
        for tmp_name, target in staged:
            os.replace(tmp_name, target)
    finally:
        for tmp_name, _ in staged:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)

    canonical_path, report_path = contents
    logger.info("Wrote %s and %s", canonical_path, report_path)
    return canonical_path, report_path
