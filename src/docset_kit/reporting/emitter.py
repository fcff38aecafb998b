# reporting/emitter.py

import logging
from time import monotonic

from docset_kit.comparison.similarity import Classification
from docset_kit.merging.models import CanonicalDocument, CanonicalSegment
from docset_kit.observability import names
from docset_kit.observability.base import MetricsHook, NoOpMetricsHook
from docset_kit.segmenting.models import SegmentKind
from docset_kit.segmenting.renderer import render_segment

from .models import DivergenceRecord, DivergenceReport, Severity

logger = logging.getLogger(__name__)


class ReportEmitter:
    def __init__(self, metrics_hook: MetricsHook = NoOpMetricsHook()) -> None:
        self.metrics_hook = metrics_hook

    def emit(self, canonical: CanonicalDocument) -> DivergenceReport:
        start = monotonic()
        records = [_record(entry) for entry in canonical.segments if entry.divergent]

        elapsed_ms = 1000 * (monotonic() - start)
        self.metrics_hook.record_latency(names.REPORT_DURATION, elapsed_ms)
        self.metrics_hook.increment(names.DIVERGENCES_TOTAL, len(records))
        logger.info("Emitted %d divergence records", len(records))
        return DivergenceReport(
            reference=canonical.reference_label,
            documents=list(canonical.documents),
            records=records,
        )


def _record(entry: CanonicalSegment) -> DivergenceRecord:
    return DivergenceRecord(
        position=entry.position,
        kind=entry.segment.kind,
        canonical_source=entry.source,
        source_documents=[v.label for v in entry.variants],
        excerpts={
            v.label: render_segment(v.segment)
            for v in entry.variants
            if v.segment is not None
        },
        severity=_severity(entry),
    )


def _severity(entry: CanonicalSegment) -> Severity:
    """MAJOR for structural or code differences, MINOR for prose wording."""
    chosen = entry.segment
    if chosen.kind is SegmentKind.CODE_BLOCK:
        return Severity.MAJOR
    for variant in entry.variants:
        if variant.classification is Classification.IDENTICAL:
            continue
        if variant.segment is None:
            return Severity.MAJOR
        if variant.segment.kind is not chosen.kind:
            return Severity.MAJOR
        if variant.segment.kind is SegmentKind.CODE_BLOCK:
            return Severity.MAJOR
    return Severity.MINOR
