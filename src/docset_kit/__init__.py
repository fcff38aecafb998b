__version__ = "0.1.0"

# Comparison
from .comparison import (
    Alignment,
    AlignmentPair,
    Classification,
    Classifier,
    SegmentComparator,
    segment_similarity,
)

# Config
from .config import NormalizerConfig, load_config

# Errors
from .errors import (
    AlignmentAmbiguityWarning,
    DocsetError,
    MalformedInputError,
    MissingInputError,
)

# Merging
from .merging import CanonicalDocument, CanonicalMerger, CanonicalSegment, Variant

# Observability
from .observability import MetricsHook, NoOpMetricsHook

# Pipeline
from .pipeline import (
    DocumentSetNormalizer,
    NormalizationResult,
    normalize,
    write_outputs,
)

# Reporting
from .reporting import DivergenceRecord, DivergenceReport, ReportEmitter, Severity

# Segmenting
from .segmenting import Document, MarkdownSegmenter, Segment, SegmentKind, render

__all__ = [
    "__version__",
    # Comparison
    "Alignment",
    "AlignmentPair",
    "Classification",
    "Classifier",
    "SegmentComparator",
    "segment_similarity",
    # Config
    "NormalizerConfig",
    "load_config",
    # Errors
    "AlignmentAmbiguityWarning",
    "DocsetError",
    "MalformedInputError",
    "MissingInputError",
    # Merging
    "CanonicalDocument",
    "CanonicalMerger",
    "CanonicalSegment",
    "Variant",
    # Observability
    "MetricsHook",
    "NoOpMetricsHook",
    # Pipeline
    "DocumentSetNormalizer",
    "NormalizationResult",
    "normalize",
    "write_outputs",
    # Reporting
    "DivergenceRecord",
    "DivergenceReport",
    "ReportEmitter",
    "Severity",
    # Segmenting
    "Document",
    "MarkdownSegmenter",
    "Segment",
    "SegmentKind",
    "render",
]
