# src/docset_kit/observability/names.py

"""Standard metric names for docset-kit observability.

Use these constants instead of hardcoded strings for consistency
across the codebase.

Note: All duration metrics are in milliseconds by convention.
"""

# ============================================================================
# Loading / Segmenting Metrics
# ============================================================================

# Duration
SEGMENTING_DURATION = "segmenting_duration"

# Counters
DOCUMENTS_LOADED = "documents_loaded"
SEGMENTS_CREATED = "segments_created"


# ============================================================================
# Alignment Metrics
# ============================================================================

# Duration
ALIGNMENT_DURATION = "alignment_duration"

# Counters
ALIGNMENT_PAIRS_TOTAL = "alignment_pairs_total"
ALIGNMENT_AMBIGUITIES_TOTAL = "alignment_ambiguities_total"


# ============================================================================
# Merge / Report Metrics
# ============================================================================

# Duration
MERGE_DURATION = "merge_duration"
REPORT_DURATION = "report_duration"

# Counters
DIVERGENCES_TOTAL = "divergences_total"


# ============================================================================
# Pipeline Metrics
# ============================================================================

# Duration
PIPELINE_DURATION = "pipeline_duration"

# Counters
PIPELINE_RUNS_TOTAL = "pipeline_runs_total"
PIPELINE_ERRORS_TOTAL = "pipeline_errors_total"
