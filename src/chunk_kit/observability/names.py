# src/chunk_kit/observability/names.py

"""Standard metric names for chunk-kit observability.

Use these constants instead of hardcoded strings for consistency
across the codebase.

Note: All duration metrics are in milliseconds by convention.
Units are handled by the metrics backend (e.g., converted to seconds in Prometheus).
"""

# ============================================================================
# Sequential (fixed-size) Chunking Metrics
# ============================================================================

# Duration
CHUNKING_DURATION = "chunking_duration"

# Counters (chunks accumulate over time)
CHUNKING_CHUNKS_CREATED = "chunking_chunks_created"
CHUNKING_OVERLAPS_APPLIED = "chunking_overlaps_applied"


# ============================================================================
# Hierarchical Chunking Metrics
# ============================================================================

# Duration
HIERARCHICAL_CHUNKING_DURATION = "hierarchical_chunking_duration"

# Counters
HIERARCHICAL_SECTIONS_PARSED = "hierarchical_sections_parsed"
HIERARCHICAL_CHUNKS_CREATED = "hierarchical_chunks_created"
HIERARCHICAL_CANCELLATIONS_TOTAL = "hierarchical_cancellations_total"

# Gauges
HIERARCHICAL_TREE_DEPTH = "hierarchical_tree_depth"
