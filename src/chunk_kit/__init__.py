# Chunking
from .chunking import (
    Chunk,
    ChunkingCancelledError,
    ChunkingOptions,
    HierarchicalChunk,
    HierarchicalChunker,
    HierarchyChunkType,
    calculate_optimal_overlap,
    chunk_text,
    create_context_preserving_overlap,
    estimate_chunk_count,
    load_chunking_options,
    validate_context_preservation,
)

# Documents
from .documents import DocumentContent, DocumentMetadata

# Observability
from .observability import LoggingMetricsHook, MetricsHook, NoOpMetricsHook

__all__ = [
    # Chunking
    "Chunk",
    "ChunkingCancelledError",
    "ChunkingOptions",
    "HierarchicalChunk",
    "HierarchicalChunker",
    "HierarchyChunkType",
    "calculate_optimal_overlap",
    "chunk_text",
    "create_context_preserving_overlap",
    "estimate_chunk_count",
    "load_chunking_options",
    "validate_context_preservation",
    # Documents
    "DocumentContent",
    "DocumentMetadata",
    # Observability
    "LoggingMetricsHook",
    "MetricsHook",
    "NoOpMetricsHook",
]
