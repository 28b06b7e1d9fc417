from .chunking import Chunk, chunk_text
from .config import ChunkingOptions, load_chunking_options
from .hierarchical import (
    ChunkingCancelledError,
    HierarchicalChunker,
    estimate_chunk_count,
)
from .models import HierarchicalChunk, HierarchyChunkType
from .overlap import (
    calculate_optimal_overlap,
    create_context_preserving_overlap,
    validate_context_preservation,
)
from .sections import Section, SectionTree, parse_sections

__all__ = [
    "Chunk",
    "ChunkingCancelledError",
    "ChunkingOptions",
    "HierarchicalChunk",
    "HierarchicalChunker",
    "HierarchyChunkType",
    "Section",
    "SectionTree",
    "calculate_optimal_overlap",
    "chunk_text",
    "create_context_preserving_overlap",
    "estimate_chunk_count",
    "load_chunking_options",
    "parse_sections",
    "validate_context_preservation",
]
