import logging
from dataclasses import dataclass
from time import monotonic

from chunk_kit.observability import names
from chunk_kit.observability.base import MetricsHook, NoOpMetricsHook

from .config import ChunkingOptions
from .overlap import calculate_optimal_overlap, create_context_preserving_overlap

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Chunk:
    chunk_id: str
    text: str
    offset_start: int
    offset_end: int
    metadata: dict
    # Tail of the previous window repeated for context (adaptive mode only).
    context_overlap: str = ""


def chunk_text(
    text: str,
    *,
    chunk_size: int,
    overlap: int,
    metadata: dict,
    adaptive_overlap: ChunkingOptions | None = None,
    metrics_hook: MetricsHook = NoOpMetricsHook(),
) -> list[Chunk]:
    """Fixed-size sliding windows over `text`.

    With `adaptive_overlap`, every chunk after the first also carries a
    sentence-aligned `context_overlap` taken from the previous window and
    sized by the adaptive overlap heuristics for that boundary.
    """
    start = monotonic()
    if chunk_size <= 0:
        raise ValueError("chunk_size must be > 0")
    if overlap < 0:
        raise ValueError("overlap must be >= 0")
    if overlap >= chunk_size:
        raise ValueError("overlap must be < chunk_size")

    chunks = []
    step = chunk_size - overlap
    text_len = len(text)
    previous_window = ""
    overlaps_applied = 0

    for offset in range(0, text_len, step):
        end = min(offset + chunk_size, text_len)
        window = text[offset:end]

        context = ""
        if adaptive_overlap is not None and previous_window:
            size = calculate_optimal_overlap(previous_window, window, adaptive_overlap)
            context = create_context_preserving_overlap(previous_window, size)
            if context:
                overlaps_applied += 1

        chunk_id = f"{metadata.get('source_id', 'unknown')}:{offset}:{end}"

        chunks.append(
            Chunk(
                chunk_id=chunk_id,
                text=window,
                offset_start=offset,
                offset_end=end,
                metadata=dict(metadata),
                context_overlap=context,
            )
        )
        previous_window = window

        if end == text_len:
            break

    elapsed_ms = 1000 * (monotonic() - start)
    metrics_hook.record_latency(names.CHUNKING_DURATION, elapsed_ms)
    metrics_hook.increment(names.CHUNKING_CHUNKS_CREATED, len(chunks))
    if adaptive_overlap is not None:
        metrics_hook.increment(names.CHUNKING_OVERLAPS_APPLIED, overlaps_applied)
    logger.debug(
        "Split %d characters into %d chunks (%d with adaptive overlap)",
        text_len,
        len(chunks),
        overlaps_applied,
    )
    return chunks
