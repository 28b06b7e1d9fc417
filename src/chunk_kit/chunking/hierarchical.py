# src/chunk_kit/chunking/hierarchical.py

import asyncio
import logging
import threading
import uuid
from dataclasses import dataclass, field
from time import monotonic
from typing import Any

from chunk_kit.documents import DocumentContent
from chunk_kit.observability import names
from chunk_kit.observability.base import MetricsHook, NoOpMetricsHook

from . import props
from .config import ChunkingOptions
from .models import HierarchicalChunk, HierarchyChunkType
from .patterns import HEADER_PATTERN, PARAGRAPH_BREAK, SENTENCE_BREAK
from .scoring import density_score, estimate_tokens, importance_score, quality_score
from .sections import Section, SectionTree, parse_sections

logger = logging.getLogger(__name__)

MIN_PARAGRAPH_LENGTH = 20
ELLIPSIS = "..."


class ChunkingCancelledError(Exception):
    """Raised when a chunking call is cancelled between top-level sections."""


@dataclass
class _ChunkDraft:
    chunk_id: str
    content: str
    index: int
    level: int
    chunk_type: HierarchyChunkType
    offset_start: int
    offset_end: int
    parent_id: str | None = None
    child_ids: list[str] = field(default_factory=list)

    def add_child(self, child_id: str) -> None:
        if child_id not in self.child_ids:
            self.child_ids.append(child_id)


@dataclass
class _BuildContext:
    """State of one chunking call, threaded through the tree walk."""

    tree: SectionTree
    group_id: str
    max_parent_size: int
    max_child_size: int
    min_section_length: int
    chunk_index: int = 0
    # Running sum of emitted chunk lengths; approximates source offsets.
    position: int = 0
    drafts: list[_ChunkDraft] = field(default_factory=list)


class HierarchicalChunker:
    """
    Section-tree chunker.

    - one chunk per meaningful section (parent), one per paragraph of an
      oversized section (leaf)
    - every chunk is at most one hop from its nearest ancestor section chunk
    - no state survives a call; safe to share across concurrent documents
    """

    strategy_name = "Hierarchical"
    supported_options = (
        "max_parent_chunk_size",
        "max_child_chunk_size",
        "min_section_length",
        "create_summary_chunks",
        "max_hierarchy_depth",
    )

    def __init__(self, metrics_hook: MetricsHook = NoOpMetricsHook()) -> None:
        self.metrics_hook = metrics_hook

    def chunk(
        self,
        document: DocumentContent,
        options: ChunkingOptions,
        cancel_event: threading.Event | None = None,
    ) -> list[HierarchicalChunk]:
        """Chunk a document synchronously.

        Args:
            document: Extracted document. Only `text` is read.
            options: Size bounds; strategy knobs resolve with their defaults.
            cancel_event: Checked before each top-level section.

        Returns:
            Chunks in emission order (depth-first), empty for blank text.

        Raises:
            ValueError: If `document` is None.
            ChunkingCancelledError: If `cancel_event` was set. Nothing is
                returned for the sections already processed.
        """
        start = monotonic()
        context = self._start(document, options)
        if context is None:
            return []

        for section in context.tree.top_level():
            if cancel_event is not None and cancel_event.is_set():
                self._record_cancellation(context)
                raise ChunkingCancelledError(
                    f"Chunking cancelled after {len(context.drafts)} chunks"
                )
            self._emit_section(section, context)

        return self._finish(document, context, start)

    async def chunk_async(
        self, document: DocumentContent, options: ChunkingOptions
    ) -> list[HierarchicalChunk]:
        """Same as `chunk`, yielding to the event loop between top-level sections.

        Cancelling the awaiting task discards the partial result.
        """
        start = monotonic()
        context = self._start(document, options)
        if context is None:
            return []

        for section in context.tree.top_level():
            try:
                await asyncio.sleep(0)
            except asyncio.CancelledError:
                self._record_cancellation(context)
                raise
            self._emit_section(section, context)

        return self._finish(document, context, start)

    def estimate_chunk_count(
        self, document: DocumentContent, options: ChunkingOptions
    ) -> int:
        return estimate_chunk_count(document, options)

    def _start(
        self, document: DocumentContent, options: ChunkingOptions
    ) -> _BuildContext | None:
        if document is None or document.text is None:
            raise ValueError("document must not be None")

        if not document.text.strip():
            logger.debug("Empty document text, returning no chunks")
            return None

        if options.resolved_create_summary_chunks():
            logger.warning(
                "create_summary_chunks is set; summary chunks are not generated"
            )

        tree = parse_sections(document.text, options.resolved_max_hierarchy_depth())
        context = _BuildContext(
            tree=tree,
            group_id=str(uuid.uuid4()),
            max_parent_size=options.resolved_max_parent_chunk_size(),
            max_child_size=options.resolved_max_child_chunk_size(),
            min_section_length=options.resolved_min_section_length(),
        )

        self.metrics_hook.increment(names.HIERARCHICAL_SECTIONS_PARSED, len(tree))
        self.metrics_hook.record_gauge(names.HIERARCHICAL_TREE_DEPTH, tree.depth())
        logger.info(
            "Chunking %d characters: sections=%d, top_level=%d, group_id=%s",
            len(document.text),
            len(tree),
            len(tree.roots),
            context.group_id,
        )
        return context

    def _emit_section(
        self, section: Section, context: _BuildContext
    ) -> list[_ChunkDraft]:
        """Emit chunks for a section subtree; returns them in emission order."""
        produced: list[_ChunkDraft] = []
        has_children = len(section.children) > 0
        section_text = section.content if section.content.strip() else section.title

        section_chunk: _ChunkDraft | None = None
        if len(section_text) >= context.min_section_length or has_children:
            body = section.title
            if section.content:
                body += "\n\n" + truncate(section.content, context.max_parent_size)
            section_chunk = self._new_draft(
                context,
                body,
                section.level,
                HierarchyChunkType.PARENT if has_children else HierarchyChunkType.LEAF,
            )
            produced.append(section_chunk)

        if section.content.strip() and len(section.content) > context.max_child_size:
            for paragraph in split_paragraphs(section.content, context.max_child_size):
                if len(paragraph.strip()) < MIN_PARAGRAPH_LENGTH:
                    continue
                leaf = self._new_draft(
                    context, paragraph, section.level + 1, HierarchyChunkType.LEAF
                )
                if section_chunk is not None:
                    leaf.parent_id = section_chunk.chunk_id
                    section_chunk.add_child(leaf.chunk_id)
                produced.append(leaf)

        for child in context.tree.children(section):
            child_drafts = self._emit_section(child, context)
            if section_chunk is not None and child_drafts:
                first = child_drafts[0]
                first.parent_id = section_chunk.chunk_id
                section_chunk.add_child(first.chunk_id)
            produced.extend(child_drafts)

        logger.debug(
            "Section %r (level %d) produced %d chunks",
            section.title,
            section.level,
            len(produced),
        )
        return produced

    def _new_draft(
        self,
        context: _BuildContext,
        content: str,
        level: int,
        chunk_type: HierarchyChunkType,
    ) -> _ChunkDraft:
        text = content.strip()
        draft = _ChunkDraft(
            chunk_id=str(uuid.uuid4()),
            content=text,
            index=context.chunk_index,
            level=level,
            chunk_type=chunk_type,
            offset_start=context.position,
            offset_end=context.position + len(text),
        )
        context.chunk_index += 1
        context.position += len(text)
        context.drafts.append(draft)
        return draft

    def _finish(
        self, document: DocumentContent, context: _BuildContext, start: float
    ) -> list[HierarchicalChunk]:
        metadata = document.metadata.as_dict()
        chunks = [
            self._freeze(draft, context.group_id, metadata) for draft in context.drafts
        ]

        elapsed_ms = 1000 * (monotonic() - start)
        self.metrics_hook.record_latency(names.HIERARCHICAL_CHUNKING_DURATION, elapsed_ms)
        self.metrics_hook.increment(names.HIERARCHICAL_CHUNKS_CREATED, len(chunks))
        logger.info(
            "Created %d hierarchical chunks (%d parents) in %.1fms",
            len(chunks),
            sum(1 for c in chunks if c.chunk_type is HierarchyChunkType.PARENT),
            elapsed_ms,
        )
        return chunks

    def _freeze(
        self, draft: _ChunkDraft, group_id: str, metadata: dict[str, Any]
    ) -> HierarchicalChunk:
        # Final typing: the provisional type was assigned before the
        # subtree below it was known.
        chunk_type = (
            HierarchyChunkType.PARENT if draft.child_ids else HierarchyChunkType.LEAF
        )

        chunk_props: dict[str, Any] = {
            props.HIERARCHY_LEVEL: draft.level,
            props.HIERARCHY_CHUNK_TYPE: chunk_type.value,
            props.MERGE_GROUP_ID: group_id,
        }
        if draft.parent_id is not None:
            chunk_props[props.PARENT_CHUNK_ID] = draft.parent_id
        if draft.child_ids:
            chunk_props[props.CHILD_CHUNK_IDS] = list(draft.child_ids)

        return HierarchicalChunk(
            chunk_id=draft.chunk_id,
            content=draft.content,
            index=draft.index,
            level=draft.level,
            chunk_type=chunk_type,
            group_id=group_id,
            offset_start=draft.offset_start,
            offset_end=draft.offset_end,
            parent_id=draft.parent_id,
            child_ids=tuple(draft.child_ids),
            quality=quality_score(draft.content),
            importance=importance_score(draft.content, draft.level),
            density=density_score(draft.content),
            tokens=estimate_tokens(draft.content),
            strategy=self.strategy_name,
            metadata=dict(metadata),
            props=chunk_props,
        )

    def _record_cancellation(self, context: _BuildContext) -> None:
        self.metrics_hook.increment(names.HIERARCHICAL_CANCELLATIONS_TOTAL)
        logger.info(
            "Chunking cancelled (group_id=%s), discarding %d chunks",
            context.group_id,
            len(context.drafts),
        )


def estimate_chunk_count(document: DocumentContent, options: ChunkingOptions) -> int:
    """
    Cheap upper bound for progress reporting: headers + paragraph breaks.

    `options` is accepted for interface uniformity and not read.
    """
    if document is None or not document.text or not document.text.strip():
        return 0

    headers = len(HEADER_PATTERN.findall(document.text))
    paragraphs = len(PARAGRAPH_BREAK.findall(document.text))
    return max(1, headers + paragraphs)


def split_paragraphs(text: str, max_size: int) -> list[str]:
    """
    Split on blank lines; re-pack paragraphs longer than `max_size` by
    sentence so each unit stays within the bound where sentences allow.
    """
    result: list[str] = []
    for paragraph in PARAGRAPH_BREAK.split(text):
        if not paragraph.strip():
            continue
        if len(paragraph) <= max_size:
            result.append(paragraph.strip())
            continue

        current = ""
        for sentence in SENTENCE_BREAK.split(paragraph):
            if current and len(current) + 1 + len(sentence) > max_size:
                result.append(current.strip())
                current = sentence
            else:
                current = f"{current} {sentence}" if current else sentence
        if current.strip():
            result.append(current.strip())
    return result


def truncate(text: str, max_size: int) -> str:
    if len(text) <= max_size:
        return text
    return text[: max(max_size - len(ELLIPSIS), 0)] + ELLIPSIS
