# src/chunk_kit/chunking/models.py

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class HierarchyChunkType(str, Enum):
    """Position of a chunk in the section hierarchy."""

    PARENT = "Parent"
    LEAF = "Leaf"


@dataclass(frozen=True)
class HierarchicalChunk:
    """One chunk emitted by the hierarchical chunker.

    Immutable. `parent_id` and `child_ids` only reference chunks from the
    same result; `group_id` is shared by every chunk of one invocation.
    """

    chunk_id: str
    content: str
    index: int
    level: int
    chunk_type: HierarchyChunkType
    group_id: str
    offset_start: int
    offset_end: int
    parent_id: str | None = None
    child_ids: tuple[str, ...] = ()
    quality: float = 0.0
    importance: float = 0.0
    density: float = 0.0
    tokens: int = 0
    strategy: str = "Hierarchical"
    metadata: Mapping[str, Any] = field(default_factory=dict)
    props: Mapping[str, Any] = field(default_factory=dict)

    @property
    def is_root(self) -> bool:
        return self.parent_id is None

    @property
    def has_children(self) -> bool:
        return len(self.child_ids) > 0
