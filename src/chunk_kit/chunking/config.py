# src/chunk_kit/chunking/config.py

import logging
from pathlib import Path
from typing import Any, TypeVar

import yaml
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ChunkingOptions(BaseModel):
    """Size bounds and strategy knobs for one chunking call.

    Explicit. No magic defaults from environment. Strategy-specific values
    (`max_parent_chunk_size` and friends) may also arrive through
    `strategy_options` under the same snake_case key; explicit fields win.
    """

    max_chunk_size: int = Field(1024, gt=0)
    overlap_size: int = Field(128, ge=0)
    max_parent_chunk_size: int | None = Field(None, gt=3)
    max_child_chunk_size: int | None = Field(None, gt=0)
    min_section_length: int | None = Field(None, ge=0)
    max_hierarchy_depth: int | None = Field(None, ge=1, le=6)
    create_summary_chunks: bool | None = None
    strategy_options: dict[str, Any] = Field(default_factory=dict)

    class Config:
        extra = "forbid"

    def resolved_max_parent_chunk_size(self) -> int:
        return self._resolve(
            "max_parent_chunk_size", int, self.max_chunk_size * 2
        )

    def resolved_max_child_chunk_size(self) -> int:
        return self._resolve("max_child_chunk_size", int, self.max_chunk_size)

    def resolved_min_section_length(self) -> int:
        return self._resolve("min_section_length", int, 100)

    def resolved_max_hierarchy_depth(self) -> int:
        return self._resolve("max_hierarchy_depth", int, 3)

    def resolved_create_summary_chunks(self) -> bool:
        return self._resolve("create_summary_chunks", bool, False)

    def _resolve(self, key: str, kind: type[T], default: T) -> T:
        explicit = getattr(self, key)
        if explicit is not None:
            return explicit

        value = self.strategy_options.get(key)
        # bool is an int subclass; keep flags out of numeric options
        if isinstance(value, kind) and not (kind is int and isinstance(value, bool)):
            return value
        if value is not None:
            logger.warning(
                "Ignoring strategy option %s=%r (expected %s)",
                key,
                value,
                kind.__name__,
            )
        return default


def load_chunking_options(path: str | Path) -> ChunkingOptions:
    """Load options from a YAML mapping. Unknown keys are rejected."""
    logger.debug("Loading chunking options from %s", path)
    with open(path) as f:
        data = yaml.safe_load(f) or {}
    return ChunkingOptions(**data)
