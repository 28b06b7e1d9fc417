# src/chunk_kit/chunking/sections.py

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field

from .patterns import is_header_line

logger = logging.getLogger(__name__)

ROOT_TITLE = "Document"


@dataclass(eq=False)
class Section:
    """
    One node of the section tree.

    Links are arena indices: `children` is owned and ordered, `parent` is a
    back-reference used for traversal only.
    """

    id: int
    title: str
    level: int
    start: int
    end: int = -1
    content: str = ""
    parent: int | None = None
    children: list[int] = field(default_factory=list)


class SectionTree:
    """Growable arena of sections. Top-level sections are listed in `roots`."""

    def __init__(self) -> None:
        self._nodes: list[Section] = []
        self.roots: list[int] = []

    def add(
        self, title: str, level: int, start: int, parent: int | None = None
    ) -> Section:
        section = Section(
            id=len(self._nodes), title=title, level=level, start=start, parent=parent
        )
        self._nodes.append(section)
        if parent is None:
            self.roots.append(section.id)
        else:
            self._nodes[parent].children.append(section.id)
        return section

    def __getitem__(self, index: int) -> Section:
        return self._nodes[index]

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[Section]:
        return iter(self._nodes)

    def top_level(self) -> list[Section]:
        return [self._nodes[i] for i in self.roots]

    def children(self, section: Section) -> list[Section]:
        return [self._nodes[i] for i in section.children]

    def parent(self, section: Section) -> Section | None:
        if section.parent is None:
            return None
        return self._nodes[section.parent]

    def depth(self) -> int:
        """Number of nodes on the longest root-to-leaf path."""
        deepest = 0
        for section in self._nodes:
            hops = 1
            node = section
            while node.parent is not None:
                node = self._nodes[node.parent]
                hops += 1
            deepest = max(deepest, hops)
        return deepest


def parse_sections(text: str, max_depth: int) -> SectionTree:
    """
    Build the section tree of a markdown-style document.

    Headers deeper than `max_depth` are clamped to it, and sections at
    `max_depth` never receive children. Text before the first header (or the
    whole text, when there are no headers) becomes a level-0 root section.
    """
    if max_depth < 1:
        raise ValueError("max_depth must be >= 1")

    tree = SectionTree()
    stack: list[Section] = []
    # Section receiving buffered lines; may be a max-depth section that is
    # open but not on the stack.
    owner: Section | None = None
    buffer: list[str] = []
    position = 0

    for line in text.split("\n"):
        if is_header_line(line):
            owner = _flush(tree, owner, buffer, position)
            if owner is not None and owner.end < 0 and owner not in stack:
                owner.end = position

            level = min(_marker_count(line), max_depth)
            while stack and stack[-1].level >= level:
                stack.pop().end = position

            parent = stack[-1].id if stack else None
            section = tree.add(
                title=line.lstrip("# \t").rstrip(),
                level=level,
                start=position,
                parent=parent,
            )
            if level < max_depth:
                stack.append(section)
            owner = section
        else:
            buffer.append(line)

        position += len(line) + 1

    _flush(tree, owner, buffer, len(text))

    for section in tree:
        if section.end < 0:
            section.end = len(text)

    logger.debug(
        "Parsed %d sections (%d top-level) from %d characters",
        len(tree),
        len(tree.roots),
        len(text),
    )
    return tree


def _flush(
    tree: SectionTree, owner: Section | None, buffer: list[str], position: int
) -> Section | None:
    content = "\n".join(buffer).strip()
    buffer.clear()
    if not content:
        return owner

    if owner is None:
        owner = tree.add(title=ROOT_TITLE, level=0, start=0)
        owner.end = position

    owner.content = f"{owner.content}\n\n{content}" if owner.content else content
    return owner


def _marker_count(line: str) -> int:
    return len(line) - len(line.lstrip("#"))
