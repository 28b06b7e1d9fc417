# src/chunk_kit/chunking/patterns.py

"""Precompiled text matchers shared by the chunkers.

Module-level and read-only; safe to use from concurrent calls.
"""

import re

# Markdown-style header: 1-6 '#' markers, whitespace, then text.
HEADER_PATTERN = re.compile(r"^#{1,6}[ \t]+\S.*$", re.MULTILINE)

PARAGRAPH_BREAK = re.compile(r"\n\s*\n+")

# End of a sentence for overlap extraction; punctuation stays with the sentence.
SENTENCE_END = re.compile(r"[.!?]+(?:\s|$)")

# Sentence boundary used when re-packing oversized paragraphs.
SENTENCE_BREAK = re.compile(r"(?<=[.!?]) ")

LIST_ITEM = re.compile(r"^(?:[-*+]|\d+\.)\s+")
BULLET_LINE = re.compile(r"^\s*[-*+]\s+", re.MULTILINE)
NUMBERED_LINE = re.compile(r"^\s*\d+\.\s+", re.MULTILINE)

TECHNICAL_TERM_PATTERNS = (
    re.compile(r"\b[A-Z]{2,}\b"),  # abbreviations
    re.compile(r"\b\w+\(\)"),  # calls
    re.compile(r"\b\w+\.\w+"),  # dotted identifiers
    re.compile(r"\b(?:class|function|method|interface|enum)\b", re.IGNORECASE),
)

REFERENCE_PATTERNS = (
    re.compile(r"\b(?:this|that|these|those|it|they|them|their)\b", re.IGNORECASE),
    re.compile(r"\b(?:above|below|following|previous|aforementioned)\b", re.IGNORECASE),
    re.compile(r"\b(?:as mentioned|as described|as shown|as discussed)\b", re.IGNORECASE),
)

KEYWORD_SPLIT = re.compile(r"[\s.,;:!?]+")


def is_header_line(line: str) -> bool:
    return HEADER_PATTERN.match(line) is not None


def is_table_row(line: str) -> bool:
    return line.count("|") >= 2


def is_list_item(line: str) -> bool:
    """Bullet or numbered item. Table rows never count as list items."""
    return not is_table_row(line) and LIST_ITEM.match(line.strip()) is not None
