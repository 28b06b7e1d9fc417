# src/chunk_kit/chunking/overlap.py

"""Adaptive overlap between two adjacent chunks.

Stateless, deterministic heuristics. Two questions are answered per chunk
boundary: how much text to repeat (`calculate_optimal_overlap`) and which
text (`create_context_preserving_overlap`). Size is the configured overlap
scaled by three factors:

- complexity: long sentences, technical terms, and structural markup ask
  for more context
- structure: headers and tables are natural breaks, list continuations
  are not
- semantic continuity: shared keywords or a pronoun/deictic opening in the
  next chunk ask for more context

Blank input never raises; every function falls back to a neutral value.
"""

import logging
from statistics import mean

from rapidfuzz.distance import Levenshtein

from .config import ChunkingOptions
from .patterns import (
    BULLET_LINE,
    HEADER_PATTERN,
    KEYWORD_SPLIT,
    NUMBERED_LINE,
    PARAGRAPH_BREAK,
    REFERENCE_PATTERNS,
    SENTENCE_END,
    TECHNICAL_TERM_PATTERNS,
    is_header_line,
    is_list_item,
    is_table_row,
)

logger = logging.getLogger(__name__)

DEFAULT_BASE_OVERLAP = 100
MIN_OVERLAP = 50
MIN_SENTENCE_LENGTH = 10
OVERSHOOT_RATIO = 1.5
BOUNDARY_LINES = 3

HEADER_BOUNDARY_FACTOR = 0.6
LIST_CONTINUATION_FACTOR = 1.4
TABLE_BOUNDARY_FACTOR = 0.5
NEUTRAL_FACTOR = 1.0

HIGH_CONTINUITY_FACTOR = 1.3
LOW_CONTINUITY_FACTOR = 0.8

STOP_WORDS = frozenset(
    {
        "the", "and", "or", "but", "in", "on", "at", "to", "for",
        "of", "with", "by", "from", "as", "is", "was", "are", "were",
        "been", "being", "have", "has", "had", "do", "does", "did",
        "will", "would", "could", "should", "may", "might", "must",
        "can", "shall", "a", "an",
    }
)


def calculate_optimal_overlap(
    previous: str, current: str, options: ChunkingOptions
) -> int:
    """Overlap size for the boundary between `previous` and `current`.

    Returns `options.overlap_size` unchanged when either side is blank.
    Otherwise the result lies in
    `[max(50, base // 2), min(max_chunk_size // 4, base * 3)]`; when those
    bounds cross, the lower one wins.
    """
    if _is_blank(previous) or _is_blank(current):
        return options.overlap_size

    base = options.overlap_size if options.overlap_size > 0 else DEFAULT_BASE_OVERLAP

    complexity = complexity_factor(previous, current)
    structural = structural_boundary_factor(previous, current)
    semantic = semantic_continuity_factor(previous, current)
    raw = int(base * complexity * structural * semantic)

    lower = max(MIN_OVERLAP, base // 2)
    upper = min(options.max_chunk_size // 4, base * 3)
    overlap = max(lower, min(upper, raw))

    logger.debug(
        "Overlap %d (raw=%d, base=%d, complexity=%.1f, structural=%.1f, semantic=%.1f)",
        overlap,
        raw,
        base,
        complexity,
        structural,
        semantic,
    )
    return overlap


def create_context_preserving_overlap(previous: str, overlap_size: int) -> str:
    """
    Text from the end of `previous` to repeat at the start of the next chunk.

    - whole sentences from the last paragraph, newest first, up to
      `overlap_size` (overshoot allowed up to 1.5x)
    - at least the final sentence, even if it alone is longer
    - the most recent header line is prepended when it is not already part
      of the overlap, so the topic survives a mid-section split
    """
    if _is_blank(previous) or overlap_size <= 0:
        return ""

    source = previous.strip()
    if len(source) <= overlap_size:
        return source

    window = _last_paragraph(previous.rstrip())
    sentences = extract_sentences(window)
    if sentences:
        overlap = _trailing_sentences(sentences, overlap_size)
    else:
        overlap = window.strip()[-overlap_size:].strip()

    header = last_header(previous)
    if header and header not in overlap:
        prefixed = f"{header}\n{overlap}"
        if len(prefixed) <= len(source):
            overlap = prefixed

    return overlap.strip()


def validate_context_preservation(overlap: str, previous: str, current: str) -> float:
    """
    How well an overlap bridges two chunks, in [0, 1].

    Weighted blend of how closely it matches the tail of `previous` (0.4),
    the head of `current` (0.4), and how many of its sentences are complete
    (0.2). Similarities are normalized Levenshtein scores.
    """
    if not overlap:
        return 0.0

    end_match = _similarity(overlap, (previous or "")[-len(overlap) :])
    start_match = _similarity(overlap, (current or "")[: len(overlap)])
    completeness = _sentence_completeness(overlap)
    return end_match * 0.4 + start_match * 0.4 + completeness * 0.2


def complexity_factor(previous: str, current: str) -> float:
    average = (text_complexity(previous) + text_complexity(current)) / 2
    if average < 0.3:
        return 0.8
    if average < 0.6:
        return 1.0
    if average < 0.8:
        return 1.3
    return 1.5


def text_complexity(text: str) -> float:
    """Score in [0, 1]; 30-word sentences, 5 technical terms or 2 structural
    elements per sentence each saturate their share."""
    if _is_blank(text):
        return 0.0

    sentences = extract_sentences(text)
    if not sentences:
        return 0.0

    avg_words = mean(len(sentence.split()) for sentence in sentences)
    technical_density = count_technical_terms(text) / len(sentences)
    structural_density = count_structural_elements(text) / len(sentences)

    score = (
        (avg_words / 30) * 0.4
        + (technical_density / 5) * 0.3
        + (structural_density / 2) * 0.3
    )
    return min(1.0, score)


def structural_boundary_factor(previous: str, current: str) -> float:
    """Header beats list, list beats table, table beats plain text."""
    if _is_blank(previous) or _is_blank(current):
        return NEUTRAL_FACTOR

    previous_lines = previous.rstrip().split("\n")
    current_lines = current.lstrip().split("\n")

    if is_header_line(previous_lines[-1].strip()) or is_header_line(
        current_lines[0].strip()
    ):
        return HEADER_BOUNDARY_FACTOR

    tail = previous_lines[-BOUNDARY_LINES:]
    head = current_lines[:BOUNDARY_LINES]

    if any(is_list_item(line) for line in tail) and any(
        is_list_item(line) for line in head
    ):
        return LIST_CONTINUATION_FACTOR

    if any(is_table_row(line) for line in tail) or any(
        is_table_row(line) for line in head
    ):
        return TABLE_BOUNDARY_FACTOR

    return NEUTRAL_FACTOR


def semantic_continuity_factor(previous: str, current: str) -> float:
    previous_sentences = extract_sentences(previous or "")
    current_sentences = extract_sentences(current or "")
    if not previous_sentences or not current_sentences:
        return NEUTRAL_FACTOR

    opening = current_sentences[0]
    ratio = keyword_overlap_ratio(previous_sentences[-1], opening)

    if ratio > 0.3 or has_reference(opening):
        return HIGH_CONTINUITY_FACTOR
    if ratio < 0.1:
        return LOW_CONTINUITY_FACTOR
    return NEUTRAL_FACTOR


def extract_sentences(text: str) -> list[str]:
    """Sentences longer than 10 characters, trimmed, punctuation kept."""
    fragments: list[str] = []
    start = 0
    for match in SENTENCE_END.finditer(text):
        fragments.append(text[start : match.end()])
        start = match.end()
    fragments.append(text[start:])

    sentences = (fragment.strip() for fragment in fragments)
    return [s for s in sentences if len(s) > MIN_SENTENCE_LENGTH]


def extract_keywords(text: str) -> set[str]:
    return {
        word
        for word in KEYWORD_SPLIT.split(text.lower())
        if len(word) > 3 and word not in STOP_WORDS
    }


def keyword_overlap_ratio(first: str, second: str) -> float:
    """Jaccard index of the two keyword sets; 0 when either is empty."""
    first_keywords = extract_keywords(first)
    second_keywords = extract_keywords(second)
    if not first_keywords or not second_keywords:
        return 0.0
    return len(first_keywords & second_keywords) / len(first_keywords | second_keywords)


def has_reference(sentence: str) -> bool:
    return any(pattern.search(sentence) for pattern in REFERENCE_PATTERNS)


def count_technical_terms(text: str) -> int:
    return sum(len(pattern.findall(text)) for pattern in TECHNICAL_TERM_PATTERNS)


def count_structural_elements(text: str) -> int:
    return (
        len(HEADER_PATTERN.findall(text))
        + len(BULLET_LINE.findall(text))
        + len(NUMBERED_LINE.findall(text))
        + sum(1 for line in text.split("\n") if is_table_row(line))
    )


def last_header(text: str) -> str:
    headers = HEADER_PATTERN.findall(text)
    return headers[-1].strip() if headers else ""


def _trailing_sentences(sentences: list[str], overlap_size: int) -> str:
    selected: list[str] = []
    size = 0
    for sentence in reversed(sentences):
        if size + len(sentence) > overlap_size * OVERSHOOT_RATIO:
            break
        selected.insert(0, sentence)
        size += len(sentence)
        if size >= overlap_size:
            break

    if not selected:
        selected = [sentences[-1]]
    return " ".join(selected)


def _last_paragraph(text: str) -> str:
    breaks = list(PARAGRAPH_BREAK.finditer(text))
    if not breaks:
        return text
    return text[breaks[-1].end() :]


def _similarity(first: str, second: str) -> float:
    if not first or not second:
        return 0.0
    return Levenshtein.normalized_similarity(first, second)


def _sentence_completeness(text: str) -> float:
    sentences = extract_sentences(text)
    if not sentences:
        return 0.0
    complete = sum(1 for s in sentences if s.endswith((".", "!", "?")))
    return complete / len(sentences)


def _is_blank(text: str | None) -> bool:
    return text is None or not text.strip()
