# src/chunk_kit/chunking/scoring.py

"""Closed-form per-chunk scores.

Pure functions over the chunk text. Blank text always scores 0.
"""


def estimate_tokens(content: str) -> int:
    """Roughly four characters per token."""
    if not content.strip():
        return 0
    return len(content) // 4


def quality_score(content: str) -> float:
    if not content.strip():
        return 0.0
    length = len(content)
    word_count = len(content.split())
    length_part = 0.5 if length > 100 else length / 200
    return min(1.0, (word_count / 50) * 0.5 + length_part)


def importance_score(content: str, level: int) -> float:
    """Shallower sections and header-led chunks rank higher."""
    level_bonus = max(0, 3 - level) * 0.1
    header_bonus = 0.1 if content.startswith("#") else 0.0
    return min(1.0, 0.5 + level_bonus + header_bonus)


def density_score(content: str) -> float:
    if not content.strip():
        return 0.0
    non_space = sum(1 for c in content if not c.isspace())
    return min(1.0, non_space / len(content))
