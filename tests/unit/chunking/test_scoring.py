import pytest

from chunk_kit.chunking.scoring import (
    density_score,
    estimate_tokens,
    importance_score,
    quality_score,
)


class TestEstimateTokens:
    def test_four_characters_per_token(self) -> None:
        assert estimate_tokens("abcdefghij") == 2

    @pytest.mark.parametrize("content", ["", "   ", "\n\t"])
    def test_blank_is_zero(self, content: str) -> None:
        assert estimate_tokens(content) == 0


class TestQualityScore:
    def test_short_text_scales_with_length(self) -> None:
        assert quality_score("a b") == pytest.approx(2 / 50 * 0.5 + 3 / 200)

    def test_long_text_saturates(self) -> None:
        assert quality_score("word " * 100) == 1.0

    def test_blank_is_zero(self) -> None:
        assert quality_score("  ") == 0.0


class TestImportanceScore:
    def test_shallow_header_chunk(self) -> None:
        assert importance_score("# Title", 1) == pytest.approx(0.8)

    def test_deep_chunk_has_base_importance(self) -> None:
        assert importance_score("plain text", 5) == 0.5

    def test_root_level(self) -> None:
        assert importance_score("plain text", 0) == pytest.approx(0.8)


class TestDensityScore:
    def test_ratio_of_non_whitespace(self) -> None:
        assert density_score("a b") == pytest.approx(2 / 3)

    def test_no_whitespace_is_one(self) -> None:
        assert density_score("abc") == 1.0

    def test_blank_is_zero(self) -> None:
        assert density_score("   ") == 0.0
