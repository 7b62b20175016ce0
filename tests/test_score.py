"""Tests for score calculation and ranks."""
import pytest

from data_colony import ScoreBreakdown, calculate_score, format_score, rank_title, score_rank


class TestCalculateScore:
    def test_worked_example(self):
        breakdown = calculate_score(3, {"quality": 12.7, "throughput": 40.2})
        assert breakdown == ScoreBreakdown(services=3, quality=12, throughput=40, total=460)
        assert score_rank(breakdown.total) == "B"

    def test_empty_colony(self):
        breakdown = calculate_score(0, {"cpu": 0, "storage": 0, "quality": 0, "throughput": 0})
        assert breakdown.total == 0

    def test_cpu_and_storage_do_not_count(self):
        breakdown = calculate_score(0, {"cpu": 999, "storage": 999, "quality": 0, "throughput": 0})
        assert breakdown.total == 0

    def test_fractions_floor(self):
        breakdown = calculate_score(1, {"quality": 0.99, "throughput": 9.99})
        assert breakdown.quality == 0
        assert breakdown.throughput == 9
        assert breakdown.total == 109


class TestRank:
    @pytest.mark.parametrize("total, letter", [
        (0, "F"),
        (99, "F"),
        (100, "D"),
        (249, "D"),
        (250, "C"),
        (399, "C"),
        (400, "B"),
        (500, "B"),
        (749, "B"),
        (750, "A"),
        (999, "A"),
        (1000, "S"),
        (25_000, "S"),
    ])
    def test_bands_have_closed_lower_bounds(self, total, letter):
        assert score_rank(total) == letter

    def test_titles(self):
        assert rank_title(1000) == "S - Data Master"
        assert rank_title(460) == "B - Data Engineer"
        assert rank_title(12) == "F - Needs Training"


def test_format_score():
    assert format_score(1234567) == "1,234,567"
    assert format_score(460) == "460"
