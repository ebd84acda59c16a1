import math

import numpy as np
import pytest

from psychometrics_lab.core.utils import get_rng
from psychometrics_lab.simulation.data_models import (
    GroupComparison,
    ReliabilityIndices,
)
from psychometrics_lab.simulation.groups import (
    approximate_mann_whitney_u,
    approximate_p_value,
    build_distribution,
    score_grid,
    simulate_group_comparison,
)
from psychometrics_lab.simulation.reliability import simulate_reliability


class TestApproximations:
    def test_p_value_at_zero(self) -> None:
        assert approximate_p_value(0.0) == 1.0

    def test_p_value_floor(self) -> None:
        assert approximate_p_value(10.0) == 0.001

    def test_p_value_ceiling_for_negative_z(self) -> None:
        assert approximate_p_value(-0.5) == 1.0

    def test_p_value_decreases_with_z(self) -> None:
        values = [approximate_p_value(z / 10) for z in range(0, 40)]
        assert all(b <= a for a, b in zip(values, values[1:], strict=False))

    def test_u_at_zero_z(self) -> None:
        # N^2 / 4
        assert approximate_mann_whitney_u(0.0, 200) == 10000

    def test_u_is_non_negative_integer(self) -> None:
        u = approximate_mann_whitney_u(15.9, 200)
        assert isinstance(u, int)
        assert u >= 0


class TestDistribution:
    def test_grid_spans_ten_to_ninety_percent(self) -> None:
        grid = score_grid(50.0)
        assert len(grid) == 41
        assert grid[0] == pytest.approx(5.0)
        assert grid[-1] == pytest.approx(45.0)
        np.testing.assert_allclose(np.diff(grid), 1.0)

    def test_records_ascending_and_non_negative(self) -> None:
        points = build_distribution(20.0, 33.0, 8.25, 50.0, 200, get_rng(0))
        scores = [p.score for p in points]
        assert scores == sorted(scores)
        for p in points:
            assert p.control_density >= 0
            assert p.clinical_density >= 0
            assert p.control_freq >= 0
            assert p.clinical_freq >= 0

    def test_frequencies_follow_jittered_density(self) -> None:
        points = build_distribution(20.0, 33.0, 8.25, 50.0, 200, get_rng(0))
        scale = 200 * 1.0 * 10
        for p in points:
            expected = p.control_density * scale
            assert 0.8 * expected - 0.5 <= p.control_freq
            assert p.control_freq <= 1.2 * expected + 0.5

    def test_jitter_reproducible_with_seed(self) -> None:
        a = build_distribution(20.0, 33.0, 8.25, 50.0, 200, get_rng(9))
        b = build_distribution(20.0, 33.0, 8.25, 50.0, 200, get_rng(9))
        assert a == b


class TestGroupComparison:
    def _compare(
        self, q: float, n: int = 200, seed: int = 0
    ) -> tuple[ReliabilityIndices, GroupComparison]:
        rng = get_rng(seed)
        reliability = simulate_reliability(10, 0.4, n, rng)
        return reliability, simulate_group_comparison(reliability, q, n, rng)

    def test_means_and_effect_size(self) -> None:
        reliability, groups = self._compare(0.7)
        max_score = reliability.max_score

        assert groups.control_group_mean == pytest.approx(0.4 * max_score)
        assert groups.clinical_group_mean == pytest.approx(
            max_score * (0.4 + 0.15 * 2.5 * 0.7)
        )
        assert groups.pooled_sd == pytest.approx(
            1.1 * reliability.standard_deviation
        )
        assert groups.effect_size == pytest.approx(
            (groups.clinical_group_mean - groups.control_group_mean)
            / groups.pooled_sd
        )
        assert groups.z_score == pytest.approx(
            groups.effect_size * math.sqrt(200 / 2)
        )

    @pytest.mark.parametrize("q", [0.1, 0.5, 0.95])
    def test_clinical_mean_exceeds_control(self, q: float) -> None:
        _, groups = self._compare(q)
        assert groups.clinical_group_mean > groups.control_group_mean
        assert groups.effect_size > 0

    def test_distribution_has_41_points(self) -> None:
        _, groups = self._compare(0.7)
        assert len(groups.distribution) == 41

    def test_strong_separation_hits_p_floor(self) -> None:
        _, groups = self._compare(0.7)
        assert groups.p_value == 0.001
