import math

import pytest

from psychometrics_lab.core.exceptions import InvalidInputError
from psychometrics_lab.core.utils import get_rng
from psychometrics_lab.simulation.reliability import (
    cronbach_alpha,
    effective_correlation,
    max_raw_score,
    noise_magnitude,
    simulate_reliability,
    standard_error_of_measurement,
)


class TestCronbachAlpha:
    def test_single_item_equals_correlation(self) -> None:
        assert cronbach_alpha(1, 0.4) == pytest.approx(0.4)

    def test_known_value(self) -> None:
        # 10 * 0.4 / (1 + 9 * 0.4) = 4 / 4.6
        assert cronbach_alpha(10, 0.4) == pytest.approx(4 / 4.6)

    @pytest.mark.parametrize("r", [0.05, 0.2, 0.5, 0.9])
    def test_strictly_increasing_in_items(self, r: float) -> None:
        alphas = [cronbach_alpha(k, r) for k in range(1, 40)]
        assert all(b > a for a, b in zip(alphas, alphas[1:], strict=False))

    @pytest.mark.parametrize("k", [1, 2, 10, 50])
    def test_strictly_increasing_in_correlation(self, k: int) -> None:
        rs = [i / 100 for i in range(1, 100)]
        alphas = [cronbach_alpha(k, r) for r in rs]
        assert all(b > a for a, b in zip(alphas, alphas[1:], strict=False))

    def test_limits(self) -> None:
        assert cronbach_alpha(10, 1e-9) == pytest.approx(0.0, abs=1e-7)
        assert cronbach_alpha(10, 1 - 1e-9) == pytest.approx(1.0, abs=1e-7)
        assert cronbach_alpha(10, 1.0) == 1.0
        assert cronbach_alpha(10, 0.0) == 0.0

    def test_zero_items_raises(self) -> None:
        with pytest.raises(InvalidInputError, match="at least 1 item"):
            cronbach_alpha(0, 0.4)

    @pytest.mark.parametrize("r", [-0.1, 1.1])
    def test_correlation_out_of_range_raises(self, r: float) -> None:
        with pytest.raises(InvalidInputError):
            cronbach_alpha(10, r)


class TestStandardErrorOfMeasurement:
    def test_perfect_reliability_has_no_error(self) -> None:
        assert standard_error_of_measurement(7.5, 1.0) == 0.0

    def test_zero_reliability_equals_sd(self) -> None:
        assert standard_error_of_measurement(7.5, 0.0) == pytest.approx(7.5)

    def test_strictly_decreasing_in_reliability(self) -> None:
        alphas = [i / 50 for i in range(51)]
        sems = [standard_error_of_measurement(7.5, a) for a in alphas]
        assert all(s >= 0 for s in sems)
        assert all(b < a for a, b in zip(sems, sems[1:], strict=False))

    def test_non_positive_sd_raises(self) -> None:
        with pytest.raises(InvalidInputError):
            standard_error_of_measurement(0.0, 0.5)


class TestEffectiveCorrelation:
    def test_noise_magnitude_shrinks_with_n(self) -> None:
        assert noise_magnitude(30) == pytest.approx(0.5 / math.sqrt(30))
        assert noise_magnitude(30) == pytest.approx(0.0913, abs=1e-4)
        assert noise_magnitude(1000) == pytest.approx(0.0158, abs=1e-4)
        assert noise_magnitude(30) > noise_magnitude(1000)

    def test_stays_within_noise_band(self) -> None:
        rng = get_rng(0)
        for _ in range(500):
            r = effective_correlation(0.4, 200, rng)
            assert abs(r - 0.4) <= noise_magnitude(200) + 1e-12

    def test_clamped(self) -> None:
        rng = get_rng(0)
        for _ in range(200):
            assert 0.05 <= effective_correlation(0.1, 1, rng) <= 0.95
            assert 0.05 <= effective_correlation(0.8, 1, rng) <= 0.95


class TestSimulateReliability:
    def test_consistent_indices(self) -> None:
        rel = simulate_reliability(10, 0.4, 200, get_rng(42))

        assert rel.n_items == 10
        assert rel.max_score == max_raw_score(10) == 50.0
        assert rel.cronbach_alpha == pytest.approx(
            cronbach_alpha(10, rel.effective_correlation)
        )
        assert abs(rel.split_half_reliability - rel.cronbach_alpha) <= 0.04
        assert 0.55 * 50 <= rel.mean_score <= 0.65 * 50
        assert rel.standard_deviation == pytest.approx(7.5)
        assert rel.sem == pytest.approx(
            7.5 * math.sqrt(1 - rel.cronbach_alpha)
        )
        assert rel.confidence_interval == pytest.approx(1.96 * rel.sem)

    def test_reproducible_with_seed(self) -> None:
        a = simulate_reliability(10, 0.4, 200, get_rng(5))
        b = simulate_reliability(10, 0.4, 200, get_rng(5))
        assert a == b

    def test_zero_items_raises(self) -> None:
        with pytest.raises(InvalidInputError):
            simulate_reliability(0, 0.4, 200, get_rng(0))
