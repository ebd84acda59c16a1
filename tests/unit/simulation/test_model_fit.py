import pytest

from psychometrics_lab.core.utils import get_rng
from psychometrics_lab.simulation.model_fit import (
    FitNoise,
    composite_fit,
    compute_fit_indices,
    simulate_fit,
)


def test_composite_fit_weights() -> None:
    assert composite_fit(0.7, 0.4) == pytest.approx(0.49 + 0.12)


@pytest.mark.parametrize("seed", [0, 1, 2])
def test_cfi_and_rmsea_move_in_opposite_directions(seed: int) -> None:
    noise = FitNoise.draw(get_rng(seed))
    fits = [compute_fit_indices(f / 20, noise) for f in range(21)]
    for before, after in zip(fits, fits[1:], strict=False):
        assert after.cfi >= before.cfi
        assert after.rmsea <= before.rmsea


def test_srmr_derived_from_rmsea() -> None:
    fit = simulate_fit(0.7, 0.4, get_rng(3))
    assert fit.srmr == pytest.approx(0.8 * fit.rmsea)


def test_bounds_hold_at_extremes() -> None:
    rng = get_rng(4)
    for q, r in [(0.1, 0.05), (0.95, 0.95)]:
        for _ in range(100):
            fit = simulate_fit(q, r, rng)
            assert 0.60 <= fit.cfi <= 0.99
            assert 0.01 <= fit.rmsea <= 0.20


def test_zero_noise_values() -> None:
    fit = compute_fit_indices(0.5, FitNoise.zero())
    assert fit.cfi == pytest.approx(0.85 + 0.07)
    assert fit.rmsea == pytest.approx(0.15 - 0.06)
