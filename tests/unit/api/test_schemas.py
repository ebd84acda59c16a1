import pytest
from pydantic import ValidationError

from psychometrics_lab.api.schemas import (
    ItemCreateRequest,
    NormRequest,
    SimulationRequest,
    SimulationResponse,
)
from psychometrics_lab.core.data_models import Polarity
from psychometrics_lab.core.exceptions import InvalidInputError
from psychometrics_lab.core.utils import get_rng
from psychometrics_lab.items.pool import generic_items
from psychometrics_lab.norms.scales import ScaleType
from psychometrics_lab.simulation.config import SimulationParameters
from psychometrics_lab.simulation.engine import run_simulation


class TestSimulationRequest:
    def test_defaults_to_classroom_scenario(self) -> None:
        assert SimulationRequest().to_domain() == SimulationParameters()

    def test_to_domain_validates(self) -> None:
        request = SimulationRequest(item_cohesion=0.9)
        with pytest.raises(InvalidInputError, match="item_cohesion"):
            request.to_domain()


def test_item_create_defaults_to_positive() -> None:
    request = ItemCreateRequest(text="I keep a gratitude journal.")
    assert request.polarity is Polarity.POSITIVE


def test_item_create_blank_rejected() -> None:
    with pytest.raises(ValidationError):
        ItemCreateRequest(text="")


def test_norm_request_parses_scale() -> None:
    request = NormRequest.model_validate({"raw_score": 20, "scale": "tscore"})
    assert request.scale is ScaleType.TSCORE


def test_norm_request_unknown_scale() -> None:
    with pytest.raises(ValidationError):
        NormRequest.model_validate({"raw_score": 20, "scale": "iq"})


def test_simulation_response_from_result() -> None:
    items = generic_items(10)
    result = run_simulation(items, SimulationParameters(), get_rng(42))
    response = SimulationResponse.from_result(result, run_id=3)

    assert response.run_id == 3
    assert len(response.item_diagnostics) == 10
    assert len(response.item_correlations) == 10
    assert response.fit_acceptable == response.fit_verdict.acceptable

    dumped = response.model_dump(mode="json")
    assert dumped["result"]["parameters"]["sample_size"] == 200
    assert dumped["reliability_band"] in {
        "excellent",
        "good",
        "questionable",
        "poor",
    }
