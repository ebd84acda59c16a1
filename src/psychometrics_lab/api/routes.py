from fastapi import APIRouter, Depends, Response

from psychometrics_lab.api.config import ApiSettings
from psychometrics_lab.api.dependencies import (
    get_app_settings,
    get_session,
    get_version,
)
from psychometrics_lab.api.errors import (
    NoSimulationResultError,
    PoolSizeExceededError,
)
from psychometrics_lab.api.schemas import (
    ConstructRequest,
    ContentValidityResponse,
    CritiqueResponse,
    HealthResponse,
    HistoryResponse,
    ItemCreateRequest,
    ItemListResponse,
    ItemUpdateRequest,
    NormRequest,
    NormResponse,
    SimulationRequest,
    SimulationResponse,
    SuggestionsResponse,
)
from psychometrics_lab.core.constructs import EXAMPLE_CONSTRUCTS
from psychometrics_lab.core.data_models import ConstructDefinition, TestItem
from psychometrics_lab.norms.transform import (
    population_curves,
    result_display_range,
    scale_boundaries,
)
from psychometrics_lab.session import SessionState

router = APIRouter(prefix="/api/v1")


@router.get("/health")
async def health_check(
    version: str = Depends(get_version),
) -> HealthResponse:
    return HealthResponse(version=version)


# --- Construct ---


@router.put("/construct")
async def set_construct(
    request: ConstructRequest,
    session: SessionState = Depends(get_session),
) -> ConstructDefinition:
    return session.set_construct(request.name, request.description)


@router.get("/construct/examples")
async def list_example_constructs() -> list[ConstructDefinition]:
    return list(EXAMPLE_CONSTRUCTS)


@router.post("/construct/example")
async def use_example_construct(
    session: SessionState = Depends(get_session),
) -> ConstructDefinition:
    """Fill the construct with a randomly drawn example."""
    return session.use_example_construct()


@router.post("/construct/critique")
async def critique_construct(
    session: SessionState = Depends(get_session),
) -> CritiqueResponse:
    critique = await session.critique_construct()
    return CritiqueResponse(ready=critique is not None, critique=critique)


# --- Items ---


def _remaining_capacity(
    session: SessionState, settings: ApiSettings
) -> int:
    remaining = settings.max_items - len(session.pool)
    if remaining <= 0:
        raise PoolSizeExceededError(settings.max_items)
    return remaining


@router.get("/items")
async def list_items(
    session: SessionState = Depends(get_session),
) -> ItemListResponse:
    return ItemListResponse(
        items=list(session.pool.items),
        content_validity_status=session.pool.panel.status,
    )


@router.post("/items", status_code=201)
async def add_item(
    request: ItemCreateRequest,
    session: SessionState = Depends(get_session),
    settings: ApiSettings = Depends(get_app_settings),
) -> TestItem:
    _remaining_capacity(session, settings)
    return session.pool.add_manual(request.text, request.polarity)


@router.post("/items/suggestions", status_code=201)
async def suggest_items(
    session: SessionState = Depends(get_session),
    settings: ApiSettings = Depends(get_app_settings),
) -> SuggestionsResponse:
    remaining = _remaining_capacity(session, settings)
    added = await session.request_suggestions(limit=remaining)
    return SuggestionsResponse(added=added)


@router.post("/items/content-validity")
async def evaluate_content_validity(
    session: SessionState = Depends(get_session),
) -> ContentValidityResponse:
    verdict = session.evaluate_content_validity()
    return ContentValidityResponse(
        status=session.pool.panel.status, verdict=verdict
    )


@router.get("/items/content-validity")
async def read_content_validity(
    session: SessionState = Depends(get_session),
) -> ContentValidityResponse:
    # Report STALE once before the read consumes it
    status = session.pool.panel.status
    verdict = session.pool.panel.read()
    return ContentValidityResponse(status=status, verdict=verdict)


@router.patch("/items/{item_id}")
async def edit_item(
    item_id: str,
    request: ItemUpdateRequest,
    session: SessionState = Depends(get_session),
) -> TestItem:
    return session.pool.edit_text(item_id, request.text)


@router.delete("/items/{item_id}", status_code=204)
async def remove_item(
    item_id: str,
    session: SessionState = Depends(get_session),
) -> Response:
    session.pool.remove(item_id)
    return Response(status_code=204)


# --- Simulation ---


@router.post("/simulations", status_code=201)
async def run_simulation(
    request: SimulationRequest,
    session: SessionState = Depends(get_session),
) -> SimulationResponse:
    result, run = session.run(request.to_domain())
    return SimulationResponse.from_result(result, run.run_id)


@router.get("/simulations/latest")
async def get_latest_simulation(
    session: SessionState = Depends(get_session),
) -> SimulationResponse:
    result = session.latest_result
    if result is None:
        raise NoSimulationResultError
    return SimulationResponse.from_result(
        result, session.history.runs[-1].run_id
    )


@router.get("/simulations/history")
async def get_history(
    session: SessionState = Depends(get_session),
) -> HistoryResponse:
    return HistoryResponse(runs=list(session.history.runs))


@router.post("/norms")
async def compute_norm_score(
    request: NormRequest,
    session: SessionState = Depends(get_session),
) -> NormResponse:
    result = session.latest_result
    if result is None:
        raise NoSimulationResultError
    score = session.norm_score(request.raw_score, request.scale)
    return NormResponse(
        score=score,
        display_range=result_display_range(result),
        boundaries=list(scale_boundaries(result, request.scale)),
        curves=list(population_curves(result)),
    )


@router.post("/session/reset", status_code=204)
async def reset_session(
    session: SessionState = Depends(get_session),
) -> Response:
    session.reset()
    return Response(status_code=204)
