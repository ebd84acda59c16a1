from functools import lru_cache

from fastapi import Request

from psychometrics_lab.api.config import ApiSettings
from psychometrics_lab.collaborators.base import (
    DefinitionCritic,
    ItemSuggester,
    OfflineDefinitionCritic,
    OfflineItemSuggester,
)
from psychometrics_lab.core.paths import get_project_version
from psychometrics_lab.core.utils import get_rng
from psychometrics_lab.session import SessionState


@lru_cache(maxsize=1)
def get_settings() -> ApiSettings:
    return ApiSettings()


def create_collaborators(
    settings: ApiSettings,
) -> tuple[ItemSuggester, DefinitionCritic]:
    if not settings.llm_api_key:
        return OfflineItemSuggester(), OfflineDefinitionCritic()

    from psychometrics_lab.collaborators.openai_client import (
        create_openai_collaborators,
    )

    return create_openai_collaborators(
        api_key=settings.llm_api_key,
        model=settings.llm_model,
        timeout_seconds=settings.llm_timeout_seconds,
    )


def create_session(settings: ApiSettings) -> SessionState:
    suggester, critic = create_collaborators(settings)
    return SessionState(
        rng=get_rng(settings.random_seed),
        suggester=suggester,
        critic=critic,
    )


def get_session(request: Request) -> SessionState:
    session: SessionState = request.app.state.session
    return session


def get_app_settings(request: Request) -> ApiSettings:
    settings: ApiSettings = request.app.state.settings
    return settings


def get_version() -> str:
    return get_project_version()
