"""OpenAI-backed item suggester and definition critic."""

import json
import logging
from collections.abc import Sequence

import openai
from openai import AsyncOpenAI
from pydantic import BaseModel, ValidationError

from psychometrics_lab.collaborators.base import (
    DefinitionCritic,
    ItemSuggester,
)
from psychometrics_lab.core.data_models import (
    ConstructDefinition,
    ItemSuggestion,
)
from psychometrics_lab.core.exceptions import ExternalCollaboratorError

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-4o-mini"
DEFAULT_N_ITEMS = 5

ITEM_PROMPT = """\
You are an expert in psychometrics. Write questionnaire items (statements)
for a questionnaire measuring the construct "{name}".
Construct description: "{description}".

Write {n_items} unique Likert-scale items. One or two of them should be
negatively worded (reverse-keyed).
Do not repeat these items: {existing}.

Respond with a JSON object {{"items": [...]}} where each element has the
keys "text", "polarity" ("positive" or "negative") and "rationale" (a short
reason why it is a good psychometric item)."""

CRITIQUE_PROMPT = """\
As a professor of psychometrics, briefly (at most 2 sentences) assess this
construct definition: "{description}". Is it operational enough?"""


class _SuggestionList(BaseModel):
    items: list[ItemSuggestion]


class OpenAIItemSuggester(ItemSuggester):
    """Drafts items with an OpenAI chat model in JSON mode."""

    def __init__(
        self,
        client: AsyncOpenAI,
        model: str = DEFAULT_MODEL,
        n_items: int = DEFAULT_N_ITEMS,
        temperature: float = 0.7,
    ) -> None:
        self.client = client
        self.model = model
        self.n_items = n_items
        self.temperature = temperature

    def build_prompt(
        self, construct: ConstructDefinition, existing_items: Sequence[str]
    ) -> str:
        return ITEM_PROMPT.format(
            name=construct.name,
            description=construct.description,
            n_items=self.n_items,
            existing=", ".join(existing_items) or "(none)",
        )

    async def suggest_items(
        self,
        construct: ConstructDefinition,
        existing_items: Sequence[str],
    ) -> list[ItemSuggestion]:
        prompt = self.build_prompt(construct, existing_items)
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
                temperature=self.temperature,
                response_format={"type": "json_object"},
            )
        except openai.OpenAIError as e:
            raise ExternalCollaboratorError(
                f"Item suggestion request failed: {e}"
            ) from e

        content = response.choices[0].message.content or "{}"
        try:
            parsed = _SuggestionList.model_validate(json.loads(content))
        except (json.JSONDecodeError, ValidationError) as e:
            raise ExternalCollaboratorError(
                f"Unparseable item suggestions: {e}"
            ) from e

        logger.info(
            "Model %s suggested %d items", self.model, len(parsed.items)
        )
        return parsed.items


class OpenAIDefinitionCritic(DefinitionCritic):
    def __init__(
        self,
        client: AsyncOpenAI,
        model: str = DEFAULT_MODEL,
        temperature: float = 0.3,
    ) -> None:
        self.client = client
        self.model = model
        self.temperature = temperature

    async def critique(self, description: str) -> str:
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {
                        "role": "user",
                        "content": CRITIQUE_PROMPT.format(
                            description=description
                        ),
                    }
                ],
                temperature=self.temperature,
                max_tokens=200,
            )
        except openai.OpenAIError as e:
            raise ExternalCollaboratorError(
                f"Definition critique request failed: {e}"
            ) from e
        return response.choices[0].message.content or ""


def create_openai_collaborators(
    api_key: str,
    model: str = DEFAULT_MODEL,
    timeout_seconds: float = 30.0,
) -> tuple[OpenAIItemSuggester, OpenAIDefinitionCritic]:
    """Build a suggester and critic sharing one client."""
    client = AsyncOpenAI(api_key=api_key, timeout=timeout_seconds)
    return (
        OpenAIItemSuggester(client, model=model),
        OpenAIDefinitionCritic(client, model=model),
    )
