from pydantic_settings import BaseSettings

PSYLAB_ENV_PREFIX = "PSYLAB_"


class ApiSettings(BaseSettings):
    model_config = {"env_prefix": PSYLAB_ENV_PREFIX}

    host: str = "127.0.0.1"
    port: int = 8000
    random_seed: int | None = None
    max_items: int = 200
    llm_api_key: str | None = None
    llm_model: str = "gpt-4o-mini"
    llm_timeout_seconds: float = 30.0
