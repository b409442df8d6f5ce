from typing import Annotated, Any, Literal

from pydantic import AnyUrl, BeforeValidator, HttpUrl, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


def parse_cors(v: Any) -> list[str] | str:
    if isinstance(v, str) and not v.startswith("["):
        return [i.strip() for i in v.split(",") if i.strip()]
    elif isinstance(v, list | str):
        return v
    raise ValueError(v)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )
    PROJECT_NAME: str = "code-executor"
    API_V1_STR: str = "/api/v1"
    ENVIRONMENT: Literal["local", "staging", "production"] = "local"
    SENTRY_DSN: HttpUrl | None = None
    LOG_LEVEL: str = "INFO"

    BACKEND_CORS_ORIGINS: Annotated[
        list[AnyUrl] | str, BeforeValidator(parse_cors)
    ] = []

    @computed_field  # type: ignore[prop-decorator]
    @property
    def all_cors_origins(self) -> list[str]:
        return [str(origin).rstrip("/") for origin in self.BACKEND_CORS_ORIGINS]

    # Script engine
    SCRIPT_EXEC_TIMEOUT_MS: int = 30000
    SCRIPT_MAX_TIMEOUT_MS: int = 300000

    # Memory backend: "memory" (in-process GraphStore) or "remote" (HTTP tool service)
    MEMORY_BACKEND: Literal["memory", "remote"] = "memory"
    MEMORY_REMOTE_URL: str = "http://localhost:8100"
    MEMORY_REMOTE_TIMEOUT: float = 30.0

    # Initial graph contents (in-memory backend only)
    GRAPH_SEED_FILE: str | None = None
    GRAPH_SEED_RECORDS: int = 0


settings = Settings()  # type: ignore
