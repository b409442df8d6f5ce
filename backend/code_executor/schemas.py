"""
Pydantic schemas for the execute API.
"""

from pydantic import BaseModel, ConfigDict, Field

from code_executor.core.config import settings


class ExecuteRequest(BaseModel):
    """Body for POST /execute and /execute/text."""

    code: str = Field(
        ...,
        description=(
            "Python code to execute. `memory` exposes async tools: read_graph(), "
            "create_entities([...]), create_relations([...]), add_observations([...]), "
            "delete_entities([names]), delete_observations([...]), delete_relations([...]), "
            "search_nodes(query), open_nodes([names]). Use `await` and print() for output."
        ),
    )
    timeout_ms: int | None = Field(
        default=None,
        gt=0,
        le=settings.SCRIPT_MAX_TIMEOUT_MS,
        description=f"Timeout in milliseconds (default: {settings.SCRIPT_EXEC_TIMEOUT_MS})",
    )


class ExecuteResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool
    output: list[str]
    error: str | None = None
    elapsed_ms: float = Field(alias="elapsedMs")


class ExecuteTextResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    text: str
    is_error: bool = Field(alias="isError")


class RecordCount(BaseModel):
    count: int
