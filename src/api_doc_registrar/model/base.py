"""Format-agnostic data models describing the API surface of a module.

Modules build an ApiSpec once during startup and hand it to the registry.
Formatters read these models and never modify them.
"""

from typing import Any, Callable

from pydantic import BaseModel, ConfigDict, Field, field_validator

HTTP_METHODS = ("GET", "POST", "PUT", "PATCH", "DELETE")


class Parameter(BaseModel):
    """A single path, query, or header parameter."""

    name: str
    description: str = ""
    required: bool = False
    type: str = "string"  # string / integer / number / boolean / array / object
    format: str | None = None  # date-time, email, ...
    pattern: str | None = None
    enum: list[str] | None = None
    default: Any = None
    example: Any = None


class ResponseDef(BaseModel):
    """Response for one status code. `body` is any reflectable payload."""

    description: str
    body: Any = None
    headers: list[Parameter] = []


class Endpoint(BaseModel):
    """A single endpoint, path relative to the API's mount point."""

    model_config = ConfigDict(frozen=True)

    method: str  # GET / POST / PUT / PATCH / DELETE
    path: str  # /status or /config/{path}
    summary: str = ""
    description: str = ""
    request: Any = None
    responses: dict[int, ResponseDef] = {}
    path_params: list[Parameter] = []
    query_params: list[Parameter] = []
    headers: list[Parameter] = []

    @field_validator("method")
    @classmethod
    def normalize_method(cls, v: str) -> str:
        method = v.upper()
        if method not in HTTP_METHODS:
            raise ValueError(f"unsupported HTTP method: {v}")
        return method


class ApiSpec(BaseModel):
    """A module's self-description of the endpoints it exposes."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    version: str
    description: str = ""
    endpoints: list[Endpoint] = []


class ApiConfig(BaseModel):
    """Where a registered API is mounted and whether it is documented."""

    model_config = ConfigDict(frozen=True)

    path: str = Field(min_length=1)
    enabled: bool = True
    title: str | None = None
    version: str | None = None
    headers: dict[str, str] = {}


ApiSpecFactory = Callable[[], ApiSpec]
