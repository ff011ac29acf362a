"""OpenAPI 3.x document object graph.

Empty optional members are left as None so that `to_dict()` drops them.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from api_doc_registrar.model.schema import Schema


class _Node(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class Info(_Node):
    title: str
    description: str | None = None
    version: str


class Server(_Node):
    url: str
    description: str | None = None


class MediaType(_Node):
    schema_: Schema | None = Field(default=None, alias="schema")
    example: Any = None


class ParameterObject(_Node):
    name: str
    in_: str = Field(alias="in")  # path / query / header
    description: str | None = None
    required: bool | None = None
    schema_: Schema = Field(alias="schema")
    example: Any = None


class RequestBody(_Node):
    description: str | None = None
    content: dict[str, MediaType]
    required: bool | None = None


class Response(_Node):
    description: str
    content: dict[str, MediaType] | None = None


class Operation(_Node):
    summary: str | None = None
    description: str | None = None
    operation_id: str | None = Field(default=None, alias="operationId")
    parameters: list[ParameterObject] | None = None
    request_body: RequestBody | None = Field(default=None, alias="requestBody")
    responses: dict[str, Response]


class PathItem(_Node):
    """Operations registered at one concrete path, at most one per method."""

    get: Operation | None = None
    post: Operation | None = None
    put: Operation | None = None
    patch: Operation | None = None
    delete: Operation | None = None


class Components(_Node):
    schemas: dict[str, Schema] = {}


class OpenAPIDocument(_Node):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    openapi: str
    info: Info
    servers: list[Server] = []
    paths: dict[str, PathItem] = {}
    components: Components = Field(default_factory=Components)

    def to_dict(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)
