"""Merges the registered specs into a single path -> PathItem map."""

import logging

from api_doc_registrar.formatter.document import (
    MediaType,
    Operation,
    ParameterObject,
    PathItem,
    RequestBody,
    Response,
)
from api_doc_registrar.model.base import Endpoint, Parameter
from api_doc_registrar.model.schema import Schema
from api_doc_registrar.reflect.reflector import SchemaReflector
from api_doc_registrar.registry import RegistrySnapshot

logger = logging.getLogger(__name__)

JSON_CONTENT = "application/json"


def operation_id(api_id: str, method: str, path: str) -> str:
    """Build an operation id such as `failover_api_get_status_name`.

    Not unique when two endpoints of one API clean to the same path.
    """
    clean = path.replace("/", "_").replace("{", "").replace("}", "")
    clean = clean.removeprefix("_")
    return f"{api_id}_{method.lower()}_{clean}"


class PathAssembler:
    """Builds the merged path map of all enabled, registered APIs."""

    def __init__(self, reflector: SchemaReflector | None = None):
        self.reflector = reflector or SchemaReflector()

    def build(self, snapshot: RegistrySnapshot) -> dict[str, PathItem]:
        paths: dict[str, PathItem] = {}

        for api_id in sorted(snapshot.configs):
            config = snapshot.configs[api_id]
            if not config.enabled:
                logger.debug("skipping disabled API %s", api_id)
                continue
            spec = snapshot.specs.get(api_id)
            if spec is None:
                logger.debug("skipping API %s: configured but no spec registered", api_id)
                continue

            for endpoint in spec.endpoints:
                full_path = config.path + endpoint.path
                item = paths.setdefault(full_path, PathItem())
                # Same method and path: the later endpoint wins.
                setattr(item, endpoint.method.lower(), self.create_operation(endpoint, spec.id))

        return paths

    def create_operation(self, endpoint: Endpoint, api_id: str) -> Operation:
        parameters = []
        for location, params in (
            ("path", endpoint.path_params),
            ("query", endpoint.query_params),
            ("header", endpoint.headers),
        ):
            for param in params:
                parameters.append(ParameterObject(
                    name=param.name,
                    in_=location,
                    description=param.description or None,
                    required=param.required or None,
                    schema_=self.parameter_schema(param),
                    example=param.example,
                ))

        request_body = None
        if endpoint.request is not None:
            request_body = RequestBody(
                description="Request body",
                required=True,
                content={JSON_CONTENT: MediaType(schema_=self.reflector.reflect(endpoint.request))},
            )

        responses = {}
        for status in sorted(endpoint.responses):
            definition = endpoint.responses[status]
            content = None
            if definition.body is not None:
                content = {JSON_CONTENT: MediaType(schema_=self.reflector.reflect(definition.body))}
            responses[str(status)] = Response(description=definition.description, content=content)

        if not responses:
            responses["200"] = Response(description="Successful response")

        return Operation(
            summary=endpoint.summary or None,
            description=endpoint.description or None,
            operation_id=operation_id(api_id, endpoint.method, endpoint.path),
            parameters=parameters or None,
            request_body=request_body,
            responses=responses,
        )

    def parameter_schema(self, param: Parameter) -> Schema:
        schema = self.reflector.reflect_type_name(param.type)
        if param.format:
            schema.format = param.format
        if param.pattern:
            schema.pattern = param.pattern
        if param.enum:
            schema.enum = list(param.enum)
        schema.description = param.description or None
        schema.default = param.default
        schema.example = param.example
        return schema
