"""OpenAPI 3.0 and 3.1 document formatters."""

import json
import logging
from typing import TextIO

from api_doc_registrar.formatter.assembler import PathAssembler
from api_doc_registrar.formatter.base import Formatter
from api_doc_registrar.formatter.document import Components, Info, OpenAPIDocument, Server
from api_doc_registrar.reflect.reflector import SchemaReflector
from api_doc_registrar.registry import RegistrySnapshot

logger = logging.getLogger(__name__)

DEFAULT_SERVER_URL = "http://localhost"
DEFAULT_TITLE = "Server API"
DEFAULT_DESCRIPTION = "Server administration and module APIs"
DEFAULT_VERSION = "2.0.0"


class OpenAPIv30Formatter(Formatter):
    """Formats the registered APIs as one OpenAPI 3.0 document."""

    content_type = "application/json"
    openapi_version = "3.0.3"

    def __init__(
        self,
        server_url: str | None = None,
        title: str = DEFAULT_TITLE,
        description: str = DEFAULT_DESCRIPTION,
        version: str = DEFAULT_VERSION,
    ):
        self.server_url = server_url
        self.title = title
        self.description = description
        self.version = version

    def render(self, snapshot: RegistrySnapshot) -> OpenAPIDocument:
        reflector = SchemaReflector()
        paths = PathAssembler(reflector).build(snapshot)
        logger.debug("rendered %d paths for OpenAPI %s", len(paths), self.openapi_version)

        return OpenAPIDocument(
            openapi=OpenAPIv30Formatter.openapi_version,
            info=Info(title=self.title, description=self.description or None, version=self.version),
            servers=[Server(url=self.server_url or DEFAULT_SERVER_URL, description="Default server")],
            paths=paths,
            components=Components(schemas=reflector.components),
        )

    def write(self, document: OpenAPIDocument, sink: TextIO) -> None:
        json.dump(document.to_dict(), sink, indent=2)
        sink.write("\n")


class OpenAPIv31Formatter(OpenAPIv30Formatter):
    """OpenAPI 3.1: the 3.0 document with its version field replaced."""

    openapi_version = "3.1.0"

    def render(self, snapshot: RegistrySnapshot) -> OpenAPIDocument:
        document = super().render(snapshot)
        return document.model_copy(update={"openapi": self.openapi_version})
