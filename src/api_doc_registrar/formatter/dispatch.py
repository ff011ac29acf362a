"""Format key lookup.

Two entry points with different contracts for unknown keys:
resolve_formatter_strict() fails closed, resolve_formatter_or_default()
falls back to OpenAPI 3.0.
"""

import logging

from api_doc_registrar.errors import UnsupportedFormatError
from api_doc_registrar.formatter.base import Formatter
from api_doc_registrar.formatter.openapi import OpenAPIv30Formatter, OpenAPIv31Formatter
from api_doc_registrar.formatter.viewer import RedocFormatter, SwaggerUIFormatter
from api_doc_registrar.spec_url import ui_spec_url

logger = logging.getLogger(__name__)

DOCUMENT_FORMATS = {
    "openapi-v3.0": OpenAPIv30Formatter,
    "openapi-3.0": OpenAPIv30Formatter,
    "openapi": OpenAPIv30Formatter,
    "openapi-v3.1": OpenAPIv31Formatter,
    "openapi-3.1": OpenAPIv31Formatter,
}

VIEWER_FORMATS = {
    "swagger-ui": SwaggerUIFormatter,
    "swaggerui": SwaggerUIFormatter,
    "redoc": RedocFormatter,
    "redoc-ui": RedocFormatter,
}


def available_formats() -> list[str]:
    return ["openapi-v3.0", "openapi-v3.1", "swagger-ui", "redoc"]


def is_viewer_format(format_key: str) -> bool:
    return format_key in VIEWER_FORMATS


def resolve_formatter_strict(
    format_key: str,
    spec_url: str | None = None,
    server_url: str | None = None,
    **document_options,
) -> Formatter:
    """Return the formatter for a key, raising UnsupportedFormatError if unknown.

    `spec_url` configures viewers; `server_url` and `document_options`
    (title, description, version) configure OpenAPI documents.
    """
    if format_key in VIEWER_FORMATS:
        return VIEWER_FORMATS[format_key](spec_url=spec_url)
    if format_key in DOCUMENT_FORMATS:
        return DOCUMENT_FORMATS[format_key](server_url=server_url, **document_options)
    raise UnsupportedFormatError(format_key)


def resolve_formatter_or_default(
    format_key: str,
    current_path: str = "",
    server_url: str | None = None,
    **document_options,
) -> Formatter:
    """Return the formatter for a key, defaulting to OpenAPI 3.0.

    Viewers point at the `openapi.json` next to `current_path`. Document
    options are the same as for resolve_formatter_strict().
    """
    if format_key in VIEWER_FORMATS:
        return VIEWER_FORMATS[format_key](spec_url=ui_spec_url(current_path))
    if format_key not in DOCUMENT_FORMATS:
        logger.info(
            "unsupported format %s, falling back to openapi-v3.0", format_key,
            extra={"format_key": format_key},
        )
    formatter_cls = DOCUMENT_FORMATS.get(format_key, OpenAPIv30Formatter)
    return formatter_cls(server_url=server_url, **document_options)
