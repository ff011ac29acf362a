"""HTML viewers that load the OpenAPI document from a URL.

The spec URL lands in a different context in each page, so each viewer
escapes it for its own context: a JavaScript string literal for Swagger UI,
a single-quoted HTML attribute for Redoc.
"""

import json
from string import Template
from typing import TextIO

from api_doc_registrar.formatter.base import Formatter
from api_doc_registrar.registry import RegistrySnapshot

DEFAULT_SPEC_URL = "./openapi.json"

SWAGGER_UI_VERSION = "5.11.0"
REDOC_VERSION = "2.1.3"

SWAGGER_UI_TEMPLATE = Template("""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <title>API Documentation - Swagger UI</title>
    <link rel="stylesheet" href="https://cdn.jsdelivr.net/npm/swagger-ui-dist@$version/swagger-ui.css">
    <style>
        html {
            box-sizing: border-box;
            overflow: -moz-scrollbars-vertical;
            overflow-y: scroll;
        }
        *, *:before, *:after {
            box-sizing: inherit;
        }
        body {
            margin: 0;
            background: #fafafa;
        }
    </style>
</head>
<body>
    <div id="swagger-ui"></div>
    <script src="https://cdn.jsdelivr.net/npm/swagger-ui-dist@$version/swagger-ui-bundle.js"></script>
    <script src="https://cdn.jsdelivr.net/npm/swagger-ui-dist@$version/swagger-ui-standalone-preset.js"></script>
    <script>
        window.onload = function() {
            window.ui = SwaggerUIBundle({
                url: $spec_url,
                dom_id: '#swagger-ui',
                deepLinking: true,
                presets: [
                    SwaggerUIBundle.presets.apis,
                    SwaggerUIStandalonePreset
                ],
                plugins: [
                    SwaggerUIBundle.plugins.DownloadUrl
                ],
                layout: "StandaloneLayout",
                validatorUrl: null,
                tryItOutEnabled: true,
                supportedSubmitMethods: ['get', 'post', 'put', 'delete', 'patch']
            });
        };
    </script>
</body>
</html>""")

REDOC_TEMPLATE = Template("""<!DOCTYPE html>
<html>
<head>
    <title>API Documentation - Redoc</title>
    <meta charset="utf-8"/>
    <meta name="viewport" content="width=device-width, initial-scale=1">
    <style>
        body {
            margin: 0;
            padding: 0;
        }
    </style>
</head>
<body>
    <redoc spec-url='$spec_url'></redoc>
    <script src="https://cdn.jsdelivr.net/npm/redoc@$version/bundles/redoc.standalone.js"></script>
</body>
</html>""")

# json.dumps already escapes non-ASCII; these could still close the <script> element.
_SCRIPT_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
}


def script_string_literal(value: str) -> str:
    """JSON-encode a string so it is safe inside an inline script."""
    literal = json.dumps(value)
    for char, escape in _SCRIPT_ESCAPES.items():
        literal = literal.replace(char, escape)
    return literal


def single_quoted_attribute(value: str) -> str:
    return value.replace("'", "&#39;")


class _ViewerFormatter(Formatter):
    content_type = "text/html; charset=utf-8"

    def __init__(self, spec_url: str | None = None):
        self.spec_url = spec_url or DEFAULT_SPEC_URL

    def write(self, document: str, sink: TextIO) -> None:
        if not isinstance(document, str):
            raise TypeError(f"expected string HTML, got {type(document).__name__}")
        sink.write(document)


class SwaggerUIFormatter(_ViewerFormatter):
    """Swagger UI page."""

    def render(self, snapshot: RegistrySnapshot) -> str:
        return SWAGGER_UI_TEMPLATE.substitute(
            version=SWAGGER_UI_VERSION,
            spec_url=script_string_literal(self.spec_url),
        )


class RedocFormatter(_ViewerFormatter):
    """Redoc page."""

    def render(self, snapshot: RegistrySnapshot) -> str:
        return REDOC_TEMPLATE.substitute(
            version=REDOC_VERSION,
            spec_url=single_quoted_attribute(self.spec_url),
        )
