"""Resolve where viewers fetch the OpenAPI document and which server it names."""

SPEC_FILE = "/openapi.json"


def resolve_spec_url(spec_url: str | None, request_path: str) -> str:
    """Resolve a viewer's configured spec URL against the page's request path.

    No URL: the document lives under the page, /api/docs/ -> /api/docs/openapi.json.
    "./openapi.json" and "../openapi.json" resolve relative to the request
    path; other URLs are returned as given.
    """
    if not spec_url:
        base = request_path
        if len(base) > 1 and base.endswith("/"):
            base = base[:-1]
        return base + SPEC_FILE
    if spec_url == "./openapi.json":
        return request_path + SPEC_FILE
    if spec_url == "../openapi.json":
        idx = request_path.rfind("/")
        if idx > 0:
            return request_path[:idx] + SPEC_FILE
        return SPEC_FILE
    return spec_url


def ui_spec_url(current_path: str) -> str:
    """Spec URL for a viewer served at current_path: /docs/swagger -> /docs/openapi.json."""
    base = current_path.removesuffix("/")
    idx = base.rfind("/")
    if idx >= 0:
        base = base[:idx]
    return base + SPEC_FILE


def detect_server_url(host: str, tls: bool = False, forwarded_proto: str | None = None) -> str:
    """Server URL as seen by the client; X-Forwarded-Proto wins over the TLS flag."""
    scheme = "https" if tls else "http"
    if forwarded_proto:
        scheme = forwarded_proto
    return f"{scheme}://{host}"
