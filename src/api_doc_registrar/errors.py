"""Exception hierarchy for registration, dispatch and manifest failures.

Reflection and path assembly never raise for bad data; they degrade to
generic schemas. These errors cover the remaining failure modes, each with
the HTTP status a serving layer should answer with.
"""


class RegistrarError(Exception):
    """Base exception for api-doc-registrar errors."""

    code = "registrar_error"
    http_status = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UnsupportedFormatError(RegistrarError):
    code = "unsupported_format"
    http_status = 400

    def __init__(self, format_key: str):
        super().__init__(f"Unsupported format: {format_key}")
        self.format_key = format_key


class UnknownApiError(RegistrarError):
    code = "unknown_api"
    http_status = 404

    def __init__(self, api_id: str):
        super().__init__(
            f"unknown API '{api_id}' - it must be registered before it can be mounted"
        )
        self.api_id = api_id


class ApiPathConflictError(RegistrarError):
    code = "api_path_conflict"
    http_status = 409

    def __init__(self, api_id: str, existing_path: str, path: str):
        super().__init__(
            f"API '{api_id}' is already registered at path '{existing_path}', "
            f"cannot register at '{path}'"
        )
        self.api_id = api_id
        self.existing_path = existing_path
        self.path = path


class ManifestError(RegistrarError):
    code = "invalid_manifest"
    http_status = 422
