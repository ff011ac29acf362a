"""YAML manifest loader that registers API specs and mounts from a file.

Payload fields (`request`, response `body`) may name a Python type as
"module:attribute"; it is imported and reflected like any other payload.
"""

import importlib
import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from api_doc_registrar.errors import ManifestError
from api_doc_registrar.model.base import ApiConfig, ApiSpec
from api_doc_registrar.registry import ApiRegistry

logger = logging.getLogger(__name__)


def load_manifest(file_path: Path, registry: ApiRegistry) -> list[str]:
    """Register every API of a manifest file. Returns the registered API ids."""
    text = file_path.read_text(encoding="utf-8")
    try:
        doc = yaml.safe_load(text) or {}
    except yaml.YAMLError as e:
        raise ManifestError(f"{file_path}: invalid YAML: {e}") from e
    if not isinstance(doc, dict):
        raise ManifestError(f"{file_path}: expected a mapping at the top level")

    api_ids = []
    for raw in _entries(doc, "apis", file_path):
        spec = _parse_spec(raw, file_path)
        registry.register_spec(spec.id, spec)
        api_ids.append(spec.id)

    for raw in _entries(doc, "mounts", file_path):
        raw = dict(raw)
        api_id = raw.pop("id", None)
        if not api_id:
            raise ManifestError(f"{file_path}: mount entry without an id")
        try:
            config = ApiConfig(**raw)
        except ValidationError as e:
            raise ManifestError(f"{file_path}: invalid mount for '{api_id}': {e}") from e
        registry.mount_api(api_id, config)

    logger.info("loaded %d APIs from %s", len(api_ids), file_path)
    return api_ids


def _parse_spec(raw: dict, file_path: Path) -> ApiSpec:
    endpoints = []
    api_id = raw.get("id", "?")
    for ep in _entries(raw, "endpoints", file_path):
        ep = dict(ep)
        if "request" in ep:
            ep["request"] = resolve_payload(ep["request"])
        responses = {}
        responses_raw = ep.get("responses") or {}
        if not isinstance(responses_raw, dict):
            raise ManifestError(f"{file_path}: responses of '{api_id}' must be a mapping")
        for status, resp in responses_raw.items():
            if not isinstance(resp, dict):
                raise ManifestError(f"{file_path}: response {status} of '{api_id}' must be a mapping")
            resp = dict(resp)
            if "body" in resp:
                resp["body"] = resolve_payload(resp["body"])
            responses[status] = resp
        ep["responses"] = responses
        endpoints.append(ep)

    try:
        return ApiSpec(**{**raw, "endpoints": endpoints})
    except ValidationError as e:
        raise ManifestError(f"{file_path}: invalid API spec '{api_id}': {e}") from e


def resolve_payload(value):
    """Import "module:attribute" references; other values pass through unchanged."""
    if not isinstance(value, str) or ":" not in value:
        return value
    module_name, _, attr = value.partition(":")
    try:
        module = importlib.import_module(module_name)
        return getattr(module, attr)
    except (ImportError, AttributeError) as e:
        raise ManifestError(f"cannot import payload type '{value}': {e}") from e


def _entries(doc: dict, key: str, file_path: Path) -> list[dict]:
    # An empty key ("apis:") loads as None.
    entries = doc.get(key) or []
    if not isinstance(entries, list):
        raise ManifestError(f"{file_path}: '{key}' must be a list")
    for entry in entries:
        if not isinstance(entry, dict):
            raise ManifestError(f"{file_path}: '{key}' entries must be mappings, got {entry!r}")
    return entries
