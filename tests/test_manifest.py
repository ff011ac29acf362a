from pathlib import Path

import pytest

from api_doc_registrar.errors import ApiPathConflictError, ManifestError, UnknownApiError
from api_doc_registrar.manifest import load_manifest, resolve_payload
from api_doc_registrar.registry import ApiRegistry
from payloads import UpstreamStatus

FIXTURES = Path(__file__).parent / "fixtures"


class TestLoadManifest:
    def test_registers_specs(self):
        registry = ApiRegistry()
        ids = load_manifest(FIXTURES / "status_api.yaml", registry)
        assert ids == ["failover_api", "caddy_api"]
        spec = registry.get_spec("failover_api")
        assert len(spec.endpoints) == 3
        assert spec.endpoints[1].path_params[0].required is True

    def test_payload_references_imported(self):
        registry = ApiRegistry()
        load_manifest(FIXTURES / "status_api.yaml", registry)
        status = registry.get_spec("failover_api").endpoints[0]
        assert status.responses[200].body is UpstreamStatus

    def test_mounts(self):
        registry = ApiRegistry()
        load_manifest(FIXTURES / "status_api.yaml", registry)
        assert registry.get_config("failover_api").path == "/caddy/failover"
        assert registry.is_configured("failover_api")
        assert not registry.is_configured("caddy_api")

    def test_invalid_yaml(self, tmp_path):
        f = tmp_path / "bad.yaml"
        f.write_text("apis: [unclosed\n")
        with pytest.raises(ManifestError, match="invalid YAML"):
            load_manifest(f, ApiRegistry())

    def test_invalid_spec(self, tmp_path):
        f = tmp_path / "bad.yaml"
        f.write_text("apis:\n  - id: x\n    title: X\n")
        with pytest.raises(ManifestError, match="invalid API spec 'x'"):
            load_manifest(f, ApiRegistry())

    def test_invalid_method(self, tmp_path):
        f = tmp_path / "bad.yaml"
        f.write_text(
            "apis:\n  - id: x\n    title: X\n    version: '1'\n"
            "    endpoints:\n      - method: TRACE\n        path: /t\n"
        )
        with pytest.raises(ManifestError):
            load_manifest(f, ApiRegistry())

    def test_mount_without_spec(self, tmp_path):
        f = tmp_path / "mount.yaml"
        f.write_text("mounts:\n  - id: ghost_api\n    path: /ghost\n")
        with pytest.raises(UnknownApiError):
            load_manifest(f, ApiRegistry())

    def test_mount_path_conflict(self, tmp_path):
        f = tmp_path / "conflict.yaml"
        f.write_text("mounts:\n  - id: failover_api\n    path: /elsewhere\n")
        registry = ApiRegistry()
        load_manifest(FIXTURES / "status_api.yaml", registry)
        with pytest.raises(ApiPathConflictError):
            load_manifest(f, registry)

    def test_mount_without_id(self, tmp_path):
        f = tmp_path / "mount.yaml"
        f.write_text("mounts:\n  - path: /ghost\n")
        with pytest.raises(ManifestError, match="without an id"):
            load_manifest(f, ApiRegistry())

    def test_empty_apis_key(self, tmp_path):
        f = tmp_path / "empty_apis.yaml"
        f.write_text("apis:\nmounts:\n")
        assert load_manifest(f, ApiRegistry()) == []

    def test_scalar_mount_entry(self, tmp_path):
        f = tmp_path / "mount.yaml"
        f.write_text("mounts:\n  - foo\n")
        with pytest.raises(ManifestError, match="'mounts' entries must be mappings"):
            load_manifest(f, ApiRegistry())

    def test_apis_not_a_list(self, tmp_path):
        f = tmp_path / "bad.yaml"
        f.write_text("apis: failover_api\n")
        with pytest.raises(ManifestError, match="'apis' must be a list"):
            load_manifest(f, ApiRegistry())

    def test_response_without_value(self, tmp_path):
        f = tmp_path / "bad.yaml"
        f.write_text(
            "apis:\n  - id: x\n    title: X\n    version: '1'\n"
            "    endpoints:\n      - method: GET\n        path: /t\n"
            "        responses:\n          200:\n"
        )
        with pytest.raises(ManifestError, match="response 200 of 'x' must be a mapping"):
            load_manifest(f, ApiRegistry())

    def test_empty_file(self, tmp_path):
        f = tmp_path / "empty.yaml"
        f.write_text("")
        assert load_manifest(f, ApiRegistry()) == []


class TestResolvePayload:
    def test_import_reference(self):
        assert resolve_payload("payloads:UpstreamStatus") is UpstreamStatus

    def test_plain_values_pass_through(self):
        assert resolve_payload("string") == "string"
        assert resolve_payload({"a": 1}) == {"a": 1}
        assert resolve_payload(None) is None

    def test_missing_module(self):
        with pytest.raises(ManifestError, match="cannot import payload type"):
            resolve_payload("no_such_module_xyz:Thing")

    def test_missing_attribute(self):
        with pytest.raises(ManifestError):
            resolve_payload("payloads:NoSuchType")
