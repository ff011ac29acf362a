from api_doc_registrar.formatter.assembler import PathAssembler, operation_id
from api_doc_registrar.model.base import ApiConfig, ApiSpec, Endpoint, Parameter, ResponseDef
from api_doc_registrar.registry import ApiRegistry
from payloads import ErrorResponse, UpstreamStatus


def _registry(*apis) -> ApiRegistry:
    """Build a registry from (api_id, base_path, enabled, endpoints) tuples."""
    registry = ApiRegistry()
    for api_id, base_path, enabled, endpoints in apis:
        registry.register_spec(api_id, ApiSpec(id=api_id, title=api_id, version="1.0", endpoints=endpoints))
        registry.configure_api(api_id, ApiConfig(path=base_path, enabled=enabled))
    return registry


def _build(registry: ApiRegistry) -> dict:
    paths = PathAssembler().build(registry.snapshot())
    return {path: item.model_dump(by_alias=True, exclude_none=True) for path, item in paths.items()}


class TestOperationId:
    def test_path_cleaned(self):
        assert operation_id("failover_api", "GET", "/status/{name}") == "failover_api_get_status_name"

    def test_method_lower_cased(self):
        assert operation_id("caddy_api", "POST", "/load") == "caddy_api_post_load"

    def test_colliding_paths_share_id(self):
        assert operation_id("api", "GET", "/items/{id}") == operation_id("api", "GET", "/items/id")


class TestPathMerging:
    def test_full_path_is_base_plus_endpoint(self):
        registry = _registry(("test_api", "/api/v1", True, [Endpoint(method="GET", path="/status")]))
        assert list(_build(registry)) == ["/api/v1/status"]

    def test_disabled_api_excluded(self):
        registry = _registry(
            ("on_api", "/on", True, [Endpoint(method="GET", path="/a")]),
            ("off_api", "/off", False, [Endpoint(method="GET", path="/b")]),
        )
        assert list(_build(registry)) == ["/on/a"]

    def test_spec_without_config_excluded(self):
        registry = ApiRegistry()
        registry.register_spec("test_api", ApiSpec(
            id="test_api", title="t", version="1", endpoints=[Endpoint(method="GET", path="/a")],
        ))
        assert _build(registry) == {}

    def test_config_without_spec_excluded(self):
        registry = ApiRegistry()
        registry.configure_api("test_api", ApiConfig(path="/api"))
        assert _build(registry) == {}

    def test_methods_share_path_item(self):
        registry = _registry(("test_api", "/api", True, [
            Endpoint(method="GET", path="/items"),
            Endpoint(method="POST", path="/items"),
        ]))
        item = _build(registry)["/api/items"]
        assert set(item) == {"get", "post"}

    def test_same_method_and_path_later_wins(self):
        registry = _registry(
            ("a_api", "/api", True, [Endpoint(method="GET", path="/status", summary="from a")]),
            ("b_api", "/api", True, [Endpoint(method="GET", path="/status", summary="from b")]),
        )
        get = _build(registry)["/api/status"]["get"]
        assert get["summary"] == "from b"
        assert get["operationId"] == "b_api_get_status"


class TestOperations:
    def test_default_response(self):
        registry = _registry(("test_api", "/api", True, [Endpoint(method="GET", path="/ping")]))
        responses = _build(registry)["/api/ping"]["get"]["responses"]
        assert responses == {"200": {"description": "Successful response"}}

    def test_declared_responses(self):
        registry = _registry(("test_api", "/api", True, [Endpoint(
            method="GET",
            path="/upstreams",
            responses={
                404: ResponseDef(description="Not found", body=ErrorResponse),
                200: ResponseDef(description="Upstreams", body=list[UpstreamStatus]),
            },
        )]))
        responses = _build(registry)["/api/upstreams"]["get"]["responses"]
        assert list(responses) == ["200", "404"]
        schema = responses["200"]["content"]["application/json"]["schema"]
        assert schema["type"] == "array"
        assert schema["items"]["properties"]["address"]["type"] == "string"
        assert responses["404"]["content"]["application/json"]["schema"]["required"] == ["error"]

    def test_response_without_body_has_no_content(self):
        registry = _registry(("test_api", "/api", True, [Endpoint(
            method="POST", path="/stop", responses={200: ResponseDef(description="Stopping")},
        )]))
        assert _build(registry)["/api/stop"]["post"]["responses"]["200"] == {"description": "Stopping"}

    def test_request_body(self):
        registry = _registry(("test_api", "/api", True, [Endpoint(
            method="PUT", path="/upstream", request=UpstreamStatus,
        )]))
        body = _build(registry)["/api/upstream"]["put"]["requestBody"]
        assert body["required"] is True
        assert body["description"] == "Request body"
        assert body["content"]["application/json"]["schema"]["type"] == "object"

    def test_no_request_body(self):
        registry = _registry(("test_api", "/api", True, [Endpoint(method="GET", path="/status")]))
        assert "requestBody" not in _build(registry)["/api/status"]["get"]

    def test_summary_and_description(self):
        registry = _registry(("test_api", "/api", True, [Endpoint(
            method="GET", path="/status", summary="Status", description="Current status",
        )]))
        get = _build(registry)["/api/status"]["get"]
        assert get["summary"] == "Status"
        assert get["description"] == "Current status"


class TestParameters:
    def test_parameter_locations_in_order(self):
        registry = _registry(("test_api", "/api", True, [Endpoint(
            method="GET",
            path="/items/{id}",
            path_params=[Parameter(name="id", type="integer", required=True)],
            query_params=[Parameter(name="limit", type="integer")],
            headers=[Parameter(name="X-Request-ID", description="Trace id")],
        )]))
        params = _build(registry)["/api/items/{id}"]["get"]["parameters"]
        assert [(p["name"], p["in"]) for p in params] == [
            ("id", "path"),
            ("limit", "query"),
            ("X-Request-ID", "header"),
        ]
        assert params[0]["required"] is True
        assert "required" not in params[1]
        assert params[0]["schema"] == {"type": "integer"}

    def test_parameter_modifiers(self):
        param = Parameter(
            name="sort",
            description="Sort order",
            type="string",
            format="token",
            pattern="^(asc|desc)$",
            enum=["asc", "desc"],
            default="asc",
            example="desc",
        )
        schema = PathAssembler().parameter_schema(param).to_dict()
        assert schema == {
            "type": "string",
            "format": "token",
            "pattern": "^(asc|desc)$",
            "enum": ["asc", "desc"],
            "description": "Sort order",
            "default": "asc",
            "example": "desc",
        }

    def test_pattern_does_not_replace_format(self):
        param = Parameter(name="id", type="string", format="uuid", pattern="^[0-9a-f-]+$")
        schema = PathAssembler().parameter_schema(param)
        assert schema.format == "uuid"
        assert schema.pattern == "^[0-9a-f-]+$"

    def test_example_carried_on_parameter(self):
        registry = _registry(("test_api", "/api", True, [Endpoint(
            method="GET", path="/search", query_params=[Parameter(name="q", example="caddy")],
        )]))
        param = _build(registry)["/api/search"]["get"]["parameters"][0]
        assert param["example"] == "caddy"
        assert param["schema"]["example"] == "caddy"

    def test_no_parameters_key_when_empty(self):
        registry = _registry(("test_api", "/api", True, [Endpoint(method="GET", path="/status")]))
        assert "parameters" not in _build(registry)["/api/status"]["get"]
