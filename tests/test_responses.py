import json
from unittest.mock import patch

from raml_mocker.errors import SchemaParseError
from raml_mocker.generator.responses import extract_endpoints, group_responses_by_code, parse_schema

USER_SCHEMA = json.dumps({
    "type": "object",
    "properties": {"id": {"type": "integer"}, "name": {"type": "string"}},
})


def _method(name: str, responses: dict) -> dict:
    return {"method": name, "responses": responses}


def _json_body(example=None, schema=None) -> dict:
    return {"application/json": {"name": "application/json", "example": example, "schema": schema}}


class TestParseSchema:
    def test_valid_object(self):
        result = parse_schema('{"type": "string"}')
        assert result.ok
        assert result.value == {"type": "string"}

    def test_absent(self):
        result = parse_schema(None)
        assert result.ok
        assert result.value is None

    def test_malformed_json_is_a_warning(self):
        result = parse_schema('{"type": ')
        assert not result.ok
        assert result.value is None
        assert "invalid JSON" in result.reason
        assert isinstance(result.error, SchemaParseError)

    def test_unresolved_reference_name_is_a_warning(self):
        assert not parse_schema("User").ok

    def test_non_object_json_is_a_warning(self):
        assert not parse_schema("[1, 2]").ok


class TestGroupResponsesByCode:
    def test_numeric_string_code_admitted_as_int(self):
        grouped = group_responses_by_code({"200": {"body": _json_body(example="{}")}})
        assert list(grouped) == [200]
        role, body = grouped[200][0]
        assert role == "application/json"
        assert body == {"example": "{}", "schema": None}

    def test_non_numeric_code_dropped(self):
        grouped = group_responses_by_code({
            "default": {"body": _json_body(example="{}")},
            "2XX": {"body": _json_body(example="{}")},
        })
        assert grouped == {}

    def test_response_without_body_skipped(self):
        grouped = group_responses_by_code({
            "204": {"description": "No content"},
            "404": None,
            "200": {"body": _json_body(example="{}")},
        })
        assert list(grouped) == [200]

    def test_one_entry_per_role(self):
        body = {
            "application/json": {"name": "application/json", "example": "{}"},
            "application/xml": {"name": "application/xml", "example": "<a/>"},
        }
        grouped = group_responses_by_code({200: {"body": body}})
        assert [role for role, _ in grouped[200]] == ["application/json", "application/xml"]

    def test_list_shaped_body(self):
        body = [{"name": "text/plain", "example": "ok"}]
        grouped = group_responses_by_code({"200": {"body": body}})
        assert grouped[200] == [("text/plain", {"example": "ok", "schema": None})]

    def test_schema_parsed(self):
        grouped = group_responses_by_code({"200": {"body": _json_body(schema=USER_SCHEMA)}})
        assert grouped[200][0][1]["schema"]["type"] == "object"


class TestExtractEndpoints:
    def test_only_mockable_verbs(self):
        responses = {"200": {"body": _json_body(example="{}")}}
        methods = [_method(m, responses) for m in ("get", "POST", "Put", "patch", "delete", "options", "head")]
        endpoints = extract_endpoints(methods, "/things")
        assert [e.method for e in endpoints] == ["GET", "POST", "PUT", "PATCH", "DELETE"]
        assert all(e.uri == "/things" for e in endpoints)

    def test_method_without_responses_ignored(self):
        assert extract_endpoints([{"method": "get"}, _method("post", {})], "/things") == []

    def test_endpoint_with_only_bodiless_responses_is_kept_empty(self):
        endpoints = extract_endpoints([_method("delete", {"204": {"description": "gone"}})], "/things/:id")
        assert len(endpoints) == 1
        assert endpoints[0].responses == {}

    def test_example_and_mock(self):
        methods = [_method("get", {"200": {"body": _json_body(example='{"id": 1}', schema=USER_SCHEMA)}})]
        endpoint = extract_endpoints(methods, "/users")[0]
        variant = endpoint.responses[200]["application/json"]
        assert variant.example == '{"id": 1}'
        assert isinstance(variant.mock, dict)
        assert isinstance(variant.mock["id"], int)
        assert isinstance(variant.mock["name"], str)

    def test_malformed_schema_keeps_example_without_mock(self):
        methods = [_method("get", {"200": {"body": _json_body(example='{"id": 1}', schema='{"type": ')}})]
        endpoint = extract_endpoints(methods, "/users")[0]
        variant = endpoint.responses[200]["application/json"]
        assert variant.example == '{"id": 1}'
        assert variant.mock is None
        assert "mock" not in variant.to_dict()

    def test_missing_example_is_null(self):
        methods = [_method("get", {"200": {"body": _json_body(schema=USER_SCHEMA)}})]
        variant = extract_endpoints(methods, "/users")[0].responses[200]["application/json"]
        assert variant.example is None

    def test_default_code_excluded_numeric_admitted(self):
        methods = [_method("get", {
            "default": {"body": _json_body(example="{}")},
            "200": {"body": _json_body(example="{}")},
        })]
        endpoint = extract_endpoints(methods, "/users")[0]
        assert list(endpoint.responses) == [200]

    @patch("raml_mocker.generator.responses.mock_schema")
    def test_formats_forwarded_to_mocker(self, mock_schema):
        mock_schema.return_value = {"id": "fixed"}
        formats = {"custom": lambda schema: "x"}
        methods = [_method("get", {"200": {"body": _json_body(schema=USER_SCHEMA)}})]

        endpoint = extract_endpoints(methods, "/users", formats)

        mock_schema.assert_called_once_with(json.loads(USER_SCHEMA), formats)
        assert endpoint[0].responses[200]["application/json"].mock == {"id": "fixed"}
