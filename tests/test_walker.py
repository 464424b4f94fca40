from raml_mocker.generator.walker import compose_uri, walk


def _ok(example="{}") -> dict:
    return {"200": {"body": {"application/json": {"name": "application/json", "example": example}}}}


def _get(example="{}") -> list[dict]:
    return [{"method": "get", "responses": _ok(example)}]


class TestComposeUri:
    def test_without_relative_uri(self):
        assert compose_uri("/a", {}) == "/a"

    def test_collapses_separators(self):
        assert compose_uri("/", {"relativeUri": "/a"}) == "/a"
        assert compose_uri("/v1/", {"relativeUri": "//a"}) == "/v1/a"

    def test_declared_parameter_becomes_placeholder(self):
        node = {"relativeUri": "/{id}", "uriParameters": {"id": {"name": "id"}}}
        assert compose_uri("/a", node) == "/a/:id"

    def test_undeclared_parameter_left_alone(self):
        assert compose_uri("/a", {"relativeUri": "/{id}"}) == "/a/{id}"


class TestWalk:
    def test_nested_resources_compose(self):
        tree = {"resources": [{
            "relativeUri": "/a",
            "resources": [{
                "relativeUri": "/{id}",
                "uriParameters": {"id": {"name": "id"}},
                "resources": [{"relativeUri": "/b", "methods": _get()}],
            }],
        }]}
        endpoints = walk(tree, "")
        assert [e.uri for e in endpoints] == ["/a/:id/b"]

    def test_methods_at_every_level(self):
        tree = {"resources": [{
            "relativeUri": "/users",
            "methods": _get(),
            "resources": [{
                "relativeUri": "/{userId}",
                "uriParameters": {"userId": {}},
                "methods": _get() + [{"method": "delete", "responses": _ok()}],
            }],
        }]}
        keys = {e.key for e in walk(tree)}
        assert keys == {("/users", "GET"), ("/users/:userId", "GET"), ("/users/:userId", "DELETE")}

    def test_document_order(self):
        tree = {"resources": [
            {"relativeUri": "/a", "methods": _get()},
            {"relativeUri": "/b", "methods": _get(), "resources": [{"relativeUri": "/c", "methods": _get()}]},
            {"relativeUri": "/d", "methods": _get()},
        ]}
        assert [e.uri for e in walk(tree)] == ["/a", "/b", "/b/c", "/d"]

    def test_base_uri_prefix(self):
        tree = {
            "baseUri": "http://{host}/v1",
            "baseUriParameters": {"host": {"name": "host", "default": "api.example.com"}},
            "resources": [{"relativeUri": "/users", "methods": _get()}],
        }
        assert [e.uri for e in walk(tree)] == ["/v1/users"]

    def test_literal_base_uri_prefix(self):
        tree = {
            "baseUri": "https://inventory.example.com/api",
            "resources": [{"relativeUri": "/items", "resources": [{"relativeUri": "/stock", "methods": _get()}]}],
        }
        assert [e.uri for e in walk(tree)] == ["/api/items/stock"]

    def test_empty_tree(self):
        assert walk({}) == []

    def test_duplicate_routes_last_wins(self):
        tree = {"resources": [
            {"relativeUri": "/a", "methods": _get("first")},
            {"relativeUri": "/a", "methods": _get("second")},
        ]}
        endpoints = walk(tree)
        assert len(endpoints) == 1
        assert endpoints[0].responses[200]["application/json"].example == "second"

    def test_deep_nesting_does_not_recurse(self):
        depth = 3000
        tree = {"resources": []}
        node = tree
        for _ in range(depth):
            child = {"relativeUri": "/n", "resources": []}
            node["resources"].append(child)
            node = child
        node["methods"] = _get()

        endpoints = walk(tree)

        assert len(endpoints) == 1
        assert endpoints[0].uri == "/n" * depth

    def test_formats_reach_mocker(self):
        schema = '{"type": "string", "format": "ticket"}'
        tree = {"resources": [{"relativeUri": "/t", "methods": [{"method": "get", "responses": {
            "200": {"body": {"application/json": {"name": "application/json", "schema": schema}}},
        }}]}]}
        endpoints = walk(tree, "/", {"ticket": lambda schema: "TICKET-1"})
        assert endpoints[0].responses[200]["application/json"].mock == "TICKET-1"
