"""Walk a parsed RAML tree and collect its mockable endpoints."""

import re

from raml_mocker.generator.base_uri import resolve_base_uri
from raml_mocker.generator.responses import extract_endpoints
from raml_mocker.parser.base import Endpoint, merge_endpoints

REPEATED_SLASHES = re.compile(r"/{2,}")


def walk(root: dict, uri: str = "/", formats: dict | None = None) -> list[Endpoint]:
    """Return the endpoints declared by ``root`` and every nested resource.

    Uses an explicit stack of ``(node, accumulated uri)`` pairs so deeply
    nested specifications do not hit the recursion limit. Nodes are visited
    in document order.
    """
    collected: list[list[Endpoint]] = []
    stack = [(root, uri)]
    while stack:
        node, parent_uri = stack.pop()
        node_uri = compose_uri(parent_uri, node)

        if node.get("methods"):
            collected.append(extract_endpoints(node["methods"], node_uri, formats))

        children = node.get("resources")
        if children:
            child_uri = resolve_base_uri(node) + node_uri
            stack.extend((child, child_uri) for child in reversed(children))

    return merge_endpoints(*collected)


def compose_uri(uri: str, node: dict) -> str:
    """Append the node's relative URI, with ``{param}`` rewritten to ``:param``."""
    relative_uri = node.get("relativeUri")
    if not relative_uri:
        return uri
    for name in node.get("uriParameters") or {}:
        relative_uri = relative_uri.replace("{" + name + "}", ":" + name)
    return REPEATED_SLASHES.sub("/", f"{uri}/{relative_uri}")
