"""Turn the methods of one resource node into Endpoints.

Responses are grouped by numeric status code. Every body declared under a
code becomes a ResponseVariant carrying the declared example and, when the
body has a well-formed JSON schema, a mock value generated from it.
"""

import json
import logging
import math

from raml_mocker.errors import SchemaParseError
from raml_mocker.generator.schema import mock_schema
from raml_mocker.parser.base import Endpoint, ResponseVariant
from raml_mocker.result import Ok, Warn

logger = logging.getLogger(__name__)

MOCKABLE_METHODS = ("GET", "POST", "PUT", "PATCH", "DELETE")


def extract_endpoints(methods: list[dict], uri: str, formats: dict | None = None) -> list[Endpoint]:
    """Build one Endpoint per mockable method that declares responses."""
    endpoints = []
    for method in methods or []:
        verb = (method.get("method") or "").upper()
        if verb not in MOCKABLE_METHODS or not method.get("responses"):
            continue

        endpoint = Endpoint(uri=uri, method=verb)
        for code, bodies in group_responses_by_code(method["responses"]).items():
            endpoint.add_response(code, [_build_variant(role, body, formats) for role, body in bodies])
        endpoints.append(endpoint)
    return endpoints


def group_responses_by_code(responses: dict) -> dict[int, list[tuple[str, dict]]]:
    """Map each numeric status code to its ``(role, {example, schema})`` bodies.

    Responses without a body and non-numeric codes such as ``default`` are
    left out.
    """
    grouped = {}
    for code, response in responses.items():
        if not response or not response.get("body"):
            continue
        status = _status_code(code)
        if status is None:
            continue

        bodies = []
        for role, body in _iter_bodies(response["body"]):
            schema = parse_schema(body.get("schema"))
            if not schema.ok:
                logger.debug("Ignoring schema of %s response %s: %s", role, code, schema.reason)
            bodies.append((role, {"example": body.get("example"), "schema": schema.value}))
        grouped.setdefault(status, []).extend(bodies)
    return grouped


def parse_schema(text) -> Ok | Warn:
    """Parse a body schema. Anything but a JSON object is a Warn."""
    if text is None or text == "":
        return Ok(None)
    if isinstance(text, dict):
        return Ok(text)
    try:
        schema = json.loads(text)
    except (TypeError, ValueError) as e:
        return Warn(f"invalid JSON schema: {e}", error=SchemaParseError(str(e)))
    if not isinstance(schema, dict):
        return Warn("schema is not a JSON object", error=SchemaParseError(text))
    return Ok(schema)


def _status_code(code) -> int | None:
    try:
        number = float(code)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number) or not number.is_integer():
        return None
    return int(number)


def _iter_bodies(body):
    # Loaded trees key bodies by media type; parser JSON dumps may list them
    if isinstance(body, dict):
        for role, value in body.items():
            yield (value or {}).get("name") or role, value or {}
    elif isinstance(body, list):
        for value in body:
            if isinstance(value, dict) and value.get("name"):
                yield value["name"], value


def _build_variant(role: str, body: dict, formats: dict | None) -> ResponseVariant:
    schema = body["schema"]
    return ResponseVariant(
        role=role,
        example=body["example"],
        mock=mock_schema(schema, formats) if schema else None,
    )
