"""JSON Schema mocker.

Builds a synthetic value for a JSON Schema fragment using Faker. Custom
string formats can be supplied through ``formats``; each entry is either a
callable taking the schema fragment or a constant value.
"""

import math
from typing import Any, Callable

from faker import Faker

fake = Faker()

MAX_DEPTH = 8
DEFAULT_MAX_ITEMS = 3

FORMAT_PROVIDERS: dict[str, Callable[[], Any]] = {
    "email": fake.email,
    "uri": fake.uri,
    "url": fake.url,
    "date": lambda: fake.date(),
    "date-time": lambda: fake.iso8601(),
    "time": lambda: fake.time(),
    "uuid": fake.uuid4,
    "ipv4": fake.ipv4,
    "ipv6": fake.ipv6,
    "hostname": fake.hostname,
}


def mock_schema(schema: dict, formats: dict | None = None) -> Any:
    """Return a synthetic value for ``schema``."""
    return _mock(schema, formats or {}, 0)


def _mock(schema: Any, formats: dict, depth: int) -> Any:
    if not isinstance(schema, dict) or depth > MAX_DEPTH:
        return None

    if "const" in schema:
        return schema["const"]
    if schema.get("enum"):
        return fake.random_element(schema["enum"])
    if "example" in schema:
        return schema["example"]
    if isinstance(schema.get("examples"), list) and schema["examples"]:
        return schema["examples"][0]
    if "default" in schema:
        return schema["default"]

    if "allOf" in schema:
        return _mock(_merge_all_of(schema), formats, depth + 1)
    for key in ("oneOf", "anyOf"):
        if schema.get(key):
            return _mock(schema[key][0], formats, depth + 1)

    schema_type = _pick_type(schema)
    if schema_type == "object":
        return _mock_object(schema, formats, depth)
    if schema_type == "array":
        return _mock_array(schema, formats, depth)
    if schema_type == "string":
        return _mock_string(schema, formats)
    if schema_type == "integer":
        return _mock_integer(schema)
    if schema_type == "number":
        return _mock_number(schema)
    if schema_type == "boolean":
        return fake.pybool()
    return None


def _pick_type(schema: dict) -> str | None:
    schema_type = schema.get("type")
    if isinstance(schema_type, list):
        # Prefer a concrete type over "null" in unions like ["string", "null"]
        concrete = [t for t in schema_type if t != "null"]
        return concrete[0] if concrete else None
    if schema_type:
        return schema_type
    if "properties" in schema:
        return "object"
    if "items" in schema:
        return "array"
    return None


def _merge_all_of(schema: dict) -> dict:
    merged = {k: v for k, v in schema.items() if k != "allOf"}
    properties = dict(merged.get("properties", {}))
    required = list(merged.get("required", []))
    for part in schema["allOf"]:
        if not isinstance(part, dict):
            continue
        properties.update(part.get("properties", {}))
        required.extend(part.get("required", []))
        for key, value in part.items():
            if key not in ("properties", "required"):
                merged.setdefault(key, value)
    if properties:
        merged["properties"] = properties
        merged.setdefault("type", "object")
    if required:
        merged["required"] = required
    return merged


def _mock_object(schema: dict, formats: dict, depth: int) -> dict:
    return {
        name: _mock(prop, formats, depth + 1)
        for name, prop in schema.get("properties", {}).items()
    }


def _mock_array(schema: dict, formats: dict, depth: int) -> list:
    items = schema.get("items", {})
    min_items = schema.get("minItems", 1)
    max_items = max(schema.get("maxItems", DEFAULT_MAX_ITEMS), min_items)
    count = fake.random_int(min=min_items, max=max_items)
    if isinstance(items, list):
        # Tuple validation: one value per positional schema
        return [_mock(item, formats, depth + 1) for item in items]
    return [_mock(items, formats, depth + 1) for _ in range(count)]


def _mock_string(schema: dict, formats: dict) -> str:
    fmt = schema.get("format")
    if fmt in formats:
        generator = formats[fmt]
        return generator(schema) if callable(generator) else generator
    if fmt in FORMAT_PROVIDERS:
        return FORMAT_PROVIDERS[fmt]()

    min_length = schema.get("minLength", 0)
    max_length = max(schema.get("maxLength", max(min_length, 20)), min_length)
    if max_length == 0:
        return ""
    return fake.pystr(min_chars=max(min_length, 1), max_chars=max_length)


def _mock_integer(schema: dict) -> int:
    low, high = _bounds(schema, -1000, 1000, step=1)
    low, high = math.ceil(low), math.floor(high)
    if low >= high:
        return low
    return fake.random_int(min=low, max=high)


def _mock_number(schema: dict) -> float:
    low, high = _bounds(schema, -1000.0, 1000.0, step=0.01)
    if low >= high:
        return low
    return round(fake.random.uniform(low, high), 2)


def _bounds(schema: dict, low, high, step):
    minimum = schema.get("minimum")
    maximum = schema.get("maximum")
    exclusive_min = schema.get("exclusiveMinimum")
    exclusive_max = schema.get("exclusiveMaximum")

    # Draft 4 marks exclusivity with a boolean next to minimum/maximum
    if isinstance(exclusive_min, bool):
        exclusive_min = minimum if exclusive_min else None
        if exclusive_min is not None:
            minimum = None
    if isinstance(exclusive_max, bool):
        exclusive_max = maximum if exclusive_max else None
        if exclusive_max is not None:
            maximum = None

    if minimum is not None:
        low = minimum
    if exclusive_min is not None:
        low = exclusive_min + step
    if maximum is not None:
        high = maximum
    if exclusive_max is not None:
        high = exclusive_max - step

    lower_bound = minimum is not None or exclusive_min is not None
    upper_bound = maximum is not None or exclusive_max is not None
    if lower_bound and not upper_bound and high < low:
        high = low + 1000
    if upper_bound and not lower_bound and low > high:
        low = high - 1000
    return low, high
