"""RAML 0.8 / 1.0 document loader.

Reads a RAML file with PyYAML (resolving ``!include``) and converts it into
the plain-dict tree consumed by the walker:

    root      {title, version, mediaType, baseUri, baseUriParameters, resources}
    resource  {relativeUri, uriParameters, methods, resources}
    method    {method, responses: {code: {code, body: {mediaType: {name, example, schema}}}}}

Resource types, traits and libraries are not expanded.
"""

import re
from pathlib import Path

import yaml

from raml_mocker.config import DEFAULT_PARSER_OPTIONS
from raml_mocker.errors import LoadError
from raml_mocker.parser.detect import detect_raml_version

DEFAULT_MEDIA_TYPE = "application/json"

HTTP_METHODS = {"get", "post", "put", "patch", "delete", "options", "head", "trace", "connect"}
BODY_KEYS = {"schema", "type", "example", "examples", "properties"}
YAML_SUFFIXES = {".raml", ".yaml", ".yml"}
URI_TOKEN = re.compile(r"\{([^{}]+)\}")


class RamlYamlLoader(yaml.SafeLoader):
    """SafeLoader that resolves ``!include`` relative to the including file."""

    base_dir = Path(".")
    include_chain: tuple[Path, ...] = ()


def _include(loader: RamlYamlLoader, node: yaml.Node):
    target = loader.base_dir / loader.construct_scalar(node)
    if target.suffix.lower() in YAML_SUFFIXES:
        if target.resolve() in loader.include_chain:
            raise yaml.constructor.ConstructorError(
                None, None, f"include cycle through {target}", node.start_mark
            )
        return _load_yaml(target, loader.include_chain)
    return target.read_text(encoding="utf-8")


RamlYamlLoader.add_constructor("!include", _include)


def _load_yaml(file_path: Path, include_chain: tuple[Path, ...] = ()):
    with open(file_path, encoding="utf-8") as f:
        loader = RamlYamlLoader(f)
        loader.base_dir = file_path.parent
        loader.include_chain = include_chain + (file_path.resolve(),)
        try:
            return loader.get_single_data()
        finally:
            loader.dispose()


def load_api(file_path, parser_options: dict | None = None) -> dict:
    """Load a RAML file into a specification tree.

    Raises LoadError when the file is missing, is not RAML, is not valid
    YAML or declares a section with the wrong shape.
    """
    options = {**DEFAULT_PARSER_OPTIONS, **(parser_options or {})}
    file_path = Path(file_path)
    try:
        if detect_raml_version(file_path) is None:
            raise LoadError(file_path, "missing #%RAML header")
        document = _load_yaml(file_path)
    except OSError as e:
        raise LoadError(file_path, str(e)) from e
    except (yaml.YAMLError, UnicodeDecodeError) as e:
        raise LoadError(file_path, f"invalid YAML: {e}") from e

    if not isinstance(document, dict):
        raise LoadError(file_path, "document root is not a mapping")
    try:
        return TreeBuilder(document, dereference=options.get("dereferenceSchemas", True)).build()
    except (AttributeError, TypeError, ValueError) as e:
        raise LoadError(file_path, f"unexpected document structure: {e}") from e


class TreeBuilder:
    """Converts a raw RAML mapping into the walker's tree."""

    def __init__(self, document: dict, dereference: bool = True):
        self.document = document
        media_type = document.get("mediaType") or DEFAULT_MEDIA_TYPE
        self.media_type = media_type[0] if isinstance(media_type, list) else media_type
        self.schemas = _collect_schemas(document) if dereference else {}

    def build(self) -> dict:
        doc = self.document
        root = {
            "title": doc.get("title"),
            "version": doc.get("version"),
            "mediaType": self.media_type,
        }
        if doc.get("baseUri"):
            base_uri = str(doc["baseUri"])
            params = _parameters(doc.get("baseUriParameters"))
            if "{version}" in base_uri and "version" not in params and doc.get("version") is not None:
                params["version"] = {"name": "version", "default": str(doc["version"])}
            root["baseUri"] = base_uri
            if params:
                root["baseUriParameters"] = params
        root["resources"] = self._resources(doc)
        return root

    def _resources(self, mapping: dict) -> list[dict]:
        return [
            self._resource(key, value if isinstance(value, dict) else {})
            for key, value in mapping.items()
            if isinstance(key, str) and key.startswith("/")
        ]

    def _resource(self, relative_uri: str, decl: dict) -> dict:
        node = {"relativeUri": relative_uri}

        params = _parameters(decl.get("uriParameters"))
        for token in URI_TOKEN.findall(relative_uri):
            params.setdefault(token, {"name": token})
        if params:
            node["uriParameters"] = params

        methods = [
            self._method(name, decl[name])
            for name in decl
            if isinstance(name, str) and name.lower() in HTTP_METHODS
        ]
        if methods:
            node["methods"] = methods

        children = self._resources(decl)
        if children:
            node["resources"] = children
        return node

    def _method(self, name: str, decl: dict) -> dict:
        responses = (decl.get("responses") if isinstance(decl, dict) else None) or {}
        return {
            "method": name.lower(),
            "responses": {str(code): self._response(code, resp) for code, resp in responses.items()},
        }

    def _response(self, code, decl) -> dict:
        response = {"code": str(code)}
        if isinstance(decl, dict):
            body = self._body(decl.get("body"))
            if body:
                response["body"] = body
        return response

    def _body(self, decl) -> dict:
        if not isinstance(decl, dict) or not decl:
            return {}
        keys = {str(k) for k in decl}
        if not any("/" in k for k in keys) and keys & BODY_KEYS:
            decl = {self.media_type: decl}

        body = {}
        for media_type, media in decl.items():
            if isinstance(media, str):
                media = {"type": media}
            media = media or {}
            body[media_type] = {
                "name": media_type,
                "example": _example(media),
                "schema": self._schema(media),
            }
        return body

    def _schema(self, media: dict) -> str | None:
        if "schema" in media:
            ref = media["schema"]
            if isinstance(ref, str) and not _is_json_text(ref):
                # Unknown names stay as-is, the extractor treats them as malformed
                return self.schemas.get(ref, ref)
            return ref if isinstance(ref, str) else None

        ref = media.get("type")
        if isinstance(ref, str):
            return ref if _is_json_text(ref) else self.schemas.get(ref)
        return None


def _collect_schemas(document: dict) -> dict[str, str]:
    schemas = {}
    for key in ("schemas", "types"):
        declared = document.get(key) or {}
        # RAML 0.8 declares schemas as a list of single-entry mappings
        if isinstance(declared, list):
            merged = {}
            for entry in declared:
                if isinstance(entry, dict):
                    merged.update(entry)
            declared = merged
        if not isinstance(declared, dict):
            continue
        for name, value in declared.items():
            if isinstance(value, dict):
                value = value.get("schema") or value.get("type")
            if isinstance(value, str) and _is_json_text(value):
                schemas[name] = value
    return schemas


def _parameters(decl) -> dict[str, dict]:
    if not isinstance(decl, dict):
        return {}
    params = {}
    for name, value in decl.items():
        params[str(name)] = {"name": str(name), **(value if isinstance(value, dict) else {})}
    return params


def _example(media: dict):
    if "example" in media:
        return media["example"]
    examples = media.get("examples")
    if isinstance(examples, dict) and examples:
        first = next(iter(examples.values()))
        if isinstance(first, dict) and "value" in first:
            return first["value"]
        return first
    return None


def _is_json_text(text: str) -> bool:
    return text.lstrip().startswith("{")
