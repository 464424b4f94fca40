"""Resolve a templated base URI into the path prefix used for mock routes."""

import logging
import re
from urllib.parse import urlparse

logger = logging.getLogger(__name__)

TOKEN_PATTERN = re.compile(r"\{([A-Za-z_][A-Za-z0-9_]*)\}")


def resolve_base_uri(node: dict) -> str:
    """Return the path component of ``node["baseUri"]`` with parameters applied.

    Each ``{token}`` takes the declared parameter's ``default``, then its
    ``name``, then a same-named attribute of the node. Tokens with no value
    are logged and left in place. Scheme and host are discarded.
    """
    base_uri = node.get("baseUri")
    if not base_uri:
        return ""

    parameters = node.get("baseUriParameters")
    if not parameters:
        return urlparse(base_uri).path

    resolved = base_uri
    for token in dict.fromkeys(TOKEN_PATTERN.findall(base_uri)):
        value = _token_value(token, parameters, node)
        if value is not None:
            resolved = resolved.replace("{" + token + "}", str(value))
        else:
            logger.warning("No value found for {%s} in base URI %s", token, base_uri)
    return urlparse(resolved).path


def _token_value(token: str, parameters: dict, node: dict):
    param = parameters.get(token) or {}
    for value in (param.get("default"), param.get("name"), node.get(token)):
        if value is not None:
            return value
    return None
