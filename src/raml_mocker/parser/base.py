"""Endpoint models produced by the tree walker.

An Endpoint is one (uri, method) pair with its possible responses, grouped
by integer status code and then by body role (media type).
"""

from typing import Any

from pydantic import BaseModel


class ResponseVariant(BaseModel):
    """One body alternative for a status code."""

    role: str  # media type, e.g. application/json
    example: Any = None
    mock: Any = None

    def to_dict(self) -> dict:
        data = {"example": self.example}
        if self.mock is not None:
            data["mock"] = self.mock
        return data


class Endpoint(BaseModel):
    """A mockable route with its responses by status code."""

    uri: str
    method: str  # GET / POST / PUT / PATCH / DELETE
    responses: dict[int, dict[str, ResponseVariant]] = {}

    @property
    def key(self) -> tuple[str, str]:
        return self.uri, self.method

    @property
    def default_code(self) -> int | None:
        """Lowest 2xx code, falling back to the lowest declared code."""
        codes = sorted(self.responses)
        success = [c for c in codes if 200 <= c < 300]
        if success:
            return success[0]
        return codes[0] if codes else None

    def add_response(self, code: int, variants: list[ResponseVariant]) -> None:
        slot = self.responses.setdefault(int(code), {})
        for variant in variants:
            slot[variant.role] = variant

    def to_dict(self) -> dict:
        return {
            "uri": self.uri,
            "method": self.method,
            "defaultCode": self.default_code,
            "responses": {
                code: {role: v.to_dict() for role, v in variants.items()}
                for code, variants in self.responses.items()
            },
        }


def merge_endpoints(*endpoint_lists: list[Endpoint]) -> list[Endpoint]:
    """Merge endpoint lists keyed by (uri, method).

    A later endpoint with the same key replaces the earlier one but keeps
    the earlier position.
    """
    merged: dict[tuple[str, str], Endpoint] = {}
    for endpoints in endpoint_lists:
        for endpoint in endpoints:
            merged[endpoint.key] = endpoint
    return list(merged.values())
