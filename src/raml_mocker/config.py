"""Options accepted by the generate entry point."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from raml_mocker.errors import ConfigurationError

DEFAULT_PARSER_OPTIONS = {"dereferenceSchemas": True}
RAML_EXTENSION = ".raml"


class MockerOptions(BaseModel):
    """Where to find specifications and how to mock them.

    Either ``path`` (a directory scanned for ``extension`` files) or
    ``files`` (explicit paths) must be given. ``formats`` is passed through
    to the schema mocker, ``parser_options`` to the RAML loader.
    """

    model_config = ConfigDict(populate_by_name=True)

    path: str | None = None
    files: list[str] = []
    formats: dict[str, Any] = {}
    parser_options: dict[str, Any] = Field(
        default_factory=lambda: dict(DEFAULT_PARSER_OPTIONS), alias="parserOptions"
    )
    extension: str = RAML_EXTENSION

    @field_validator("parser_options", mode="before")
    @classmethod
    def _apply_parser_defaults(cls, value):
        return {**DEFAULT_PARSER_OPTIONS, **(value or {})}

    @field_validator("formats", mode="before")
    @classmethod
    def _none_formats(cls, value):
        return value or {}

    @classmethod
    def from_value(cls, value: Any) -> "MockerOptions":
        if isinstance(value, cls):
            options = value
        else:
            try:
                options = cls.model_validate(value)
            except ValidationError as e:
                raise ConfigurationError(f"Invalid options: {e}") from e
        if not options.path and not options.files:
            raise ConfigurationError("Options must define either 'path' or 'files'")
        return options
