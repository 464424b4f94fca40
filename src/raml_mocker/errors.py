"""Exception taxonomy for catalog generation.

Configuration and directory errors halt generation. Load and schema errors
are absorbed so that one bad file or body does not hide the rest.
"""


class MockerError(Exception):
    """Base class for all raml-mocker errors."""


class ConfigurationError(MockerError):
    """Missing or invalid options, or a callback that is not callable."""


class LoadError(MockerError):
    """A specification file could not be read or parsed."""

    def __init__(self, file_path, reason: str):
        self.file_path = str(file_path)
        self.reason = reason
        super().__init__(f"Error parsing {self.file_path}: {reason}")


class SchemaParseError(MockerError):
    """A body schema is not valid JSON."""


class DirectoryListError(MockerError):
    """The configured specification directory cannot be listed."""
