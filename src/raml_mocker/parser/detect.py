"""Detect RAML documents by their header line."""

import re
from pathlib import Path

HEADER_PATTERN = re.compile(r"^#%RAML\s+(\d+\.\d+)")


def detect_raml_version(file_path: Path) -> str | None:
    """Return the RAML version declared on the first line ('0.8', '1.0'), or None."""
    with open(file_path, encoding="utf-8") as f:
        first_line = f.readline()
    match = HEADER_PATTERN.match(first_line.lstrip("\ufeff"))
    return match.group(1) if match else None


def is_raml_file(file_path: Path, extension: str = ".raml") -> bool:
    """Whether the name carries the RAML extension (content is not checked)."""
    return Path(file_path).name.endswith(extension)
