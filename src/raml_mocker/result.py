"""Result values separating recoverable problems from fatal ones."""

from dataclasses import dataclass
from typing import Any


@dataclass
class Ok:
    value: Any

    ok = True


@dataclass
class Warn:
    """Logged and skipped; processing continues with ``value`` (usually None)."""

    reason: str
    value: Any = None
    error: Exception | None = None

    ok = False


@dataclass
class Fatal:
    """Halts the whole run."""

    reason: str
    error: BaseException | None = None

    ok = False
