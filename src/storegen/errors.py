"""Error types for storegen.

Every failure the library reports derives from StoregenError so callers
(the CLI in particular) can catch one type and show the message.
"""

from __future__ import annotations

from pathlib import Path

__all__ = [
    "ConfigNotFoundError",
    "ConfigParseError",
    "EmptyNameError",
    "FeatureExistsError",
    "InvalidNameError",
    "ProvidersShapeError",
    "StoregenError",
]


class StoregenError(Exception):
    """Base class for all storegen failures."""


class InvalidNameError(StoregenError, ValueError):
    """Raised when a feature name cannot be used as an identifier."""

    def __init__(self, raw: str, reason: str) -> None:
        super().__init__(f"Invalid feature name {raw!r}: {reason}")
        self.raw = raw


class EmptyNameError(InvalidNameError):
    """Raised when a feature name has no letters or digits left after cleaning."""

    def __init__(self, raw: str) -> None:
        super().__init__(raw, "no letters or digits")


class ConfigNotFoundError(StoregenError, FileNotFoundError):
    """Raised when the application configuration module does not exist."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"Configuration module not found: {path}")
        self.path = path


class ConfigParseError(StoregenError):
    """Raised when the configuration module is not valid Python."""

    def __init__(self, path: Path, detail: str) -> None:
        super().__init__(f"Could not parse {path}: {detail}")
        self.path = path


class ProvidersShapeError(StoregenError):
    """Raised when ``providers`` is bound to something other than a list display.

    The file is left untouched; the registration has to be added by hand.
    """

    def __init__(self, name: str, code: str) -> None:
        super().__init__(
            f"'{name}' is bound to {code!r}, expected a list literal; "
            "add the registration by hand"
        )
        self.name = name


class FeatureExistsError(StoregenError, FileExistsError):
    """Raised when scaffolding would overwrite an existing feature file."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"Refusing to overwrite existing file: {path} (use --force)")
        self.path = path
