from __future__ import annotations

from enum import Enum

from pydantic import BaseModel


class ErrorKind(str, Enum):
    transport = "transport"
    parse = "parse"
    validation = "validation"
    configuration = "configuration"
    internal = "internal"


class ComponentError(BaseModel):
    """A failure reported by one component boundary instead of raised."""

    kind: ErrorKind
    component: str
    detail: str = ""


class ConfigurationError(ValueError):
    """Raised at startup when required settings are missing or invalid."""

    def __init__(self, missing: list[str]):
        self.missing = missing
        super().__init__(f"Missing or invalid settings: {', '.join(missing)}")
