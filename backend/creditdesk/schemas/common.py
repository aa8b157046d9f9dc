from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from creditdesk.core.exceptions import ErrorKind


class CamelModel(BaseModel):
    """Base model exposing camelCase keys on the wire, snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Outcome(CamelModel):
    """Result envelope returned by every user operation."""

    success: bool
    message: str
    error: ErrorKind | None = None
    data: Any = None

    @classmethod
    def ok(cls, message: str, data: Any = None) -> "Outcome":
        return cls(success=True, message=message, data=data)

    @classmethod
    def fail(cls, kind: ErrorKind, message: str, data: Any = None) -> "Outcome":
        return cls(success=False, message=message, error=kind, data=data)
