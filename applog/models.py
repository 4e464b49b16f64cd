"""
Pydantic models for the JSON record written by the logger.

Wire format (field names are load-bearing for downstream log consumers):

    {
      "time":  "<RFC3339 UTC timestamp>",
      "app":   "<application name>",
      "level": "<debug|info|notice|warning|error|critical|alert|emergency>",
      "msg":   "<formatted message>",
      "data":  { ... },                       # omitted entirely if empty
      "Src":   {"file": "<dir>/<file>", "line": <int>}
    }
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field, ValidationError
from pydantic_core import PydanticSerializationError

from applog.exceptions import SerializationError


class Src(BaseModel):
    """Source location of the logging call (truncated file path + line)."""

    file: str = Field(default="???", description="'<dir>/<file>' or bare filename.")
    line: int = Field(default=0, ge=0, description="1-based line number, 0 if unknown.")


class WriteLog(BaseModel):
    """One fully-assembled log record, ready for serialization."""

    time: datetime = Field(..., description="Emission time, UTC.")
    app: str = Field(..., description="Application / service name.")
    level: str = Field(..., description="Level label.")
    msg: str = Field(default="", description="Message after printf-style expansion.")
    data: Optional[dict[str, Any]] = Field(
        default=None,
        description="Structured fields accumulated since the previous emission.",
    )
    src: Src = Field(default_factory=Src, serialization_alias="Src")

    @classmethod
    def assemble(cls, **fields: Any) -> WriteLog:
        """Validate a record, reporting bad input as a SerializationError.

        Raises:
            SerializationError: If a field fails validation
                (e.g. a ``data`` key that is not a string).
        """
        try:
            return cls(**fields)
        except ValidationError as exc:
            raise SerializationError(str(exc)) from exc

    def to_json(self) -> bytes:
        """Serialize the record, dropping ``data`` when it is empty.

        Raises:
            SerializationError: If a value in ``data`` is not JSON-serializable.
        """
        exclude = None if self.data else {"data"}
        try:
            return self.model_dump_json(by_alias=True, exclude=exclude).encode("utf-8")
        except (PydanticSerializationError, ValueError, TypeError) as exc:
            raise SerializationError(str(exc)) from exc
