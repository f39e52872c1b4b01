"""Closed message protocol between a sampling run and its caller.

A run reports exactly one message: ``result`` with the assembled payload
and preview, or ``error`` with a human-readable message. Messages cross the
worker boundary as plain dicts and are validated with ``parse_message``.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, model_validator


class ResultMessage(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    type: Literal["result"] = "result"
    payload: dict[str, Any]
    preview: str

    @model_validator(mode="after")
    def _check_payload(self) -> "ResultMessage":
        missing = {"repo", "metadata", "filesAnalyzed", "samples"} - self.payload.keys()
        if missing:
            raise ValueError(f"payload missing keys: {sorted(missing)}")
        samples = self.payload["samples"]
        if not isinstance(samples, list):
            raise ValueError("payload.samples must be a list")
        if self.payload["filesAnalyzed"] != len(samples):
            raise ValueError("payload.filesAnalyzed must equal len(payload.samples)")
        for sample in samples:
            if not isinstance(sample, dict) or not isinstance(sample.get("path"), str) or not isinstance(sample.get("snippet"), str):
                raise ValueError("each sample needs string 'path' and 'snippet'")
        return self


class ErrorMessage(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    type: Literal["error"] = "error"
    message: str


RunMessage = Annotated[Union[ResultMessage, ErrorMessage], Field(discriminator="type")]

_adapter: TypeAdapter[ResultMessage | ErrorMessage] = TypeAdapter(RunMessage)


def parse_message(obj: Any) -> ResultMessage | ErrorMessage:
    """Validate a plain-data message; raises pydantic.ValidationError."""
    if isinstance(obj, (ResultMessage, ErrorMessage)):
        return obj
    return _adapter.validate_python(obj)
