"""JSON output for ``--json`` command flags."""

from __future__ import annotations

import dataclasses
import json
from enum import Enum
from typing import Any

from scriptline.cli.formatters.base import OutputFormat, OutputFormatter


def to_jsonable(data: Any) -> Any:
    """Convert models, dataclasses and enums into JSON-friendly values.

    Pydantic models use their own JSON dump so ids and enums serialize the
    same way as everywhere else; dataclasses and containers are walked.
    """
    if hasattr(data, "model_dump"):
        return data.model_dump(mode="json")
    if isinstance(data, Enum):
        return data.value
    if dataclasses.is_dataclass(data) and not isinstance(data, type):
        return {
            field.name: to_jsonable(getattr(data, field.name))
            for field in dataclasses.fields(data)
        }
    if isinstance(data, dict):
        return {str(key): to_jsonable(value) for key, value in data.items()}
    if isinstance(data, list | tuple):
        return [to_jsonable(item) for item in data]
    return data


def _dumps(payload: Any) -> str:
    return json.dumps(payload, default=str, indent=2)


class JsonFormatter(OutputFormatter[Any]):
    """Indented JSON, plus the success and error envelopes commands print."""

    def format(self, data: Any, format_type: OutputFormat = OutputFormat.JSON) -> str:  # noqa: ARG002
        """Format any result as JSON; ``format_type`` is always JSON here."""
        return _dumps(to_jsonable(data))

    def format_success(self, message: str, data: Any = None) -> str:
        """Envelope ``{"success": true, "message": ..., "data": ...}``."""
        payload: dict[str, Any] = {"success": True, "message": message}
        if data is not None:
            payload["data"] = to_jsonable(data)
        return _dumps(payload)

    def format_error_response(self, error: str | Exception, code: int = 1) -> str:
        """Envelope ``{"success": false, "error": ..., "code": ...}``."""
        return _dumps({"success": False, "error": str(error), "code": code})
