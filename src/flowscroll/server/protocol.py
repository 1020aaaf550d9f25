"""JSON-lines protocol messages exchanged with the feed client.

One JSON object per line in each direction. Requests carry an ``id`` that
the matching response echoes; notifications carry none.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Optional


class ProtocolError(ValueError):
    """A line that is not a well-formed request."""


@dataclass
class Request:
    id: int
    method: str
    params: dict = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict) -> Request:
        return cls(
            id=data["id"],
            method=data["method"],
            params=data.get("params") or {},
        )


def parse_request(line: str) -> Request:
    try:
        data = json.loads(line)
    except json.JSONDecodeError as e:
        raise ProtocolError(f"Invalid JSON: {e}") from e
    if not isinstance(data, dict) or not isinstance(data.get("method"), str):
        raise ProtocolError("Request must be an object with a string 'method'")
    if not isinstance(data.get("params") or {}, dict):
        raise ProtocolError("Request 'params' must be an object")
    return Request.from_dict({"id": 0, **data})


@dataclass
class Response:
    """Reply to one request; exactly one of result or error is sent."""
    id: int
    result: Optional[dict] = None
    error: Optional[str] = None

    def to_json_line(self) -> str:
        d = {"id": self.id}
        if self.error is not None:
            d["error"] = self.error
        else:
            d["result"] = self.result
        return json.dumps(d, ensure_ascii=False) + "\n"


@dataclass
class Notification:
    """Server-initiated message (no id, no response expected)."""
    method: str
    params: dict = field(default_factory=dict)

    def to_json_line(self) -> str:
        return json.dumps({"method": self.method, "params": self.params}, ensure_ascii=False) + "\n"
