from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union


class Operation:
    INTEGER = "integer"
    DECIMAL = "decimal"
    TRNG = "trng"

    RANGE = (INTEGER, DECIMAL)


@dataclass
class GenerationRequest:
    operation: str
    min: float
    max: float
    count: int = 1
    decimal_places: int | None = None


@dataclass
class GenerationResult:
    operation: str
    count: int
    min: float
    max: float
    values: list[float]
    timestamp: str
    decimal_places: int | None = None

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "operation": self.operation,
            "count": self.count,
            "min": self.min,
            "max": self.max,
            "values": self.values,
            "timestamp": self.timestamp,
        }
        if self.decimal_places is not None:
            d["decimalPlaces"] = self.decimal_places
        return d


@dataclass
class SingleValueResult:
    value: int
    min: int
    max: int
    url: str
    timestamp: str
    source: str = "random.org"

    def to_dict(self) -> dict[str, Any]:
        return {
            "value": self.value,
            "min": self.min,
            "max": self.max,
            "source": self.source,
            "url": self.url,
            "timestamp": self.timestamp,
        }


@dataclass
class ErrorRecord:
    error: str

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.error}


@dataclass
class RpcSuccess:
    data: list[Any]
    completion_time: str | None = None
    bits_used: int | None = None
    bits_left: int | None = None
    requests_left: int | None = None
    advisory_delay: int | None = None
    raw: dict[str, Any] = field(default_factory=dict)


@dataclass
class RpcFailure:
    message: str
    code: int | None = None
    data: Any = None
    raw: dict[str, Any] = field(default_factory=dict)


RpcResponse = Union[RpcSuccess, RpcFailure]


def parse_rpc_response(body: Any) -> RpcResponse:
    """Classify a JSON-RPC response body.

    Raises ``ValueError`` when the body is neither an error envelope nor
    carries a ``result.random.data`` list.
    """
    if not isinstance(body, dict):
        raise ValueError(f"Expected a JSON object, got {type(body).__name__}")

    error = body.get("error")
    if isinstance(error, dict):
        return RpcFailure(
            message=str(error.get("message", "")),
            code=error.get("code"),
            data=error.get("data"),
            raw=body,
        )
    if error:
        return RpcFailure(message=str(error), raw=body)

    result = body.get("result")
    random = result.get("random") if isinstance(result, dict) else None
    data = random.get("data") if isinstance(random, dict) else None
    if not isinstance(data, list):
        raise ValueError("Response is missing result.random.data")

    return RpcSuccess(
        data=data,
        completion_time=random.get("completionTime"),
        bits_used=result.get("bitsUsed"),
        bits_left=result.get("bitsLeft"),
        requests_left=result.get("requestsLeft"),
        advisory_delay=result.get("advisoryDelay"),
        raw=body,
    )


__all__ = [
    "Operation",
    "GenerationRequest",
    "GenerationResult",
    "SingleValueResult",
    "ErrorRecord",
    "RpcSuccess",
    "RpcFailure",
    "RpcResponse",
    "parse_rpc_response",
]
