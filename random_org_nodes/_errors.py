from __future__ import annotations


class RandomOrgError(Exception):
    pass


class ConfigurationError(RandomOrgError):
    pass


class TransportError(RandomOrgError):
    pass


class APIError(RandomOrgError):
    def __init__(self, status_code: int, message: str, response_body: str | None = None):
        self.status_code = status_code
        self.response_body = response_body
        super().__init__(f"HTTP {status_code}: {message}")


class RateLimitError(APIError):
    pass


class ServerError(APIError):
    pass


class NodeOperationError(RandomOrgError):
    """A failure scoped to one input item of a node run."""

    def __init__(self, message: str, item_index: int | None = None):
        self.message = message
        self.item_index = item_index
        super().__init__(message)

    def __str__(self) -> str:
        if self.item_index is None:
            return self.message
        return f"{self.message} [item {self.item_index}]"


class ValidationError(NodeOperationError):
    pass


class BadResponseError(NodeOperationError):
    pass


class UpstreamAPIError(NodeOperationError):
    def __init__(self, message: str, item_index: int | None = None, code: int | None = None):
        self.code = code
        super().__init__(message, item_index)


__all__ = [
    "RandomOrgError",
    "ConfigurationError",
    "TransportError",
    "APIError",
    "RateLimitError",
    "ServerError",
    "NodeOperationError",
    "ValidationError",
    "BadResponseError",
    "UpstreamAPIError",
]
