from __future__ import annotations

from random_org_nodes._config import Settings
from random_org_nodes._errors import (
    APIError,
    BadResponseError,
    ConfigurationError,
    NodeOperationError,
    RandomOrgError,
    RateLimitError,
    ServerError,
    TransportError,
    UpstreamAPIError,
    ValidationError,
)
from random_org_nodes._http import HTTPClient
from random_org_nodes._types import (
    ErrorRecord,
    GenerationRequest,
    GenerationResult,
    Operation,
    RpcFailure,
    RpcSuccess,
    SingleValueResult,
    parse_rpc_response,
)
from random_org_nodes.bridge import NodeRuntime
from random_org_nodes.context import Context, ExecutionInput, ExecutionResult
from random_org_nodes.host import (
    ErrorReporter,
    HostBridge,
    HttpClient,
    LogLevel,
    MockHostBridge,
    MockHTTPClient,
    ParameterSource,
    SystemHostBridge,
    get_host,
    set_host,
)
from random_org_nodes.nodes import get_definitions, run
from random_org_nodes.schema import NodeDefinition, ParameterDefinition, ParameterOption, ParameterType

__all__ = [
    "Settings",
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
    "HTTPClient",
    "Operation",
    "GenerationRequest",
    "GenerationResult",
    "SingleValueResult",
    "ErrorRecord",
    "RpcSuccess",
    "RpcFailure",
    "parse_rpc_response",
    "NodeRuntime",
    "Context",
    "ExecutionInput",
    "ExecutionResult",
    "LogLevel",
    "ParameterSource",
    "HttpClient",
    "ErrorReporter",
    "HostBridge",
    "SystemHostBridge",
    "MockHostBridge",
    "MockHTTPClient",
    "set_host",
    "get_host",
    "get_definitions",
    "run",
    "NodeDefinition",
    "ParameterDefinition",
    "ParameterOption",
    "ParameterType",
]
