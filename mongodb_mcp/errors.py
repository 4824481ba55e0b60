from enum import Enum
from typing import Optional

from mcp.shared.exceptions import McpError
from mcp.types import ErrorData, INTERNAL_ERROR, INVALID_REQUEST, METHOD_NOT_FOUND

class ErrorCodes(Enum):
    NOT_CONNECTED_TO_MONGODB = "not_connected_to_mongodb"
    MISCONFIGURED_CONNECTION_STRING = "misconfigured_connection_string"

class MongoDBError(Exception):
    def __init__(self, code: ErrorCodes, message: str, details: Optional[str] = None):
        self.code = code
        self.message = message
        self.details = details
        super().__init__(f"{code.value}: {message}")

# Protocol-level failures. These abort the request with a JSON-RPC error
# instead of a tool result envelope.

def method_not_found(message: str) -> McpError:
    return McpError(ErrorData(code=METHOD_NOT_FOUND, message=message))

def invalid_request(message: str) -> McpError:
    return McpError(ErrorData(code=INVALID_REQUEST, message=message))

def internal_error(message: str) -> McpError:
    return McpError(ErrorData(code=INTERNAL_ERROR, message=message))
