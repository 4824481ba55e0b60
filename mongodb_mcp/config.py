import os
import re
from typing import Optional
from dataclasses import dataclass

from .errors import MongoDBError, ErrorCodes

def _int_from_env(name: str, default: int) -> int:
    value = os.getenv(name, str(default))
    try:
        return int(value)
    except ValueError:
        raise MongoDBError(
            ErrorCodes.MISCONFIGURED_CONNECTION_STRING,
            f"{name} must be an integer number of milliseconds, got '{value}'"
        ) from None

@dataclass
class MongoDBConfig:
    connection_string: str
    database_name: Optional[str] = None
    connect_timeout: int = 10000
    server_selection_timeout: int = 5000

    @classmethod
    def from_env(cls) -> 'MongoDBConfig':
        connection_string = os.getenv("MONGODB_URI")
        if not connection_string:
            raise MongoDBError(
                ErrorCodes.MISCONFIGURED_CONNECTION_STRING,
                "MONGODB_URI environment variable is required"
            )

        return cls(
            connection_string=connection_string,
            database_name=os.getenv("MONGODB_DB_NAME") or None,
            connect_timeout=_int_from_env("MONGODB_CONNECT_TIMEOUT", 10000),
            server_selection_timeout=_int_from_env("MONGODB_SERVER_SELECTION_TIMEOUT", 5000)
        )

    @property
    def redacted_connection_string(self) -> str:
        """Connection string with the password replaced, safe for logs"""
        return re.sub(r"(://[^:/@]+:)[^@]+@", r"\1****@", self.connection_string)
