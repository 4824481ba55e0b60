import json
import logging
from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, List, Optional, Type

from bson import json_util
from mcp import types
from pymongo import AsyncMongoClient
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.asynchronous.database import AsyncDatabase

from ...config import MongoDBConfig
from ...errors import MongoDBError, ErrorCodes
from .models import Invalid, ToolArguments, validate_arguments

logger = logging.getLogger(__name__)

DEFAULT_DATABASE_NAME = "test"

class MongoDBSession:
    """The one database handle of the process, shared by every tool"""

    def __init__(self, client: Optional[AsyncMongoClient] = None, database: Optional[AsyncDatabase] = None):
        self.client = client
        self.database = database

    async def connect(self, config: MongoDBConfig) -> None:
        try:
            self.client = AsyncMongoClient(
                config.connection_string,
                connectTimeoutMS=config.connect_timeout,
                serverSelectionTimeoutMS=config.server_selection_timeout
            )
            # Test connection
            await self.client.admin.command('ping')
            if config.database_name:
                self.database = self.client[config.database_name]
            else:
                self.database = self.client.get_default_database(DEFAULT_DATABASE_NAME)
        except Exception as e:
            await self.close()
            raise MongoDBError(
                ErrorCodes.MISCONFIGURED_CONNECTION_STRING,
                f"Failed to connect to MongoDB: {str(e)}"
            )
        logger.info(f"Connected to MongoDB database '{self.database.name}' at {config.redacted_connection_string}")

    async def close(self) -> None:
        if self.client is not None:
            await self.client.close()
            self.client = None
            self.database = None
            logger.info("MongoDB connection closed")

    @classmethod
    @asynccontextmanager
    async def open(cls, config: MongoDBConfig) -> AsyncIterator['MongoDBSession']:
        session = cls()
        await session.connect(config)
        try:
            yield session
        finally:
            await session.close()

    def get_database(self) -> AsyncDatabase:
        if self.database is None:
            raise MongoDBError(ErrorCodes.NOT_CONNECTED_TO_MONGODB, "Not connected to MongoDB")
        return self.database

    def get_collection(self, collection_name: str) -> AsyncCollection:
        return self.get_database()[collection_name]

def format_result(value: Any) -> types.CallToolResult:
    """Wrap a successful result as pretty-printed Extended JSON"""
    return types.CallToolResult(
        content=[
            types.TextContent(
                type="text",
                text=json.dumps(value, default=json_util.default, indent=2)
            )
        ],
        isError=False
    )

def format_error(message: str) -> types.CallToolResult:
    return types.CallToolResult(
        content=[types.TextContent(type="text", text=message)],
        isError=True
    )

class MongoDBToolBase(ABC):
    """
    A read-only tool backed by the shared session.

    ``execute`` is the whole contract towards the dispatcher: it validates the
    raw arguments, runs the query and always returns a result envelope.
    Database failures never escape it.
    """

    args_model: Type[ToolArguments] = ToolArguments
    invalid_arguments_message = "Invalid arguments: expected collection name"

    def __init__(self, session: MongoDBSession):
        self.session = session

    @property
    @abstractmethod
    def name(self) -> str:
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        pass

    @property
    @abstractmethod
    def input_schema(self) -> Dict[str, Any]:
        pass

    @property
    def examples(self) -> List[Dict[str, Any]]:
        return []

    @property
    @abstractmethod
    def error_label(self) -> str:
        """Prefix of database error messages, e.g. 'Aggregation'"""

    @abstractmethod
    async def run(self, args: ToolArguments) -> Any:
        pass

    def to_tool(self) -> types.Tool:
        return types.Tool(
            name=self.name,
            description=self.description,
            inputSchema=self.input_schema,
            examples=self.examples
        )

    async def execute(self, arguments: Any) -> types.CallToolResult:
        validation = validate_arguments(self.args_model, arguments)
        if isinstance(validation, Invalid):
            logger.warning(f"Rejected {self.name} call: {validation.reason}")
            return format_error(f"{self.invalid_arguments_message} ({validation.reason})")

        try:
            result = await self.run(validation.args)
        except Exception as e:
            logger.warning(f"{self.name} on '{validation.args.collection}' failed: {e}")
            return self.handle_error(e)

        return format_result(result)

    def handle_error(self, error: Exception) -> types.CallToolResult:
        message = error.message if isinstance(error, MongoDBError) else str(error)
        return format_error(f"{self.error_label} error: {message or 'Unknown error'}")
