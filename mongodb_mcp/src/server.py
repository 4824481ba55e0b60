import asyncio
import logging
import os
import sys
from typing import Iterable, List

from dotenv import load_dotenv
from mcp import types
from mcp.server.lowlevel import Server
from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.server.stdio import stdio_server
from pydantic import AnyUrl

from ..config import MongoDBConfig
from ..errors import MongoDBError
from ..metadata.collection_schema import CollectionSchemaResources, SCHEMA_MIME_TYPE
from .tools.base import MongoDBSession
from .tools.dispatcher import ToolDispatcher

SERVER_NAME = "mongodb-mcp"
SERVER_VERSION = "0.1.0"
SERVER_INSTRUCTIONS = (
    "MongoDB MCP server providing read-only access to a MongoDB database. "
    "Use the collection schema resources to discover fields, then the "
    "aggregate, explain and sample tools to query them."
)

logger = logging.getLogger(__name__)

def create_server(session: MongoDBSession) -> Server:
    """Build the MCP server with tool and resource handlers bound to ``session``"""
    server = Server(SERVER_NAME, version=SERVER_VERSION, instructions=SERVER_INSTRUCTIONS)
    dispatcher = ToolDispatcher(session)
    resources = CollectionSchemaResources(session)

    @server.list_tools()
    async def list_tools() -> List[types.Tool]:
        return dispatcher.list_tools()

    # Registered directly rather than through @server.call_tool(): that
    # decorator turns every exception into an isError result, while an
    # unknown tool must reach the client as a JSON-RPC error.
    async def call_tool(request: types.CallToolRequest) -> types.ServerResult:
        result = await dispatcher.call_tool(request.params.name, request.params.arguments)
        return types.ServerResult(result)

    server.request_handlers[types.CallToolRequest] = call_tool

    @server.list_resources()
    async def list_resources() -> List[types.Resource]:
        return await resources.list_resources()

    @server.read_resource()
    async def read_resource(uri: AnyUrl) -> Iterable[ReadResourceContents]:
        text = await resources.read_resource(str(uri))
        return [ReadResourceContents(content=text, mime_type=SCHEMA_MIME_TYPE)]

    return server

async def serve(config: MongoDBConfig) -> None:
    async with MongoDBSession.open(config) as session:
        server = create_server(session)
        async with stdio_server() as (read_stream, write_stream):
            logger.info(f"{SERVER_NAME} {SERVER_VERSION} serving on stdio")
            await server.run(read_stream, write_stream, server.create_initialization_options())

def main() -> None:
    load_dotenv()

    # stdout carries the protocol, so logs go to stderr
    logging.basicConfig(
        level=getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr
    )

    try:
        config = MongoDBConfig.from_env()
        asyncio.run(serve(config))
    except MongoDBError as e:
        logger.error(e.message)
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")

if __name__ == "__main__":
    main()
